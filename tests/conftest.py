import copy
import os
import uuid

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from app.core.database import appointment_options, bookings, create_client, users
from app.core.security import create_access_token
from app.main import create_app

# Test data
APPOINTMENT_OPTIONS = [
    {
        "name": "Teeth Orthodontics",
        "slots": ["08.00 AM - 08.30 AM", "08.30 AM - 09.00 AM", "09.00 AM - 09.30 AM"],
    },
    {
        "name": "Cosmetic Dentistry",
        "slots": ["08.00 AM - 08.30 AM", "08.30 AM - 09.00 AM"],
        "price": 50,
    },
    {
        "name": "Teeth Cleaning",
        "slots": ["10.00 AM - 10.30 AM", "10.30 AM - 11.00 AM", "10.00 AM - 10.30 AM"],
    },
    {
        "name": "Oral Surgery",
        "slots": ["01.00 PM - 01.30 PM"],
    },
]

@pytest.fixture
def db():
    return mongomock.MongoClient()["doctorsPortal"]

@pytest.fixture
def client(db):
    with TestClient(create_app(database=db), base_url="http://testserver") as test_client:
        yield test_client

@pytest.fixture
def live_db():
    """A throwaway database on a real MongoDB server (5.0+) from TEST_MONGODB_URL.

    Used where mongomock falls short: correlated $lookup and concurrent writes.
    """
    url = os.getenv("TEST_MONGODB_URL")
    if not url:
        pytest.skip("TEST_MONGODB_URL is not set")

    client = create_client(url)
    try:
        client.admin.command("ping")
    except PyMongoError as exc:
        client.close()
        pytest.skip(f"MongoDB at TEST_MONGODB_URL is unreachable: {exc}")

    database = client[f"doctorsPortal_test_{uuid.uuid4().hex[:12]}"]
    try:
        yield database
    finally:
        client.drop_database(database.name)
        client.close()

@pytest.fixture
def live_client(live_db):
    with TestClient(create_app(database=live_db), base_url="http://testserver") as test_client:
        yield test_client

@pytest.fixture
def seed_options(db):
    appointment_options(db).insert_many(copy.deepcopy(APPOINTMENT_OPTIONS))

@pytest.fixture
def add_booking(db):
    def _add(email, treatment, date, slot, **extra):
        document = {
            "email": email,
            "treatmentTitle": treatment,
            "appointmentDate": date,
            "slot": slot,
            **extra,
        }
        document["_id"] = bookings(db).insert_one(document).inserted_id
        return document
    return _add

@pytest.fixture
def add_user(db):
    def _add(email, **extra):
        document = {"email": email, **extra}
        document["_id"] = users(db).insert_one(document).inserted_id
        return document
    return _add

@pytest.fixture
def auth_headers():
    def _headers(email):
        return {"Authorization": f"Bearer {create_access_token(email)}"}
    return _headers

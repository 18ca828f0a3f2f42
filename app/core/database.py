from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
from pymongo.server_api import ServerApi
from typing import Any, Dict, List, Optional
import logging

from .config import settings

logger = logging.getLogger(__name__)

def create_client(url: Optional[str] = None) -> MongoClient:
    """Create the process-wide MongoDB client (Stable API v1, strict)."""
    return MongoClient(
        url or settings.get_mongodb_url,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
    )

# Collection accessors
def appointment_options(db: Database) -> Collection:
    return db[settings.APPOINTMENT_OPTIONS_COLLECTION]

def bookings(db: Database) -> Collection:
    return db[settings.BOOKINGS_COLLECTION]

def users(db: Database) -> Collection:
    return db[settings.USERS_COLLECTION]

# Index setup
BOOKING_KEY = ["appointmentDate", "email", "treatmentTitle"]
USER_KEY = ["email"]

def find_duplicates(
    collection: Collection,
    fields: List[str],
    sparse: bool = False,
    limit: int = 10
) -> List[Dict[str, Any]]:
    """Key combinations held by more than one document in ``collection``."""
    pipeline = []
    if sparse:
        pipeline.append({"$match": {field: {"$exists": True} for field in fields}})
    pipeline += [
        {"$group": {"_id": {field: f"${field}" for field in fields}, "count": {"$sum": 1}}},
        {"$match": {"count": {"$gt": 1}}},
        {"$limit": limit},
    ]
    return [dict(group["_id"], count=group["count"]) for group in collection.aggregate(pipeline)]

def _create_unique_index(
    collection: Collection,
    fields: List[str],
    name: str,
    sparse: bool = False
) -> None:
    try:
        collection.create_index(
            [(field, ASCENDING) for field in fields],
            unique=True,
            name=name,
            sparse=sparse,
        )
    except DuplicateKeyError:
        duplicates = find_duplicates(collection, fields, sparse=sparse)
        logger.error(
            f"Cannot build unique index '{name}' on '{collection.name}': "
            f"existing documents share keys {duplicates}. "
            "Remove the extra documents and restart."
        )
        raise

def ensure_indexes(db: Database) -> None:
    """Create the unique indexes the booking and signup rules rely on.

    Fails with DuplicateKeyError if existing data already violates them.
    """
    _create_unique_index(bookings(db), BOOKING_KEY, "unique_patient_treatment_per_day")
    _create_unique_index(users(db), USER_KEY, "unique_user_email", sparse=True)
    logger.info("Database indexes ensured")

# Database dependency
def get_database(request: Request) -> Database:
    """Get the database handle attached to the application at startup."""
    return request.app.state.database

from fastapi import APIRouter, Depends
from pymongo.database import Database
from typing import List

from ...api.deps import get_token_email
from ...core.database import get_database
from ...core.security import AuthorizationError
from ...schemas.appointment import AppointmentOption, Booking, BookingCreate
from ...schemas.common import WriteResult
from ...services.availability_service import AvailabilityService
from ...services.booking_service import BookingService

router = APIRouter(tags=["Appointments"])

@router.get("/availableAppointments", response_model=List[AppointmentOption])
def available_appointments(date: str, db: Database = Depends(get_database)):
    """Treatment options with the slots still open on ``date``."""
    return AvailabilityService(db).list_available(date)

@router.get("/v2/availableAppointments", response_model=List[AppointmentOption])
def available_appointments_v2(date: str, db: Database = Depends(get_database)):
    """Same as ``/availableAppointments``, resolved by an aggregation pipeline."""
    return AvailabilityService(db).list_available_aggregated(date)

@router.get("/bookings", response_model=List[Booking])
def my_bookings(
    email: str,
    token_email: str = Depends(get_token_email),
    db: Database = Depends(get_database)
):
    """Bookings of the authenticated patient."""
    if token_email != email:
        raise AuthorizationError()

    return BookingService(db).list_patient_bookings(email)

@router.post(
    "/bookingAppointments",
    response_model=WriteResult,
    response_model_exclude_none=True
)
def book_appointment(booking: BookingCreate, db: Database = Depends(get_database)):
    """Book a slot. A second booking of the same treatment on the same day is refused."""
    return BookingService(db).create_booking(booking)

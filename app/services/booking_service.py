from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
from typing import Any, Dict, List
import logging

from ..core.database import bookings
from ..schemas.appointment import BookingCreate
from ..schemas.common import WriteResult

logger = logging.getLogger(__name__)

class BookingService:
    def __init__(self, db: Database):
        self.db = db

    def create_booking(self, booking: BookingCreate) -> WriteResult:
        """Store a booking unless the patient already holds this treatment on that date.

        Relies on the unique (appointmentDate, email, treatmentTitle) index, so
        the check and the insert are one store operation.
        """
        document = booking.model_dump()

        try:
            result = bookings(self.db).insert_one(document)
        except DuplicateKeyError:
            logger.info(
                f"Rejected duplicate booking for {booking.email} - "
                f"{booking.treatmentTitle} on {booking.appointmentDate}"
            )
            return WriteResult(
                acknowledged=False,
                message=f"You have an already booking at {booking.appointmentDate}"
            )

        return WriteResult(
            acknowledged=result.acknowledged,
            insertedId=result.inserted_id
        )

    def list_patient_bookings(self, email: str) -> List[Dict[str, Any]]:
        """All bookings made by the given patient."""
        return list(bookings(self.db).find({"email": email}))

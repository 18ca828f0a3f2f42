"""Availability resolution: treatment slots net of the bookings on a date.

Two realizations are kept side by side and must agree:

* :meth:`AvailabilityService.list_available` fetches templates and the day's
  bookings and subtracts in Python (:func:`remaining_slots`).
* :meth:`AvailabilityService.list_available_aggregated` pushes the join and
  the subtraction into a single aggregation (:func:`build_availability_pipeline`).

Both keep the template's slot order and any duplicate labels in it.
"""
from pymongo.database import Database
from typing import Any, Dict, Iterable, List

from ..core.config import settings
from ..core.database import appointment_options, bookings

def remaining_slots(
    options: Iterable[Dict[str, Any]],
    booked: Iterable[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """Return copies of ``options`` with the slots in ``booked`` removed.

    ``booked`` must already be restricted to a single appointment date.
    """
    booked = list(booked)
    available = []

    for option in options:
        booked_slots = {
            booking.get("slot")
            for booking in booked
            if booking.get("treatmentTitle") == option.get("name")
        }
        slots = [slot for slot in option.get("slots") or [] if slot not in booked_slots]
        available.append({**option, "slots": slots})

    return available

def build_availability_pipeline(date: str) -> List[Dict[str, Any]]:
    """Aggregation over the appointment options collection for ``date``.

    Uses the concise correlated $lookup (localField plus pipeline), which
    needs MongoDB 5.0 or later.
    """
    return [
        {
            "$lookup": {
                "from": settings.BOOKINGS_COLLECTION,
                "localField": "name",
                "foreignField": "treatmentTitle",
                # only the requested day's bookings are joined
                "pipeline": [
                    {"$match": {"$expr": {"$eq": ["$appointmentDate", {"$literal": date}]}}},
                    {"$project": {"_id": 0, "slot": 1}},
                ],
                "as": "bookedSlots",
            }
        },
        {
            "$addFields": {
                "bookedSlots": {
                    "$map": {"input": "$bookedSlots", "as": "book", "in": "$$book.slot"}
                }
            }
        },
        # $filter rather than $setDifference: keeps slot order and duplicates
        {
            "$addFields": {
                "slots": {
                    "$filter": {
                        "input": {"$ifNull": ["$slots", []]},
                        "as": "slot",
                        "cond": {"$not": {"$in": ["$$slot", "$bookedSlots"]}},
                    }
                }
            }
        },
        {"$project": {"bookedSlots": 0}},
    ]

class AvailabilityService:
    def __init__(self, db: Database):
        self.db = db

    def list_available(self, date: str) -> List[Dict[str, Any]]:
        """Resolve availability in application code."""
        options = appointment_options(self.db).find({})
        booked = bookings(self.db).find({"appointmentDate": date})
        return remaining_slots(options, booked)

    def list_available_aggregated(self, date: str) -> List[Dict[str, Any]]:
        """Resolve availability with a store-side join."""
        return list(appointment_options(self.db).aggregate(build_availability_pipeline(date)))

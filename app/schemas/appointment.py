from pydantic import BaseModel, ConfigDict
from typing import List

from .common import MongoDocument

class AppointmentOption(MongoDocument):
    name: str
    slots: List[str] = []

class BookingBase(BaseModel):
    appointmentDate: str
    email: str
    treatmentTitle: str
    slot: str

class BookingCreate(BookingBase):
    model_config = ConfigDict(extra="allow")

class Booking(MongoDocument, BookingBase):
    pass

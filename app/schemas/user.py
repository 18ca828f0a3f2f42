from pydantic import BaseModel, ConfigDict
from typing import Optional

from .common import MongoDocument

class UserCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: str

class UserResponse(MongoDocument):
    email: Optional[str] = None
    role: Optional[str] = None

class AdminStatus(BaseModel):
    isAdmin: bool

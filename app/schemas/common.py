from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from typing import Annotated, Any, Optional

def _object_id_to_str(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value

# ObjectId values are rendered as their hex string
PyObjectId = Annotated[str, BeforeValidator(_object_id_to_str)]

class MongoDocument(BaseModel):
    """Base for documents read back from the store.

    Unknown fields are kept so client-supplied extras survive a round trip.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[PyObjectId] = Field(default=None, alias="_id")

class WriteResult(BaseModel):
    acknowledged: bool
    insertedId: Optional[PyObjectId] = None
    message: Optional[str] = None

class UpdateResult(BaseModel):
    acknowledged: bool
    matchedCount: int
    modifiedCount: int
    upsertedId: Optional[PyObjectId] = None

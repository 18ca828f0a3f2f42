from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError
from typing import Any, Dict, List, Optional
import logging

from ..core.database import users
from ..core.security import UserRole
from ..schemas.common import UpdateResult, WriteResult
from ..schemas.user import UserCreate

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, db: Database):
        self.db = db

    def list_users(self) -> List[Dict[str, Any]]:
        return list(users(self.db).find({}))

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return users(self.db).find_one({"email": email})

    def is_admin(self, email: str) -> bool:
        user = self.get_by_email(email)
        return bool(user) and user.get("role") == UserRole.ADMIN.value

    def create_user(self, user_data: UserCreate) -> WriteResult:
        """Register a user. Roles are never taken from the signup payload."""
        document = user_data.model_dump()
        document.pop("role", None)

        try:
            result = users(self.db).insert_one(document)
        except DuplicateKeyError:
            return WriteResult(
                acknowledged=False,
                message=f"{user_data.email} is already registered"
            )

        return WriteResult(
            acknowledged=result.acknowledged,
            insertedId=result.inserted_id
        )

    def promote_to_admin(self, user_id: str) -> UpdateResult:
        """Set role "admin" on the user with the given id (upserting if absent)."""
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid user id"
            )

        result = users(self.db).update_one(
            {"_id": object_id},
            {"$set": {"role": UserRole.ADMIN.value}},
            upsert=True
        )
        logger.info(f"User {user_id} promoted to admin")

        return UpdateResult(
            acknowledged=result.acknowledged,
            matchedCount=result.matched_count,
            modifiedCount=result.modified_count,
            upsertedId=result.upserted_id
        )

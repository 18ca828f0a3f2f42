from fastapi import APIRouter, Depends
from pymongo.database import Database
from typing import List

from ...api.deps import get_admin_email
from ...core.database import get_database
from ...schemas.common import UpdateResult, WriteResult
from ...schemas.user import AdminStatus, UserCreate, UserResponse
from ...services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

@router.get("", response_model=List[UserResponse])
def list_users(db: Database = Depends(get_database)):
    return UserService(db).list_users()

@router.post("", response_model=WriteResult, response_model_exclude_none=True)
def create_user(user_data: UserCreate, db: Database = Depends(get_database)):
    """Register a user on first signup."""
    return UserService(db).create_user(user_data)

@router.get("/admin/{email}", response_model=AdminStatus)
def admin_status(email: str, db: Database = Depends(get_database)):
    return AdminStatus(isAdmin=UserService(db).is_admin(email))

@router.put("/admin/{user_id}", response_model=UpdateResult)
def make_admin(
    user_id: str,
    _: str = Depends(get_admin_email),
    db: Database = Depends(get_database)
):
    """Grant the admin role (admin only)."""
    return UserService(db).promote_to_admin(user_id)

from pymongo.database import Database
from typing import Optional

from ..core.database import users
from ..core.security import create_access_token

class AuthService:
    def __init__(self, db: Database):
        self.db = db

    def issue_access_token(self, email: str) -> Optional[str]:
        """Return a signed access token if a user with this email exists."""
        user = users(self.db).find_one({"email": email})

        if user and user.get("email"):
            return create_access_token(user["email"])

        return None

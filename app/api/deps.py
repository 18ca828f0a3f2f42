from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from pymongo.database import Database
from typing import Optional

from ..core.database import get_database
from ..core.security import (
    security, verify_token, AuthenticationError, AuthorizationError
)
from ..services.user_service import UserService

async def get_token_email(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """Verify the bearer token and return the email it was issued for.

    Only a request without an Authorization header is unauthorized; any
    header that does not carry a valid bearer token is forbidden.
    """
    if "authorization" not in request.headers:
        raise AuthenticationError()

    if credentials is None:
        raise AuthorizationError()

    token_payload = verify_token(credentials.credentials)
    if not token_payload or not token_payload.email:
        raise AuthorizationError()

    return token_payload.email

def get_admin_email(
    email: str = Depends(get_token_email),
    db: Database = Depends(get_database)
) -> str:
    """Require the token holder to be an admin user."""
    if not UserService(db).is_admin(email):
        raise AuthorizationError()

    return email

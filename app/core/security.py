from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status
from fastapi.security import HTTPBearer
from pydantic import BaseModel, ValidationError
from enum import Enum

from .config import settings

# JWT Security; the dependency decides between 401 and 403 itself
security = HTTPBearer(auto_error=False)

class UserRole(str, Enum):
    ADMIN = "admin"

class TokenPayload(BaseModel):
    email: Optional[str] = None
    exp: Optional[int] = None

# JWT utilities
def create_access_token(
    email: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed access token carrying the email claim."""
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)

    to_encode = {
        "email": email,
        "exp": datetime.utcnow() + expires_delta,
    }

    encoded_jwt = jwt.encode(
        to_encode,
        settings.ACCESS_TOKEN,
        algorithm=settings.ALGORITHM
    )
    return encoded_jwt

def verify_token(token: str) -> Optional[TokenPayload]:
    """Verify and decode JWT token. Returns None for bad or expired tokens."""
    try:
        payload = jwt.decode(
            token,
            settings.ACCESS_TOKEN,
            algorithms=[settings.ALGORITHM]
        )

        return TokenPayload(**payload)

    except (JWTError, ValidationError):
        return None

# Security exceptions
class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "unauthorized access"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "forbidden access"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )

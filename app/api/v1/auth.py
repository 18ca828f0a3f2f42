from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pymongo.database import Database

from ...core.database import get_database
from ...schemas.auth import AccessTokenResponse
from ...services.auth_service import AuthService

router = APIRouter(tags=["Authentication"])

@router.get(
    "/jwt",
    response_model=AccessTokenResponse,
    responses={status.HTTP_403_FORBIDDEN: {"model": AccessTokenResponse}}
)
def issue_token(email: str, db: Database = Depends(get_database)):
    """Issue an access token for a registered user."""
    token = AuthService(db).issue_access_token(email)

    if token is None:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"accessToken": ""}
        )

    return AccessTokenResponse(accessToken=token)

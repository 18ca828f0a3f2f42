from pydantic import BaseModel

class AccessTokenResponse(BaseModel):
    accessToken: str

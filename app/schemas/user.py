from pydantic import BaseModel
from typing import Optional
from uuid import UUID


class TokenResponse(BaseModel):

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AccessTokenResponse(BaseModel):

    access_token: str
    token_type: str = "bearer"


# Snapshot of the signed-in admin, handed to each request
class AdminSession(BaseModel):
    id: UUID
    email: str
    name: Optional[str] = None
    token_id: Optional[str] = None

    model_config = {
        "from_attributes": True,
        "frozen": True,
    }

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from family_directory.schemas.profile_schema import ProfileOut


# --------------------------------------------------
# REQUESTS
# --------------------------------------------------
class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=8, max_length=1024)
    invite_code: str = Field(min_length=1)


class LoginRequest(BaseModel):
    username: str
    password: str


# --------------------------------------------------
# USER OUT (never carries the password hash)
# --------------------------------------------------
class UserOut(BaseModel):
    id: int
    username: str
    role: Literal["admin", "member"]
    created_at: datetime

    model_config = {"from_attributes": True}


class MeOut(UserOut):
    profile: Optional[ProfileOut] = None


class LoginOut(UserOut):
    access_token: str
    token_type: str = "bearer"

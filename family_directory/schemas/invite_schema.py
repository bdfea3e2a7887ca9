from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr


class InviteCreate(BaseModel):
    email: EmailStr


class InviteOut(BaseModel):
    id: int
    email: str
    code: str
    created_by_admin_id: Optional[int] = None
    used_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


# --------------------------------------------------
# REQUESTS
# --------------------------------------------------
class ThreadCreate(BaseModel):
    recipient_user_id: int
    body: str = Field(min_length=1)


class ReplyCreate(BaseModel):
    body: str = Field(min_length=1)


# --------------------------------------------------
# OUT
# --------------------------------------------------
class ThreadOut(BaseModel):
    id: int
    created_at: datetime
    participants: List[int] = []


class MessageOut(BaseModel):
    id: int
    thread_id: int
    sender_user_id: int
    body: str
    created_at: datetime

    model_config = {"from_attributes": True}

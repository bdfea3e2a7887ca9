from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


MediaType = Literal["PHOTO", "VIDEO"]


class MediaCreate(BaseModel):
    person_id: int
    type: MediaType
    url: str = Field(min_length=1)
    caption: Optional[str] = None


class MediaOut(BaseModel):
    id: int
    person_id: int
    uploader_user_id: Optional[int] = None
    type: MediaType
    url: str
    caption: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}

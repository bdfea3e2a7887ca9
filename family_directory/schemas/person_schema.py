from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from family_directory.schemas.media_schema import MediaOut
from family_directory.schemas.relationship_schema import RelationshipOut


# --------------------------------------------------
# CREATE
# --------------------------------------------------
class PersonCreate(BaseModel):
    full_name: str = Field(min_length=1, max_length=255)
    nickname: Optional[str] = None
    maiden_name: Optional[str] = None
    gender: Optional[str] = None

    is_living: bool = True
    birth_date: Optional[date] = None
    death_date: Optional[date] = None

    birth_place: Optional[str] = None
    current_city: Optional[str] = None
    biography: Optional[str] = None
    cultural_notes: Optional[str] = None

    tags: List[str] = []
    linked_user_id: Optional[int] = None


# --------------------------------------------------
# UPDATE (partial)
# --------------------------------------------------
class PersonUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    nickname: Optional[str] = None
    maiden_name: Optional[str] = None
    gender: Optional[str] = None

    is_living: Optional[bool] = None
    birth_date: Optional[date] = None
    death_date: Optional[date] = None

    birth_place: Optional[str] = None
    current_city: Optional[str] = None
    biography: Optional[str] = None
    cultural_notes: Optional[str] = None

    tags: Optional[List[str]] = None
    linked_user_id: Optional[int] = None

    # Nullable columns may be cleared; these may not
    @field_validator("full_name", "is_living", "tags")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


# --------------------------------------------------
# OUT
# --------------------------------------------------
class PersonOut(BaseModel):
    id: int
    created_by_user_id: Optional[int] = None

    full_name: str
    nickname: Optional[str] = None
    maiden_name: Optional[str] = None
    gender: Optional[str] = None

    is_living: bool
    birth_date: Optional[date] = None
    death_date: Optional[date] = None

    birth_place: Optional[str] = None
    current_city: Optional[str] = None
    biography: Optional[str] = None
    cultural_notes: Optional[str] = None

    tags: List[str] = []
    linked_user_id: Optional[int] = None

    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("tags", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []


# --------------------------------------------------
# DETAIL (person + media + both edge directions)
# --------------------------------------------------
class PersonDetailOut(PersonOut):
    media: List[MediaOut] = []
    relationships_from: List[RelationshipOut] = []
    relationships_to: List[RelationshipOut] = []

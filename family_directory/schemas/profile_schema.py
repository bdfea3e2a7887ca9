from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    bio: Optional[str] = None
    location: Optional[str] = None
    profile_image_url: Optional[str] = None

    linkedin_url: Optional[str] = None
    instagram_url: Optional[str] = None
    facebook_url: Optional[str] = None
    x_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    youtube_url: Optional[str] = None
    website_url: Optional[str] = None

    privacy_show_social: Optional[bool] = None
    privacy_allow_contact: Optional[bool] = None

    @field_validator("display_name", "privacy_show_social", "privacy_allow_contact")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class ProfileOut(BaseModel):
    id: int
    user_id: int
    display_name: str

    bio: Optional[str] = None
    location: Optional[str] = None
    profile_image_url: Optional[str] = None

    linkedin_url: Optional[str] = None
    instagram_url: Optional[str] = None
    facebook_url: Optional[str] = None
    x_url: Optional[str] = None
    tiktok_url: Optional[str] = None
    youtube_url: Optional[str] = None
    website_url: Optional[str] = None

    privacy_show_social: bool
    privacy_allow_contact: bool

    model_config = {"from_attributes": True}

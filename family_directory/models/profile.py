from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Text
from sqlalchemy.orm import relationship

from family_directory.database import Base


SOCIAL_LINK_FIELDS = (
    "linkedin_url",
    "instagram_url",
    "facebook_url",
    "x_url",
    "tiktok_url",
    "youtube_url",
    "website_url",
)


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        unique=True,
        nullable=False
    )

    display_name = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)

    # -------------------------------------------------------
    # Social links
    # -------------------------------------------------------
    linkedin_url = Column(String, nullable=True)
    instagram_url = Column(String, nullable=True)
    facebook_url = Column(String, nullable=True)
    x_url = Column(String, nullable=True)
    tiktok_url = Column(String, nullable=True)
    youtube_url = Column(String, nullable=True)
    website_url = Column(String, nullable=True)

    # -------------------------------------------------------
    # Privacy
    # -------------------------------------------------------
    privacy_show_social = Column(Boolean, nullable=False, default=True)
    privacy_allow_contact = Column(Boolean, nullable=False, default=True)

    user = relationship("User", back_populates="profile", foreign_keys=[user_id])

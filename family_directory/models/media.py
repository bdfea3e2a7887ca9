from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint

from family_directory.database import Base, utcnow


MEDIA_TYPES = ("PHOTO", "VIDEO")


class Media(Base):
    __tablename__ = "media"

    id = Column(Integer, primary_key=True, index=True)

    person_id = Column(Integer, ForeignKey("people.id"), nullable=False, index=True)
    uploader_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    # PHOTO | VIDEO
    type = Column(String, nullable=False)
    url = Column(String, nullable=False)
    caption = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("type IN ('PHOTO', 'VIDEO')", name="ck_media_type"),
    )

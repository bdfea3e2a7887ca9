from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship

from family_directory.database import Base, utcnow


class Person(Base):
    """
    A genealogical record.
    Independent of User accounts; may optionally point at one.
    """
    __tablename__ = "people"

    id = Column(Integer, primary_key=True, index=True)
    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    full_name = Column(String, nullable=False, index=True)
    nickname = Column(String, nullable=True)
    maiden_name = Column(String, nullable=True)
    gender = Column(String, nullable=True)

    is_living = Column(Boolean, nullable=False, default=True, index=True)
    birth_date = Column(Date, nullable=True)
    death_date = Column(Date, nullable=True)

    birth_place = Column(String, nullable=True)
    current_city = Column(String, nullable=True)
    biography = Column(Text, nullable=True)
    cultural_notes = Column(Text, nullable=True)

    # e.g. ["Ijebu", "Lagos"]
    tags = Column(JSON, nullable=False, default=list)

    # Set when this person is also a registered user
    linked_user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    linked_user = relationship("User", foreign_keys=[linked_user_id])

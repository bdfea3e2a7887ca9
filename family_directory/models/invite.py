from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from family_directory.database import Base, utcnow


class Invite(Base):
    __tablename__ = "invites"

    id = Column(Integer, primary_key=True, index=True)

    email = Column(String, nullable=False)
    code = Column(String, unique=True, index=True, nullable=False)

    created_by_admin_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    # Set once at registration; a used invite never becomes valid again
    used_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    created_by = relationship("User", foreign_keys=[created_by_admin_id])

    @property
    def is_used(self) -> bool:
        return self.used_at is not None

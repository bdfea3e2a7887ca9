from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from family_directory.database import Base, utcnow


class UserSession(Base):
    """
    Server-side half of a login.
    The signed cookie only carries session_key; deleting the row revokes it.
    """
    __tablename__ = "user_sessions"

    id = Column(Integer, primary_key=True, index=True)
    session_key = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False)

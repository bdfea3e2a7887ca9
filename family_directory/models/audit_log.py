from sqlalchemy import Column, Integer, String, DateTime, JSON, Index

from family_directory.database import Base, utcnow


AUDIT_CREATE = "CREATE"
AUDIT_UPDATE = "UPDATE"
AUDIT_DELETE = "DELETE"


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)

    # person | relationship | media
    entity_type = Column(String, nullable=False)
    entity_id = Column(Integer, nullable=False)

    # CREATE | UPDATE | DELETE
    action = Column(String, nullable=False)

    # Kept plain: the actor may later be removed
    actor_user_id = Column(Integer, nullable=True)
    details = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
    )

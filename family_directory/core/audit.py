from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from family_directory.models.audit_log import AuditLog


def record(
    db: Session,
    entity_type: str,
    entity_id: int,
    action: str,
    actor_user_id: Optional[int],
    details: Optional[dict[str, Any]] = None,
) -> AuditLog:
    """
    Append an audit row to the current transaction.
    Dates and other non-JSON values in details are stringified.
    """
    entry = AuditLog(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        actor_user_id=actor_user_id,
        details=jsonable_encoder(details) if details else None,
    )
    db.add(entry)
    return entry

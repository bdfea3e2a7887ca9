from typing import List, Optional

from fastapi import APIRouter, Depends, status

from family_directory.auth import require_admin
from family_directory.core.store import FamilyStore
from family_directory.dependencies import get_store
from family_directory.models.user import User
from family_directory.schemas.audit_schema import AuditLogOut
from family_directory.schemas.invite_schema import InviteCreate, InviteOut


router = APIRouter(prefix="/admin", tags=["Admin"])


# --------------------------------------------------
# INVITES
# --------------------------------------------------
@router.get("/invites", response_model=List[InviteOut])
def list_invites(
    admin: User = Depends(require_admin),
    store: FamilyStore = Depends(get_store),
):
    return store.list_invites()


@router.post("/invites", response_model=InviteOut, status_code=status.HTTP_201_CREATED)
def create_invite(
    payload: InviteCreate,
    admin: User = Depends(require_admin),
    store: FamilyStore = Depends(get_store),
):
    return store.create_invite(payload.email, admin_id=admin.id)


# --------------------------------------------------
# AUDIT TRAIL
# --------------------------------------------------
@router.get("/audit-logs", response_model=List[AuditLogOut])
def list_audit_logs(
    entity_type: Optional[str] = None,
    entity_id: Optional[int] = None,
    admin: User = Depends(require_admin),
    store: FamilyStore = Depends(get_store),
):
    return store.list_audit_logs(entity_type=entity_type, entity_id=entity_id)

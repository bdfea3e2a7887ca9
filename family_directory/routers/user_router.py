from fastapi import APIRouter, Depends

from family_directory.auth import get_current_user
from family_directory.core.store import FamilyStore
from family_directory.dependencies import get_store
from family_directory.models.user import User
from family_directory.schemas.auth_schema import MeOut, UserOut
from family_directory.schemas.profile_schema import ProfileOut, ProfileUpdate


router = APIRouter(prefix="/user", tags=["User"])


# ---------------------------------------------------------------------
# GET ME (user + profile)
# ---------------------------------------------------------------------
@router.get("", response_model=MeOut)
def get_me(
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    profile = store.get_profile(current_user.id)

    return {
        **UserOut.model_validate(current_user).model_dump(),
        "profile": ProfileOut.model_validate(profile) if profile else None,
    }


# ---------------------------------------------------------------------
# UPDATE MY PROFILE (partial upsert)
# ---------------------------------------------------------------------
@router.put("/profile", response_model=ProfileOut)
def update_my_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    changes = payload.model_dump(exclude_unset=True)
    return store.upsert_profile(current_user.id, changes)

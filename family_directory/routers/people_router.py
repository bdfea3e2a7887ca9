from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from family_directory.auth import get_current_user
from family_directory.core.store import FamilyStore
from family_directory.dependencies import get_store
from family_directory.errors import NotFoundError
from family_directory.models.user import User
from family_directory.schemas.media_schema import MediaOut
from family_directory.schemas.person_schema import (
    PersonCreate,
    PersonDetailOut,
    PersonOut,
    PersonUpdate,
)
from family_directory.schemas.relationship_schema import RelationshipOut


router = APIRouter(prefix="/people", tags=["People"])


# --------------------------------------------------
# LIST (search is case-insensitive on full / maiden name)
# --------------------------------------------------
@router.get("", response_model=List[PersonOut])
def list_people(
    search: Optional[str] = None,
    living: Optional[bool] = None,
    tag: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    return store.list_people(search=search, living=living, tag=tag)


# --------------------------------------------------
# DETAIL
# --------------------------------------------------
@router.get("/{person_id}", response_model=PersonDetailOut)
def get_person(
    person_id: int,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    detail = store.get_person_detail(person_id)

    return {
        **PersonOut.model_validate(detail["person"]).model_dump(),
        "media": [MediaOut.model_validate(m) for m in detail["media"]],
        "relationships_from": [
            RelationshipOut.model_validate(r) for r in detail["relationships_from"]
        ],
        "relationships_to": [
            RelationshipOut.model_validate(r) for r in detail["relationships_to"]
        ],
    }


# --------------------------------------------------
# CREATE
# --------------------------------------------------
@router.post("", response_model=PersonOut, status_code=status.HTTP_201_CREATED)
def create_person(
    payload: PersonCreate,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    return store.create_person(payload.model_dump(), actor_id=current_user.id)


# --------------------------------------------------
# UPDATE (partial)
# --------------------------------------------------
@router.put("/{person_id}", response_model=PersonOut)
def update_person(
    person_id: int,
    payload: PersonUpdate,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    changes = payload.model_dump(exclude_unset=True)
    return store.update_person(person_id, changes, actor_id=current_user.id)


# --------------------------------------------------
# DELETE (cascades to media + relationships)
# --------------------------------------------------
@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_person(
    person_id: int,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    if not store.delete_person(person_id, actor_id=current_user.id):
        raise NotFoundError("Person not found", field="person_id")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

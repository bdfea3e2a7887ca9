from fastapi import APIRouter, Depends, Response, status

from family_directory.auth import get_current_user
from family_directory.core.store import FamilyStore
from family_directory.dependencies import get_store
from family_directory.errors import NotFoundError
from family_directory.models.user import User
from family_directory.schemas.relationship_schema import RelationshipCreate, RelationshipOut


router = APIRouter(prefix="/relationships", tags=["Relationships"])


@router.post("", response_model=RelationshipOut, status_code=status.HTTP_201_CREATED)
def create_relationship(
    payload: RelationshipCreate,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    return store.create_relationship(payload.model_dump(), actor_id=current_user.id)


@router.delete("/{relationship_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_relationship(
    relationship_id: int,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    if not store.delete_relationship(relationship_id, actor_id=current_user.id):
        raise NotFoundError("Relationship not found", field="relationship_id")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

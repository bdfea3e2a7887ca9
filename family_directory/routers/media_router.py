from fastapi import APIRouter, Depends, Response, status

from family_directory.auth import get_current_user
from family_directory.core.store import FamilyStore
from family_directory.dependencies import get_store
from family_directory.errors import NotFoundError
from family_directory.models.user import User
from family_directory.schemas.media_schema import MediaCreate, MediaOut


router = APIRouter(prefix="/media", tags=["Media"])


@router.post("", response_model=MediaOut, status_code=status.HTTP_201_CREATED)
def create_media(
    payload: MediaCreate,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    return store.create_media(payload.model_dump(), actor_id=current_user.id)


@router.delete("/{media_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_media(
    media_id: int,
    current_user: User = Depends(get_current_user),
    store: FamilyStore = Depends(get_store),
):
    if not store.delete_media(media_id, actor_id=current_user.id):
        raise NotFoundError("Media not found", field="media_id")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from typing import List

from fastapi import APIRouter, Depends, status

from family_directory.auth import get_current_user
from family_directory.core.messaging import Messenger, thread_out
from family_directory.dependencies import get_messenger
from family_directory.models.user import User
from family_directory.schemas.message_schema import (
    MessageOut,
    ReplyCreate,
    ThreadCreate,
    ThreadOut,
)


router = APIRouter(prefix="/messages", tags=["Messages"])


# --------------------------------------------------
# INBOX
# --------------------------------------------------
@router.get("/inbox", response_model=List[ThreadOut])
def inbox(
    current_user: User = Depends(get_current_user),
    messenger: Messenger = Depends(get_messenger),
):
    return [thread_out(t) for t in messenger.list_threads_for_user(current_user.id)]


# --------------------------------------------------
# NEW THREAD (with first message)
# --------------------------------------------------
@router.post("/thread", response_model=ThreadOut, status_code=status.HTTP_201_CREATED)
def create_thread(
    payload: ThreadCreate,
    current_user: User = Depends(get_current_user),
    messenger: Messenger = Depends(get_messenger),
):
    thread = messenger.start_conversation(
        sender_id=current_user.id,
        recipient_id=payload.recipient_user_id,
        body=payload.body,
    )
    return thread_out(thread)


# --------------------------------------------------
# THREAD MESSAGES
# --------------------------------------------------
@router.get("/thread/{thread_id}", response_model=List[MessageOut])
def list_thread_messages(
    thread_id: int,
    current_user: User = Depends(get_current_user),
    messenger: Messenger = Depends(get_messenger),
):
    return messenger.list_messages(thread_id)


# --------------------------------------------------
# REPLY
# --------------------------------------------------
@router.post("/{thread_id}", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def reply(
    thread_id: int,
    payload: ReplyCreate,
    current_user: User = Depends(get_current_user),
    messenger: Messenger = Depends(get_messenger),
):
    return messenger.post_message(thread_id, current_user.id, payload.body)

from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from family_directory.database import unit_of_work
from family_directory.errors import NotFoundError
from family_directory.models.message import Message, MessageThread, ThreadParticipant
from family_directory.models.user import User


def thread_out(thread: MessageThread) -> dict[str, Any]:
    return {
        "id": thread.id,
        "created_at": thread.created_at,
        "participants": thread.participant_ids,
    }


class Messenger:
    """
    Direct messaging over threads, participants and messages.

    Participant lists are stored as given: no dedup, and asking twice for
    the same pair yields two threads. Senders are not checked against a
    thread's participants.
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_thread(self, thread_id: int) -> MessageThread:
        thread = self.db.get(MessageThread, thread_id)
        if not thread:
            raise NotFoundError("Thread not found", field="thread_id")
        return thread

    def _check_users(self, user_ids: Iterable[int]) -> None:
        for user_id in user_ids:
            if self.db.get(User, user_id) is None:
                raise NotFoundError("User not found", field="user_id")

    # ------------------------------------------------------
    # Writes (stage only; callers pick the transaction)
    # ------------------------------------------------------
    def _add_thread(self, participant_user_ids: list[int]) -> MessageThread:
        self._check_users(participant_user_ids)

        thread = MessageThread()
        self.db.add(thread)
        self.db.flush()

        for user_id in participant_user_ids:
            self.db.add(ThreadParticipant(thread_id=thread.id, user_id=user_id))

        self.db.flush()
        return thread

    def _add_message(self, thread_id: int, sender_id: int, body: str) -> Message:
        self._get_thread(thread_id)
        self._check_users([sender_id])

        msg = Message(thread_id=thread_id, sender_user_id=sender_id, body=body)
        self.db.add(msg)
        self.db.flush()
        return msg

    # ------------------------------------------------------
    # Public operations
    # ------------------------------------------------------
    def create_thread(self, participant_user_ids: Iterable[int]) -> MessageThread:
        with unit_of_work(self.db):
            thread = self._add_thread(list(participant_user_ids))

        self.db.refresh(thread)
        return thread

    def post_message(self, thread_id: int, sender_id: int, body: str) -> Message:
        with unit_of_work(self.db):
            msg = self._add_message(thread_id, sender_id, body)

        self.db.refresh(msg)
        return msg

    def start_conversation(self, sender_id: int, recipient_id: int, body: str) -> MessageThread:
        """New two-party thread and its first message, atomically."""
        with unit_of_work(self.db):
            thread = self._add_thread([sender_id, recipient_id])
            self._add_message(thread.id, sender_id, body)

        self.db.refresh(thread)
        return thread

    def list_threads_for_user(self, user_id: int) -> list[MessageThread]:
        """Threads the user takes part in, newest first, each listed once."""
        thread_ids = (
            select(ThreadParticipant.thread_id)
            .where(ThreadParticipant.user_id == user_id)
            .distinct()
        )

        return (
            self.db.query(MessageThread)
            .options(selectinload(MessageThread.participants))
            .filter(MessageThread.id.in_(thread_ids))
            .order_by(MessageThread.created_at.desc(), MessageThread.id.desc())
            .all()
        )

    def list_messages(self, thread_id: int) -> list[Message]:
        self._get_thread(thread_id)

        return (
            self.db.query(Message)
            .filter(Message.thread_id == thread_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
            .all()
        )

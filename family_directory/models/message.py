from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from family_directory.database import Base, utcnow


class MessageThread(Base):
    __tablename__ = "message_threads"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    participants = relationship(
        "ThreadParticipant",
        back_populates="thread",
        order_by="ThreadParticipant.id",
    )

    @property
    def participant_ids(self) -> list[int]:
        return [p.user_id for p in self.participants]


class ThreadParticipant(Base):
    # No uniqueness on (thread_id, user_id)
    __tablename__ = "thread_participants"

    id = Column(Integer, primary_key=True, index=True)
    thread_id = Column(Integer, ForeignKey("message_threads.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    thread = relationship("MessageThread", back_populates="participants")


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    thread_id = Column(Integer, ForeignKey("message_threads.id"), nullable=False)
    sender_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_messages_thread_created", "thread_id", "created_at"),
    )

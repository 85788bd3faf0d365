"""
Message ORM model.

One immutable chat turn. Assistant turns carry cited chunk IDs and
token usage; user turns carry neither.

Dependencies: sqlalchemy, policy_chat.boundary.db.base
System role: Chat history persistence
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from policy_chat.boundary.db.base import Base, UUIDMixin, utc_now


class MessageModel(Base, UUIDMixin):
    """
    Message ORM model.

    Attributes:
        conversation_id: Parent conversation (cascade on delete)
        role: 'user' or 'assistant'
        content: Full message text
        cited_chunk_ids: Chunk IDs cited by an assistant reply (strings)
        prompt_tokens: Prompt token count (assistant turns only)
        completion_tokens: Completion token count (assistant turns only)
        created_at: Insert timestamp, the history ordering key
    """

    __tablename__ = "messages"
    __table_args__ = (Index("ix_messages_conversation_created", "conversation_id", "created_at"),)

    conversation_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    cited_chunk_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    prompt_tokens: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    completion_tokens: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    conversation = relationship("ConversationModel", back_populates="messages")

    @property
    def cited_chunk_uuids(self) -> list[UUID]:
        return [UUID(value) for value in self.cited_chunk_ids or []]

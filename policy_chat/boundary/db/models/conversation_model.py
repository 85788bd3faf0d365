"""
Conversation ORM model.

A chat thread scoped to a tenant and its owning user, with the ordered
policy and document scope read by every turn.

Dependencies: sqlalchemy, policy_chat.boundary.db.base
System role: Conversation persistence for chat context management
"""

from uuid import UUID

from sqlalchemy import JSON, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from policy_chat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ConversationModel(Base, UUIDMixin, TimestampMixin):
    """
    Conversation ORM model.

    Attributes:
        tenant_id: Owning tenant (isolation key)
        user_id: Owning user
        title: Optional display title
        policy_ids: Ordered attached policy IDs (stored as strings)
        document_ids: Ordered attached document IDs (stored as strings)
        messages: Messages in this conversation (cascade delete)
    """

    __tablename__ = "conversations"
    __table_args__ = (Index("ix_conversations_owner", "tenant_id", "user_id", "updated_at"),)

    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    user_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    policy_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    document_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    messages = relationship(
        "MessageModel",
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[MessageModel.created_at, MessageModel.id]",
    )

    @property
    def policy_uuids(self) -> list[UUID]:
        return [UUID(value) for value in self.policy_ids or []]

    @property
    def document_uuids(self) -> list[UUID]:
        return [UUID(value) for value in self.document_ids or []]

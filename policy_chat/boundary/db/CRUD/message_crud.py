"""
Message CRUD operations.

Append-only message storage with ordered history reads.

Dependencies: sqlalchemy, policy_chat.boundary.db.models
System role: Chat history persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from policy_chat.boundary.db.CRUD.base_crud import BaseCRUD
from policy_chat.boundary.db.models.message_model import MessageModel


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel. Messages are never updated after insert."""

    def __init__(self) -> None:
        super().__init__(MessageModel)

    async def list_for_conversation(
        self,
        session: AsyncSession,
        conversation_id: UUID,
    ) -> Sequence[MessageModel]:
        """Full history, oldest first."""
        stmt = (
            select(MessageModel)
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_recent(
        self,
        session: AsyncSession,
        conversation_id: UUID,
        limit: int,
    ) -> list[MessageModel]:
        """
        Retrieve the last `limit` messages in chronological order.

        Args:
            session: Async database session
            conversation_id: Conversation UUID
            limit: Maximum number of messages

        Returns:
            Up to `limit` messages, oldest first
        """
        if limit <= 0:
            return []
        stmt = (
            select(MessageModel)
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def count_for_conversation(self, session: AsyncSession, conversation_id: UUID) -> int:
        stmt = select(func.count(MessageModel.id)).where(
            MessageModel.conversation_id == conversation_id
        )
        result = await session.execute(stmt)
        return result.scalar_one()


message_crud = MessageCRUD()

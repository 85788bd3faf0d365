"""
Conversation CRUD operations.

Owner-scoped lookups, activity-ordered summaries and scope updates for
ConversationModel.

Dependencies: sqlalchemy, policy_chat.boundary.db.models
System role: Conversation persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from policy_chat.boundary.db.base import utc_now
from policy_chat.boundary.db.CRUD.base_crud import BaseCRUD
from policy_chat.boundary.db.models.conversation_model import ConversationModel
from policy_chat.boundary.db.models.message_model import MessageModel


class ConversationCRUD(BaseCRUD[ConversationModel]):
    """CRUD operations for ConversationModel."""

    def __init__(self) -> None:
        super().__init__(ConversationModel)

    async def get_for_owner(
        self,
        session: AsyncSession,
        id: UUID,
        tenant_id: UUID,
        user_id: UUID,
    ) -> ConversationModel | None:
        """
        Retrieve a conversation only if it belongs to the tenant and user.

        Args:
            session: Async database session
            id: Conversation UUID
            tenant_id: Caller tenant
            user_id: Caller user

        Returns:
            ConversationModel if found and owned, None otherwise
        """
        stmt = select(ConversationModel).where(
            ConversationModel.id == id,
            ConversationModel.tenant_id == tenant_id,
            ConversationModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_summaries(
        self,
        session: AsyncSession,
        tenant_id: UUID,
        user_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[tuple[ConversationModel, int, str | None]]:
        """
        List the owner's conversations, most recently active first.

        Returns:
            Rows of (conversation, message_count, last_message_content)
        """
        message_count = (
            select(func.count(MessageModel.id))
            .where(MessageModel.conversation_id == ConversationModel.id)
            .correlate(ConversationModel)
            .scalar_subquery()
        )
        last_message = (
            select(MessageModel.content)
            .where(MessageModel.conversation_id == ConversationModel.id)
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
            .limit(1)
            .correlate(ConversationModel)
            .scalar_subquery()
        )

        stmt = (
            select(ConversationModel, message_count, last_message)
            .where(
                ConversationModel.tenant_id == tenant_id,
                ConversationModel.user_id == user_id,
            )
            .order_by(ConversationModel.updated_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await session.execute(stmt)
        return [(row[0], row[1] or 0, row[2]) for row in result.all()]

    async def touch(self, session: AsyncSession, id: UUID) -> None:
        """Bump updated_at to now."""
        stmt = (
            update(ConversationModel)
            .where(ConversationModel.id == id)
            .values(updated_at=utc_now())
        )
        await session.execute(stmt)

    async def add_policies(
        self,
        session: AsyncSession,
        conversation: ConversationModel,
        policy_ids: list[UUID],
    ) -> ConversationModel:
        """
        Append policy IDs not yet attached, keeping existing order.

        Args:
            session: Async database session
            conversation: Conversation to update
            policy_ids: Policy IDs to attach

        Returns:
            The updated conversation
        """
        current = list(conversation.policy_ids or [])
        for policy_id in policy_ids:
            value = str(policy_id)
            if value not in current:
                current.append(value)

        # JSON columns are not mutation-tracked; assign a new list
        conversation.policy_ids = current
        conversation.updated_at = utc_now()
        await session.flush()
        return conversation

    async def delete_with_messages(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a conversation and all of its messages.

        Returns:
            True if the conversation existed, False otherwise
        """
        await session.execute(delete(MessageModel).where(MessageModel.conversation_id == id))
        return await self.delete_by_id(session, id)


conversation_crud = ConversationCRUD()

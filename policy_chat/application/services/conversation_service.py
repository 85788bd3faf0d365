"""
Conversation service orchestrator.

Owner-scoped conversation lifecycle: create, read, list, rename, attach
policies and delete.

Dependencies: sqlalchemy, policy_chat.boundary.db.CRUD, policy_chat.models
System role: Conversation management use cases
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from policy_chat.boundary.db.CRUD.conversation_crud import conversation_crud
from policy_chat.boundary.db.CRUD.message_crud import message_crud
from policy_chat.boundary.db.models.conversation_model import ConversationModel
from policy_chat.boundary.db.models.message_model import MessageModel
from policy_chat.core.exceptions import ConversationNotFoundError
from policy_chat.models.conversation import (
    ConversationDetail,
    ConversationSummary,
    CreateConversationRequest,
    MessageResponse,
    UpdateConversationRequest,
)

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100


def truncate_preview(content: str | None, length: int = PREVIEW_LENGTH) -> str | None:
    """Shorten a message for list views, marking the cut with '...'."""
    if content is None or len(content) <= length:
        return content
    return content[:length] + "..."


def to_message_response(message: MessageModel) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        role=message.role,
        content=message.content,
        cited_chunk_ids=message.cited_chunk_uuids,
        prompt_tokens=message.prompt_tokens,
        completion_tokens=message.completion_tokens,
        created_at=message.created_at,
    )


class ConversationService:
    """Conversation service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize conversation service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_owned(self, conversation_id: UUID, tenant_id: UUID, user_id: UUID) -> ConversationModel:
        conversation = await conversation_crud.get_for_owner(
            self.db, conversation_id, tenant_id, user_id
        )
        if conversation is None:
            raise ConversationNotFoundError(str(conversation_id))
        return conversation

    async def _detail(self, conversation: ConversationModel) -> ConversationDetail:
        messages = await message_crud.list_for_conversation(self.db, conversation.id)
        return ConversationDetail(
            id=conversation.id,
            title=conversation.title,
            policy_ids=conversation.policy_uuids,
            document_ids=conversation.document_uuids,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
            messages=[to_message_response(message) for message in messages],
        )

    async def create_conversation(
        self,
        tenant_id: UUID,
        user_id: UUID,
        request: CreateConversationRequest | None = None,
    ) -> ConversationDetail:
        """
        Create a conversation, optionally scoped to policies and documents.

        Args:
            tenant_id: Owning tenant
            user_id: Owning user
            request: Optional title and initial policy/document scope

        Returns:
            ConversationDetail: The new, empty conversation
        """
        request = request or CreateConversationRequest()
        conversation = await conversation_crud.create(
            self.db,
            tenant_id=tenant_id,
            user_id=user_id,
            title=request.title,
            policy_ids=[str(value) for value in dict.fromkeys(request.policy_ids)],
            document_ids=[str(value) for value in dict.fromkeys(request.document_ids)],
        )
        await self.db.commit()
        logger.info(
            f"{__name__}:create_conversation - Created {conversation.id} "
            f"(policies={len(conversation.policy_ids)}, documents={len(conversation.document_ids)})"
        )
        return await self._detail(conversation)

    async def get_conversation(
        self,
        conversation_id: UUID,
        tenant_id: UUID,
        user_id: UUID,
    ) -> ConversationDetail:
        """
        Get a conversation with its full message history.

        Raises:
            ConversationNotFoundError: If missing or not owned by the caller
        """
        conversation = await self._get_owned(conversation_id, tenant_id, user_id)
        return await self._detail(conversation)

    async def list_conversations(
        self,
        tenant_id: UUID,
        user_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ConversationSummary]:
        """
        List the caller's conversations, most recently active first.

        Returns:
            list[ConversationSummary]: With message count and last-message preview
        """
        rows = await conversation_crud.list_summaries(
            self.db, tenant_id, user_id, limit=limit, offset=offset
        )
        return [
            ConversationSummary(
                id=conversation.id,
                title=conversation.title,
                policy_ids=conversation.policy_uuids,
                document_ids=conversation.document_uuids,
                created_at=conversation.created_at,
                updated_at=conversation.updated_at,
                message_count=message_count,
                last_message=truncate_preview(last_message),
            )
            for conversation, message_count, last_message in rows
        ]

    async def rename_conversation(
        self,
        conversation_id: UUID,
        tenant_id: UUID,
        user_id: UUID,
        request: UpdateConversationRequest,
    ) -> ConversationDetail:
        """
        Change the title only.

        Raises:
            ConversationNotFoundError: If missing or not owned by the caller
        """
        conversation = await self._get_owned(conversation_id, tenant_id, user_id)
        conversation = await conversation_crud.update_by_id(
            self.db, conversation.id, title=request.title
        )
        await self.db.commit()
        return await self._detail(conversation)

    async def add_policies(
        self,
        conversation_id: UUID,
        tenant_id: UUID,
        user_id: UUID,
        policy_ids: list[UUID],
    ) -> ConversationDetail:
        """
        Attach policies to a conversation; already attached IDs are ignored.

        Raises:
            ConversationNotFoundError: If missing or not owned by the caller
        """
        conversation = await self._get_owned(conversation_id, tenant_id, user_id)
        conversation = await conversation_crud.add_policies(self.db, conversation, policy_ids)
        await self.db.commit()
        logger.info(
            f"{__name__}:add_policies - Conversation {conversation_id} now has "
            f"{len(conversation.policy_ids)} policies"
        )
        return await self._detail(conversation)

    async def delete_conversation(
        self,
        conversation_id: UUID,
        tenant_id: UUID,
        user_id: UUID,
    ) -> None:
        """
        Delete a conversation and its messages.

        Raises:
            ConversationNotFoundError: If missing or not owned by the caller
        """
        conversation = await self._get_owned(conversation_id, tenant_id, user_id)
        await conversation_crud.delete_with_messages(self.db, conversation.id)
        await self.db.commit()
        logger.info(f"{__name__}:delete_conversation - Deleted {conversation_id}")

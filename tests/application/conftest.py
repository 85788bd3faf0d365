"""
Fixtures for application service tests.

Persistence runs on the in-memory SQLite DB; LLM, search and policy
collaborators are fakes from chat_fakes.

System role: Test wiring for the chat orchestrator
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from chat_fakes import (
    EMBEDDING_DIMENSION,
    FakeEmbeddingClient,
    FakeGenerationClient,
    FakePolicyContextService,
    FakeSearchService,
)
from policy_chat.application.services.chat_service import ChatService
from policy_chat.boundary.db.CRUD.conversation_crud import conversation_crud
from policy_chat.configs import ChatSettings
from policy_chat.core.events import EventDispatcher


@pytest.fixture
def chat_settings() -> ChatSettings:
    return ChatSettings(
        embedding_timeout_seconds=0.2,
        search_timeout_seconds=0.2,
        max_history_messages=10,
    )


@pytest.fixture
def embedding_client() -> FakeEmbeddingClient:
    return FakeEmbeddingClient()


@pytest.fixture
def generation_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def search_service() -> FakeSearchService:
    return FakeSearchService()


@pytest.fixture
def policy_context_service() -> FakePolicyContextService:
    return FakePolicyContextService()


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def chat_service(
    test_async_db: AsyncSession,
    embedding_client: FakeEmbeddingClient,
    generation_client: FakeGenerationClient,
    search_service: FakeSearchService,
    policy_context_service: FakePolicyContextService,
    dispatcher: EventDispatcher,
    chat_settings: ChatSettings,
) -> ChatService:
    return ChatService(
        db=test_async_db,
        embedding_client=embedding_client,
        generation_client=generation_client,
        search_service=search_service,
        policy_context_service=policy_context_service,
        dispatcher=dispatcher,
        settings=chat_settings,
        embedding_dimension=EMBEDDING_DIMENSION,
    )


@pytest.fixture
def make_conversation(test_async_db: AsyncSession, tenant_id: uuid.UUID, user_id: uuid.UUID):
    """Factory creating a committed conversation owned by the test tenant/user."""

    async def _make(
        policy_ids: list[uuid.UUID] | None = None,
        document_ids: list[uuid.UUID] | None = None,
    ):
        conversation = await conversation_crud.create(
            test_async_db,
            tenant_id=tenant_id,
            user_id=user_id,
            title="Test",
            policy_ids=[str(p) for p in policy_ids or []],
            document_ids=[str(d) for d in document_ids or []],
        )
        await test_async_db.commit()
        return conversation

    return _make

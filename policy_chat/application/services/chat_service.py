"""
Chat service for retrieval-augmented conversations over insurance policies.

Runs one chat turn end to end: validation, history snapshot, user message
persistence, retrieval decision, query embedding, chunk search with
graceful degradation, policy context, prompt assembly, token streaming,
citation extraction and assistant message persistence.

Every turn yields zero or more token/warning events and then exactly one
terminal event (error or complete). Collaborator failures never escape as
exceptions; cancellation always propagates.

Dependencies: sqlalchemy, policy_chat.boundary, policy_chat.core, policy_chat.models
System role: Chat orchestration layer
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from policy_chat.application.services.policy_context_service import PolicyContextService
from policy_chat.application.services.search_service import SemanticSearchService
from policy_chat.boundary.db.CRUD.conversation_crud import conversation_crud
from policy_chat.boundary.db.CRUD.message_crud import message_crud
from policy_chat.boundary.llm.embedding_client import EmbeddingClient
from policy_chat.boundary.llm.generation_client import GenerationClient
from policy_chat.boundary.vdb.vector_schemas import ChunkSearchResult, SemanticSearchRequest
from policy_chat.configs import ChatSettings, LLMSettings
from policy_chat.core.citation_extractor import extract_citations
from policy_chat.core.events import (
    ChatTurnCompleted,
    EventDispatcher,
    SearchDegraded,
    build_default_dispatcher,
)
from policy_chat.core.exceptions import EmbeddingError, ValidationError
from policy_chat.core.prompts.chat_prompts import SYSTEM_PROMPT, build_context_prompt
from policy_chat.core.retrieval_policy import should_retrieve
from policy_chat.models.chat import ChatMessage, GenerationRequest, SendMessageRequest
from policy_chat.models.policy import PolicyContextSnapshot
from policy_chat.models.streaming import StreamEvent
from policy_chat.observability import (
    get_correlation_id,
    restore_correlation_id,
    safe_log_value,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

SEARCH_DEGRADED_WARNING = "Document search unavailable. Response may lack specific document context."


class ChatService:
    """
    Chat orchestrator.

    Coordinates the conversation store, retrieval collaborators and the
    generation client for a single turn. Turns on the same conversation are
    not serialized here; callers that need strict reply ordering must do so.
    """

    def __init__(
        self,
        db: AsyncSession,
        embedding_client: EmbeddingClient,
        generation_client: GenerationClient,
        search_service: SemanticSearchService,
        policy_context_service: PolicyContextService | None = None,
        dispatcher: EventDispatcher | None = None,
        settings: ChatSettings | None = None,
        embedding_dimension: int | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for the conversation store
            embedding_client: Query embedder
            generation_client: Streaming model client
            search_service: Chunk search
            policy_context_service: Policy snapshot loader (defaults to one on `db`)
            dispatcher: Domain event dispatcher (defaults to the logging handlers)
            settings: Per-turn limits and timeouts
            embedding_dimension: Expected query vector size
        """
        self.db = db
        self.embedding_client = embedding_client
        self.generation_client = generation_client
        self.search_service = search_service
        self.policy_context_service = policy_context_service or PolicyContextService(db)
        self.dispatcher = dispatcher or build_default_dispatcher()
        self.settings = settings or ChatSettings()
        self.embedding_dimension = (
            embedding_dimension if embedding_dimension is not None else LLMSettings().embedding_dimension
        )

    def validate_message(self, message: str) -> None:
        """
        Reject empty or over-long messages.

        Raises:
            ValidationError: With a user-facing reason
        """
        if not message or not message.strip():
            raise ValidationError("Message cannot be empty", field="content")
        if len(message) > self.settings.max_message_length:
            raise ValidationError(
                f"Message exceeds maximum length of {self.settings.max_message_length} characters",
                field="content",
                details={"length": len(message)},
            )

    @staticmethod
    def resolve_policy_scope(
        attached_policy_ids: list[UUID],
        active_policy_ids: list[UUID] | None,
    ) -> list[UUID]:
        """
        Policies the turn should consider.

        Active IDs narrow the attached set; IDs that are not attached are
        ignored. A missing or empty active list keeps every attached policy.
        """
        if not active_policy_ids:
            return list(attached_policy_ids)
        active = set(active_policy_ids)
        return [policy_id for policy_id in attached_policy_ids if policy_id in active]

    async def _load_policy_context(
        self,
        tenant_id: UUID,
        policy_ids: list[UUID],
    ) -> list[PolicyContextSnapshot]:
        try:
            return await self.policy_context_service.load_snapshots(tenant_id, policy_ids)
        except Exception as e:
            logger.warning(
                f"{__name__}:_load_policy_context - Continuing without policy context: "
                f"{type(e).__name__}: {e}"
            )
            return []

    async def _embed_query(self, message: str) -> list[float]:
        """
        Embed the user message within the configured timeout.

        Raises:
            EmbeddingError: With a user-facing message for timeout, failure
                or dimension mismatch
        """
        try:
            result = await asyncio.wait_for(
                self.embedding_client.embed(message),
                timeout=self.settings.embedding_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise EmbeddingError(
                "Query processing timed out. Please try again.",
                details={"timeout_seconds": self.settings.embedding_timeout_seconds},
            ) from e
        except Exception as e:
            raise EmbeddingError(
                "Failed to generate query embedding",
                details={"cause": f"{type(e).__name__}: {e}"},
            ) from e

        if not result.success or not result.vectors:
            raise EmbeddingError(
                "Failed to generate query embedding",
                details={"cause": result.error},
            )

        vector = result.vectors[0]
        if len(vector) != self.embedding_dimension:
            raise EmbeddingError(
                "Embedding service configuration error",
                details={"expected": self.embedding_dimension, "actual": len(vector)},
            )
        return vector

    async def _history(self, conversation_id: UUID) -> tuple[list[ChatMessage], int]:
        recent = await message_crud.get_recent(
            self.db, conversation_id, limit=self.settings.max_history_messages
        )
        total = await message_crud.count_for_conversation(self.db, conversation_id)
        return [ChatMessage(role=m.role, content=m.content) for m in recent], total

    async def _persist_user_message(self, conversation_id: UUID, message: str) -> None:
        await message_crud.create(
            self.db,
            conversation_id=conversation_id,
            role="user",
            content=message,
            cited_chunk_ids=[],
        )
        await conversation_crud.touch(self.db, conversation_id)
        await self.db.commit()

    async def _persist_assistant_message(
        self,
        conversation_id: UUID,
        content: str,
        cited_chunk_ids: list[UUID],
        prompt_tokens: int | None,
        completion_tokens: int | None,
    ) -> UUID:
        assistant_message = await message_crud.create(
            self.db,
            conversation_id=conversation_id,
            role="assistant",
            content=content,
            cited_chunk_ids=[str(chunk_id) for chunk_id in cited_chunk_ids],
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
        )
        message_id = assistant_message.id
        await conversation_crud.touch(self.db, conversation_id)
        await self.db.commit()
        return message_id

    def send_message(
        self,
        conversation_id: UUID,
        request: SendMessageRequest,
        tenant_id: UUID,
        user_id: UUID,
    ) -> AsyncGenerator[StreamEvent, None]:
        """Stream a turn from a SendMessageRequest."""
        return self.stream_chat(
            conversation_id=conversation_id,
            message=request.content,
            tenant_id=tenant_id,
            user_id=user_id,
            active_policy_ids=request.active_policy_ids,
        )

    async def stream_chat(
        self,
        conversation_id: UUID,
        message: str,
        tenant_id: UUID,
        user_id: UUID,
        active_policy_ids: list[UUID] | None = None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream one chat turn.

        Flow:
        1. Validate message
        2. Load conversation (owner scoped)
        3. Snapshot history before the new message
        4. Persist user message and commit
        5. Decide retrieval
        6. Resolve active policy scope
        7. Load policy context (non-fatal)
        8. Embed query (fatal on failure) and search chunks (degrades on failure)
        9. Assemble prompt
        10. Stream tokens
        11. Extract citations
        12. Persist assistant message and commit
        13. Emit completion

        Args:
            conversation_id: Conversation UUID
            message: User's message
            tenant_id: Caller tenant
            user_id: Caller user
            active_policy_ids: Optional subset of attached policies to focus on

        Yields:
            StreamEvent: token/warning events, then one error or complete event
        """
        previous_correlation_id = get_correlation_id()
        set_correlation_id()
        try:
            logger.info(
                f"{__name__}:stream_chat - START conversation_id={conversation_id}, "
                f"message={safe_log_value(message, max_length=40)!r}"
            )

            # Step 1: Validate input
            try:
                self.validate_message(message)
            except ValidationError as e:
                logger.info(f"{__name__}:stream_chat - Step 1 REJECTED: {e.message}")
                yield StreamEvent.error(e.message, "validation_error")
                return

            # Step 2: Load conversation
            try:
                conversation = await conversation_crud.get_for_owner(
                    self.db, conversation_id, tenant_id, user_id
                )
            except Exception as e:
                logger.error(f"{__name__}:stream_chat - Step 2 FAILED: {type(e).__name__}: {e}")
                yield StreamEvent.error("Failed to load conversation", "internal_error")
                return
            if conversation is None:
                logger.info(f"{__name__}:stream_chat - Step 2: Conversation not found")
                yield StreamEvent.error("Conversation not found", "not_found")
                return

            # Read scope before the first commit
            attached_policy_ids = conversation.policy_uuids
            attached_document_ids = conversation.document_uuids

            # Step 3: Snapshot history before appending the new message
            # Step 4: Persist user message so it survives a failed generation
            try:
                history, prior_turn_count = await self._history(conversation_id)
                logger.info(
                    f"{__name__}:stream_chat - Step 3 OK: history={len(history)} of {prior_turn_count}"
                )
                await self._persist_user_message(conversation_id, message)
                logger.info(f"{__name__}:stream_chat - Step 4 OK: User message stored")
            except Exception as e:
                logger.error(f"{__name__}:stream_chat - Step 3/4 FAILED: {type(e).__name__}: {e}")
                await self.db.rollback()
                yield StreamEvent.error("Failed to save message", "persistence_error")
                return

            # Step 5: Decide retrieval
            retrieve = should_retrieve(message, prior_turn_count)

            # Step 6: Resolve policy scope
            policy_scope = self.resolve_policy_scope(attached_policy_ids, active_policy_ids)
            if attached_policy_ids and not policy_scope:
                # No attached policy selected; never widen to the whole tenant
                logger.info(f"{__name__}:stream_chat - Step 6: Active policies not attached, skipping search")
                retrieve = False
            balanced = len(policy_scope) > 1
            logger.info(
                f"{__name__}:stream_chat - Step 5/6: retrieve={retrieve}, "
                f"policies={len(policy_scope)}, balanced={balanced}"
            )

            # Step 7: Policy context is loaded even when retrieval is skipped
            policies = await self._load_policy_context(tenant_id, policy_scope)

            # Step 8: Embed and search
            chunks: list[ChunkSearchResult] = []
            degraded = False
            if retrieve:
                try:
                    query_vector = await self._embed_query(message)
                except EmbeddingError as e:
                    logger.error(f"{__name__}:stream_chat - Step 8 FAILED: embedding - {e}")
                    yield StreamEvent.error(e.message, "embedding_error")
                    return

                search_request = SemanticSearchRequest(
                    query_embedding=query_vector,
                    tenant_id=tenant_id,
                    policy_ids=policy_scope or None,
                    document_ids=attached_document_ids or None,
                    top_k=self.settings.max_context_chunks,
                    min_similarity=self.settings.min_similarity,
                    balanced=balanced,
                    chunks_per_policy=self.settings.chunks_per_policy,
                )
                try:
                    chunks = await asyncio.wait_for(
                        self.search_service.search(search_request),
                        timeout=self.settings.search_timeout_seconds,
                    )
                    logger.info(f"{__name__}:stream_chat - Step 8 OK: {len(chunks)} chunks")
                except Exception as e:
                    reason = "timeout" if isinstance(e, asyncio.TimeoutError) else f"{type(e).__name__}: {e}"
                    logger.warning(f"{__name__}:stream_chat - Step 8 DEGRADED: search - {reason}")
                    degraded = True
                    chunks = []
                    yield StreamEvent.warning(SEARCH_DEGRADED_WARNING)
                    await self.dispatcher.publish(
                        SearchDegraded(
                            conversation_id=conversation_id,
                            tenant_id=tenant_id,
                            reason=reason,
                        )
                    )

            # Step 9: Assemble prompt
            user_content = build_context_prompt(
                chunks,
                policies,
                message,
                balanced=balanced,
                search_unavailable=degraded,
            )
            generation_request = GenerationRequest(
                system_prompt=SYSTEM_PROMPT,
                messages=[*history, ChatMessage(role="user", content=user_content)],
                max_tokens=self.settings.max_response_tokens,
            )
            logger.info(
                f"{__name__}:stream_chat - Step 9 OK: prompt_len={len(user_content)}, "
                f"messages={len(generation_request.messages)}"
            )

            # Step 10: Stream tokens
            fragments: list[str] = []
            prompt_tokens: int | None = None
            completion_tokens: int | None = None
            try:
                async with aclosing(self.generation_client.stream_chat(generation_request)) as stream:
                    async for chunk in stream:
                        if chunk.input_tokens is not None:
                            prompt_tokens = chunk.input_tokens
                        if chunk.output_tokens is not None:
                            completion_tokens = chunk.output_tokens
                        if chunk.text:
                            fragments.append(chunk.text)
                            yield StreamEvent.token(chunk.text)
            except (asyncio.CancelledError, GeneratorExit):
                logger.warning(
                    f"{__name__}:stream_chat - Step 10 INTERRUPTED after {len(fragments)} "
                    f"fragments; assistant message not stored"
                )
                raise
            except Exception as e:
                logger.error(
                    f"{__name__}:stream_chat - Step 10 FAILED after {len(fragments)} fragments: "
                    f"{type(e).__name__}: {e}"
                )
                yield StreamEvent.error("Failed to generate response", "generation_error")
                return

            response_text = "".join(fragments)
            logger.info(f"{__name__}:stream_chat - Step 10 OK: answer_len={len(response_text)}")

            # Step 11: Extract citations
            try:
                cited_chunk_ids = extract_citations(
                    response_text,
                    chunks,
                    implicit_count=self.settings.implicit_citation_count,
                )
            except Exception as e:
                logger.warning(f"{__name__}:stream_chat - Step 11: citation extraction failed: {e}")
                cited_chunk_ids = []

            # Step 12: Persist assistant message
            try:
                message_id = await self._persist_assistant_message(
                    conversation_id,
                    response_text,
                    cited_chunk_ids,
                    prompt_tokens,
                    completion_tokens,
                )
                logger.info(
                    f"{__name__}:stream_chat - Step 12 OK: message_id={message_id}, "
                    f"citations={len(cited_chunk_ids)}"
                )
            except Exception as e:
                logger.error(f"{__name__}:stream_chat - Step 12 FAILED: {type(e).__name__}: {e}")
                await self.db.rollback()
                yield StreamEvent.error("Failed to save response", "persistence_error")
                return

            await self.dispatcher.publish(
                ChatTurnCompleted(
                    conversation_id=conversation_id,
                    message_id=message_id,
                    tenant_id=tenant_id,
                    user_id=user_id,
                    prompt_tokens=prompt_tokens,
                    completion_tokens=completion_tokens,
                    cited_chunk_count=len(cited_chunk_ids),
                    degraded=degraded,
                )
            )

            # Step 13: Complete
            yield StreamEvent.complete(message_id, cited_chunk_ids, degraded=degraded)
            logger.info(f"{__name__}:stream_chat - END conversation_id={conversation_id}")
        finally:
            restore_correlation_id(previous_correlation_id)

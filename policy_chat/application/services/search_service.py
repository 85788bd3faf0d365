"""
Semantic search service.

Vector search over policy document chunks in two modes: standard (one
global ranking) and balanced (a fixed quota per policy, so one policy's
chunks cannot crowd out the others in a comparison).

Dependencies: policy_chat.boundary.vdb, policy_chat.core.exceptions
System role: Vector search engine for the chat orchestrator
"""

import logging
from uuid import UUID

from policy_chat.boundary.vdb.chunk_store import ChunkStore
from policy_chat.boundary.vdb.vector_schemas import (
    ChunkQuery,
    ChunkSearchResult,
    SemanticSearchRequest,
)
from policy_chat.core.exceptions import PolicyChatException, VectorStoreError

logger = logging.getLogger(__name__)


class SemanticSearchService:
    """
    Chunk search over a ChunkStore.

    Attributes:
        chunk_store: Backend that ranks chunks by cosine similarity
    """

    def __init__(self, chunk_store: ChunkStore) -> None:
        self.chunk_store = chunk_store

    async def search(self, request: SemanticSearchRequest) -> list[ChunkSearchResult]:
        """
        Run a semantic search.

        Args:
            request: Query vector, tenant, optional policy/document filters,
                top_k, threshold and balancing options

        Returns:
            list[ChunkSearchResult]: Standard mode is sorted by descending
            similarity; balanced mode is per-policy blocks in policy order

        Raises:
            VectorStoreError: If the backing store fails
        """
        try:
            if request.uses_balanced_mode:
                return await self._balanced_search(request)
            return await self._standard_search(request)
        except VectorStoreError:
            raise
        except PolicyChatException as e:
            raise VectorStoreError(e.message, operation="search", details=e.details) from e
        except Exception as e:
            logger.error(f"{__name__}:search - Chunk store failed: {type(e).__name__}: {e}")
            raise VectorStoreError(f"Chunk search failed: {e}", operation="search") from e

    async def _standard_search(self, request: SemanticSearchRequest) -> list[ChunkSearchResult]:
        document_ids = await self._resolve_document_filter(request)
        if document_ids is not None and not document_ids:
            logger.info(f"{__name__}:_standard_search - Document filter is empty, no results")
            return []

        results = await self.chunk_store.query(
            ChunkQuery(
                embedding=request.query_embedding,
                tenant_id=request.tenant_id,
                document_ids=document_ids,
                top_k=request.top_k,
                min_similarity=request.min_similarity,
            )
        )
        logger.info(
            f"{__name__}:_standard_search - Found {len(results)} chunks "
            f"(top_k={request.top_k}, min_similarity={request.min_similarity})"
        )
        return results

    async def _resolve_document_filter(self, request: SemanticSearchRequest) -> list[UUID] | None:
        """
        Combine explicit document IDs with the documents behind policy IDs.

        Returns None when neither filter is set; otherwise the intersection,
        preserving the order of the first applicable filter.
        """
        policy_documents: list[UUID] | None = None
        if request.policy_ids:
            sources = await self.chunk_store.resolve_policy_sources(
                request.tenant_id, request.policy_ids
            )
            policy_documents = list(dict.fromkeys(source.document_id for source in sources))

        explicit = list(dict.fromkeys(request.document_ids)) if request.document_ids else None

        if explicit is None:
            return policy_documents
        if policy_documents is None:
            return explicit
        allowed = set(policy_documents)
        return [document_id for document_id in explicit if document_id in allowed]

    async def _balanced_search(self, request: SemanticSearchRequest) -> list[ChunkSearchResult]:
        policy_ids = request.policy_ids or []
        sources = await self.chunk_store.resolve_policy_sources(request.tenant_id, policy_ids)
        resolved = {source.policy_id: source for source in sources}

        explicit = set(request.document_ids) if request.document_ids else None
        results: list[ChunkSearchResult] = []

        for policy_id in policy_ids:
            source = resolved.get(policy_id)
            if source is None:
                logger.warning(
                    f"{__name__}:_balanced_search - Policy {policy_id} has no source document, skipping"
                )
                continue
            if explicit is not None and source.document_id not in explicit:
                continue

            chunks = await self.chunk_store.query(
                ChunkQuery(
                    embedding=request.query_embedding,
                    tenant_id=request.tenant_id,
                    document_ids=[source.document_id],
                    top_k=request.chunks_per_policy,
                    min_similarity=request.min_similarity,
                )
            )
            results.extend(
                chunk.model_copy(
                    update={
                        "policy_id": policy_id,
                        "carrier_name": source.carrier_name,
                        "policy_number": source.policy_number,
                    }
                )
                for chunk in chunks
            )
            logger.info(
                f"{__name__}:_balanced_search - Policy {policy_id}: {len(chunks)} chunks"
            )

        logger.info(
            f"{__name__}:_balanced_search - Found {len(results)} chunks across "
            f"{len(policy_ids)} policies (chunks_per_policy={request.chunks_per_policy})"
        )
        return results

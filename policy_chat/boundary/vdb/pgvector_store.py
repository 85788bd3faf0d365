"""
pgvector chunk store.

Ranks document chunks in PostgreSQL by cosine distance using the pgvector
operator (`<=>`) served by the HNSW index on document_chunks.embedding.

Dependencies: sqlalchemy, pgvector, policy_chat.boundary.db
System role: Production vector search backend
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from policy_chat.boundary.db.models.document_model import DocumentChunkModel, DocumentModel
from policy_chat.boundary.db.models.policy_model import PolicyModel
from policy_chat.boundary.vdb.vector_schemas import ChunkQuery, ChunkSearchResult, PolicySource
from policy_chat.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class PgVectorChunkStore:
    """
    Chunk store backed by the pgvector extension.

    Attributes:
        db: Async session used for reads
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def build_query_statement(self, query: ChunkQuery):
        """Build the ranked SELECT for a chunk query (exposed for inspection)."""
        distance = DocumentChunkModel.embedding.cosine_distance(query.embedding)
        similarity = (1 - distance).label("similarity")

        stmt = (
            select(DocumentChunkModel, DocumentModel.file_name, similarity)
            .join(DocumentModel, DocumentModel.id == DocumentChunkModel.document_id)
            .where(
                DocumentModel.tenant_id == query.tenant_id,
                DocumentChunkModel.embedding.is_not(None),
                (1 - distance) >= query.min_similarity,
            )
        )
        if query.document_ids is not None:
            stmt = stmt.where(DocumentChunkModel.document_id.in_(query.document_ids))

        return stmt.order_by(distance.asc(), DocumentChunkModel.chunk_index.asc()).limit(
            query.top_k
        )

    async def query(self, query: ChunkQuery) -> list[ChunkSearchResult]:
        """
        Run a ranked cosine similarity query.

        Args:
            query: Embedding, tenant, optional document filter, top_k, threshold

        Returns:
            list[ChunkSearchResult]: Best first

        Raises:
            VectorStoreError: If the database query fails
        """
        if query.document_ids is not None and not query.document_ids:
            return []

        try:
            result = await self.db.execute(self.build_query_statement(query))
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:query - Chunk query failed: {e}")
            raise VectorStoreError(f"Chunk query failed: {e}", operation="query") from e

        return [
            ChunkSearchResult(
                chunk_id=chunk.id,
                document_id=chunk.document_id,
                document_name=file_name,
                chunk_text=chunk.chunk_text,
                chunk_index=chunk.chunk_index,
                page_start=chunk.page_start,
                page_end=chunk.page_end,
                section_type=chunk.section_type,
                similarity=min(1.0, max(0.0, float(score))),
                policy_id=chunk.policy_id,
                carrier_name=chunk.carrier_name,
                policy_number=chunk.policy_number,
            )
            for chunk, file_name, score in rows
        ]

    async def resolve_policy_sources(
        self,
        tenant_id: UUID,
        policy_ids: list[UUID],
    ) -> list[PolicySource]:
        """
        Resolve policies to their source documents, in the requested order.

        Raises:
            VectorStoreError: If the database query fails
        """
        if not policy_ids:
            return []

        stmt = select(
            PolicyModel.id,
            PolicyModel.source_document_id,
            PolicyModel.carrier_name,
            PolicyModel.policy_number,
        ).where(
            PolicyModel.tenant_id == tenant_id,
            PolicyModel.id.in_(policy_ids),
            PolicyModel.source_document_id.is_not(None),
        )
        try:
            result = await self.db.execute(stmt)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:resolve_policy_sources - Lookup failed: {e}")
            raise VectorStoreError(
                f"Policy source lookup failed: {e}", operation="resolve_policies"
            ) from e

        by_id = {
            row.id: PolicySource(
                policy_id=row.id,
                document_id=row.source_document_id,
                carrier_name=row.carrier_name,
                policy_number=row.policy_number,
            )
            for row in rows
        }
        return [by_id[policy_id] for policy_id in policy_ids if policy_id in by_id]

"""
Test suite for the pgvector chunk store.

Statement shape is checked against the PostgreSQL dialect; policy
resolution and error wrapping run against SQLite.

System role: Verification of the production vector search backend
"""

import uuid

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from policy_chat.boundary.db.models import DocumentChunkModel, DocumentModel, PolicyModel
from policy_chat.boundary.vdb.pgvector_store import PgVectorChunkStore
from policy_chat.boundary.vdb.vector_schemas import ChunkQuery
from policy_chat.configs import get_settings
from policy_chat.core.exceptions import VectorStoreError


def compile_pg(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


class TestPgVectorQueryStatement:
    """SQL generated for ranked queries."""

    def test_uses_cosine_distance_and_filters(self) -> None:
        # Arrange
        store = PgVectorChunkStore(db=None)
        query = ChunkQuery(embedding=[0.1, 0.2, 0.3], tenant_id=uuid.uuid4(), top_k=5)

        # Act
        sql = compile_pg(store.build_query_statement(query))

        # Assert
        assert "<=>" in sql
        assert "document_chunks.embedding IS NOT NULL" in sql
        assert "documents.tenant_id" in sql
        assert "ORDER BY" in sql and "LIMIT" in sql
        assert "document_chunks.document_id IN" not in sql

    def test_document_filter_is_applied(self) -> None:
        store = PgVectorChunkStore(db=None)
        query = ChunkQuery(embedding=[0.1], tenant_id=uuid.uuid4(), document_ids=[uuid.uuid4()])
        assert "document_chunks.document_id IN" in compile_pg(store.build_query_statement(query))

    @pytest.mark.asyncio
    async def test_empty_document_filter_short_circuits(self) -> None:
        store = PgVectorChunkStore(db=None)
        query = ChunkQuery(embedding=[0.1], tenant_id=uuid.uuid4(), document_ids=[])
        assert await store.query(query) == []


class TestPgVectorStoreOnSQLite:
    @pytest.mark.asyncio
    async def test_resolve_policy_sources(self, test_async_db: AsyncSession, tenant_id: uuid.UUID) -> None:
        # Arrange
        document = DocumentModel(tenant_id=tenant_id, file_name="gl.pdf")
        test_async_db.add(document)
        await test_async_db.flush()
        resolved = PolicyModel(
            tenant_id=tenant_id,
            source_document_id=document.id,
            carrier_name="Acme",
            policy_number="GL-1",
        )
        orphan = PolicyModel(tenant_id=tenant_id, source_document_id=None)
        test_async_db.add_all([resolved, orphan])
        await test_async_db.flush()
        store = PgVectorChunkStore(test_async_db)

        # Act
        sources = await store.resolve_policy_sources(tenant_id, [orphan.id, resolved.id])

        # Assert
        assert len(sources) == 1
        assert sources[0].policy_id == resolved.id
        assert sources[0].document_id == document.id
        assert sources[0].carrier_name == "Acme"

    @pytest.mark.asyncio
    async def test_backend_failure_raises_vector_store_error(
        self, test_async_db: AsyncSession, tenant_id: uuid.UUID
    ) -> None:
        # Arrange: SQLite has no pgvector operators
        store = PgVectorChunkStore(test_async_db)

        # Act / Assert
        with pytest.raises(VectorStoreError) as exc_info:
            await store.query(ChunkQuery(embedding=[0.1, 0.2], tenant_id=tenant_id))
        assert exc_info.value.details["operation"] == "query"


class TestChunkEmbeddingColumn:
    def test_dimension_follows_llm_settings(self) -> None:
        column_type = DocumentChunkModel.__table__.c.embedding.type
        assert column_type.dim == get_settings().llm.embedding_dimension

"""
Test suite for chunk store selection.

System role: Verification of chunk store factory
"""

import pytest

from policy_chat.boundary.vdb.memory_store import InMemoryChunkStore
from policy_chat.boundary.vdb.pgvector_store import PgVectorChunkStore
from policy_chat.boundary.vdb.vector_store_factory import get_chunk_store
from policy_chat.configs import Settings, VectorStoreSettings


def settings_for(store_type: str) -> Settings:
    return Settings(vector_store=VectorStoreSettings(store_type=store_type))


class TestGetChunkStore:
    def test_memory_store(self) -> None:
        assert isinstance(get_chunk_store(settings=settings_for("memory")), InMemoryChunkStore)

    @pytest.mark.asyncio
    async def test_pgvector_store_wraps_session(self, test_async_db) -> None:
        store = get_chunk_store(db=test_async_db, settings=settings_for("pgvector"))
        assert isinstance(store, PgVectorChunkStore)
        assert store.db is test_async_db

    def test_pgvector_without_session_raises(self) -> None:
        with pytest.raises(ValueError, match="requires a database session"):
            get_chunk_store(settings=settings_for("pgvector"))

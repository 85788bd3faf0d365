"""
Chunk store factory for selecting between pgvector (prod) and memory (dev).

Depends on VECTOR_STORE_STORE_TYPE.

Dependencies: policy_chat.boundary.vdb, policy_chat.configs
System role: Chunk store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from policy_chat.boundary.vdb.chunk_store import ChunkStore
from policy_chat.boundary.vdb.memory_store import InMemoryChunkStore
from policy_chat.boundary.vdb.pgvector_store import PgVectorChunkStore
from policy_chat.configs import Settings, get_settings

logger = logging.getLogger(__name__)


def get_chunk_store(db: AsyncSession | None = None, settings: Settings | None = None) -> ChunkStore:
    """
    Build the chunk store selected in settings.

    Args:
        db: Async session, required for pgvector
        settings: Settings override (defaults to cached settings)

    Returns:
        ChunkStore: PgVectorChunkStore or an empty InMemoryChunkStore

    Raises:
        ValueError: If the store type is unknown or pgvector lacks a session
    """
    settings = settings or get_settings()
    store_type = settings.vector_store.store_type.lower()

    if store_type == "pgvector":
        if db is None:
            raise ValueError("pgvector chunk store requires a database session")
        logger.info(f"{__name__}:get_chunk_store - Creating pgvector chunk store")
        return PgVectorChunkStore(db)

    if store_type == "memory":
        logger.info(f"{__name__}:get_chunk_store - Creating in-memory chunk store (local dev mode)")
        return InMemoryChunkStore()

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. Must be 'pgvector' or 'memory'."
    )

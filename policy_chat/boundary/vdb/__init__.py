"""
Vector search backends and schemas.
"""

from policy_chat.boundary.vdb.chunk_store import ChunkStore
from policy_chat.boundary.vdb.vector_schemas import (
    ChunkQuery,
    ChunkSearchResult,
    PolicySource,
    SemanticSearchRequest,
)

__all__ = [
    "ChunkQuery",
    "ChunkSearchResult",
    "ChunkStore",
    "PolicySource",
    "SemanticSearchRequest",
]

"""
Chunk store interface.

Read contract the search service depends on: ranked, tenant-scoped chunk
lookup plus policy-to-document resolution.

Dependencies: policy_chat.boundary.vdb.vector_schemas
System role: Abstraction over vector search backends
"""

from typing import Protocol
from uuid import UUID

from policy_chat.boundary.vdb.vector_schemas import ChunkQuery, ChunkSearchResult, PolicySource


class ChunkStore(Protocol):
    """Backend able to rank stored chunks against a query embedding."""

    async def query(self, query: ChunkQuery) -> list[ChunkSearchResult]:
        """
        Return chunks with similarity >= query.min_similarity, best first.

        Chunks without an embedding are never returned. Equal scores keep the
        backend's natural order.
        """
        ...

    async def resolve_policy_sources(
        self,
        tenant_id: UUID,
        policy_ids: list[UUID],
    ) -> list[PolicySource]:
        """Map policies to their source documents; unresolvable IDs are omitted."""
        ...

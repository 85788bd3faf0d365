"""
In-memory chunk store.

Pure-Python cosine ranking over chunks held in a list. Used for local
development without PostgreSQL and as the backend in tests.

Dependencies: policy_chat.boundary.vdb.vector_schemas
System role: Development vector search backend
"""

import math
from dataclasses import dataclass
from uuid import UUID, uuid4

from policy_chat.boundary.vdb.vector_schemas import ChunkQuery, ChunkSearchResult, PolicySource


@dataclass
class StoredChunk:
    """A chunk row as held by the in-memory store."""

    document_id: UUID
    tenant_id: UUID
    chunk_text: str
    embedding: list[float] | None
    document_name: str = ""
    chunk_index: int = 0
    page_start: int | None = None
    page_end: int | None = None
    section_type: str | None = None
    policy_id: UUID | None = None
    carrier_name: str | None = None
    policy_number: str | None = None
    chunk_id: UUID | None = None

    def __post_init__(self) -> None:
        if self.chunk_id is None:
            self.chunk_id = uuid4()


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity clamped to [0, 1]; zero vectors score 0."""
    if len(a) != len(b):
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0:
        return 0.0
    return min(1.0, max(0.0, dot / norm))


class InMemoryChunkStore:
    """
    Chunk store over Python lists.

    Ties keep insertion order (stable sort).
    """

    def __init__(self) -> None:
        self._chunks: list[StoredChunk] = []
        self._policies: dict[UUID, tuple[UUID, PolicySource]] = {}

    def add_chunk(self, chunk: StoredChunk) -> StoredChunk:
        self._chunks.append(chunk)
        return chunk

    def add_policy(
        self,
        policy_id: UUID,
        tenant_id: UUID,
        document_id: UUID,
        carrier_name: str | None = None,
        policy_number: str | None = None,
    ) -> None:
        """Register a policy's source document for balanced retrieval."""
        self._policies[policy_id] = (
            tenant_id,
            PolicySource(
                policy_id=policy_id,
                document_id=document_id,
                carrier_name=carrier_name,
                policy_number=policy_number,
            ),
        )

    async def query(self, query: ChunkQuery) -> list[ChunkSearchResult]:
        allowed = set(query.document_ids) if query.document_ids is not None else None

        scored: list[tuple[float, StoredChunk]] = []
        for chunk in self._chunks:
            if chunk.tenant_id != query.tenant_id or chunk.embedding is None:
                continue
            if allowed is not None and chunk.document_id not in allowed:
                continue
            score = cosine_similarity(query.embedding, chunk.embedding)
            if score >= query.min_similarity:
                scored.append((score, chunk))

        scored.sort(key=lambda item: item[0], reverse=True)

        return [
            ChunkSearchResult(
                chunk_id=chunk.chunk_id,
                document_id=chunk.document_id,
                document_name=chunk.document_name,
                chunk_text=chunk.chunk_text,
                chunk_index=chunk.chunk_index,
                page_start=chunk.page_start,
                page_end=chunk.page_end,
                section_type=chunk.section_type,
                similarity=score,
                policy_id=chunk.policy_id,
                carrier_name=chunk.carrier_name,
                policy_number=chunk.policy_number,
            )
            for score, chunk in scored[: query.top_k]
        ]

    async def resolve_policy_sources(
        self,
        tenant_id: UUID,
        policy_ids: list[UUID],
    ) -> list[PolicySource]:
        sources = []
        for policy_id in policy_ids:
            entry = self._policies.get(policy_id)
            if entry is not None and entry[0] == tenant_id:
                sources.append(entry[1])
        return sources

"""
Vector search schemas.

Pydantic models for chunk store queries, search requests and results.
Used for type-safe chunk store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from uuid import UUID

from pydantic import BaseModel, Field


class ChunkQuery(BaseModel):
    """
    Single ranked lookup against a chunk store.

    document_ids=None means no document filter; an empty list matches nothing.
    """

    embedding: list[float] = Field(description="Query embedding vector")
    tenant_id: UUID = Field(description="Tenant isolation filter (mandatory)")
    document_ids: list[UUID] | None = Field(default=None, description="Restrict to these documents")
    top_k: int = Field(default=10, ge=1, description="Number of results to return")
    min_similarity: float = Field(default=0.7, ge=0.0, le=1.0, description="Minimum similarity")


class PolicySource(BaseModel):
    """Policy resolved to the document it was extracted from."""

    policy_id: UUID
    document_id: UUID
    carrier_name: str | None = None
    policy_number: str | None = None


class SemanticSearchRequest(BaseModel):
    """Parameters for a semantic search over policy document chunks."""

    query_embedding: list[float] = Field(description="Query embedding vector")
    tenant_id: UUID
    policy_ids: list[UUID] | None = Field(
        default=None,
        description="Restrict to chunks of these policies' source documents",
    )
    document_ids: list[UUID] | None = Field(
        default=None,
        description="Restrict to chunks of these documents",
    )
    top_k: int = Field(default=10, ge=1)
    min_similarity: float = Field(default=0.7, ge=0.0, le=1.0)
    balanced: bool = Field(
        default=False,
        description="Allocate a fixed chunk quota per policy instead of ranking globally",
    )
    chunks_per_policy: int = Field(default=12, ge=1)

    @property
    def uses_balanced_mode(self) -> bool:
        return self.balanced and len(self.policy_ids or []) > 1


class ChunkSearchResult(BaseModel):
    """A document chunk returned from semantic search with similarity score."""

    chunk_id: UUID
    document_id: UUID
    document_name: str = ""
    chunk_text: str = ""
    chunk_index: int = 0
    page_start: int | None = None
    page_end: int | None = None
    section_type: str | None = None
    similarity: float = Field(ge=0.0, le=1.0, description="Cosine similarity (1 = identical)")
    policy_id: UUID | None = None
    carrier_name: str | None = None
    policy_number: str | None = None

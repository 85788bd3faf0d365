"""
Document and chunk ORM models.

Chunks hold searchable text with a pgvector embedding. Rows are written by
document processing; the chat core only reads them.

Dependencies: sqlalchemy, pgvector, policy_chat.boundary.db.base
System role: Chunk store backing semantic search
"""

from uuid import UUID

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from policy_chat.boundary.db.base import Base, TimestampMixin, UUIDMixin
from policy_chat.configs import get_settings

# Column size follows LLM_EMBEDDING_DIMENSION, the size query vectors are checked against
EMBEDDING_DIMENSION = get_settings().llm.embedding_dimension


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """Uploaded policy document."""

    __tablename__ = "documents"

    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    file_name: Mapped[str] = mapped_column(String(512), nullable=False)

    chunks = relationship(
        "DocumentChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
    )


class DocumentChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Searchable chunk of a document.

    Attributes:
        chunk_index: Zero-based position within the document
        page_start: First page covered, if known
        page_end: Last page covered, if known
        section_type: Section tag (declarations, exclusions, ...)
        embedding: Vector used for similarity search; null rows are never searched
        policy_id: Policy the chunk belongs to, for balanced retrieval
        carrier_name: Denormalized carrier for display
        policy_number: Denormalized policy number for display
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        Index(
            "ix_document_chunks_embedding_hnsw",
            "embedding",
            postgresql_using="hnsw",
            postgresql_with={"m": 16, "ef_construction": 64},
            postgresql_ops={"embedding": "vector_cosine_ops"},
        ),
    )

    document_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    chunk_text: Mapped[str] = mapped_column(Text, nullable=False)
    page_start: Mapped[int | None] = mapped_column(Integer, nullable=True)
    page_end: Mapped[int | None] = mapped_column(Integer, nullable=True)
    section_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    embedding: Mapped[list[float] | None] = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=True)
    policy_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True, index=True)
    carrier_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    policy_number: Mapped[str | None] = mapped_column(String(100), nullable=True)

    document = relationship("DocumentModel", back_populates="chunks")

"""
Vector store configuration settings.

Selects the chunk store backing semantic search.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from policy_chat.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Chunk store configuration (pgvector for deployments, memory for local dev)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: Literal["pgvector", "memory"] = Field(
        default="pgvector",
        description="Chunk store type: 'pgvector' for PostgreSQL, 'memory' for local dev",
    )

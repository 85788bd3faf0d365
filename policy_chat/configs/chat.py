"""
Chat orchestration settings.

Bounds for a single chat turn: context sizes, similarity threshold,
input limits and collaborator timeouts.

Dependencies: pydantic, pydantic_settings
System role: Tuning knobs for the chat orchestrator and retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from policy_chat.configs.base import BaseSettings


class ChatSettings(BaseSettings):
    """Per-turn limits for retrieval-augmented chat."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHAT_",
        case_sensitive=False,
        extra="ignore",
    )

    max_context_chunks: int = Field(
        default=10,
        ge=1,
        description="Top-K chunks for standard (single policy) retrieval",
    )
    min_similarity: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity for a chunk to be used as context",
    )
    chunks_per_policy: int = Field(
        default=12,
        ge=1,
        description="Chunk quota per policy for balanced multi-policy retrieval",
    )
    max_history_messages: int = Field(
        default=10,
        ge=0,
        description="Number of prior messages replayed to the model",
    )
    max_response_tokens: int = Field(default=2048, ge=1, description="Generation token cap")
    max_message_length: int = Field(
        default=10000,
        ge=1,
        description="Maximum accepted user message length in characters",
    )
    embedding_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for embedding the user query (fatal on expiry)",
    )
    search_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        description="Timeout for chunk search (degrades on expiry)",
    )
    implicit_citation_count: int = Field(
        default=3,
        ge=0,
        description="Top chunks cited when the answer carries no explicit markers",
    )

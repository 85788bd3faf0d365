"""
LLM provider settings.

Model identifiers for generation and embeddings (Google Gemini via
LangChain) plus the expected embedding dimensionality.

Dependencies: pydantic, pydantic_settings
System role: Model configuration for embedding and generation clients
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from policy_chat.configs.base import BaseSettings


class LLMSettings(BaseSettings):
    """Generation and embedding model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    chat_model: str = Field(
        default="gemini-2.5-flash",
        description="Google Gemini chat model identifier",
    )
    temperature: float = Field(default=0.0, ge=0.0, le=2.0, description="Sampling temperature")
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension (must match the chunk index)",
    )
    google_api_key: str | None = Field(
        default=None,
        description="API key for Google Generative AI (falls back to GOOGLE_API_KEY)",
    )

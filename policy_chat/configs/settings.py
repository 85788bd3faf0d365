"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from policy_chat.configs.base import BaseSettings
from policy_chat.configs.chat import ChatSettings
from policy_chat.configs.database import DatabaseSettings
from policy_chat.configs.llm import LLMSettings
from policy_chat.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once and cached.

    Returns:
        Settings: Application settings instance

    Usage:
        from policy_chat.configs import get_settings
        settings = get_settings()
    """
    return Settings()

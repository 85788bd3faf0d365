"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from policy_chat.configs.chat import ChatSettings
from policy_chat.configs.database import DatabaseSettings
from policy_chat.configs.llm import LLMSettings
from policy_chat.configs.settings import Settings, get_settings
from policy_chat.configs.vector_store import VectorStoreSettings

__all__ = [
    "ChatSettings",
    "DatabaseSettings",
    "LLMSettings",
    "Settings",
    "VectorStoreSettings",
    "get_settings",
]

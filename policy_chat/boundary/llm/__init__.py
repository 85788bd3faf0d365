"""
LLM provider adapters for embeddings and streamed generation.
"""

from policy_chat.boundary.llm.embedding_client import EmbeddingClient, EmbeddingResult
from policy_chat.boundary.llm.generation_client import GenerationClient

__all__ = ["EmbeddingClient", "EmbeddingResult", "GenerationClient"]

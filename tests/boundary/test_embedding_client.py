"""
Test suite for EmbeddingClient.

System role: Verification of query embedding adapter
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding

from policy_chat.boundary.llm.embedding_client import EmbeddingClient
from policy_chat.configs import LLMSettings


class TestEmbeddingClient:
    """Success and failure reporting."""

    @pytest.mark.asyncio
    async def test_embed_returns_single_vector(self) -> None:
        # Arrange
        client = EmbeddingClient(embeddings=DeterministicFakeEmbedding(size=8))

        # Act
        result = await client.embed("What is my deductible?")

        # Assert
        assert result.success is True
        assert len(result.vectors) == 1
        assert len(result.vectors[0]) == 8
        assert result.error is None

    @pytest.mark.asyncio
    async def test_embed_is_deterministic(self) -> None:
        client = EmbeddingClient(embeddings=DeterministicFakeEmbedding(size=4))
        first = await client.embed("flood")
        second = await client.embed("flood")
        assert first.vectors == second.vectors

    @pytest.mark.asyncio
    async def test_provider_error_is_reported_not_raised(self) -> None:
        # Arrange
        embeddings = MagicMock()
        embeddings.aembed_query = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        client = EmbeddingClient(embeddings=embeddings)

        # Act
        result = await client.embed("anything")

        # Assert
        assert result.success is False
        assert result.vectors == []
        assert "quota exceeded" in result.error

    def test_default_embeddings_are_built_lazily(self) -> None:
        client = EmbeddingClient(settings=LLMSettings(google_api_key="test-key"))
        assert client._embeddings is None

"""
Embedding client.

Turns a user query into a vector through a LangChain Embeddings model
(Google Gemini by default). Failures are reported in the result instead of
raised, so the caller decides what is fatal.

Dependencies: langchain_core, langchain_google_genai, policy_chat.configs
System role: Query embedding for semantic search
"""

import logging

from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings
from pydantic import BaseModel, Field

from policy_chat.configs import LLMSettings

logger = logging.getLogger(__name__)


class EmbeddingResult(BaseModel):
    """
    Outcome of an embedding call.

    Attributes:
        success: Whether vectors were produced
        vectors: One vector per input text
        error: Failure description when success is False
    """

    success: bool
    vectors: list[list[float]] = Field(default_factory=list)
    error: str | None = None


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings that always requests the configured size.

    gemini-embedding-001 returns 3072 dimensions unless told otherwise; the
    chunk index is built at a reduced dimension.
    """

    _output_dimensionality: int = 1536

    def __init__(self, output_dimensionality: int = 1536, **kwargs) -> None:
        super().__init__(**kwargs)
        self._output_dimensionality = output_dimensionality

    def embed_query(self, text: str, **kwargs) -> list[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_query(text, **kwargs)

    async def aembed_query(self, text: str, **kwargs) -> list[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return await super().aembed_query(text, **kwargs)


def build_default_embeddings(settings: LLMSettings) -> Embeddings:
    """Construct the Gemini embeddings model from settings."""
    kwargs = {}
    if settings.google_api_key:
        kwargs["google_api_key"] = settings.google_api_key
    return FixedDimensionEmbeddings(
        model=settings.embedding_model,
        output_dimensionality=settings.embedding_dimension,
        **kwargs,
    )


class EmbeddingClient:
    """
    Async query embedder.

    Attributes:
        embeddings: LangChain embeddings model
        settings: LLM settings (model, expected dimension)
    """

    def __init__(
        self,
        embeddings: Embeddings | None = None,
        settings: LLMSettings | None = None,
    ) -> None:
        self.settings = settings or LLMSettings()
        self._embeddings = embeddings

    @property
    def embeddings(self) -> Embeddings:
        # Built on first use so constructing the client never needs an API key
        if self._embeddings is None:
            self._embeddings = build_default_embeddings(self.settings)
        return self._embeddings

    async def embed(self, text: str) -> EmbeddingResult:
        """
        Embed a single text.

        Args:
            text: Text to embed

        Returns:
            EmbeddingResult: success with one vector, or failure with an error
        """
        try:
            vector = await self.embeddings.aembed_query(text)
        except Exception as e:
            logger.error(f"{__name__}:embed - Embedding failed: {type(e).__name__}: {e}")
            return EmbeddingResult(success=False, error=f"{type(e).__name__}: {e}")

        logger.debug(f"{__name__}:embed - Embedded text_len={len(text)}, dim={len(vector)}")
        return EmbeddingResult(success=True, vectors=[list(vector)])

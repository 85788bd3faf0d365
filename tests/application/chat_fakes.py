"""
Hand-written collaborators for chat orchestrator tests.

Each fake records its calls so tests can assert what the orchestrator
asked for.
"""

import asyncio
import uuid

from policy_chat.boundary.llm.embedding_client import EmbeddingResult
from policy_chat.boundary.vdb.vector_schemas import ChunkSearchResult, SemanticSearchRequest
from policy_chat.models.chat import GenerationChunk, GenerationRequest
from policy_chat.models.policy import PolicyContextSnapshot

EMBEDDING_DIMENSION = 3


class FakeEmbeddingClient:
    def __init__(self, vector: list[float] | None = None) -> None:
        self.vector = vector if vector is not None else [1.0, 0.0, 0.0]
        self.calls: list[str] = []
        self.delay: float = 0.0
        self.fail = False

    async def embed(self, text: str) -> EmbeddingResult:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            return EmbeddingResult(success=False, error="service down")
        return EmbeddingResult(success=True, vectors=[list(self.vector)])


class FakeGenerationClient:
    def __init__(self, fragments: list[str] | None = None) -> None:
        self.fragments = fragments if fragments is not None else ["The ", "limit ", "is $1M."]
        self.usage = (120, 30)
        self.requests: list[GenerationRequest] = []
        self.fail_after: int | None = None
        self.hang_after: int | None = None
        self.closed = False

    async def stream_chat(self, request: GenerationRequest):
        self.requests.append(request)
        try:
            for index, fragment in enumerate(self.fragments):
                if self.fail_after is not None and index == self.fail_after:
                    raise ConnectionError("upstream reset")
                if self.hang_after is not None and index == self.hang_after:
                    await asyncio.Event().wait()
                yield GenerationChunk(text=fragment)
            yield GenerationChunk(input_tokens=self.usage[0], output_tokens=self.usage[1])
        finally:
            self.closed = True

    @property
    def last_user_content(self) -> str:
        return self.requests[-1].messages[-1].content


class FakeSearchService:
    def __init__(self, results: list[ChunkSearchResult] | None = None) -> None:
        self.results = results or []
        self.requests: list[SemanticSearchRequest] = []
        self.delay: float = 0.0
        self.error: Exception | None = None

    async def search(self, request: SemanticSearchRequest) -> list[ChunkSearchResult]:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.results)


class FakePolicyContextService:
    def __init__(self, snapshots: list[PolicyContextSnapshot] | None = None) -> None:
        self.snapshots = snapshots or []
        self.calls: list[list[uuid.UUID]] = []
        self.error: Exception | None = None

    async def load_snapshots(self, tenant_id, policy_ids):
        self.calls.append(list(policy_ids))
        if self.error is not None:
            raise self.error
        return [s for s in self.snapshots if s.policy_id in policy_ids]


def make_chunk(page_start: int = 1, page_end: int | None = None, **overrides) -> ChunkSearchResult:
    values = {
        "chunk_id": uuid.uuid4(),
        "document_id": uuid.uuid4(),
        "document_name": "policy.pdf",
        "chunk_text": "Each occurrence limit: $1,000,000.",
        "page_start": page_start,
        "page_end": page_end,
        "similarity": 0.88,
    }
    values.update(overrides)
    return ChunkSearchResult(**values)


async def collect(stream) -> list:
    return [event async for event in stream]



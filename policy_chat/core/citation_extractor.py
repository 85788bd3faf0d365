"""
Citation extraction.

Reconciles page-reference markers in a generated answer against the chunks
that were presented to the model as context.

Dependencies: policy_chat.boundary.vdb
System role: Evidence trail for generated answers
"""

import re
from uuid import UUID

from policy_chat.boundary.vdb.vector_schemas import ChunkSearchResult

# [Source: Page 4], [Source: Page 4-5, Section: X], [Document: a.pdf, Page 7]
CITATION_PATTERN = re.compile(
    r"\[(?:Source|Document)[^\]]*Page\s*(\d+)(?:\s*-\s*(\d+))?[^\]]*\]",
    re.IGNORECASE,
)

DEFAULT_IMPLICIT_CITATIONS = 3


def _overlaps(chunk: ChunkSearchResult, start: int, end: int) -> bool:
    if chunk.page_start is None:
        return False
    chunk_end = chunk.page_end if chunk.page_end is not None else chunk.page_start
    return chunk.page_start <= end and chunk_end >= start


def extract_citations(
    response: str,
    chunks: list[ChunkSearchResult],
    implicit_count: int = DEFAULT_IMPLICIT_CITATIONS,
) -> list[UUID]:
    """
    Extract cited chunk IDs from a generated response.

    Each marker's page range is matched to the first retrieved chunk whose
    page range overlaps it. When the response has no resolvable markers but
    chunks were used, the top `implicit_count` chunks by rank are cited.

    Args:
        response: Full generated answer text
        chunks: Chunks presented as context, in rank order
        implicit_count: Fallback citation count

    Returns:
        list[UUID]: Deduplicated chunk IDs in first-seen order, always a
        subset of the given chunks
    """
    cited: list[UUID] = []

    for match in CITATION_PATTERN.finditer(response):
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) else start
        if end < start:
            start, end = end, start

        matching = next((c for c in chunks if _overlaps(c, start, end)), None)
        if matching is not None and matching.chunk_id not in cited:
            cited.append(matching.chunk_id)

    if not cited and chunks:
        cited = [chunk.chunk_id for chunk in chunks[:implicit_count]]

    return cited

"""
Test suite for prompt assembly.

System role: Verification of the context assembler
"""

import uuid
from datetime import date
from decimal import Decimal

from policy_chat.boundary.vdb.vector_schemas import ChunkSearchResult
from policy_chat.core.prompts.chat_prompts import (
    SEARCH_UNAVAILABLE_NOTE,
    SYSTEM_PROMPT,
    build_context_prompt,
    format_section_type,
    format_source_label,
)
from policy_chat.models.policy import CoverageSnapshot, CoverageType, PolicyContextSnapshot


def make_chunk(text: str, **overrides) -> ChunkSearchResult:
    values = {
        "chunk_id": uuid.uuid4(),
        "document_id": uuid.uuid4(),
        "document_name": "gl_policy.pdf",
        "chunk_text": text,
        "page_start": 4,
        "page_end": 5,
        "section_type": "coverage_form",
        "similarity": 0.9,
    }
    values.update(overrides)
    return ChunkSearchResult(**values)


def make_policy(**overrides) -> PolicyContextSnapshot:
    values = {
        "policy_id": uuid.uuid4(),
        "policy_number": "GL-100",
        "carrier_name": "Acme Mutual",
        "insured_name": "Widget Co",
        "policy_status": "active",
        "effective_date": date(2024, 1, 1),
        "expiration_date": date(2025, 1, 1),
        "total_premium": Decimal("12500.00"),
        "extraction_confidence": Decimal("0.92"),
        "coverages": [
            CoverageSnapshot(
                coverage_type=CoverageType.GENERAL_LIABILITY,
                each_occurrence_limit=Decimal("1000000"),
                aggregate_limit=Decimal("2000000"),
                deductible=Decimal("5000"),
                details={"b": 2, "a": 1},
            )
        ],
    }
    values.update(overrides)
    return PolicyContextSnapshot(**values)


class TestFormatSectionType:
    def test_known_sections(self) -> None:
        assert format_section_type("declarations") == "Declarations"
        assert format_section_type("coverage_form") == "Coverage Form"
        assert format_section_type("endorsements") == "Endorsements"

    def test_unknown_section_is_title_cased(self) -> None:
        assert format_section_type("additional_insured_schedule") == "Additional Insured Schedule"


class TestFormatSourceLabel:
    def test_page_range(self) -> None:
        chunk = make_chunk("x")
        assert format_source_label(chunk) == "[Document: gl_policy.pdf, Pages 4-5, Section: Coverage Form]"

    def test_single_page_without_section(self) -> None:
        chunk = make_chunk("x", page_start=3, page_end=3, section_type=None)
        assert format_source_label(chunk) == "[Document: gl_policy.pdf, Page 3]"

    def test_no_pages(self) -> None:
        chunk = make_chunk("x", page_start=None, page_end=None, section_type=None)
        assert format_source_label(chunk) == "[Document: gl_policy.pdf]"


class TestBuildContextPrompt:
    """Context assembly for the current user turn."""

    def test_no_context_returns_raw_message(self) -> None:
        assert build_context_prompt([], [], "thanks") == "thanks"

    def test_search_unavailable_without_context_prefixes_disclaimer(self) -> None:
        # Act
        prompt = build_context_prompt([], [], "What is my deductible?", search_unavailable=True)

        # Assert
        assert prompt == f"{SEARCH_UNAVAILABLE_NOTE}\n\nWhat is my deductible?"

    def test_structured_block_contains_policy_chunks_and_question_last(self) -> None:
        # Arrange
        chunk = make_chunk("Each occurrence limit is $1,000,000.")
        policy = make_policy()

        # Act
        prompt = build_context_prompt([chunk], [policy], "What are the coverage limits?")

        # Assert
        assert "## Policy Data" in prompt
        assert "### Acme Mutual | Policy GL-100" in prompt
        assert "- Insured: Widget Co" in prompt
        assert "- Policy Period: 2024-01-01 to 2025-01-01" in prompt
        assert "- Total Premium: $12,500.00" in prompt
        assert "- Extraction Confidence: 92%" in prompt
        assert "General Liability: Each Occurrence $1,000,000.00; Aggregate $2,000,000.00" in prompt
        assert 'Details: {"a": 1, "b": 2}' in prompt
        assert "[Document: gl_policy.pdf, Pages 4-5, Section: Coverage Form]" in prompt
        assert "Each occurrence limit is $1,000,000." in prompt
        assert prompt.endswith("## Current Question\nWhat are the coverage limits?")

    def test_all_chunks_are_included(self) -> None:
        chunks = [make_chunk(f"chunk number {i}") for i in range(25)]
        prompt = build_context_prompt(chunks, [], "q")
        assert all(f"chunk number {i}" in prompt for i in range(25))

    def test_policies_only_still_builds_block(self) -> None:
        prompt = build_context_prompt([], [make_policy()], "hello there")
        assert prompt.startswith("## Policy Data")
        assert "## Policy Excerpts" not in prompt

    def test_search_unavailable_with_policy_context_prefixes_block(self) -> None:
        prompt = build_context_prompt([], [make_policy()], "q", search_unavailable=True)
        assert prompt.startswith(SEARCH_UNAVAILABLE_NOTE)
        assert "## Policy Data" in prompt

    def test_balanced_groups_chunks_by_policy(self) -> None:
        # Arrange
        policy_a, policy_b = uuid.uuid4(), uuid.uuid4()
        chunks = [
            make_chunk("alpha one", policy_id=policy_a, carrier_name="Alpha Ins", policy_number="A-1"),
            make_chunk("beta one", policy_id=policy_b, carrier_name="Beta Ins", policy_number="B-1"),
            make_chunk("alpha two", policy_id=policy_a, carrier_name="Alpha Ins", policy_number="A-1"),
        ]

        # Act
        prompt = build_context_prompt(chunks, [], "compare", balanced=True)

        # Assert
        alpha = prompt.index("### Alpha Ins | Policy A-1")
        beta = prompt.index("### Beta Ins | Policy B-1")
        assert alpha < prompt.index("alpha one") < prompt.index("alpha two") < beta
        assert beta < prompt.index("beta one")

    def test_unbalanced_has_no_policy_headings(self) -> None:
        chunk = make_chunk("x", policy_id=uuid.uuid4(), carrier_name="Alpha Ins", policy_number="A-1")
        prompt = build_context_prompt([chunk], [], "q", balanced=False)
        assert "### Alpha Ins" not in prompt

    def test_unknown_coverage_type_uses_other_label(self) -> None:
        policy = make_policy(coverages=[CoverageSnapshot(coverage_type=CoverageType.parse("mystery"))])
        prompt = build_context_prompt([], [policy], "q")
        assert "- Other Coverage" in prompt

    def test_output_is_deterministic(self) -> None:
        # Arrange
        chunks = [make_chunk("a"), make_chunk("b")]
        policies = [make_policy()]

        # Act
        first = build_context_prompt(chunks, policies, "q", balanced=True)
        second = build_context_prompt(chunks, policies, "q", balanced=True)

        # Assert
        assert first == second


class TestSystemPrompt:
    def test_describes_citation_format(self) -> None:
        assert "[Source: Page X]" in SYSTEM_PROMPT
        assert "[Source: Page X, Section: Y]" in SYSTEM_PROMPT

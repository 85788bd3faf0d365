"""
Chat prompt assembly.

System prompt for the insurance policy analyst plus the builder that merges
structured policy data, retrieved chunks and the user question into the
content of the current user turn. Output is a pure function of the inputs.

Dependencies: policy_chat.models, policy_chat.boundary.vdb
System role: Context assembler for retrieval-augmented generation
"""

import json
from decimal import Decimal
from uuid import UUID

from policy_chat.boundary.vdb.vector_schemas import ChunkSearchResult
from policy_chat.models.policy import CoverageSnapshot, PolicyContextSnapshot

SYSTEM_PROMPT = """You are an expert insurance policy analyst helping users understand their coverage.

## Your Role
- Answer questions about insurance policies accurately and helpfully
- Always cite specific sections when referencing policy language
- Use plain language while maintaining accuracy

## Citation Format
When referencing policy content, use this format: [Source: Page X]
For page ranges: [Source: Page X-Y]
For section-specific references: [Source: Page X, Section: Y]
Always include citations for factual claims about the user's specific coverage, limits, or exclusions.

## Context
Structured policy data and relevant excerpts from the user's policy documents
are provided with each question when available.

## Important Guidelines
1. Answer using both the policy data AND your general insurance knowledge
2. Don't make up specific details about the USER'S policy - cite documents for their specific coverage
3. Distinguish between what IS covered vs what is NOT covered in their policy
4. For their limits and deductibles, quote exact figures from the documents
5. If multiple policies are provided, be clear about which policy you're referencing

You should NOT:
- Tell the user exactly what coverage they should purchase
- Make guarantees about whether their coverage is "enough" for their specific situation
- Provide advice that should come from a licensed agent who knows their full risk profile"""

SEARCH_UNAVAILABLE_NOTE = (
    "[Note: Document search is temporarily unavailable. "
    "Please answer based on general knowledge about insurance policies.]"
)

SECTION_LABELS: dict[str, str] = {
    "declarations": "Declarations",
    "coverage_form": "Coverage Form",
    "endorsements": "Endorsements",
    "schedule": "Schedule",
    "conditions": "Conditions",
    "exclusions": "Exclusions",
    "definitions": "Definitions",
}


def format_section_type(section_type: str) -> str:
    """Display label for a chunk's section tag (snake_case -> Title Case)."""
    if section_type in SECTION_LABELS:
        return SECTION_LABELS[section_type]
    return " ".join(part.capitalize() for part in section_type.split("_") if part)


def _money(value: Decimal | None) -> str | None:
    return None if value is None else f"${value:,.2f}"


def _confidence(value: Decimal | None) -> str | None:
    if value is None:
        return None
    percent = value * 100 if value <= 1 else value
    return f"{percent:.0f}%"


def _policy_heading(carrier_name: str | None, policy_number: str | None) -> str:
    carrier = carrier_name or "Unknown Carrier"
    return f"{carrier} | Policy {policy_number}" if policy_number else carrier


def _format_coverage(coverage: CoverageSnapshot) -> list[str]:
    name = coverage.coverage_type.label
    if coverage.coverage_subtype:
        name = f"{name} ({coverage.coverage_subtype})"

    figures = [
        (label, _money(value))
        for label, value in (
            ("Each Occurrence", coverage.each_occurrence_limit),
            ("Aggregate", coverage.aggregate_limit),
            ("Deductible", coverage.deductible),
            ("Premium", coverage.premium),
        )
    ]
    rendered = "; ".join(f"{label} {value}" for label, value in figures if value)

    lines = [f"- {name}: {rendered}" if rendered else f"- {name}"]
    if coverage.details:
        lines.append(f"  Details: {json.dumps(coverage.details, sort_keys=True, default=str)}")
    return lines


def format_policy(policy: PolicyContextSnapshot) -> str:
    """Compact rendering of one policy's structured fields and coverages."""
    lines = [f"### {_policy_heading(policy.carrier_name, policy.policy_number)}"]

    if policy.insured_name:
        lines.append(f"- Insured: {policy.insured_name}")
    if policy.policy_status:
        lines.append(f"- Status: {policy.policy_status}")
    if policy.effective_date or policy.expiration_date:
        start = policy.effective_date.isoformat() if policy.effective_date else "unknown"
        end = policy.expiration_date.isoformat() if policy.expiration_date else "unknown"
        lines.append(f"- Policy Period: {start} to {end}")
    if policy.total_premium is not None:
        lines.append(f"- Total Premium: {_money(policy.total_premium)}")
    if policy.extraction_confidence is not None:
        lines.append(f"- Extraction Confidence: {_confidence(policy.extraction_confidence)}")

    if policy.coverages:
        lines.append("- Coverages:")
        for coverage in policy.coverages:
            lines.extend(f"  {line}" for line in _format_coverage(coverage))
    else:
        lines.append("- Coverages: none extracted")

    return "\n".join(lines)


def format_source_label(chunk: ChunkSearchResult) -> str:
    """Bracketed source label: document name, page reference and section."""
    label = f"[Document: {chunk.document_name or 'Unknown document'}"
    if chunk.page_start is not None:
        if chunk.page_end is not None and chunk.page_end != chunk.page_start:
            label += f", Pages {chunk.page_start}-{chunk.page_end}"
        else:
            label += f", Page {chunk.page_start}"
    if chunk.section_type:
        label += f", Section: {format_section_type(chunk.section_type)}"
    return label + "]"


def _format_chunks(chunks: list[ChunkSearchResult]) -> list[str]:
    lines: list[str] = []
    for chunk in chunks:
        lines.append("---")
        lines.append(format_source_label(chunk))
        lines.append(chunk.chunk_text)
    lines.append("---")
    return lines


def _group_by_policy(
    chunks: list[ChunkSearchResult],
) -> list[tuple[UUID | None, list[ChunkSearchResult]]]:
    groups: dict[UUID | None, list[ChunkSearchResult]] = {}
    for chunk in chunks:
        groups.setdefault(chunk.policy_id, []).append(chunk)
    return list(groups.items())


def build_context_prompt(
    chunks: list[ChunkSearchResult],
    policies: list[PolicyContextSnapshot],
    user_message: str,
    balanced: bool = False,
    search_unavailable: bool = False,
) -> str:
    """
    Build the content of the current user turn.

    Args:
        chunks: Retrieved chunks in rank order; all of them are included
        policies: Structured policy snapshots
        user_message: Raw user message, always appended last
        balanced: Group chunks under a per-policy heading
        search_unavailable: Document search failed for this turn

    Returns:
        str: The raw message when there is no context, the disclaimer plus
        message when search failed with no context, else the structured block
    """
    if not chunks and not policies:
        if search_unavailable:
            return f"{SEARCH_UNAVAILABLE_NOTE}\n\n{user_message}"
        return user_message

    lines: list[str] = []
    if search_unavailable:
        lines.extend([SEARCH_UNAVAILABLE_NOTE, ""])

    if policies:
        lines.extend(["## Policy Data", ""])
        for policy in policies:
            lines.append(format_policy(policy))
            lines.append("")

    if chunks:
        if balanced:
            lines.extend(["## Policy Excerpts (grouped by policy)", ""])
            for _, group in _group_by_policy(chunks):
                first = group[0]
                heading = (
                    _policy_heading(first.carrier_name, first.policy_number)
                    if first.policy_id is not None
                    else "Other Documents"
                )
                lines.append(f"### {heading}")
                lines.extend(_format_chunks(group))
                lines.append("")
        else:
            lines.extend(["## Policy Excerpts", ""])
            lines.extend(_format_chunks(chunks))
            lines.append("")

    lines.append("## Current Question")
    lines.append(user_message)
    return "\n".join(lines)

"""
Prompt templates and context assembly for policy chat.
"""

from policy_chat.core.prompts.chat_prompts import (
    SEARCH_UNAVAILABLE_NOTE,
    SYSTEM_PROMPT,
    build_context_prompt,
    format_policy,
    format_section_type,
    format_source_label,
)

__all__ = [
    "SEARCH_UNAVAILABLE_NOTE",
    "SYSTEM_PROMPT",
    "build_context_prompt",
    "format_policy",
    "format_section_type",
    "format_source_label",
]

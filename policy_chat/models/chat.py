"""
Chat domain models and schemas.

Request schema for a user turn and the message/stream shapes exchanged
with the generation client.

Dependencies: pydantic
System role: Chat contracts
"""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class SendMessageRequest(BaseModel):
    """Request schema for sending a message in a conversation."""

    content: str = Field(description="User question or message")
    active_policy_ids: list[UUID] | None = Field(
        default=None,
        description="Subset of attached policies to focus on (None = all attached)",
    )


class ChatMessage(BaseModel):
    """Single role-tagged message replayed to the model."""

    role: Literal["user", "assistant"] = Field(description="Message role")
    content: str = Field(description="Message content")


class GenerationRequest(BaseModel):
    """Input for one streamed completion."""

    system_prompt: str
    messages: list[ChatMessage]
    max_tokens: int = Field(default=2048, ge=1)


class GenerationChunk(BaseModel):
    """
    One item of a generation stream.

    Attributes:
        text: Text fragment, if this item carries one
        input_tokens: Prompt token count, when reported
        output_tokens: Completion token count, when reported
    """

    text: str | None = None
    input_tokens: int | None = None
    output_tokens: int | None = None

"""
Conversation domain models and schemas.

Request/response schemas for conversation management.

Dependencies: pydantic
System role: Conversation API contracts
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class CreateConversationRequest(BaseModel):
    """Request schema for creating a new conversation."""

    title: str | None = Field(default=None, description="Optional conversation title")
    policy_ids: list[UUID] = Field(default_factory=list, description="Initial policy scope")
    document_ids: list[UUID] = Field(default_factory=list, description="Initial document scope")


class UpdateConversationRequest(BaseModel):
    """Request schema for renaming a conversation."""

    title: str | None = Field(default=None, description="New title")


class MessageResponse(BaseModel):
    """A persisted message in a conversation."""

    id: UUID
    role: str
    content: str
    cited_chunk_ids: list[UUID] = Field(default_factory=list)
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    created_at: datetime


class ConversationSummary(BaseModel):
    """Conversation row for list views."""

    id: UUID
    title: str | None
    policy_ids: list[UUID] = Field(default_factory=list)
    document_ids: list[UUID] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    message_count: int = 0
    last_message: str | None = None


class ConversationDetail(BaseModel):
    """Full conversation with its ordered message history."""

    id: UUID
    title: str | None
    policy_ids: list[UUID] = Field(default_factory=list)
    document_ids: list[UUID] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    messages: list[MessageResponse] = Field(default_factory=list)

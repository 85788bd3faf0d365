"""
Streaming event schemas for chat turns.

Defines the event kinds a caller receives while a turn is processed.
Every turn yields zero or more token/warning events followed by exactly
one terminal event (complete or error).

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class StreamEventType(str, Enum):
    """Server-to-caller event types for streaming chat."""

    TOKEN = "token"
    WARNING = "warning"
    ERROR = "error"
    COMPLETE = "complete"

    @property
    def is_terminal(self) -> bool:
        """Whether this event ends the turn."""
        return self in (StreamEventType.ERROR, StreamEventType.COMPLETE)


class StreamEvent(BaseModel):
    """
    Base streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any]

    @classmethod
    def token(cls, text: str) -> "StreamEvent":
        return cls(event=StreamEventType.TOKEN, data={"text": text})

    @classmethod
    def warning(cls, message: str) -> "StreamEvent":
        return cls(event=StreamEventType.WARNING, data={"message": message, "degraded": True})

    @classmethod
    def error(cls, message: str, code: str) -> "StreamEvent":
        return cls(event=StreamEventType.ERROR, data={"message": message, "code": code})

    @classmethod
    def complete(
        cls,
        message_id: UUID,
        cited_chunk_ids: list[UUID],
        degraded: bool = False,
    ) -> "StreamEvent":
        data: dict[str, Any] = {
            "message_id": str(message_id),
            "cited_chunk_ids": [str(chunk_id) for chunk_id in cited_chunk_ids],
        }
        if degraded:
            data["degraded"] = True
        return cls(event=StreamEventType.COMPLETE, data=data)

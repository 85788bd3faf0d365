"""
Correlation ID context manager.

Manages correlation ID propagation across async boundaries using contextvars.
A chat turn binds one ID for its whole duration so every log line of the
turn can be grouped.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Set correlation ID in context.

    Args:
        correlation_id: Optional correlation ID (generates new if None)

    Returns:
        str: The ID now bound
    """
    correlation_id = correlation_id or uuid.uuid4().hex
    correlation_id_ctx.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """
    Get current correlation ID from context.

    Returns:
        str: Current correlation ID ("" when unset)
    """
    return correlation_id_ctx.get()


def restore_correlation_id(previous: str) -> None:
    """
    Rebind a previously active correlation ID.

    Value-based rather than token-based: an async generator may be finalized
    in a different context than the one it started in.
    """
    correlation_id_ctx.set(previous)

"""
Domain events and dispatcher.

Chat turns publish events (turn completed, search degraded) to handlers
registered per event type. Handlers run in registration order; a failing
handler is logged and does not stop the others or the turn.

Dependencies: None (pure domain layer)
System role: Post-turn side effects (usage accounting, degradation alerts)
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Awaitable, Callable
from uuid import UUID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainEvent:
    """Base class for events raised by the chat core."""

    occurred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc),
        kw_only=True,
    )


@dataclass(frozen=True)
class ChatTurnCompleted(DomainEvent):
    """An assistant reply was generated and persisted."""

    conversation_id: UUID
    message_id: UUID
    tenant_id: UUID
    user_id: UUID
    prompt_tokens: int | None
    completion_tokens: int | None
    cited_chunk_count: int
    degraded: bool = False


@dataclass(frozen=True)
class SearchDegraded(DomainEvent):
    """Chunk search failed or timed out and the turn continued without it."""

    conversation_id: UUID
    tenant_id: UUID
    reason: str


EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventDispatcher:
    """
    Explicit event-type to handler-list mapping.

    Construct one per process and pass it to the services that publish;
    there is no module-level instance.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)

    def register(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """
        Register a handler for an event type.

        Args:
            event_type: Exact event class the handler receives
            handler: Async callable invoked with the event
        """
        self._handlers[event_type].append(handler)

    def handlers_for(self, event_type: type[DomainEvent]) -> list[EventHandler]:
        return list(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """
        Invoke every handler registered for the event's type, in order.

        Args:
            event: Event instance to deliver
        """
        for handler in self.handlers_for(type(event)):
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    f"{__name__}:publish - Handler {getattr(handler, '__name__', handler)!r} "
                    f"failed for {type(event).__name__}: {type(e).__name__}: {e}"
                )


async def log_token_usage(event: DomainEvent) -> None:
    """Default handler: record per-turn token usage."""
    if not isinstance(event, ChatTurnCompleted):
        return
    logger.info(
        f"{__name__}:log_token_usage - conversation={event.conversation_id} "
        f"message={event.message_id} prompt_tokens={event.prompt_tokens} "
        f"completion_tokens={event.completion_tokens} citations={event.cited_chunk_count} "
        f"degraded={event.degraded}"
    )


async def log_search_degraded(event: DomainEvent) -> None:
    if not isinstance(event, SearchDegraded):
        return
    logger.warning(
        f"{__name__}:log_search_degraded - conversation={event.conversation_id} "
        f"tenant={event.tenant_id} reason={event.reason}"
    )


def build_default_dispatcher() -> EventDispatcher:
    """
    Create a dispatcher with the built-in logging handlers registered.

    Returns:
        EventDispatcher: Dispatcher ready to be injected into ChatService
    """
    dispatcher = EventDispatcher()
    dispatcher.register(ChatTurnCompleted, log_token_usage)
    dispatcher.register(SearchDegraded, log_search_degraded)
    return dispatcher

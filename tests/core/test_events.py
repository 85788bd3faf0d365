"""
Test suite for the domain event dispatcher.

System role: Verification of post-turn event fan-out
"""

import logging
import uuid

import pytest

from policy_chat.core.events import (
    ChatTurnCompleted,
    EventDispatcher,
    SearchDegraded,
    build_default_dispatcher,
    log_token_usage,
)


def make_completed() -> ChatTurnCompleted:
    return ChatTurnCompleted(
        conversation_id=uuid.uuid4(),
        message_id=uuid.uuid4(),
        tenant_id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        prompt_tokens=120,
        completion_tokens=40,
        cited_chunk_count=2,
    )


class TestEventDispatcher:
    """Registration and ordered delivery."""

    @pytest.mark.asyncio
    async def test_handlers_run_in_registration_order(self) -> None:
        # Arrange
        dispatcher = EventDispatcher()
        calls: list[str] = []

        async def first(event):
            calls.append("first")

        async def second(event):
            calls.append("second")

        dispatcher.register(ChatTurnCompleted, first)
        dispatcher.register(ChatTurnCompleted, second)

        # Act
        await dispatcher.publish(make_completed())

        # Assert
        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_only_matching_event_type_is_delivered(self) -> None:
        # Arrange
        dispatcher = EventDispatcher()
        received = []

        async def handler(event):
            received.append(event)

        dispatcher.register(SearchDegraded, handler)

        # Act
        await dispatcher.publish(make_completed())

        # Assert
        assert received == []

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self, caplog: pytest.LogCaptureFixture) -> None:
        # Arrange
        dispatcher = EventDispatcher()
        calls: list[str] = []

        async def broken(event):
            raise RuntimeError("boom")

        async def healthy(event):
            calls.append("healthy")

        dispatcher.register(ChatTurnCompleted, broken)
        dispatcher.register(ChatTurnCompleted, healthy)

        # Act
        with caplog.at_level(logging.ERROR):
            await dispatcher.publish(make_completed())

        # Assert
        assert calls == ["healthy"]
        assert "boom" in caplog.text

    def test_dispatchers_do_not_share_handlers(self) -> None:
        # Arrange
        a = EventDispatcher()
        b = EventDispatcher()

        async def handler(event):
            return None

        # Act
        a.register(ChatTurnCompleted, handler)

        # Assert
        assert b.handlers_for(ChatTurnCompleted) == []


class TestDefaultDispatcher:
    def test_registers_usage_logger(self) -> None:
        dispatcher = build_default_dispatcher()
        assert dispatcher.handlers_for(ChatTurnCompleted) == [log_token_usage]
        assert len(dispatcher.handlers_for(SearchDegraded)) == 1

    @pytest.mark.asyncio
    async def test_usage_logger_records_token_counts(self, caplog: pytest.LogCaptureFixture) -> None:
        # Act
        with caplog.at_level(logging.INFO, logger="policy_chat.core.events"):
            await build_default_dispatcher().publish(make_completed())

        # Assert
        assert "prompt_tokens=120" in caplog.text
        assert "completion_tokens=40" in caplog.text

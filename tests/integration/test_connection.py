"""
Tests for engine and session factory wiring.

System role: Verification of database connection helpers
"""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from policy_chat.boundary.db.connection import get_async_engine, get_async_session_factory


class TestConnection:
    def test_engine_uses_asyncpg_driver(self) -> None:
        engine = get_async_engine()
        assert engine.url.drivername == "postgresql+asyncpg"

    @pytest.mark.asyncio
    async def test_session_factory_binds_given_engine(self) -> None:
        # Arrange
        engine = create_async_engine("sqlite+aiosqlite:///:memory:")
        factory = get_async_session_factory(engine)

        # Act
        async with factory() as session:
            value = (await session.execute(text("SELECT 1"))).scalar_one()

        # Assert
        assert value == 1
        assert factory.kw["expire_on_commit"] is False
        await engine.dispose()

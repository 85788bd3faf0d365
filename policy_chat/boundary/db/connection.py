"""
Database connection management.

Provides the async SQLAlchemy engine, session factory and a session
generator for dependency injection.

Dependencies: sqlalchemy, policy_chat.configs
System role: Database connection lifecycle management
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from policy_chat.configs import get_settings


def get_async_engine() -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    pool_pre_ping=True verifies connections before use to detect stale
    connections early.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Args:
        engine: Engine to bind (defaults to one built from settings)

    Returns:
        async_sessionmaker: Factory with autoflush off and expire_on_commit off
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield an async database session and close it afterwards.

    Yields:
        AsyncSession: Session scoped to one unit of work

    Usage:
        async for db in get_async_db():
            service = ConversationService(db)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session

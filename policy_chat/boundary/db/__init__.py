"""
Relational persistence: ORM models, connection management and CRUD.
"""

from policy_chat.boundary.db.base import Base, TimestampMixin, UUIDMixin
from policy_chat.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]

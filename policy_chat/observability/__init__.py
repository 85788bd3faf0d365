"""
Observability module.

Provides logging configuration, correlation ID tracking and safe log helpers.
"""

from policy_chat.observability.correlation import (
    get_correlation_id,
    restore_correlation_id,
    set_correlation_id,
)
from policy_chat.observability.log_utils import safe_log_value
from policy_chat.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "restore_correlation_id",
    "safe_log_value",
    "set_correlation_id",
]

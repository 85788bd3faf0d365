"""
Exception hierarchy for the policy chat application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class PolicyChatException(Exception):
    """Base exception for all policy chat errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(PolicyChatException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConversationNotFoundError(PolicyChatException):
    """Raised when a conversation cannot be found for the caller."""

    def __init__(self, conversation_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize conversation not found error.

        Args:
            conversation_id: ID of the missing conversation
            details: Additional context
        """
        details = details or {}
        details["conversation_id"] = conversation_id
        super().__init__("Conversation not found", details)


class EmbeddingError(PolicyChatException):
    """Raised when the query embedding cannot be produced (service error, timeout, bad size)."""

    pass


class VectorStoreError(PolicyChatException):
    """Raised when chunk store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (query, resolve_policies)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class GenerationError(PolicyChatException):
    """Raised when the generation stream fails."""

    pass


class PolicyContextError(PolicyChatException):
    """Raised when structured policy data cannot be loaded (non-critical)."""

    pass

"""
Exception hierarchy for the ArchMen application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ArchMenException(Exception):
    """Base exception for all ArchMen application errors."""

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


class ValidationError(ArchMenException):
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


class ChunkingConfigurationError(ValidationError):
    """Raised when chunk size / overlap would not make forward progress."""

    def __init__(self, message: str, chunk_size: int, overlap: int) -> None:
        super().__init__(
            message,
            details={"chunk_size": chunk_size, "overlap": overlap},
        )


class AuthenticationError(ArchMenException):
    """Raised when a request has no valid user session."""


class NotFoundError(ArchMenException):
    """Base exception for missing resources."""


class ParentNotFoundError(NotFoundError):
    """Raised when an assessment or archetype cannot be found."""

    def __init__(self, kind: str, parent_id: str) -> None:
        """
        Initialize parent not found error.

        Args:
            kind: Parent kind ("assessment" or "archetype")
            parent_id: ID of the missing parent
        """
        super().__init__(
            f"{kind.capitalize()} not found: {parent_id}",
            {"kind": kind, "parent_id": parent_id},
        )


class ChunkNotFoundError(NotFoundError):
    """Raised when a content chunk cannot be found."""

    def __init__(self, chunk_id: str) -> None:
        super().__init__(f"Content chunk not found: {chunk_id}", {"chunk_id": chunk_id})


class SessionNotFoundError(NotFoundError):
    """Raised when an assessment session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Assessment session not found: {session_id}", details)


class ConversationNotFoundError(NotFoundError):
    """Raised when a conversation ID is unknown or belongs to another user."""

    def __init__(self, conversation_id: str) -> None:
        super().__init__(
            f"Conversation not found: {conversation_id}",
            {"conversation_id": conversation_id},
        )


class ConflictError(ArchMenException):
    """Base exception for requests that clash with the current stored state."""


class InvalidSessionTransitionError(ConflictError):
    """Raised when an assessment session event is not allowed in its state."""

    def __init__(self, status: str, event: str) -> None:
        super().__init__(
            f"Cannot {event} an assessment session that is {status}",
            {"status": status, "event": event},
        )


class DuplicateMessageIndexError(ConflictError):
    """Raised when a chat history slot is already taken."""

    def __init__(self, session_id: str, message_index: int) -> None:
        super().__init__(
            f"Message {message_index} already recorded for session {session_id}",
            {"session_id": session_id, "message_index": message_index},
        )


class UpstreamProviderError(ArchMenException):
    """Base exception for failures of an external provider."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream provider error.

        Args:
            message: Error message
            provider: Name of the failing provider
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class EmbeddingError(UpstreamProviderError):
    """Raised when embedding generation fails."""


class ChatCompletionError(UpstreamProviderError):
    """Raised when the chat-completion model call fails."""


class StorageError(UpstreamProviderError):
    """Raised when object storage operations fail."""


class SimilaritySearchError(ArchMenException):
    """Raised when the database-side similarity search fails."""

    def __init__(
        self,
        message: str,
        parent_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if parent_id:
            details["parent_id"] = parent_id
        super().__init__(message, details)

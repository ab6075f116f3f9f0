"""Error hierarchy for the user registry.

Service operations either fulfil their contract or raise one of these
errors. The HTTP layer translates them into plain-text responses.

Exception Hierarchy:
    UserRegistryError (base)
    ├── InvalidInputError   - validation failures, bad range endpoints (400)
    ├── NotFoundError       - lookup by id found nothing (404)
    ├── AlreadyExistsError  - email already taken by another user (400)
    └── PersistenceError    - any other failure reported by the store
"""

from __future__ import annotations

from typing import Any

USER_ALREADY_EXISTS_MESSAGE = "This user already exists!"
INVALID_DATE_FORMAT_MESSAGE = (
    "Invalid date of birth format. Please use YYYY-MM-DD format."
)


class UserRegistryError(Exception):
    """Base exception for all user registry errors.

    Attributes:
        message: Human-readable error description, safe to show to clients.
        details: Optional dict with additional context for logs.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class InvalidInputError(UserRegistryError):
    """A candidate user or query argument was rejected."""


class NotFoundError(UserRegistryError):
    """No user exists with the requested id."""


class AlreadyExistsError(UserRegistryError):
    """Another user already holds the requested email address."""

    def __init__(
        self,
        message: str = USER_ALREADY_EXISTS_MESSAGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


class PersistenceError(UserRegistryError):
    """Error reported by the database that has no more specific meaning.

    Attributes:
        operation: Name of the repository operation that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.operation = operation

    @classmethod
    def from_exception(
        cls, exc: Exception, *, operation: str | None = None
    ) -> PersistenceError:
        """Wrap a driver or ORM exception, keeping it as ``__cause__``."""
        error = cls(
            f"Database operation failed: {type(exc).__name__}",
            operation=operation,
            details={"original_exception": type(exc).__name__},
        )
        error.__cause__ = exc
        return error

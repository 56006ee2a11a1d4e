"""Domain exceptions for the database tooling.

Defines exceptions that represent invalid operator input or violated
tool rules. They are independent of the store driver; the command
scripts turn them into console messages and exit codes.
"""

from typing import Any


class PrehistoricDBException(Exception):
    """Base exception for all database tooling errors.

    All custom exceptions should inherit from this class so the command
    scripts can report them consistently.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, collection).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(PrehistoricDBException):
    """Raised when operator input fails validation (e.g. a non-positive keep count)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or argument that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)

"""
Domain errors for the reward and crossword services.

Services raise these; the API layer never inspects messages. Each error class
carries a stable ``kind`` and ``STATUS_BY_KIND`` maps that kind to the HTTP
status returned in the error envelope.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Stable identifiers for domain failures."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    ALREADY_ISSUED = "already_issued"
    ACTIVITIES_INCOMPLETE = "activities_incomplete"
    ALREADY_REDEEMED = "already_redeemed"
    ALREADY_STARTED = "already_started"
    EXPIRED = "expired"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_ISSUED: 403,
    ErrorKind.ACTIVITIES_INCOMPLETE: 403,
    ErrorKind.ALREADY_REDEEMED: 409,
    ErrorKind.ALREADY_STARTED: 409,
    ErrorKind.EXPIRED: 409,
    ErrorKind.INTERNAL: 500,
}


class DomainError(Exception):
    """
    Base class for expected, user-visible failures.

    Args:
        message: Human-readable message returned to the client
        details: Extra context for logs (never sent to the client)
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dict for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class ValidationError(DomainError):
    """Missing or malformed input."""

    kind = ErrorKind.VALIDATION


class NotFoundError(DomainError):
    """Unknown id or token."""

    kind = ErrorKind.NOT_FOUND


class NotStartedError(NotFoundError):
    """No progress record exists for the (user, puzzle) pair."""


class ConflictError(DomainError):
    """Base for state conflicts."""


class AlreadyIssuedError(ConflictError):
    """The user already holds a reward in a state that forbids another one."""

    kind = ErrorKind.ALREADY_ISSUED


class ActivitiesIncompleteError(ConflictError):
    """Reward requested before every activity was completed."""

    kind = ErrorKind.ACTIVITIES_INCOMPLETE


class AlreadyRedeemedError(ConflictError):
    kind = ErrorKind.ALREADY_REDEEMED


class AlreadyStartedError(ConflictError):
    kind = ErrorKind.ALREADY_STARTED


class ExpiredError(ConflictError):
    kind = ErrorKind.EXPIRED


class InternalError(DomainError):
    """Unexpected persistence failure."""

    kind = ErrorKind.INTERNAL

"""
Domain-specific errors for the subscriptions bounded context.

This is a closed taxonomy: every failure an operation can end in is
one of these classes. They are mapped to HTTP responses at the
interface layer. No framework imports allowed.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence


@dataclass(frozen=True)
class FieldViolation:
    """One invalid input field: dotted path plus a readable message."""

    path: str
    message: str


class SubscriptionDomainError(Exception):
    """Base error for all subscription domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ValidationError(SubscriptionDomainError):
    """Raised when caller input is malformed or out of range."""

    def __init__(self, details: Sequence[FieldViolation]) -> None:
        super().__init__("Validation failed")
        self.details = list(details)


class NotFoundError(SubscriptionDomainError):
    """Raised when no subscription matches the requested id."""

    def __init__(self, subscription_id: str) -> None:
        super().__init__("Subscription not found")
        self.subscription_id = subscription_id


class ForbiddenError(SubscriptionDomainError):
    """Raised when a subscription exists but belongs to another owner."""

    def __init__(self, subscription_id: str) -> None:
        super().__init__("Forbidden")
        self.subscription_id = subscription_id


class ConflictError(SubscriptionDomainError):
    """Raised when a write would duplicate a value that must be unique."""

    def __init__(self, fields: Sequence[str]) -> None:
        super().__init__("Unique constraint violation")
        self.fields = list(fields)


class ConstraintError(SubscriptionDomainError):
    """Raised when a write references a record that does not exist."""

    def __init__(self, message: str = "Related record does not exist") -> None:
        super().__init__(message)


class HttpStatusError(SubscriptionDomainError):
    """A failure that already carries the HTTP status it should produce."""

    def __init__(
        self,
        status_code: int,
        message: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.headers = dict(headers) if headers else None


class UnexpectedError(SubscriptionDomainError):
    """Anything not recognized. The cause is kept for server-side logs only."""

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        super().__init__("Internal server error")
        self.cause = cause

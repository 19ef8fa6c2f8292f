"""
Error classifier.

Maps any exception raised while serving a request onto the closed
domain taxonomy, exactly once. First match wins:

1. request validation failures (body, query and path parameters)
2. unique-constraint violations
3. foreign-key violations
4. domain errors raised by the use cases (not found, forbidden, ...)
5. errors that already carry an HTTP status
6. anything else, including pydantic errors raised by server code
"""

import re
from typing import Any, Iterable, Optional

from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.subscriptions.errors import (
    ConflictError,
    ConstraintError,
    FieldViolation,
    HttpStatusError,
    SubscriptionDomainError,
    UnexpectedError,
    ValidationError,
)

# SQLSTATE codes (PostgreSQL, surfaced by asyncpg)
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

# Extended result codes (SQLite, surfaced by sqlite3 as ``sqlite_errorname``)
SQLITE_UNIQUE_CODES = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})
SQLITE_FOREIGN_KEY_CODE = "SQLITE_CONSTRAINT_FOREIGNKEY"

_REQUEST_PARTS = frozenset({"body", "query", "path", "header", "cookie"})
_SQLITE_UNIQUE_COLUMNS = re.compile(r"UNIQUE constraint failed: ([^\n]+)")
_POSTGRES_KEY_COLUMNS = re.compile(r"Key \(([^)]+)\)=")


def _camelize(column: str) -> str:
    head, *rest = column.split("_")
    return head + "".join(part.title() for part in rest)


def field_violations(errors: Iterable[dict[str, Any]]) -> list[FieldViolation]:
    """Convert pydantic error dicts into dotted-path violations.

    The leading request part (``body``, ``query``) is dropped unless it
    is the whole location, as for a missing body.
    """
    violations = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if len(location) > 1 and location[0] in _REQUEST_PARTS:
            location = location[1:]
        violations.append(
            FieldViolation(path=".".join(location), message=str(error.get("msg", "Invalid value")))
        )
    return violations


def _integrity_kind(orig: Any) -> Optional[str]:
    """Return UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION or None for a DBAPI error."""
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code in (UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION):
        return code

    sqlite_name = getattr(orig, "sqlite_errorname", None)
    if sqlite_name in SQLITE_UNIQUE_CODES:
        return UNIQUE_VIOLATION
    if sqlite_name == SQLITE_FOREIGN_KEY_CODE:
        return FOREIGN_KEY_VIOLATION

    message = str(orig)
    if "UNIQUE constraint failed" in message:
        return UNIQUE_VIOLATION
    if "FOREIGN KEY constraint failed" in message:
        return FOREIGN_KEY_VIOLATION
    return None


def _conflicting_fields(orig: Any) -> list[str]:
    """Extract the offending column names, as external field names."""
    texts = [str(orig)]
    cause = getattr(orig, "__cause__", None)
    detail = getattr(cause, "detail", None) or getattr(orig, "detail", None)
    if detail:
        texts.insert(0, str(detail))

    for text in texts:
        match = _SQLITE_UNIQUE_COLUMNS.search(text)
        if match:
            columns = [part.strip().split(".")[-1] for part in match.group(1).split(",")]
            return [_camelize(column) for column in columns]
        match = _POSTGRES_KEY_COLUMNS.search(text)
        if match:
            return [_camelize(part.strip()) for part in match.group(1).split(",")]
    return []


def classify_integrity_error(exc: IntegrityError) -> SubscriptionDomainError:
    kind = _integrity_kind(exc.orig)
    if kind == UNIQUE_VIOLATION:
        return ConflictError(_conflicting_fields(exc.orig))
    if kind == FOREIGN_KEY_VIOLATION:
        return ConstraintError()
    return UnexpectedError(exc)


def classify(exc: BaseException) -> SubscriptionDomainError:
    """Return the single taxonomy member describing ``exc``."""
    if isinstance(exc, RequestValidationError):
        return ValidationError(field_violations(exc.errors()))
    if isinstance(exc, IntegrityError):
        return classify_integrity_error(exc)
    if isinstance(exc, SubscriptionDomainError):
        return exc
    if isinstance(exc, StarletteHTTPException):
        return HttpStatusError(exc.status_code, str(exc.detail), headers=exc.headers)
    return UnexpectedError(exc)

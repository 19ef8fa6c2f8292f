"""
Centralized error handlers for FastAPI.

Every handler funnels into the classifier, so each failure is
classified once and rendered once. No stack traces or internal
details are exposed to clients. All error responses share the shape
``{"error": {"message": ..., "details"?: [...], "field"?: ...}}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.subscriptions.errors import (
    ConflictError,
    ConstraintError,
    ForbiddenError,
    HttpStatusError,
    NotFoundError,
    SubscriptionDomainError,
    UnexpectedError,
    ValidationError,
)
from app.shared.errors.classifier import classify

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_403 = 403
HTTP_404 = 404
HTTP_409 = 409
HTTP_500 = 500

_STATUS_BY_ERROR: dict[type[SubscriptionDomainError], int] = {
    ValidationError: HTTP_400,
    ConstraintError: HTTP_400,
    ForbiddenError: HTTP_403,
    NotFoundError: HTTP_404,
    ConflictError: HTTP_409,
    UnexpectedError: HTTP_500,
}


def status_for(error: SubscriptionDomainError) -> int:
    """Return the HTTP status for a classified error."""
    if isinstance(error, HttpStatusError):
        return error.status_code
    return _STATUS_BY_ERROR.get(type(error), HTTP_500)


def render_error(error: SubscriptionDomainError) -> JSONResponse:
    """Build the JSON error response for a classified error."""
    status_code = status_for(error)
    body: dict[str, object] = {"message": error.message}
    headers = None

    if isinstance(error, ValidationError):
        body["details"] = [{"path": v.path, "message": v.message} for v in error.details]
    elif isinstance(error, ConflictError) and error.fields:
        body["field"] = ",".join(error.fields)
    elif isinstance(error, HttpStatusError):
        headers = error.headers
    elif status_code >= HTTP_500:
        body["message"] = "Internal server error"

    return JSONResponse(status_code=status_code, content={"error": body}, headers=headers)


def _respond(request: Request, exc: Exception) -> JSONResponse:
    """Classify, log and render one failure."""
    error = classify(exc)
    status_code = status_for(error)

    if isinstance(error, UnexpectedError):
        cause = error.cause or exc
        logger.error(
            "Unexpected error on %s %s: %s",
            request.method,
            request.url.path,
            type(cause).__name__,
            exc_info=cause,
        )
    elif status_code >= HTTP_500:
        logger.error("%s %s failed: %s", request.method, request.url.path, error.message)
    else:
        logger.info(
            "%s %s -> %d %s", request.method, request.url.path, status_code, error.message
        )

    return render_error(error)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed bodies and query strings."""
        return _respond(request, exc)

    @app.exception_handler(IntegrityError)
    async def handle_integrity(request: Request, exc: IntegrityError) -> JSONResponse:
        """Handle unique and foreign-key violations from the database."""
        return _respond(request, exc)

    @app.exception_handler(SubscriptionDomainError)
    async def handle_domain(
        request: Request, exc: SubscriptionDomainError
    ) -> JSONResponse:
        """Handle errors raised by the use cases."""
        return _respond(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle errors that already carry a status (404 route, 405, 429)."""
        return _respond(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        return _respond(request, exc)

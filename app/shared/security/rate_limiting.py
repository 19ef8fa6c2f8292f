"""
Rate limiting configuration and setup.

Uses slowapi to enforce a default per-client limit on every route.
Protects against denial-of-service and resource abuse.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.core.config import Settings
from app.domain.subscriptions.errors import HttpStatusError
from app.shared.errors.handlers import render_error

HTTP_429 = 429


def build_limiter(settings: Settings) -> Limiter:
    """Create the application limiter from settings.

    Args:
        settings: Supplies the default limit and the on/off switch.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit_default],
        enabled=settings.rate_limit_enabled,
    )


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Handle rate limit exceeded errors with the standard error body.

    Synchronous because SlowAPIMiddleware calls it without awaiting.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.

    Returns:
        A 429 JSON response naming the exceeded limit.
    """
    return render_error(HttpStatusError(HTTP_429, f"Rate limit exceeded: {exc.detail}"))

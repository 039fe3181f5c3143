"""Error results of the chat endpoint and their exception handlers.

Every non-2xx response of ``/api/chat`` is raised as a ``RelayError``
subclass and rendered by ``handle_relay_error``.  The class tells apart
the outcomes that logs and metrics keep separate:

* ``ClientError``: 4xx, rejected before any upstream call.
* ``ApiKeyNotConfigured``: 500, rejected before any upstream call.
* ``UpstreamError``: 500, the upstream call was attempted and failed.
* ``InternalError``: 500, anything else raised while serving the
  request (config resolution, body reading).

Router-level 405s for methods the route does not list are rendered by
``handle_http_exception`` with the same payload as ``MethodNotAllowed``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from riskatlas.core.service.metrics import (
    CHAT_REQUESTS_TOTAL,
    OUTCOME_CLIENT_ERROR,
    OUTCOME_CONFIG_ERROR,
    OUTCOME_INTERNAL_ERROR,
    OUTCOME_UPSTREAM_ERROR,
)

from . import API_PREFIX
from .models import ErrorResponse

logger = logging.getLogger(__name__)

ERROR_METHOD_NOT_ALLOWED = "Method not allowed"
ERROR_MESSAGE_REQUIRED = "Message is required"
ERROR_INVALID_BODY = "Invalid request body"
ERROR_API_KEY_NOT_CONFIGURED = "API key not configured"
ERROR_PROCESSING_FAILED = "Failed to process request"


class RelayError(Exception):
    """Base error result: an HTTP status plus an ``ErrorResponse`` payload."""

    status_code: int = 500
    error: str = ERROR_PROCESSING_FAILED
    outcome: str = OUTCOME_UPSTREAM_ERROR

    def __init__(self, details: str | None = None) -> None:
        super().__init__(details or self.error)
        self.details = details

    @property
    def headers(self) -> dict[str, str] | None:
        return None

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.error, details=self.details)


class ClientError(RelayError):
    """Request rejected before any upstream call (4xx)."""

    status_code = 400
    outcome = OUTCOME_CLIENT_ERROR


class MethodNotAllowed(ClientError):
    status_code = 405
    error = ERROR_METHOD_NOT_ALLOWED

    def __init__(self, allowed: tuple[str, ...] = ("POST", "OPTIONS")) -> None:
        super().__init__()
        self.allowed = allowed

    @property
    def headers(self) -> dict[str, str]:
        return {"Allow": ", ".join(self.allowed)}


class MessageRequired(ClientError):
    error = ERROR_MESSAGE_REQUIRED


class InvalidRequestBody(ClientError):
    error = ERROR_INVALID_BODY


class ApiKeyNotConfigured(RelayError):
    """The upstream credential is missing from configuration."""

    error = ERROR_API_KEY_NOT_CONFIGURED
    outcome = OUTCOME_CONFIG_ERROR


class UpstreamError(RelayError):
    """The upstream call (or reply extraction) failed."""

    error = ERROR_PROCESSING_FAILED
    outcome = OUTCOME_UPSTREAM_ERROR

    @classmethod
    def from_exception(cls, exc: BaseException) -> "UpstreamError":
        return cls(details=str(exc))


class InternalError(RelayError):
    """Unexpected failure outside the upstream call."""

    error = ERROR_PROCESSING_FAILED
    outcome = OUTCOME_INTERNAL_ERROR

    @classmethod
    def from_exception(cls, exc: BaseException) -> "InternalError":
        return cls(details=str(exc))


async def handle_relay_error(request: Request, exc: RelayError) -> JSONResponse:
    CHAT_REQUESTS_TOTAL.labels(outcome=exc.outcome).inc()
    if exc.outcome == OUTCOME_CLIENT_ERROR:
        logger.info(
            "Rejected %s %s: %s", request.method, request.url.path, exc.error
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().to_content(),
        headers=exc.headers,
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Render router-level 405s like ``MethodNotAllowed``.

    Under ``/api`` the relay's own ``Allow`` list is sent; other paths
    keep the methods the router reported.  Every other status falls back
    to FastAPI's default rendering.
    """
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)

    reported = (exc.headers or {}).get("Allow")
    if request.url.path.startswith(API_PREFIX) or not reported:
        error = MethodNotAllowed()
    else:
        error = MethodNotAllowed(
            allowed=tuple(method.strip() for method in reported.split(","))
        )
    return await handle_relay_error(request, error)


def register_exception_handlers(app: FastAPI) -> None:
    """Register the ``RelayError`` and HTTP error handlers on ``app``."""
    app.add_exception_handler(RelayError, handle_relay_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)

"""Origin allow-list CORS middleware.

Unlike Starlette's ``CORSMiddleware`` this never rejects a request on
CORS grounds: an allow-listed ``Origin`` is echoed back, anything else
(including a missing header) gets ``*``.  The full header set is added
to every response, errors included, and any ``OPTIONS`` request is
answered here with an empty 200.  Exceptions that escape the app are
rendered here as the relay's JSON 500 so they carry the same headers.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from riskatlas.configs.system import CORSConfig

from .exceptions import InternalError, handle_relay_error

logger = logging.getLogger(__name__)

WILDCARD_ORIGIN = "*"
PREFLIGHT_METHOD = "OPTIONS"


def resolve_allow_origin(origin: str | None, allowed_origins: list[str]) -> str:
    """Exact allow-list match, otherwise the wildcard."""
    if origin is not None and origin in allowed_origins:
        return origin
    return WILDCARD_ORIGIN


def build_cors_headers(origin: str | None, config: CORSConfig) -> dict[str, str]:
    allow_origin = resolve_allow_origin(origin, config.allowed_origins)
    headers = {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": ", ".join(config.allow_methods),
        "Access-Control-Allow-Headers": ", ".join(config.allow_headers),
        "Access-Control-Allow-Credentials": str(config.allow_credentials).lower(),
        "Access-Control-Max-Age": str(int(config.max_age.total_seconds())),
    }
    if allow_origin != WILDCARD_ORIGIN:
        headers["Vary"] = "Origin"
    return headers


class AllowListCORSMiddleware(BaseHTTPMiddleware):
    """Adds CORS headers and turns escaped exceptions into JSON 500s.

    ``RelayError`` subclasses are rendered by the app's own handler; any
    other exception (a failing dependency, a broken body stream) reaches
    this layer and is reported as ``InternalError``.
    """

    def __init__(self, app: ASGIApp, config: CORSConfig) -> None:
        super().__init__(app)
        self.config = config

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == PREFLIGHT_METHOD:
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.exception(
                    "Unhandled error serving %s %s", request.method, request.url.path
                )
                response = await handle_relay_error(
                    request, InternalError.from_exception(exc)
                )

        response.headers.update(
            build_cors_headers(request.headers.get("origin"), self.config)
        )
        return response

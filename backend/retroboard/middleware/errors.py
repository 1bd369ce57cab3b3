"""
RetroBoard Backend — Unhandled Error Middleware
=================================================

What:  Turns any exception that escapes the route handlers into the standard
       500 body {"error": "Server Error", "request_id": ...}.
Why:   FastAPI installs a catch-all `Exception` handler in Starlette's
       ServerErrorMiddleware, which sits outside every user middleware. Its
       500s would skip the CORS and X-Request-ID headers, so the browser
       frontend could not read them.

Placement:
    Innermost user middleware (added first in create_app), so the access
    logger, the request ID and the CORS headers all apply to its response.
"""

import logging

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from retroboard.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "request_id": request_id_var.get("")},
    )


class UnhandledErrorMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            # Stack trace stays server-side
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                request_id_var.get(""),
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            return error_response(500, "Server Error")

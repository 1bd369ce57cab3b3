"""
RetroBoard Backend — Permissive CORS Middleware
=================================================

What:  Adds the same CORS headers to every response and answers every
       OPTIONS request with 204, whatever the path.
Why:   The API is called from a browser frontend on another origin. Preflight
       must succeed uniformly, including for paths the router does not know.

Headers (from settings):
    Access-Control-Allow-Origin:  *
    Access-Control-Allow-Methods: GET, POST, PUT, DELETE, OPTIONS
    Access-Control-Allow-Headers: Content-Type
"""

from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from retroboard.config import settings


def cors_headers() -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": settings.cors_allow_methods,
        "Access-Control-Allow-Headers": settings.cors_allow_headers,
    }


class PermissiveCORSMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=cors_headers())

        response = await call_next(request)
        response.headers.update(cors_headers())
        return response

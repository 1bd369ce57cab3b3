"""
RetroBoard Backend — Request Dependencies
===========================================

What:  FastAPI dependencies shared by the route handlers:
       - get_database(): the Database store attached to the application
       - json_body(Schema): incremental, size-capped JSON body parser

Body Parsing Rules:
    1. Stream chunks from the ASGI receive channel; stop as soon as the total
       passes settings.max_body_size (→ 413, the rest is never buffered)
    2. Empty body → {}
    3. Invalid UTF-8 / invalid JSON / non-object JSON → ParseError (400)
    4. Validate into the request schema; a field of the wrong JSON type
       → ValidationError (400)
"""

import json
import logging
from typing import Any, Callable, Dict, Type, TypeVar

import pydantic
from fastapi import Request

from retroboard.config import settings
from retroboard.database import Database
from retroboard.exceptions import ParseError, PayloadTooLargeError, ValidationError

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=pydantic.BaseModel)


def get_database(request: Request) -> Database:
    """The store created by create_app(); one per application instance."""
    return request.app.state.database


async def read_json_body(request: Request) -> Dict[str, Any]:
    """Read and decode the request body as a JSON object."""
    limit = settings.max_body_size
    raw = bytearray()
    async for chunk in request.stream():
        raw.extend(chunk)
        if len(raw) > limit:
            logger.warning("Rejected request body over %d bytes on %s", limit, request.url.path)
            raise PayloadTooLargeError(max_size=limit)

    if not raw.strip():
        return {}

    try:
        data = json.loads(bytes(raw))
    except (ValueError, RecursionError) as e:
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors;
        # RecursionError comes from arrays/objects nested too deep
        raise ParseError("invalid json", context={"reason": str(e)})

    if not isinstance(data, dict):
        raise ParseError("JSON body must be an object")
    return data


def json_body(schema: Type[SchemaT]) -> Callable[[Request], Any]:
    """
    Build a dependency that parses the body into `schema`.

    Usage:
        async def create_board(payload: BoardCreateRequest = Depends(json_body(BoardCreateRequest)))
    """

    async def dependency(request: Request) -> SchemaT:
        data = await read_json_body(request)
        try:
            return schema.model_validate(data)
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise ValidationError(f"{field}: {first['msg']}", field=field)

    return dependency

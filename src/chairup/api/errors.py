"""Map domain exceptions onto HTTP responses.

Every failure body has the same shape::

    {"error": <kind>, "message": <text>, "details": {<field>: [<messages>]}}
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from chairup.exceptions import Conflict, Forbidden, describe

logger = structlog.get_logger(__name__)

_HTTP_KINDS = {
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
}


def error_response(status_code: int, kind: str, messages) -> JSONResponse:
    details = messages if isinstance(messages, dict) else {}
    return JSONResponse(
        status_code=status_code,
        content={"error": kind, "message": describe(messages), "details": details},
    )


async def _validation_error(request: Request, exc: ValidationError):
    kind = getattr(exc, "kind", "validation_error")
    status_code = 409 if isinstance(exc, Conflict) else 400
    return error_response(status_code, kind, exc.messages)


async def _not_found(request: Request, exc: ObjectNotFoundError):
    # Protean's own lookups raise without a messages mapping
    messages = getattr(exc, "messages", None) or {"id": [describe(exc.args[0]) if exc.args else "Not found"]}
    return error_response(404, "not_found", messages)


async def _forbidden(request: Request, exc: Forbidden):
    return error_response(403, Forbidden.kind, exc.messages)


async def _version_conflict(request: Request, exc: ExpectedVersionError):
    logger.warning("Concurrent modification rejected", path=request.url.path, reason=str(exc))
    return error_response(409, Conflict.kind, {"version": ["The record was changed by another request, retry"]})


async def _request_validation_error(request: Request, exc: RequestValidationError):
    details: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:]) or "body"
        details.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return error_response(400, "validation_error", details)


async def _http_error(request: Request, exc: StarletteHTTPException):
    kind = _HTTP_KINDS.get(exc.status_code, "http_error")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": kind, "message": str(exc.detail), "details": {}},
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(Forbidden, _forbidden)
    app.add_exception_handler(ExpectedVersionError, _version_conflict)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)

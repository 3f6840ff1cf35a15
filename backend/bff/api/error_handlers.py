"""Error Handlers — every failure leaves the BFF as {message, statusCode, errors?}.

Invariants:
    - BffError → its own status and envelope (upstream message passed through)
    - RequestValidationError → 400 "Invalid request data", one "field: problem" per error
    - Starlette HTTPException (unknown route, wrong method) → envelope, same status
    - Anything else → 500 "Internal server error"; details only in the log
      (answered outside the request middleware, so the request id is set here)

Design Decisions:
    - Four layers, most specific first: domain, request shape, routing, catch-all
    - Body location prefix ("body.") dropped from field paths: clients know
      which fields they sent, not where FastAPI found them
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bff.core.errors import BffError, ErrorSeverity
from bff.infrastructure.observability import REQUEST_ID_HEADER, current_request_id

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request data"
INTERNAL_ERROR_MESSAGE = "Internal server error"

_LOUD_SEVERITIES = (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL)


def envelope(
    status_code: int,
    message: str,
    errors: list[str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict = {"message": message, "statusCode": status_code}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BffError, handle_bff_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_bff_error(request: Request, exc: BffError) -> JSONResponse:
    logger.log(
        logging.ERROR if exc.severity in _LOUD_SEVERITIES else logging.WARNING,
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "status_code": exc.http_status,
            "service": exc.context.service,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    problems = [_describe(error) for error in exc.errors()]
    logger.info(
        f"Rejected malformed request to {request.url.path}: {problems}",
        extra={"path": request.url.path, "status_code": status.HTTP_400_BAD_REQUEST},
    )
    return envelope(status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_MESSAGE, problems)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return envelope(exc.status_code, message, headers=getattr(exc, "headers", None))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        extra={"path": request.url.path, "status_code": 500},
    )
    request_id = current_request_id()
    return envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        headers={REQUEST_ID_HEADER: request_id} if request_id else None,
    )


def _describe(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = ".".join(location) or "body"
    return f"{field}: {error.get('msg', 'invalid value')}"

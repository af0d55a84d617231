"""Error Handlers — every failure leaves the API as a LedgerError envelope.

Invariants:
    - All error bodies come from LedgerError.to_response(): {"error": {code, message, ...}}
    - Status policy:
        400  INVALID_FIELD, INVALID_AMOUNT, VALIDATION_ERROR (caller mistakes, nothing written)
        404  RESOURCE_NOT_FOUND (unknown article id, nothing written)
        503  STORE_UNAVAILABLE / DATABASE_ERROR (record store unreadable or unwritable)
        500  INTERNAL_ERROR (anything unclassified; exception text stays in the log)
    - 4xx logged at WARNING, 5xx at ERROR, with the article id when one is known

Design Decisions:
    - Request validation and unexpected exceptions are converted into LedgerError
      subclasses first, so one _respond() renders and logs all of them
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ledger.core.errors import InvalidRequestError, LedgerError, UnexpectedError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LedgerError, _handle_ledger_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)


async def _handle_ledger_error(request: Request, exc: LedgerError) -> JSONResponse:
    return _respond(request, exc)


async def _handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    return _respond(request, InvalidRequestError(field_errors(exc)))


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    return _respond(request, UnexpectedError(), cause=exc)


def _respond(
    request: Request, error: LedgerError, cause: Exception | None = None,
) -> JSONResponse:
    level = logging.WARNING if error.http_status < 500 else logging.ERROR
    logger.log(
        level,
        f"{request.method} {request.url.path} -> {error.http_status} {error.code}: "
        f"{error.message}",
        exc_info=cause,
        extra={
            "error_code": error.code,
            "path": request.url.path,
            "article_id": error.context.article_id,
        },
    )
    return JSONResponse(status_code=error.http_status, content=error.to_response())


def field_errors(exc: RequestValidationError) -> list[dict]:
    """One entry per invalid input, located without the "body" prefix."""
    return [
        {
            "field": ".".join(str(part) for part in e["loc"] if part != "body"),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]

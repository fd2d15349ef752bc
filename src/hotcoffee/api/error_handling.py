from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hotcoffee.api.middleware.request_id import get_request_id
from hotcoffee.application.errors import (
    CollectionNotReadError,
    ConflictError,
    InsufficientStockError,
    InvalidOrderIdError,
    NoOrdersError,
    NothingToModifyError,
    NotFoundError,
    OrderAlreadyClosedError,
    StoreUnavailableError,
    UnknownOrderStatusError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        log = logger.error if status_code >= 500 else logger.warning
        log(str(exc), extra={"status_code": status_code, "error_code": code})
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _nothing_to_modify_handler(_: Request, exc: Exception) -> Response:
    logger.info(str(exc), extra={"status_code": 204, "error_code": "NOTHING_TO_MODIFY"})
    return Response(status_code=204)


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (NoOrdersError, 404, "NO_ORDERS"),
        (NotFoundError, 404, "NOT_FOUND"),
        (CollectionNotReadError, 409, "COLLECTION_NOT_READ"),
        (InvalidOrderIdError, 409, "INVALID_ORDER_ID"),
        (OrderAlreadyClosedError, 409, "ORDER_ALREADY_CLOSED"),
        (UnknownOrderStatusError, 400, "UNKNOWN_ORDER_STATUS"),
        (ConflictError, 409, "CONFLICT"),
        (ValidationFailedError, 400, "VALIDATION_FAILED"),
        (InsufficientStockError, 400, "INSUFFICIENT_STOCK"),
        (StoreUnavailableError, 500, "STORE_UNAVAILABLE"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(NothingToModifyError, _nothing_to_modify_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

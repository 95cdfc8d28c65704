"""
Exception handlers translating failures into HTTP responses.

Every failure is rendered as ``{"status", "message", "error"}`` where
``status`` is the HTTP reason phrase. Request bodies that do not parse are
BadInput and answer 400, not FastAPI's default 422.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hr.api.responses import ErrorResponse
from hr.errors import BadInputError, HRServiceError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, error: str) -> JSONResponse:
    body = ErrorResponse(
        status=HTTPStatus(status_code).phrase,
        message=message,
        error=error,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def hr_service_error_handler(
    request: Request, exc: HRServiceError
) -> JSONResponse:
    logger.info(
        "Request failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "status_code": exc.status_code,
        },
    )
    return error_response(exc.status_code, exc.message, exc.detail)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(
        "Invalid request body",
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(
        BadInputError.status_code, BadInputError.message, str(exc.errors())
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register the failure translation on ``app``."""
    app.add_exception_handler(
        HRServiceError, hr_service_error_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        RequestValidationError,
        request_validation_error_handler,  # type: ignore[arg-type]
    )

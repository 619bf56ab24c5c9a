import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from garage_manager.core.domain_exceptions import DomainException
from garage_manager.core.error_codes import ErrorCode
from garage_manager.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int,
    code: ErrorCode,
    error: str,
    details: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content=ErrorResponse(code=code, error=error, details=details).model_dump(mode="json"),
    )


async def domain_exception_handler(request: Request, exc: DomainException):
    return _error_response(exc.status_code, exc.code, exc.error, exc.details)


async def http_exception_handler(request: Request, exc: HTTPException):
    code = ErrorCode.NOT_FOUND if exc.status_code == 404 else ErrorCode.INVALID_ARGUMENT
    return _error_response(
        exc.status_code,
        code,
        "Request failed",
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg')}")

    return _error_response(
        400,
        ErrorCode.INVALID_ARGUMENT,
        "Invalid request",
        "; ".join(problems) or "Request validation failed.",
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _error_response(
        500,
        ErrorCode.UNAVAILABLE,
        "Internal server error",
        "The request could not be completed.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

"""
app/core/errors.py

Purpose: Map exceptions to the ErrorResponse envelope

- Domain errors keep their code and status; 5xx bodies are always generic
- Rate limited responses carry Retry-After
- Request validation failures are reported as 400 VALIDATION_ERROR
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import ServiProError, RateLimitedError
from app.core.logging import get_logger
from app.schemas.response import ErrorResponse

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Please try again later."


def _error_response(
    status_code: int,
    message: str,
    code: str,
    details: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, code=code, details=details)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)


def _request_context(request: Request) -> Dict[str, str]:
    return {
        "method": request.method,
        "url": str(request.url),
        "client": request.client.host if request.client else "unknown",
    }


def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    """

    @app.exception_handler(ServiProError)
    async def servipro_exception_handler(request: Request, exc: ServiProError):
        if exc.status_code >= 500:
            logger.error(f"{exc.code}: {exc.message}", extra=_request_context(request))
            return _error_response(exc.status_code, INTERNAL_ERROR_MESSAGE, exc.code)

        headers = None
        if isinstance(exc, RateLimitedError):
            headers = {"Retry-After": str(exc.retry_after)}
        return _error_response(exc.status_code, exc.message, exc.code, exc.details, headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """404 for unknown routes, 405 for wrong methods, etc."""
        return _error_response(
            exc.status_code, str(exc.detail), "HTTP_ERROR", headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
            for err in exc.errors()
        ]
        message = errors[0]["msg"] if errors else "Input validation failed"
        return _error_response(400, message, "VALIDATION_ERROR", errors)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", extra=_request_context(request), exc_info=True)
        return _error_response(500, INTERNAL_ERROR_MESSAGE, "INTERNAL_ERROR")

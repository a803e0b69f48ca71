"""Error response formatting: every error body is {"error": "<message>"}"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bluechain_mrv.exceptions import AuthenticationError, BlueChainError, StoreError

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    message: str,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Create an error response

    Args:
        status_code: HTTP status code
        message: Human-readable explanation
        headers: Optional extra response headers

    Returns:
        JSONResponse with an `error` field
    """
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=headers,
    )


def format_validation_error(exc: RequestValidationError) -> str:
    """Describe the first failing field, e.g. `hectares: Input should be a valid number`"""
    errors = exc.errors()
    if not errors:
        return "Validation failed"

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", "Invalid value")
    # pydantic prefixes messages raised from field validators
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]

    if not location:
        return f"Request body: {message}"
    return f"{'.'.join(location)}: {message}"


async def blue_chain_error_handler(request: Request, exc: BlueChainError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}

    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")

    return create_error_response(exc.status_code, exc.message, headers=headers)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures outside commit_or_raise (reads, flushes) carry only the driver message"""
    return await blue_chain_error_handler(request, StoreError(str(getattr(exc, "orig", None) or exc)))


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return create_error_response(status.HTTP_400_BAD_REQUEST, format_validation_error(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return create_error_response(
        exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) or "An internal server error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlueChainError, blue_chain_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

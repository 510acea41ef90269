"""
Exception-to-response mapping.

Handlers are built from ``Settings`` at application start, so whether
validation details reach the client is decided by configuration passed in
here rather than by reading the environment per request.
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import Settings
from ..constants import HIDDEN_VALIDATION_MESSAGE
from ..exceptions import InvalidSearchRequestError, MongoCrudError

logger = logging.getLogger(__name__)

Handler = Callable[[Request, Exception], Awaitable[JSONResponse]]


def make_validation_exception_handler(expose_details: bool) -> Handler:
    """Build the 400 handler for request validation failures."""

    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info(f"Validation failed on {request.url.path}: {len(exc.errors())} error(s)")
        return JSONResponse(
            status_code=400,
            content={
                "statusCode": 400,
                "createdBy": "ValidationFilter",
                "validationErrors": (
                    jsonable_errors(exc) if expose_details else HIDDEN_VALIDATION_MESSAGE
                ),
            },
        )

    return validation_exception_handler


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Validation errors without the non-serializable ``ctx``/``input`` payloads."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": exc.status_code,
            "createdBy": "HttpExceptionFilter",
            "date": datetime.now(timezone.utc).isoformat(),
            "exception": str(exc.detail),
            "readableMessage": str(exc.detail),
        },
        headers=getattr(exc, "headers", None),
    )


async def search_request_exception_handler(
    request: Request, exc: InvalidSearchRequestError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "status": 400,
            "createdBy": "HttpExceptionFilter",
            "date": datetime.now(timezone.utc).isoformat(),
            "exception": type(exc).__name__,
            "readableMessage": exc.message,
        },
    )


async def database_exception_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error(f"{type(exc).__name__} on {request.url.path} (503): {exc}", exc_info=True)
    return JSONResponse(
        status_code=503,
        content={
            "status": 503,
            "createdBy": "DatabaseExceptionFilter",
            "date": datetime.now(timezone.utc).isoformat(),
            "exception": type(exc).__name__,
            "readableMessage": "Database unavailable",
        },
    )


def make_fallback_exception_handler(expose_details: bool) -> Handler:
    """Build the 500 handler for anything not mapped above."""

    async def fallback_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"{type(exc).__name__} on {request.url.path} (500): {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "status": 500,
                "createdBy": "FallbackExceptionFilter",
                "date": datetime.now(timezone.utc).isoformat(),
                "exception": type(exc).__name__,
                "readableMessage": str(exc) if expose_details else "Internal server error",
            },
        )

    return fallback_exception_handler


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Attach every handler to ``app`` using the given settings."""
    app.add_exception_handler(
        RequestValidationError,
        make_validation_exception_handler(settings.expose_validation_errors),
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(InvalidSearchRequestError, search_request_exception_handler)
    app.add_exception_handler(PyMongoError, database_exception_handler)
    fallback = make_fallback_exception_handler(settings.expose_validation_errors)
    app.add_exception_handler(MongoCrudError, fallback)
    app.add_exception_handler(Exception, fallback)

"""
Global error handlers for the marketplace API.

Every failure leaves the API as the same envelope:

    {"error": {"code": "...", "message": "...", "details": {...}}}

Store failures are reported as 503 without internals; the list engine itself
never retries or hides them.
"""
import sqlite3

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger("marketplace.api.errors")


class DomainError(Exception):
    """Base class for domain-level errors."""
    status_code: int = 400
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(DomainError):
    """Resource not found."""
    status_code = 404
    error_code = "NOT_FOUND"


class InvalidFilterError(DomainError):
    """Resource filter value outside its allowed set or unparseable."""
    status_code = 422
    error_code = "INVALID_FILTER"


def error_response(status_code: int, code: str, message: str, details: dict | None = None) -> JSONResponse:
    error = {"code": code, "message": message}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        return error_response(exc.status_code, exc.error_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
        logger.warning("request_validation_error", fields=fields, path=request.url.path)
        return error_response(422, "INVALID_INPUT", "Request parameters failed validation.", {"fields": fields})

    @app.exception_handler(sqlite3.DatabaseError)
    async def store_error_handler(request: Request, exc: sqlite3.DatabaseError) -> JSONResponse:
        logger.error(
            "store_error",
            error_type=type(exc).__name__,
            error=str(exc),
            path=request.url.path,
        )
        return error_response(503, "DB_UNAVAILABLE", "Database temporarily unavailable. Please retry.")

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.warning("validation_error", error=str(exc), path=request.url.path)
        return error_response(422, "INVALID_INPUT", str(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_error",
            error_type=type(exc).__name__,
            error=str(exc),
            path=request.url.path,
        )
        return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")

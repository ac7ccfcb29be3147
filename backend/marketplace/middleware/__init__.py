"""Middleware package for the marketplace API."""
from .logging_middleware import RequestLoggingMiddleware
from .error_handler import DomainError, InvalidFilterError, NotFoundError, register_error_handlers

__all__ = [
    "RequestLoggingMiddleware",
    "register_error_handlers",
    "DomainError",
    "InvalidFilterError",
    "NotFoundError",
]

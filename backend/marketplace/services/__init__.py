"""
Service layer for the marketplace API.

The pagination engine (paginate / QueryBuilder) and the resource services
built on it. Services are constructed per request with their store injected;
routers stay thin: parse request -> call service -> return response.
"""
from .predicates import AnyOf, Condition, Predicate, Projection, SortDirection, SortSpec
from .store import DocumentStore, MemoryDocumentStore
from .sqlite_store import SQLiteDocumentDatabase
from .pagination import PaginatedResult, PaginationParams, normalize_params, paginate
from .query_builder import QueryBuilder
from .user_service import UserService
from .catalog_service import CatalogService
from .booking_service import BookingService
from .vendor_service import VendorService

__all__ = [
    "AnyOf",
    "Condition",
    "Predicate",
    "Projection",
    "SortDirection",
    "SortSpec",
    "DocumentStore",
    "MemoryDocumentStore",
    "SQLiteDocumentDatabase",
    "PaginatedResult",
    "PaginationParams",
    "normalize_params",
    "paginate",
    "QueryBuilder",
    "UserService",
    "CatalogService",
    "BookingService",
    "VendorService",
]

# Pydantic models for API request/response
from .common import DataResponse, ErrorResponse, PaginationMeta, PaginatedResponse
from .user import UserItem, UserListResponse, UserStats
from .catalog import ServiceItem, ServiceListResponse
from .booking import BookingItem, BookingListResponse
from .vendor import VendorItem, VendorListResponse

__all__ = [
    "DataResponse",
    "ErrorResponse",
    "PaginationMeta",
    "PaginatedResponse",
    "UserItem",
    "UserListResponse",
    "UserStats",
    "ServiceItem",
    "ServiceListResponse",
    "BookingItem",
    "BookingListResponse",
    "VendorItem",
    "VendorListResponse",
]

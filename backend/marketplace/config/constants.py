"""
Centralized constants for the marketplace backend.

Pagination bounds, resource enums and the field lists each listing uses.
Import from here instead of redefining.
"""
from enum import Enum

# Pagination defaults and bounds (shared by every list endpoint)
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MIN_LIMIT = 1
MAX_LIMIT = 100  # hard cap, protects the store from unbounded scans
DEFAULT_SORT = "createdAt"
DEFAULT_ORDER = "desc"


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"
    VENDOR = "VENDOR"


class UserTier(str, Enum):
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    BLOCKED = "BLOCKED"


class ServiceStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class KycStatus(str, Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


# Collection names in the document store
USERS_COLLECTION = "users"
SERVICES_COLLECTION = "services"
BOOKINGS_COLLECTION = "bookings"
VENDORS_COLLECTION = "vendors"

# Free-text search fields per resource
USER_SEARCH_FIELDS = ("fullName", "email")
SERVICE_SEARCH_FIELDS = ("name", "description")
BOOKING_SEARCH_FIELDS = ()
VENDOR_SEARCH_FIELDS = ()

# Fields that must never leave the service layer
USER_HIDDEN_FIELDS = "-passwordHash -__v"
DEFAULT_HIDDEN_FIELDS = "-__v"

# Query params redacted from request logs
SENSITIVE_QUERY_PARAMS = {"email", "phone", "search"}

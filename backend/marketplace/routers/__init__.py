# API routers
from .users import router as users_router
from .catalog import router as services_router
from .bookings import router as bookings_router
from .vendors import router as vendors_router

__all__ = [
    "users_router",
    "services_router",
    "bookings_router",
    "vendors_router",
]

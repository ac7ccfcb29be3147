"""
Booking domain service.

Lists bookings filtered by customer, service, status and a scheduled-date
window.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

import structlog

from ..config.constants import BOOKING_SEARCH_FIELDS
from .base_service import BaseService
from .pagination import PaginatedResult, PaginationParams
from .store import isoformat_utc

logger = structlog.get_logger("marketplace.services.booking")


class BookingService(BaseService):
    """Business logic for booking queries."""

    search_fields = BOOKING_SEARCH_FIELDS

    def list_bookings(
        self,
        params: PaginationParams | Mapping[str, Any] | None = None,
        *,
        user_id: str | None = None,
        service_id: str | None = None,
        status: str | None = None,
        scheduled_from: datetime | None = None,
        scheduled_to: datetime | None = None,
        scheduled_before: datetime | None = None,
    ) -> PaginatedResult:
        """
        List bookings.

        Args:
            params: Pagination parameters
            user_id: Customer who placed the booking
            service_id: Booked service
            status: Booking status
            scheduled_from: Inclusive lower bound on scheduledDate
            scheduled_to: Inclusive upper bound on scheduledDate
            scheduled_before: Exclusive upper bound on scheduledDate
        """
        result = (
            self._query(params)
            .where("customerId", value=user_id)
            .where("serviceId", value=service_id)
            .where("status", value=status)
            .where("scheduledDate", "gte", _iso(scheduled_from))
            .where("scheduledDate", "lte", _iso(scheduled_to))
            .where("scheduledDate", "lt", _iso(scheduled_before))
            .sort()
            .paginate()
            .execute()
        )
        logger.debug(
            "bookings_listed",
            user_id=user_id,
            status=status,
            window=[_iso(scheduled_from), _iso(scheduled_to or scheduled_before)],
            total=result.meta["total"],
        )
        return result


def _iso(value: datetime | None) -> str | None:
    # scheduledDate is stored as an ISO-8601 string, so bounds compare as text
    return isoformat_utc(value) if value is not None else None

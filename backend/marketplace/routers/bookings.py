"""
API router for bookings.

Supports filtering by customer, service, status and a scheduled-date range.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config.constants import BookingStatus
from ..dependencies import get_booking_service
from ..middleware.error_handler import InvalidFilterError
from ..models.booking import BookingListResponse
from ..services.booking_service import BookingService
from ..services.pagination import PaginationParams
from .params import next_day, pagination_params, parse_datetime_bound, parse_enum

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=None, responses={200: {"model": BookingListResponse}})
def list_bookings(
    params: PaginationParams = Depends(pagination_params),
    user_id: Optional[str] = Query(None, alias="userId", description="Filter by customer ID"),
    service_id: Optional[str] = Query(None, alias="serviceId", description="Filter by service ID"),
    status: Optional[str] = Query(
        None, description="Filter by status: PENDING, CONFIRMED, COMPLETED, CANCELLED"
    ),
    start_date: Optional[str] = Query(
        None, alias="startDate", description="Scheduled on/after (YYYY-MM-DD or ISO datetime)"
    ),
    end_date: Optional[str] = Query(
        None, alias="endDate", description="Scheduled on/before (YYYY-MM-DD or ISO datetime)"
    ),
    bookings: BookingService = Depends(get_booking_service),
):
    """
    List bookings.

    A date-only endDate includes the whole day.
    """
    start, _ = parse_datetime_bound(start_date, "startDate")
    end, end_is_date = parse_datetime_bound(end_date, "endDate")
    if start is not None and end is not None and start > end:
        raise InvalidFilterError(
            "startDate cannot be after endDate",
            details={"startDate": start_date, "endDate": end_date},
        )

    result = bookings.list_bookings(
        params,
        user_id=user_id or None,
        service_id=service_id or None,
        status=parse_enum(BookingStatus, status, "status"),
        scheduled_from=start,
        scheduled_to=end if end is not None and not end_is_date else None,
        scheduled_before=next_day(end) if end is not None and end_is_date else None,
    )
    return result.to_dict()

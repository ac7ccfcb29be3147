"""
Shared query-parameter parsing for list endpoints.

Pagination inputs are taken as raw strings and normalized, never rejected.
Resource filters with a closed value set are validated here.
"""
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Optional, Type

from fastapi import Query

from ..middleware.error_handler import InvalidFilterError
from ..services.pagination import PaginationParams, normalize_params


def pagination_params(
    page: Optional[str] = Query(None, description="Page number (1-indexed, default 1)"),
    limit: Optional[str] = Query(None, description="Items per page (default 10, capped at 100)"),
    sort: Optional[str] = Query(None, description="Sort field (default createdAt)"),
    order: Optional[str] = Query(None, description="Sort order: asc or desc (default desc)"),
    search: Optional[str] = Query(None, description="Free-text search"),
) -> PaginationParams:
    """FastAPI dependency: raw pagination query params -> PaginationParams."""
    return normalize_params(page=page, limit=limit, sort=sort, order=order, search=search)


def parse_enum(enum_cls: Type[Enum], value: Optional[str], name: str) -> Optional[str]:
    """Case-insensitive enum filter. None/empty means no filter."""
    if value is None or not value.strip():
        return None
    candidate = value.strip().upper()
    allowed = [member.value for member in enum_cls]
    if candidate not in allowed:
        raise InvalidFilterError(
            f"Invalid {name} '{value}'. Must be one of: {', '.join(allowed)}",
            details={"field": name, "allowed": allowed},
        )
    return candidate


def parse_datetime_bound(value: Optional[str], name: str) -> tuple[Optional[datetime], bool]:
    """
    Parse a date filter as a UTC datetime.

    Returns (moment, date_only). Date-only values (YYYY-MM-DD) map to the
    start of that day so callers can treat the end bound as exclusive on the
    following day.
    """
    text = (value or "").strip()
    if not text:
        return None, False
    try:
        if "T" not in text and " " not in text and len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=timezone.utc), True
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidFilterError(
            f"Invalid {name} '{value}'. Use YYYY-MM-DD or an ISO-8601 datetime.",
            details={"field": name},
        )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc), False


def next_day(moment: datetime) -> datetime:
    return moment + timedelta(days=1)

"""
Pagination utilities for the service layer.

Normalizes raw query parameters and standardizes the paginated response
format across all list endpoints.
"""
from __future__ import annotations

import concurrent.futures
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

import structlog

from ..config.constants import DEFAULT_LIMIT, DEFAULT_ORDER, DEFAULT_PAGE, DEFAULT_SORT, MAX_LIMIT, MIN_LIMIT
from .predicates import (
    Predicate,
    Projection,
    SortDirection,
    SortSpec,
    build_search_group,
    combine_filters,
)
from .store import DocumentStore

logger = structlog.get_logger("marketplace.services.pagination")


@dataclass(frozen=True)
class PaginationParams:
    """Fully defaulted, bounds-safe pagination parameters."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort: str = DEFAULT_SORT
    order: SortDirection = SortDirection(DEFAULT_ORDER)
    search: str = ""
    search_fields: tuple[str, ...] = ()

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def sort_spec(self) -> SortSpec:
        return SortSpec(self.sort, self.order)


@dataclass
class PaginatedResult:
    """Standard paginated response matching the API envelope format."""

    data: list[dict] = field(default_factory=list)
    meta: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"meta": dict(self.meta), "data": list(self.data)}


def _to_number(value: Any) -> int | float | None:
    """Parse an int-ish input. None means absent or malformed (including NaN)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number):
        return None
    return number


def normalize_page(value: Any) -> int:
    number = _to_number(value)
    if number is None or math.isinf(number):
        return DEFAULT_PAGE
    return max(1, int(number))


def normalize_limit(value: Any) -> int:
    number = _to_number(value)
    if number is None:
        return DEFAULT_LIMIT
    if math.isinf(number):
        return MAX_LIMIT if number > 0 else MIN_LIMIT
    return min(MAX_LIMIT, max(MIN_LIMIT, int(number)))


def normalize_order(value: Any) -> SortDirection:
    if isinstance(value, SortDirection):
        return value
    return SortDirection.ASC if str(value or "").strip().lower() == "asc" else SortDirection.DESC


def normalize_params(
    page: Any = None,
    limit: Any = None,
    sort: str | None = None,
    order: Any = None,
    search: str | None = None,
    search_fields: Iterable[str] | None = None,
) -> PaginationParams:
    """
    Turn raw, possibly absent or malformed inputs into PaginationParams.

    Never raises for bad input: page falls back to 1 and is kept >= 1, limit
    falls back to 10 and is clamped to [1, 100], any order other than "asc"
    is descending. The sort field is passed through unvalidated.

    Args:
        page: Page number (1-indexed), int or numeric string
        limit: Items per page, int or numeric string
        sort: Field name to sort on (default "createdAt")
        order: "asc" or "desc"
        search: Free-text search term
        search_fields: Fields the search term is matched against

    Returns:
        PaginationParams
    """
    sort_field = str(sort).strip() if sort is not None else ""
    return PaginationParams(
        page=normalize_page(page),
        limit=normalize_limit(limit),
        sort=sort_field or DEFAULT_SORT,
        order=normalize_order(order),
        search=str(search or "").strip(),
        search_fields=tuple(f for f in (search_fields or ()) if f),
    )


def ensure_params(params: PaginationParams | Mapping[str, Any] | None) -> PaginationParams:
    """Normalize either a PaginationParams value or a raw query mapping."""
    if params is None:
        return normalize_params()
    if isinstance(params, PaginationParams):
        return normalize_params(
            params.page, params.limit, params.sort, params.order, params.search, params.search_fields
        )
    return normalize_params(
        page=params.get("page"),
        limit=params.get("limit"),
        sort=params.get("sort"),
        order=params.get("order"),
        search=params.get("search"),
        search_fields=params.get("search_fields", params.get("searchFields")),
    )


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


def fetch_page(
    store: DocumentStore,
    *,
    predicate: Predicate,
    params: PaginationParams,
    sort: SortSpec | None,
    skip: int,
    limit: int | None,
    projection: Projection | None,
) -> PaginatedResult:
    """
    Run the page fetch and the total count in parallel and build the result.

    Both reads use the same predicate. Sort, skip, limit and projection only
    shape the fetch; the count sees the full matching set. If either read
    fails the error propagates and no result is built.
    """
    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
        f_data = executor.submit(
            store.find, predicate, sort=sort, skip=skip, limit=limit, projection=projection
        )
        f_total = executor.submit(store.count, predicate)

        data = f_data.result()
        total = f_total.result()

    logger.debug(
        "page_fetched",
        collection=store.name,
        page=params.page,
        limit=params.limit,
        total=total,
        returned=len(data),
    )

    return PaginatedResult(
        data=data,
        meta={
            "page": params.page,
            "limit": params.limit,
            "total": total,
            "totalPages": total_pages(total, params.limit),
        },
    )


def paginate(
    store: DocumentStore,
    params: PaginationParams | Mapping[str, Any] | None = None,
    extra_filter: Predicate | Mapping[str, Any] | None = None,
    projection: Projection | str | Iterable[str] | None = None,
) -> PaginatedResult:
    """
    Paginated, sorted, optionally searched listing of one collection.

    Args:
        store: Collection to read
        params: Raw or normalized pagination parameters
        extra_filter: Caller filter (e.g. role, status), ANDed with the search
        projection: Fields to include/exclude, e.g. "-passwordHash -__v"

    Returns:
        PaginatedResult with data and meta (page, limit, total, totalPages)
    """
    p = ensure_params(params)
    predicate = combine_filters(extra_filter, build_search_group(p.search, p.search_fields))
    return fetch_page(
        store,
        predicate=predicate,
        params=p,
        sort=p.sort_spec,
        skip=p.skip,
        limit=p.limit,
        projection=Projection.parse(projection),
    )

"""
QueryBuilder: fluent, immutable list-query construction over a DocumentStore.

Each chained call returns a new builder, so a partially built query can be
shared and extended without side effects. execute() finishes through the
same fetch_page() primitive as paginate(), and search goes through the same
build_search_group(), so both entry points return identical pages for
equivalent inputs.

    result = (
        QueryBuilder(store, params)
        .filter({"status": "ACTIVE"})
        .range("basePrice", 100, 500)
        .search(["name", "description"])
        .sort()
        .select("-__v")
        .paginate()
        .execute()
    )
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping

from .pagination import PaginatedResult, PaginationParams, ensure_params, fetch_page
from .predicates import (
    Clause,
    Condition,
    Predicate,
    Projection,
    SortSpec,
    build_search_group,
)
from .store import DocumentStore


@dataclass(frozen=True)
class QueryBuilder:
    """Immutable fluent builder. Count uses `predicate` only."""

    store: DocumentStore
    params: PaginationParams | Mapping[str, Any] | None = None
    predicate: Predicate = field(default_factory=Predicate)
    sort_spec: SortSpec | None = None
    projection: Projection | None = None
    offset: int = 0
    page_size: int | None = None

    def __post_init__(self):
        object.__setattr__(self, "params", ensure_params(self.params))

    # --- Filters ---

    def search(self, fields: Iterable[str]) -> QueryBuilder:
        """AND an OR-group over `fields` when the params carry search text."""
        group = build_search_group(self.params.search, fields)
        if group is None:
            return self
        return replace(self, predicate=self.predicate.and_(group))

    def filter(self, constraint: Predicate | Clause | Mapping[str, Any] | None = None) -> QueryBuilder:
        """AND an additional constraint onto the accumulated predicate."""
        if constraint is None:
            return self
        if isinstance(constraint, Mapping):
            constraint = Predicate.from_mapping(constraint)
        return replace(self, predicate=self.predicate.and_(constraint))

    def where(self, field_name: str, op: str = "eq", value: Any = None) -> QueryBuilder:
        """Add a single condition if a value is provided."""
        if value is None:
            return self
        return self.filter(Condition(field_name, op, value))

    def range(self, field_name: str, minimum: Any = None, maximum: Any = None) -> QueryBuilder:
        """Inclusive range filter; either bound may be omitted."""
        return self.where(field_name, "gte", minimum).where(field_name, "lte", maximum)

    # --- Shaping ---

    def sort(self) -> QueryBuilder:
        """Sort by the normalized sort field and order from the params."""
        return replace(self, sort_spec=self.params.sort_spec)

    def select(self, fields: Projection | str | Iterable[str] | None) -> QueryBuilder:
        """Apply a projection. Empty specs are a no-op."""
        projection = Projection.parse(fields)
        if projection is None:
            return self
        return replace(self, projection=projection)

    def paginate(self) -> QueryBuilder:
        """Window the fetch to the requested page."""
        return replace(self, offset=self.params.skip, page_size=self.params.limit)

    # --- Terminal ---

    def execute(self) -> PaginatedResult:
        return fetch_page(
            self.store,
            predicate=self.predicate,
            params=self.params,
            sort=self.sort_spec,
            skip=self.offset,
            limit=self.page_size,
            projection=self.projection,
        )

"""
BaseService: common patterns for resource services.

Every resource service gets its store injected at construction and inherits
standardized paginated listing, single-record lookup and builder setup.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

import structlog

from ..config.constants import DEFAULT_HIDDEN_FIELDS
from .pagination import PaginatedResult, PaginationParams, ensure_params, paginate
from .predicates import Predicate, Projection
from .query_builder import QueryBuilder
from .store import DocumentStore

logger = structlog.get_logger("marketplace.services")


class BaseService:
    """Base class for resource services."""

    search_fields: tuple[str, ...] = ()
    hidden_fields: str = DEFAULT_HIDDEN_FIELDS

    def __init__(self, store: DocumentStore):
        self.store = store
        self.projection = Projection.parse(self.hidden_fields)

    def _params(self, params: PaginationParams | Mapping[str, Any] | None) -> PaginationParams:
        """Normalize params and attach this resource's search fields."""
        return replace(ensure_params(params), search_fields=self.search_fields)

    def _paginated_list(
        self,
        params: PaginationParams | Mapping[str, Any] | None,
        extra_filter: Predicate | Mapping[str, Any] | None = None,
    ) -> PaginatedResult:
        """Functional-form listing with this resource's search fields and projection."""
        return paginate(self.store, self._params(params), extra_filter, self.projection)

    def _query(self, params: PaginationParams | Mapping[str, Any] | None) -> QueryBuilder:
        """Builder-form listing, pre-loaded with the resource projection."""
        return QueryBuilder(self.store, self._params(params)).select(self.projection)

    def _get_one(self, record_id: str) -> dict | None:
        """Fetch a single record by id, projected. None when absent."""
        rows = self.store.find(
            Predicate().where("id", "eq", record_id),
            limit=1,
            projection=self.projection,
        )
        if not rows:
            logger.debug("record_not_found", collection=self.store.name, record_id=record_id)
            return None
        return rows[0]

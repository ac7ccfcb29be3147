"""
Service catalog domain service.

Lists marketplace services with optional category, status, vendor and
price-range filters, composed incrementally with the QueryBuilder.
"""
from __future__ import annotations

from typing import Any, Mapping

import structlog

from ..config.constants import SERVICE_SEARCH_FIELDS
from .base_service import BaseService
from .pagination import PaginatedResult, PaginationParams

logger = structlog.get_logger("marketplace.services.catalog")


class CatalogService(BaseService):
    """Business logic for service catalog queries."""

    search_fields = SERVICE_SEARCH_FIELDS

    def list_services(
        self,
        params: PaginationParams | Mapping[str, Any] | None = None,
        *,
        category: str | None = None,
        status: str | None = None,
        vendor_id: str | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
    ) -> PaginatedResult:
        """List services. Price bounds are inclusive on basePrice."""
        result = (
            self._query(params)
            .where("categoryId", value=category)
            .where("status", value=status)
            .where("vendorId", value=vendor_id)
            .range("basePrice", min_price, max_price)
            .search(self.search_fields)
            .sort()
            .paginate()
            .execute()
        )
        logger.debug(
            "services_listed",
            category=category,
            status=status,
            vendor_id=vendor_id,
            price_range=[min_price, max_price],
            total=result.meta["total"],
        )
        return result

    def get_service(self, service_id: str) -> dict | None:
        return self._get_one(service_id)

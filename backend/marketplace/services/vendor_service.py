"""
Vendor domain service.

Lists vendor profiles by KYC status and completed-job count.
"""
from __future__ import annotations

from typing import Any, Mapping

import structlog

from ..config.constants import VENDOR_SEARCH_FIELDS
from .base_service import BaseService
from .pagination import PaginatedResult, PaginationParams
from .predicates import Predicate

logger = structlog.get_logger("marketplace.services.vendor")


class VendorService(BaseService):
    """Business logic for vendor queries."""

    search_fields = VENDOR_SEARCH_FIELDS

    def list_vendors(
        self,
        params: PaginationParams | Mapping[str, Any] | None = None,
        *,
        kyc_status: str | None = None,
        min_jobs: int | None = None,
    ) -> PaginatedResult:
        vendor_filter = Predicate.from_mapping({"kycStatus": kyc_status})
        if min_jobs is not None:
            vendor_filter = vendor_filter.where("jobsDone", "gte", min_jobs)
        result = self._paginated_list(params, vendor_filter)
        logger.debug("vendors_listed", kyc_status=kyc_status, min_jobs=min_jobs, total=result.meta["total"])
        return result

    def get_vendor(self, vendor_id: str) -> dict | None:
        return self._get_one(vendor_id)

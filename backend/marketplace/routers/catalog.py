"""
API router for the service catalog.

Filters compose incrementally (category, status, vendor, price range) on top
of the shared pagination and search parameters.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from ..config.constants import ServiceStatus
from ..dependencies import get_catalog_service
from ..middleware.error_handler import InvalidFilterError, NotFoundError
from ..models.catalog import ServiceDetailResponse, ServiceListResponse
from ..models.common import ErrorResponse
from ..services.catalog_service import CatalogService
from ..services.pagination import PaginationParams
from .params import pagination_params, parse_enum

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=None, responses={200: {"model": ServiceListResponse}})
def list_services(
    params: PaginationParams = Depends(pagination_params),
    category: Optional[str] = Query(None, description="Filter by service category ID"),
    status: Optional[str] = Query(None, description="Filter by status: ACTIVE, INACTIVE"),
    vendor_id: Optional[str] = Query(None, alias="vendorId", description="Filter by vendor ID"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0, description="Minimum base price"),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0, description="Maximum base price"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """
    List marketplace services.

    Search matches name and description. Price bounds are inclusive.
    """
    if min_price is not None and max_price is not None and min_price > max_price:
        raise InvalidFilterError(
            "minPrice cannot be greater than maxPrice",
            details={"minPrice": min_price, "maxPrice": max_price},
        )

    result = catalog.list_services(
        params,
        category=category or None,
        status=parse_enum(ServiceStatus, status, "status"),
        vendor_id=vendor_id or None,
        min_price=min_price,
        max_price=max_price,
    )
    return result.to_dict()


@router.get(
    "/{service_id}",
    response_model=None,
    responses={200: {"model": ServiceDetailResponse}, 404: {"model": ErrorResponse}},
)
def get_service(
    service_id: str = Path(..., description="Service ID"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    record = catalog.get_service(service_id)
    if record is None:
        raise NotFoundError(f"Service {service_id} not found", details={"service_id": service_id})
    return {"data": record}

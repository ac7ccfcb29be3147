"""
API router for vendor endpoints.

Vendor profile listing by KYC status and experience, plus detail.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from ..config.constants import KycStatus
from ..dependencies import get_vendor_service
from ..middleware.error_handler import NotFoundError
from ..models.common import ErrorResponse
from ..models.vendor import VendorDetailResponse, VendorListResponse
from ..services.pagination import PaginationParams
from ..services.vendor_service import VendorService
from .params import pagination_params, parse_enum

router = APIRouter(prefix="/vendors", tags=["vendors"])


@router.get("", response_model=None, responses={200: {"model": VendorListResponse}})
def list_vendors(
    params: PaginationParams = Depends(pagination_params),
    kyc_status: Optional[str] = Query(
        None, alias="kycStatus", description="Filter by KYC status: PENDING, VERIFIED, REJECTED"
    ),
    min_jobs: Optional[int] = Query(None, alias="minJobs", ge=0, description="Minimum completed jobs"),
    vendors: VendorService = Depends(get_vendor_service),
):
    """List vendor profiles."""
    result = vendors.list_vendors(
        params,
        kyc_status=parse_enum(KycStatus, kyc_status, "kycStatus"),
        min_jobs=min_jobs,
    )
    return result.to_dict()


@router.get(
    "/{vendor_id}",
    response_model=None,
    responses={200: {"model": VendorDetailResponse}, 404: {"model": ErrorResponse}},
)
def get_vendor(
    vendor_id: str = Path(..., description="Vendor ID"),
    vendors: VendorService = Depends(get_vendor_service),
):
    record = vendors.get_vendor(vendor_id)
    if record is None:
        raise NotFoundError(f"Vendor {vendor_id} not found", details={"vendor_id": vendor_id})
    return {"data": record}

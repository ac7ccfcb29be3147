"""Pydantic models for vendor endpoints."""
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import DataResponse, DocumentModel, PaginatedResponse


class WorkingHour(BaseModel):
    day: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None


class ServiceLocation(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None


class VendorItem(DocumentModel):
    """Vendor profile attached to a VENDOR user."""

    user_id: Optional[str] = Field(None, description="Owning user ID")
    kyc_status: Optional[str] = Field(None, description="PENDING, VERIFIED or REJECTED")
    jobs_done: Optional[int] = Field(None, description="Completed jobs")
    working_hours: List[WorkingHour] = Field(default_factory=list)
    service_locations: List[ServiceLocation] = Field(default_factory=list)


VendorListResponse = PaginatedResponse[VendorItem]
VendorDetailResponse = DataResponse[VendorItem]

"""Pydantic models for service catalog endpoints."""
from typing import Optional

from pydantic import Field

from .common import DataResponse, DocumentModel, PaginatedResponse


class ServiceItem(DocumentModel):
    """Marketplace service offering."""

    category_id: Optional[str] = Field(None, description="Service category ID")
    name: Optional[str] = Field(None, description="Service name")
    description: Optional[str] = None
    base_price: Optional[float] = Field(None, description="Base price")
    vendor_id: Optional[str] = Field(None, description="Vendor offering the service")
    status: Optional[str] = Field(None, description="ACTIVE or INACTIVE")


ServiceListResponse = PaginatedResponse[ServiceItem]
ServiceDetailResponse = DataResponse[ServiceItem]

"""Pydantic models for booking endpoints."""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from .common import DocumentModel, PaginatedResponse


class BookingItem(DocumentModel):
    """Booking of a service by a customer."""

    customer_id: Optional[str] = Field(None, description="Customer (user) ID")
    vendor_id: Optional[str] = Field(None, description="Vendor ID")
    service_id: Optional[str] = Field(None, description="Service ID")
    address_snapshot: Optional[Dict[str, Any]] = Field(None, description="Address at booking time")
    scheduled_date: Optional[datetime] = Field(None, description="Scheduled service date")
    status: Optional[str] = Field(None, description="PENDING, CONFIRMED, COMPLETED or CANCELLED")
    total_amount: Optional[float] = Field(None, description="Booking total")


BookingListResponse = PaginatedResponse[BookingItem]

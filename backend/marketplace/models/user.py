"""Pydantic models for user endpoints."""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config.constants import UserTier
from .common import DataResponse, DocumentModel, PaginatedResponse


class UserItem(DocumentModel):
    """User as returned by the API.

    Note: passwordHash is stripped by the service layer projection before
    the record reaches a router.
    """

    role: Optional[str] = Field(None, description="ADMIN, CUSTOMER or VENDOR")
    full_name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Login email")
    phone: Optional[str] = None
    tier: Optional[UserTier] = Field(None, description="Loyalty tier")
    wallet_balance: Optional[float] = Field(None, description="Wallet balance")
    lifetime_spend: Optional[float] = Field(None, description="Total spend over the account lifetime")
    status: Optional[str] = Field(None, description="ACTIVE or BLOCKED")


class UserStats(BaseModel):
    """Aggregate user counts."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int = Field(..., description="All users")
    active_users: int = Field(..., description="Users with status ACTIVE")
    blocked_users: int = Field(..., description="Users with status BLOCKED")
    role_distribution: Dict[str, int] = Field(
        default_factory=dict, description="User count per role (roles with no users omitted)"
    )


UserListResponse = PaginatedResponse[UserItem]
UserDetailResponse = DataResponse[UserItem]
UserStatsResponse = DataResponse[UserStats]

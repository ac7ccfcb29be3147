"""
API router for user endpoints.

Thin router: parse query params, call UserService, return the envelope.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from ..config.constants import UserRole, UserStatus
from ..dependencies import get_user_service
from ..middleware.error_handler import NotFoundError
from ..models.common import ErrorResponse
from ..models.user import UserDetailResponse, UserListResponse, UserStatsResponse
from ..services.pagination import PaginationParams
from ..services.user_service import UserService
from .params import pagination_params, parse_enum


router = APIRouter(prefix="/users", tags=["users"])

# Records are schemaless and go out as stored; the models only document them.


@router.get("", response_model=None, responses={200: {"model": UserListResponse}})
def list_users(
    params: PaginationParams = Depends(pagination_params),
    role: Optional[str] = Query(None, description="Filter by role: ADMIN, CUSTOMER, VENDOR"),
    status: Optional[str] = Query(None, description="Filter by status: ACTIVE, BLOCKED"),
    service: UserService = Depends(get_user_service),
):
    """
    List users with pagination, sorting and search.

    - page: number (default 1)
    - limit: number (default 10, max 100)
    - sort: field name (default createdAt)
    - order: asc | desc (default desc)
    - search: matched against fullName and email
    - role / status: optional exact filters
    """
    additional_filter = {}
    role_value = parse_enum(UserRole, role, "role")
    if role_value:
        additional_filter["role"] = role_value
    status_value = parse_enum(UserStatus, status, "status")
    if status_value:
        additional_filter["status"] = status_value

    return service.get_all_users(params, additional_filter).to_dict()


# Registered before /{user_id} so "stats" is not taken for an id
@router.get("/stats", response_model=UserStatsResponse)
def get_user_stats(service: UserService = Depends(get_user_service)):
    """User totals by status and role distribution."""
    return {"data": service.get_user_stats()}


@router.get(
    "/{user_id}",
    response_model=None,
    responses={200: {"model": UserDetailResponse}, 404: {"model": ErrorResponse}},
)
def get_user(
    user_id: str = Path(..., description="User ID"),
    service: UserService = Depends(get_user_service),
):
    user = service.get_user_by_id(user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found", details={"user_id": user_id})
    return {"data": user}

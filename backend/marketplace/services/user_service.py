"""
User domain service.

Handles user listing (search over name and email), lookup by id,
role/status listings and aggregate user statistics. Credential hashes
never leave this layer.
"""
from __future__ import annotations

import concurrent.futures
from typing import Any, Mapping

import structlog

from ..config.constants import USER_HIDDEN_FIELDS, USER_SEARCH_FIELDS, UserRole, UserStatus
from .base_service import BaseService
from .pagination import PaginatedResult, PaginationParams
from .predicates import Predicate

logger = structlog.get_logger("marketplace.services.user")


class UserService(BaseService):
    """Business logic for user queries."""

    search_fields = USER_SEARCH_FIELDS
    hidden_fields = USER_HIDDEN_FIELDS

    def get_all_users(
        self,
        params: PaginationParams | Mapping[str, Any] | None = None,
        additional_filter: Predicate | Mapping[str, Any] | None = None,
    ) -> PaginatedResult:
        """
        List users with pagination, sorting and search.

        Args:
            params: Pagination parameters from the query string
            additional_filter: Optional filters (e.g. role, status)

        Returns:
            PaginatedResult of users without credential fields
        """
        return self._paginated_list(params, additional_filter)

    def get_user_by_id(self, user_id: str) -> dict | None:
        return self._get_one(user_id)

    def get_users_by_role(
        self,
        role: UserRole | str,
        params: PaginationParams | Mapping[str, Any] | None = None,
    ) -> PaginatedResult:
        return self.get_all_users(params, {"role": UserRole(role).value})

    def get_users_by_status(
        self,
        status: UserStatus | str,
        params: PaginationParams | Mapping[str, Any] | None = None,
    ) -> PaginatedResult:
        return self.get_all_users(params, {"status": UserStatus(status).value})

    def get_user_stats(self) -> dict:
        """
        Totals by status and the role distribution.

        All counts run in parallel. Roles with no users are left out of the
        distribution.
        """
        queries = {
            "total": Predicate(),
            "activeUsers": Predicate.from_mapping({"status": UserStatus.ACTIVE.value}),
            "blockedUsers": Predicate.from_mapping({"status": UserStatus.BLOCKED.value}),
        }
        for role in UserRole:
            queries[role.value] = Predicate.from_mapping({"role": role.value})

        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            futures = {key: executor.submit(self.store.count, pred) for key, pred in queries.items()}
            counts = {key: f.result() for key, f in futures.items()}

        stats = {
            "total": counts["total"],
            "activeUsers": counts["activeUsers"],
            "blockedUsers": counts["blockedUsers"],
            "roleDistribution": {
                role.value: counts[role.value] for role in UserRole if counts[role.value]
            },
        }
        logger.debug("user_stats_computed", total=stats["total"])
        return stats

"""
Unit tests for the resource services.

Each service is constructed with an in-memory store, the same way the API
injects a SQLite collection.
"""
from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_bookings, make_services, make_users, make_vendors
from marketplace.services.booking_service import BookingService
from marketplace.services.catalog_service import CatalogService
from marketplace.services.predicates import Predicate
from marketplace.services.store import MemoryDocumentStore
from marketplace.services.user_service import UserService
from marketplace.services.vendor_service import VendorService


@pytest.fixture
def users():
    return UserService(MemoryDocumentStore("users", make_users()))


@pytest.fixture
def catalog():
    return CatalogService(MemoryDocumentStore("services", make_services()))


@pytest.fixture
def bookings():
    return BookingService(MemoryDocumentStore("bookings", make_bookings()))


@pytest.fixture
def vendors():
    return VendorService(MemoryDocumentStore("vendors", make_vendors()))


class TestUserService:
    """UserService listing, lookup and stats."""

    def test_list_hides_credentials(self, users):
        result = users.get_all_users({"limit": 100})
        assert result.meta["total"] == 25
        for user in result.data:
            assert "passwordHash" not in user
            assert "__v" not in user

    def test_search_over_name_and_email(self, users):
        result = users.get_all_users({"search": "john"})
        assert sorted(u["id"] for u in result.data) == ["user-01", "user-02"]

    def test_caller_search_fields_are_ignored(self, users):
        """Searchable fields belong to the resource, not the request."""
        result = users.get_all_users({"search": "hash", "searchFields": ["passwordHash"]})
        assert result.meta["total"] == 0

    def test_additional_filter(self, users):
        result = users.get_all_users({}, {"role": "VENDOR", "status": "BLOCKED"})
        assert [u["id"] for u in result.data] == ["user-15"]

    def test_additional_filter_predicate(self, users):
        rich = Predicate().where("walletBalance", "gte", 200)
        assert users.get_all_users({}, rich).meta["total"] == 6

    def test_get_user_by_id(self, users):
        user = users.get_user_by_id("user-01")
        assert user["fullName"] == "John Doe"
        assert "passwordHash" not in user
        assert users.get_user_by_id("nope") is None

    def test_get_users_by_role(self, users):
        assert users.get_users_by_role("VENDOR").meta["total"] == 8
        with pytest.raises(ValueError):
            users.get_users_by_role("SUPERUSER")

    def test_get_users_by_status(self, users):
        assert users.get_users_by_status("BLOCKED").meta["total"] == 5

    def test_stats(self, users):
        assert users.get_user_stats() == {
            "total": 25,
            "activeUsers": 20,
            "blockedUsers": 5,
            "roleDistribution": {"ADMIN": 1, "CUSTOMER": 16, "VENDOR": 8},
        }

    def test_stats_omit_empty_roles(self):
        service = UserService(MemoryDocumentStore("users", [{"role": "CUSTOMER", "status": "ACTIVE"}]))
        assert service.get_user_stats()["roleDistribution"] == {"CUSTOMER": 1}


class TestCatalogService:
    """CatalogService builder-based listing."""

    def test_price_range_inclusive(self, catalog):
        result = catalog.list_services({}, min_price=300, max_price=600)
        assert result.meta["total"] == 4

    def test_filters_compose(self, catalog):
        result = catalog.list_services({}, category="cat-plumbing", min_price=500)
        assert sorted(s["id"] for s in result.data) == ["svc-06", "svc-08", "svc-10", "svc-12"]

    def test_status_and_vendor(self, catalog):
        assert catalog.list_services({}, status="INACTIVE").meta["total"] == 3
        assert catalog.list_services({}, vendor_id="vendor-2").meta["total"] == 6

    def test_search_name_or_description(self, catalog):
        assert catalog.list_services({"search": "pipe"}).meta["total"] == 6
        assert catalog.list_services({"search": "HOME"}).meta["total"] == 6

    def test_sorted_page(self, catalog):
        result = catalog.list_services({"sort": "basePrice", "order": "asc", "limit": 3})
        assert [s["basePrice"] for s in result.data] == [100, 200, 300]
        assert result.meta["totalPages"] == 4

    def test_get_service(self, catalog):
        assert catalog.get_service("svc-03")["name"] == "Deep Cleaning 3"
        assert catalog.get_service("svc-99") is None


class TestBookingService:
    """BookingService filters."""

    def test_customer_filter(self, bookings):
        assert bookings.list_bookings({}, user_id="user-01").meta["total"] == 4

    def test_service_and_status(self, bookings):
        assert bookings.list_bookings({}, service_id="svc-02").meta["total"] == 4
        assert bookings.list_bookings({}, status="PENDING").meta["total"] == 3

    def test_inclusive_window(self, bookings):
        result = bookings.list_bookings(
            {},
            scheduled_from=datetime(2025, 2, 3, tzinfo=timezone.utc),
            scheduled_to=datetime(2025, 2, 5, 10, tzinfo=timezone.utc),
        )
        assert sorted(b["id"] for b in result.data) == ["booking-03", "booking-04", "booking-05"]

    def test_exclusive_upper_bound(self, bookings):
        result = bookings.list_bookings({}, scheduled_before=datetime(2025, 2, 3, 10, tzinfo=timezone.utc))
        assert sorted(b["id"] for b in result.data) == ["booking-01", "booking-02"]

    def test_search_does_not_narrow(self, bookings):
        assert bookings.list_bookings({"search": "anything"}).meta["total"] == 10

    def test_offset_datetimes_compare_in_utc(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        store = MemoryDocumentStore("bookings", [
            {"id": "late-night", "scheduledDate": datetime(2025, 2, 2, 1, 30, tzinfo=ist)},
        ])
        assert store.find(Predicate())[0]["scheduledDate"] == "2025-02-01T20:00:00+00:00"

        bookings = BookingService(store)
        inside = bookings.list_bookings({}, scheduled_from=datetime(2025, 2, 1, 23, tzinfo=ist))
        assert [b["id"] for b in inside.data] == ["late-night"]
        before = bookings.list_bookings({}, scheduled_before=datetime(2025, 2, 1, 21, tzinfo=timezone.utc))
        assert before.meta["total"] == 1


class TestVendorService:
    """VendorService functional listing."""

    def test_kyc_filter(self, vendors):
        assert vendors.list_vendors({}, kyc_status="VERIFIED").meta["total"] == 3

    def test_min_jobs(self, vendors):
        assert vendors.list_vendors({}, min_jobs=20).meta["total"] == 3

    def test_combined(self, vendors):
        result = vendors.list_vendors({}, kyc_status="VERIFIED", min_jobs=10)
        assert sorted(v["id"] for v in result.data) == ["vendor-2", "vendor-3"]

    def test_get_vendor(self, vendors):
        assert vendors.get_vendor("vendor-6")["kycStatus"] == "REJECTED"
        assert vendors.get_vendor("vendor-9") is None

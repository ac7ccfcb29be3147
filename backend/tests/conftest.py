"""
Pytest fixtures for API and service tests.

The API fixtures run against a throwaway SQLite document database seeded with
a small, fully deterministic marketplace:

- 25 users: user-01 .. user-25, every 3rd is a VENDOR, user-25 is the ADMIN,
  every 5th is BLOCKED. user-01 is "John Doe"; user-02 has a "johnny" email.
- 12 services: odd ids are cleaning, even ids plumbing, basePrice = 100 * i,
  every 4th is INACTIVE, svc-01..06 belong to vendor-1 and the rest vendor-2.
- 10 bookings on 2025-02-01 .. 2025-02-10 at 10:00 UTC.
- 6 vendors: 1-3 VERIFIED, 4-5 PENDING, 6 REJECTED, jobsDone = 5 * i.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from marketplace.config.constants import (
    BOOKINGS_COLLECTION,
    SERVICES_COLLECTION,
    USERS_COLLECTION,
    VENDORS_COLLECTION,
)
from marketplace.main import create_app
from marketplace.services.sqlite_store import SQLiteDocumentDatabase

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)
BOOKING_STATUSES = ["PENDING", "CONFIRMED", "COMPLETED", "CANCELLED"]


def make_users():
    users = []
    for i in range(1, 26):
        if i == 25:
            role = "ADMIN"
        elif i % 3 == 0:
            role = "VENDOR"
        else:
            role = "CUSTOMER"
        users.append({
            "id": f"user-{i:02d}",
            "fullName": f"Customer {i:02d}",
            "email": f"customer{i:02d}@example.com",
            "phone": f"+91-90000-000{i:02d}",
            "passwordHash": f"$2b$10$hash{i:02d}",
            "role": role,
            "tier": "SILVER",
            "walletBalance": float(i * 10),
            "lifetimeSpend": 0,
            "status": "BLOCKED" if i % 5 == 0 else "ACTIVE",
            "__v": 0,
            "createdAt": BASE_TIME + timedelta(hours=i),
        })
    users[0]["fullName"] = "John Doe"
    users[0]["email"] = "jd@example.com"
    users[1]["fullName"] = "Mary Major"
    users[1]["email"] = "johnny.m@example.com"
    return users


def make_services():
    services = []
    for i in range(1, 13):
        cleaning = i % 2 == 1
        services.append({
            "id": f"svc-{i:02d}",
            "categoryId": "cat-cleaning" if cleaning else "cat-plumbing",
            "name": f"Deep Cleaning {i}" if cleaning else f"Pipe Repair {i}",
            "description": "Full home cleaning" if cleaning else "Leak and pipe fixes",
            "basePrice": 100 * i,
            "vendorId": "vendor-1" if i <= 6 else "vendor-2",
            "status": "INACTIVE" if i % 4 == 0 else "ACTIVE",
            "__v": 0,
            "createdAt": BASE_TIME + timedelta(hours=i),
        })
    return services


def make_bookings():
    return [
        {
            "id": f"booking-{i:02d}",
            "customerId": "user-01" if i <= 4 else "user-02",
            "vendorId": "vendor-1",
            "serviceId": f"svc-{(i % 3) + 1:02d}",
            "addressSnapshot": {"city": "Pune"},
            "scheduledDate": datetime(2025, 2, i, 10, tzinfo=timezone.utc),
            "status": BOOKING_STATUSES[(i - 1) % 4],
            "totalAmount": 250.0 * i,
            "createdAt": BASE_TIME + timedelta(hours=i),
        }
        for i in range(1, 11)
    ]


def make_vendors():
    vendors = []
    for i in range(1, 7):
        if i <= 3:
            kyc = "VERIFIED"
        elif i <= 5:
            kyc = "PENDING"
        else:
            kyc = "REJECTED"
        vendors.append({
            "id": f"vendor-{i}",
            "userId": f"user-{3 * i:02d}",
            "kycStatus": kyc,
            "jobsDone": 5 * i,
            "workingHours": [{"day": "MON", "start": "09:00", "end": "18:00"}],
            "serviceLocations": [{"city": "Pune", "state": "MH", "pincode": "411001"}],
            "createdAt": BASE_TIME + timedelta(hours=i),
        })
    return vendors


def seed_database(database: SQLiteDocumentDatabase) -> None:
    database.initialize()
    database.collection(USERS_COLLECTION).insert_many(make_users())
    database.collection(SERVICES_COLLECTION).insert_many(make_services())
    database.collection(BOOKINGS_COLLECTION).insert_many(make_bookings())
    database.collection(VENDORS_COLLECTION).insert_many(make_vendors())


@pytest.fixture(scope="module")
def database(tmp_path_factory):
    """Seeded SQLite document database, one per test module."""
    db = SQLiteDocumentDatabase(tmp_path_factory.mktemp("store") / "marketplace.db")
    seed_database(db)
    return db


@pytest.fixture(scope="module")
def client(database):
    """Create a test client for the FastAPI app."""
    app = create_app(database, rate_limit="10000/minute")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="module")
def base_url():
    """Base URL for API v1 endpoints."""
    return "/api/v1"

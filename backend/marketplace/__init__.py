# Marketplace API
"""
REST API over the marketplace document store.

Endpoints:
- GET /api/v1/users - Paginated, searchable user listing
- GET /api/v1/users/stats - User counts by status and role
- GET /api/v1/users/{id} - Single user
- GET /api/v1/services - Service catalog with category/price filters
- GET /api/v1/services/{id} - Single service
- GET /api/v1/bookings - Bookings with status/date filters
- GET /api/v1/vendors - Vendor profiles by KYC status
- GET /api/v1/vendors/{id} - Single vendor
"""

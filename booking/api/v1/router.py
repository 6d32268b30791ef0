"""
API v1 router setup
Organized into: public (customers booking) and dashboard (JWT) routes
"""
from fastapi import APIRouter

from booking.api.v1.public import auth, booking
from booking.api.v1.dashboard import appointments, business, employees, services

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(
    auth.router,
    # No prefix needed - auth.router already has "/auth" prefix
    tags=["Authentication"]
)

api_v1_router.include_router(
    booking.router,
    prefix="/public",
    tags=["Public"]
)

# ============================================================================
# DASHBOARD ROUTES (JWT authentication required)
# ============================================================================
api_v1_router.include_router(
    business.router,
    prefix="/dashboard/business",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    services.router,
    prefix="/dashboard/services",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    employees.router,
    prefix="/dashboard/employees",
    tags=["Dashboard"]
)

api_v1_router.include_router(
    appointments.router,
    prefix="/dashboard",
    tags=["Dashboard"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    Shows the structure of all API routes organized by authentication type.
    """
    return {
        "version": "1.0",
        "booking_flow": [
            "GET /public/businesses/{bus_id}/services",
            "GET /public/businesses/{bus_id}/slots?date=YYYY-MM-DD&service_id=",
            "POST /public/businesses/{bus_id}/bookings",
        ],
        "authentication": {
            "public": "No authentication required",
            "dashboard": "JWT Bearer token from /auth/login or /auth/signup",
        }
    }

"""API V1 Router"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth, profiles, bills, payments, complaints, dashboard
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
api_router.include_router(bills.router, prefix="/bills", tags=["Bills"])
api_router.include_router(payments.router, prefix="/payments", tags=["Payments"])
api_router.include_router(complaints.router, prefix="/complaints", tags=["Complaints"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])

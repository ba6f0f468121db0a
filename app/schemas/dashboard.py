"""Dashboard schemas."""

from decimal import Decimal
from pydantic import BaseModel, Field


class AdminStats(BaseModel):
    """
    Utility-wide counters.
    Returned by GET /api/v1/dashboard/admin.
    """

    total_customers: int = Field(..., ge=0, description="Profiles with is_admin = false")
    total_bills: int = Field(..., ge=0)
    total_revenue: Decimal = Field(..., description="Sum of all recorded payment amounts")
    pending_complaints: int = Field(
        ...,
        ge=0,
        description="Complaints still in status OPEN (in_progress is not counted)",
    )


class CustomerSummary(BaseModel):
    """Per-customer counters for the customer dashboard."""

    pending_bills: int = Field(..., ge=0)
    total_outstanding: Decimal = Field(..., description="Sum of amounts on pending bills")
    total_payments: int = Field(..., ge=0)
    open_complaints: int = Field(..., ge=0)

"""Bill Pydantic Schemas

units_consumed and amount only appear on responses. Request schemas forbid
extra fields so a client-supplied charge is rejected rather than ignored.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import BillStatus


class BillCreate(BaseModel):
    customer_id: UUID
    meter_number: Optional[str] = Field(
        None,
        max_length=100,
        description="Defaults to the customer's provisioned meter",
    )
    previous_reading: Decimal = Field(Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    current_reading: Decimal = Field(..., max_digits=10, decimal_places=2)
    rate_per_unit: Optional[Decimal] = Field(
        None,
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Defaults to the standard tariff",
    )
    bill_month: str = Field(..., min_length=1, max_length=50)
    due_date: date

    model_config = ConfigDict(extra="forbid")


class BillUpdate(BaseModel):
    """Partial update. Omit a field to keep it; every bill column is NOT NULL, so null is rejected."""
    meter_number: Optional[str] = Field(None, min_length=1, max_length=100)
    previous_reading: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    current_reading: Optional[Decimal] = Field(None, max_digits=10, decimal_places=2)
    rate_per_unit: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    bill_month: Optional[str] = Field(None, min_length=1, max_length=50)
    due_date: Optional[date] = None
    status: Optional[BillStatus] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator(
        "meter_number",
        "previous_reading",
        "current_reading",
        "rate_per_unit",
        "bill_month",
        "due_date",
        "status",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class BillResponse(BaseModel):
    id: UUID
    customer_id: UUID
    customer_name: Optional[str] = None
    meter_number: str
    previous_reading: Decimal
    current_reading: Decimal
    units_consumed: Decimal
    rate_per_unit: Decimal
    amount: Decimal
    bill_month: str
    due_date: date
    status: BillStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

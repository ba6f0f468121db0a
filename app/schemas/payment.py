from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import BillStatus, PaymentMethod, PaymentStatus


class PaymentCreate(BaseModel):
    """
    A customer's report of a payment. The amount is not checked against the
    bill; the status is whatever the payment channel asserted.
    """
    bill_id: UUID
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    payment_method: PaymentMethod
    transaction_id: Optional[str] = Field(None, max_length=255)
    status: PaymentStatus = PaymentStatus.COMPLETED

    model_config = ConfigDict(extra="forbid")


class PaymentResponse(BaseModel):
    id: UUID
    bill_id: UUID
    customer_id: UUID
    customer_name: Optional[str] = None
    amount: Decimal
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    payment_date: datetime
    status: PaymentStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentRecorded(BaseModel):
    payment: PaymentResponse
    bill_status: BillStatus

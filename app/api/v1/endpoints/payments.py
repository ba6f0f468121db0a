"""Payment endpoints"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.policy import Caller
from app.schemas.payment import PaymentCreate, PaymentRecorded, PaymentResponse
from app.schemas.responses import SuccessResponse
from app.services.payment_service import PaymentService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[PaymentResponse]])
async def list_payments(
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Latest payment first. Customers see their own, admins see all."""
    payments = await PaymentService.list_payments(db, caller)
    return SuccessResponse(data=[PaymentResponse.model_validate(p) for p in payments])


@router.post("", response_model=SuccessResponse[PaymentRecorded])
async def record_payment(
    payment_in: PaymentCreate,
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Record a payment against one of the caller's bills. The payment row and
    the bill status change commit together.
    """
    recorded = await PaymentService.record_payment(db, caller, payment_in.bill_id, payment_in)
    if recorded is None:
        raise HTTPException(status_code=404, detail="Bill not found")
    payment, bill_status = recorded
    return SuccessResponse(
        data=PaymentRecorded(
            payment=PaymentResponse.model_validate(payment),
            bill_status=bill_status,
        ),
        message="Payment recorded successfully",
    )


@router.get("/{payment_id}", response_model=SuccessResponse[PaymentResponse])
async def get_payment(
    payment_id: UUID,
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    payment = await PaymentService.get_visible_payment(db, caller, payment_id)
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")
    return SuccessResponse(data=PaymentResponse.model_validate(payment))

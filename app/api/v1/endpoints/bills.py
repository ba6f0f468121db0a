"""Bill endpoints - customers read their own, admins create and edit"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.policy import Caller
from app.schemas.bill import BillCreate, BillResponse, BillUpdate
from app.schemas.responses import SuccessResponse
from app.services.bill_service import BillService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[BillResponse]])
async def list_bills(
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Newest first. Customers see their own bills, admins see all."""
    bills = await BillService.list_bills(db, caller)
    return SuccessResponse(data=[BillResponse.model_validate(b) for b in bills])


@router.post("", response_model=SuccessResponse[BillResponse])
async def create_bill(
    bill_in: BillCreate,
    caller: Caller = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Create a bill from two meter readings. Admin only.
    units_consumed and amount are computed; sending them is a 422.
    """
    try:
        bill = await BillService.create_bill(db, caller, bill_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse(
        data=BillResponse.model_validate(bill),
        message="Bill created successfully",
    )


@router.get("/{bill_id}", response_model=SuccessResponse[BillResponse])
async def get_bill(
    bill_id: UUID,
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    bill = await BillService.get_visible_bill(db, caller, bill_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return SuccessResponse(data=BillResponse.model_validate(bill))


@router.patch("/{bill_id}", response_model=SuccessResponse[BillResponse])
async def update_bill(
    bill_id: UUID,
    bill_in: BillUpdate,
    caller: Caller = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Correct readings, rate, dates or status. Charges follow the readings."""
    bill = await BillService.get_bill_by_id(db, bill_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    try:
        bill = await BillService.update_bill(db, caller, bill, bill_in.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse(
        data=BillResponse.model_validate(bill),
        message="Bill updated successfully",
    )

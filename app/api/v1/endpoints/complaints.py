"""Complaint endpoints - customers file and edit, admins respond"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.policy import Caller
from app.schemas.complaint import ComplaintCreate, ComplaintRespond, ComplaintResponse, ComplaintUpdate
from app.schemas.responses import SuccessResponse
from app.services.complaint_service import ComplaintService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[ComplaintResponse]])
async def list_complaints(
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    complaints = await ComplaintService.list_complaints(db, caller)
    return SuccessResponse(data=[ComplaintResponse.model_validate(c) for c in complaints])


@router.post("", response_model=SuccessResponse[ComplaintResponse])
async def create_complaint(
    complaint_in: ComplaintCreate,
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """File a complaint. Starts OPEN; priority defaults to medium."""
    complaint = await ComplaintService.create_complaint(db, caller, complaint_in)
    return SuccessResponse(
        data=ComplaintResponse.model_validate(complaint),
        message="Complaint submitted successfully",
    )


@router.get("/{complaint_id}", response_model=SuccessResponse[ComplaintResponse])
async def get_complaint(
    complaint_id: UUID,
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    complaint = await ComplaintService.get_visible_complaint(db, caller, complaint_id)
    if not complaint:
        raise HTTPException(status_code=404, detail="Complaint not found")
    return SuccessResponse(data=ComplaintResponse.model_validate(complaint))


@router.patch("/{complaint_id}", response_model=SuccessResponse[ComplaintResponse])
async def update_complaint(
    complaint_id: UUID,
    complaint_in: ComplaintUpdate,
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Owner edits subject, description or priority."""
    complaint = await ComplaintService.get_complaint_by_id(db, complaint_id)
    if not complaint:
        raise HTTPException(status_code=404, detail="Complaint not found")
    complaint = await ComplaintService.update_complaint(
        db, caller, complaint, complaint_in.model_dump(exclude_unset=True)
    )
    return SuccessResponse(
        data=ComplaintResponse.model_validate(complaint),
        message="Complaint updated successfully",
    )


@router.patch("/{complaint_id}/respond", response_model=SuccessResponse[ComplaintResponse])
async def respond_to_complaint(
    complaint_id: UUID,
    respond_in: ComplaintRespond,
    caller: Caller = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Mark in progress / resolved / closed with a response. Admin only."""
    complaint = await ComplaintService.get_complaint_by_id(db, complaint_id)
    if not complaint:
        raise HTTPException(status_code=404, detail="Complaint not found")
    complaint = await ComplaintService.respond(
        db, caller, complaint, respond_in.status, respond_in.admin_response
    )
    return SuccessResponse(
        data=ComplaintResponse.model_validate(complaint),
        message="Complaint updated successfully",
    )

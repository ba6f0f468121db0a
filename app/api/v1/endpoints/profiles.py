"""Profile endpoints - own contact details, admin customer management"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.policy import Caller
from app.schemas.profile import ProfileAdminUpdate, ProfileContactUpdate, ProfileResponse
from app.schemas.responses import SuccessResponse
from app.services.profile_service import ProfileService

router = APIRouter()


@router.get("/me", response_model=SuccessResponse[ProfileResponse])
async def read_my_profile(caller: Caller = Depends(deps.get_current_caller)) -> Any:
    return SuccessResponse(data=ProfileResponse.model_validate(caller.profile))


@router.patch("/me", response_model=SuccessResponse[ProfileResponse])
async def update_my_profile(
    profile_in: ProfileContactUpdate,
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Update own contact fields: name, phone, address, meter number."""
    try:
        profile = await ProfileService.update_profile(
            db, caller, caller.profile, profile_in.model_dump(exclude_unset=True)
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse(
        data=ProfileResponse.model_validate(profile),
        message="Profile updated successfully",
    )


@router.get("/customers", response_model=SuccessResponse[List[ProfileResponse]])
async def list_customers(
    caller: Caller = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """All non-admin profiles. Admin only."""
    customers = await ProfileService.list_customers(db)
    return SuccessResponse(data=[ProfileResponse.model_validate(p) for p in customers])


@router.get("/{profile_id}", response_model=SuccessResponse[ProfileResponse])
async def get_profile(
    profile_id: UUID,
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    profile = await ProfileService.get_visible_profile(db, caller, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return SuccessResponse(data=ProfileResponse.model_validate(profile))


@router.patch("/{profile_id}", response_model=SuccessResponse[ProfileResponse])
async def update_profile(
    profile_id: UUID,
    profile_in: ProfileAdminUpdate,
    caller: Caller = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Admin edit of any profile field, including meter provisioning and is_admin."""
    profile = await ProfileService.get_profile_by_id(db, profile_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    try:
        profile = await ProfileService.update_profile(
            db, caller, profile, profile_in.model_dump(exclude_unset=True)
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse(
        data=ProfileResponse.model_validate(profile),
        message="Profile updated successfully",
    )

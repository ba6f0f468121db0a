from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.policy import Caller
from app.schemas.dashboard import AdminStats, CustomerSummary
from app.schemas.responses import SuccessResponse
from app.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/admin", response_model=SuccessResponse[AdminStats])
async def get_admin_stats(
    caller: Caller = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Customers, bills, revenue and open complaints.
    """
    stats = await DashboardService.get_admin_stats(db)
    return SuccessResponse(data=stats)


@router.get("/customer", response_model=SuccessResponse[CustomerSummary])
async def get_customer_summary(
    caller: Caller = Depends(deps.get_current_caller),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Pending bills, outstanding balance, payments and open complaints for the caller.
    """
    summary = await DashboardService.get_customer_summary(db, caller)
    return SuccessResponse(data=summary)

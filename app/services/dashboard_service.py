"""Dashboard aggregates"""

from decimal import Decimal
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.billing import quantize_currency
from app.core.policy import Caller
from app.models.bill import Bill
from app.models.complaint import Complaint
from app.models.enums import BillStatus, ComplaintStatus
from app.models.payment import Payment
from app.models.profile import Profile
from app.schemas.dashboard import AdminStats, CustomerSummary


class DashboardService:
    @staticmethod
    async def get_admin_stats(db: AsyncSession) -> AdminStats:
        """
        Counters for the admin overview. Revenue sums every recorded payment
        regardless of its status; pending complaints are OPEN ones only.
        """
        total_customers = await db.scalar(
            select(func.count(Profile.id)).where(Profile.is_admin.is_(False))
        )
        total_bills = await db.scalar(select(func.count(Bill.id)))
        total_revenue = await db.scalar(select(func.coalesce(func.sum(Payment.amount), 0)))
        pending_complaints = await db.scalar(
            select(func.count(Complaint.id)).where(Complaint.status == ComplaintStatus.OPEN)
        )
        return AdminStats(
            total_customers=total_customers or 0,
            total_bills=total_bills or 0,
            total_revenue=quantize_currency(total_revenue or Decimal("0")),
            pending_complaints=pending_complaints or 0,
        )

    @staticmethod
    async def get_customer_summary(db: AsyncSession, caller: Caller) -> CustomerSummary:
        profile_id = caller.profile_id
        pending_bills = await db.scalar(
            select(func.count(Bill.id)).where(
                Bill.customer_id == profile_id,
                Bill.status == BillStatus.PENDING,
            )
        )
        total_outstanding = await db.scalar(
            select(func.coalesce(func.sum(Bill.amount), 0)).where(
                Bill.customer_id == profile_id,
                Bill.status == BillStatus.PENDING,
            )
        )
        total_payments = await db.scalar(
            select(func.count(Payment.id)).where(Payment.customer_id == profile_id)
        )
        open_complaints = await db.scalar(
            select(func.count(Complaint.id)).where(
                Complaint.customer_id == profile_id,
                Complaint.status == ComplaintStatus.OPEN,
            )
        )
        return CustomerSummary(
            pending_bills=pending_bills or 0,
            total_outstanding=quantize_currency(total_outstanding or Decimal("0")),
            total_payments=total_payments or 0,
            open_complaints=open_complaints or 0,
        )

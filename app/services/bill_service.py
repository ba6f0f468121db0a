"""Bill Service - creation, charge recomputation and status changes"""

from datetime import date
from typing import Optional, List, Dict, Any
from uuid import UUID
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from app.config import settings
from app.core.billing import compute_charges
from app.core.policy import Caller, can_create_bill, can_update_bill, can_view_owned, ensure, scope_to_caller
from app.models.bill import Bill
from app.models.enums import BillStatus
from app.schemas.bill import BillCreate
from app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

# Changing any of these invalidates units_consumed and amount
CHARGE_INPUTS = ("previous_reading", "current_reading", "rate_per_unit")


class BillService:
    @staticmethod
    async def get_bill_by_id(db: AsyncSession, bill_id: UUID) -> Optional[Bill]:
        result = await db.execute(
            select(Bill)
            .options(selectinload(Bill.customer))
            .where(Bill.id == bill_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_visible_bill(db: AsyncSession, caller: Caller, bill_id: UUID) -> Optional[Bill]:
        bill = await BillService.get_bill_by_id(db, bill_id)
        if bill is not None:
            ensure(can_view_owned(caller, bill))
        return bill

    @staticmethod
    async def list_bills(db: AsyncSession, caller: Caller) -> List[Bill]:
        """Caller's bills (all bills for admins), newest first"""
        stmt = select(Bill).options(selectinload(Bill.customer))
        stmt = scope_to_caller(stmt, Bill, caller)
        result = await db.execute(stmt.order_by(Bill.created_at.desc(), Bill.id.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def create_bill(db: AsyncSession, caller: Caller, data: BillCreate) -> Bill:
        """
        Admin creates a bill for a customer.

        The meter number defaults to the customer's provisioned meter and the
        rate to the standard tariff. Charges are derived here, never read from
        the request.

        Raises:
            PermissionDenied: caller is not an admin
            ValueError: unknown customer, no meter number, or negative
                consumption while REJECT_NEGATIVE_CONSUMPTION is on
        """
        ensure(can_create_bill(caller))

        customer = await ProfileService.get_profile_by_id(db, data.customer_id)
        if customer is None:
            raise ValueError("Customer not found")

        meter_number = data.meter_number or customer.meter_number
        if not meter_number:
            raise ValueError("Customer has no meter number; provide one for the bill")

        rate = data.rate_per_unit if data.rate_per_unit is not None else settings.DEFAULT_RATE_PER_UNIT
        units, amount = compute_charges(
            data.previous_reading,
            data.current_reading,
            rate,
            reject_negative=settings.REJECT_NEGATIVE_CONSUMPTION,
        )

        bill = Bill(
            customer_id=customer.id,
            meter_number=meter_number,
            previous_reading=data.previous_reading,
            current_reading=data.current_reading,
            rate_per_unit=rate,
            units_consumed=units,
            amount=amount,
            bill_month=data.bill_month,
            due_date=data.due_date,
            status=BillStatus.PENDING,
        )
        bill.customer = customer
        db.add(bill)
        await db.commit()

        logger.info(
            "Bill created",
            extra={
                "bill_id": str(bill.id),
                "customer_id": str(customer.id),
                "units_consumed": str(units),
                "amount": str(amount),
            },
        )
        return bill

    @staticmethod
    async def update_bill(
        db: AsyncSession,
        caller: Caller,
        bill: Bill,
        changes: Dict[str, Any],
    ) -> Bill:
        """
        Admin partial update. Charges are recomputed when a reading or the
        rate changes.

        Raises:
            PermissionDenied: caller is not an admin
            ValueError: negative consumption while rejection is on
        """
        ensure(can_update_bill(caller))

        updates = dict(changes)
        if any(field in changes for field in CHARGE_INPUTS):
            updates["units_consumed"], updates["amount"] = compute_charges(
                changes.get("previous_reading", bill.previous_reading),
                changes.get("current_reading", bill.current_reading),
                changes.get("rate_per_unit", bill.rate_per_unit),
                reject_negative=settings.REJECT_NEGATIVE_CONSUMPTION,
            )

        for field, value in updates.items():
            setattr(bill, field, value)

        await db.commit()
        logger.info("Bill updated", extra={"bill_id": str(bill.id), "fields": sorted(changes)})
        return bill

    @staticmethod
    async def set_status(
        db: AsyncSession,
        bill_id: UUID,
        status: BillStatus,
        auto_commit: bool = True,
    ) -> Optional[Bill]:
        """
        Set a bill's status unconditionally. Returns None if the bill is gone.
        With auto_commit=False only flushes, so the caller owns the transaction.
        """
        bill = await BillService.get_bill_by_id(db, bill_id)
        if bill is None:
            return None
        bill.status = status
        if auto_commit:
            await db.commit()
        else:
            await db.flush()
        return bill

    @staticmethod
    async def mark_overdue(db: AsyncSession, today: date) -> int:
        """Flip pending bills due before today to OVERDUE. Returns the row count."""
        result = await db.execute(
            update(Bill)
            .where(Bill.status == BillStatus.PENDING, Bill.due_date < today)
            .values(status=BillStatus.OVERDUE)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        count = result.rowcount or 0
        logger.info("Overdue sweep finished", extra={"as_of": today.isoformat(), "bills_marked": count})
        return count

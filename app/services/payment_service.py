"""Payment Service

Two ways to record a payment:

* create_payment() followed by BillService.set_status(): two independent
  commits. If the second never runs the bill stays pending with a payment
  recorded against it. Kept for callers that need the old two-step behavior.
* record_payment(): both writes in one transaction, with the bill status
  derived from the payment status. This is what the API uses.
"""

from typing import Optional, List, Tuple
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from app.core.policy import Caller, can_create_payment, can_view_owned, ensure, scope_to_caller
from app.models.bill import Bill
from app.models.enums import BillStatus, PaymentStatus
from app.models.payment import Payment
from app.schemas.payment import PaymentCreate
from app.services.bill_service import BillService

logger = logging.getLogger(__name__)


def derive_bill_status(current: BillStatus, payment_status: PaymentStatus) -> BillStatus:
    """Only a completed payment settles a bill"""
    if payment_status == PaymentStatus.COMPLETED:
        return BillStatus.PAID
    return current


class PaymentService:
    @staticmethod
    async def get_payment_by_id(db: AsyncSession, payment_id: UUID) -> Optional[Payment]:
        result = await db.execute(
            select(Payment)
            .options(selectinload(Payment.customer))
            .where(Payment.id == payment_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_visible_payment(
        db: AsyncSession, caller: Caller, payment_id: UUID
    ) -> Optional[Payment]:
        payment = await PaymentService.get_payment_by_id(db, payment_id)
        if payment is not None:
            ensure(can_view_owned(caller, payment))
        return payment

    @staticmethod
    async def list_payments(db: AsyncSession, caller: Caller) -> List[Payment]:
        """Caller's payments (all payments for admins), latest payment_date first"""
        stmt = select(Payment).options(selectinload(Payment.customer))
        stmt = scope_to_caller(stmt, Payment, caller)
        result = await db.execute(stmt.order_by(Payment.payment_date.desc(), Payment.id.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def create_payment(
        db: AsyncSession,
        caller: Caller,
        bill: Bill,
        data: PaymentCreate,
        auto_commit: bool = True,
    ) -> Payment:
        """
        Insert a payment row for the caller against one of their bills.
        Does not touch the bill.

        Raises:
            PermissionDenied: the bill belongs to someone else
        """
        ensure(can_create_payment(caller, bill))

        payment = Payment(
            bill_id=bill.id,
            customer_id=caller.profile_id,
            amount=data.amount,
            payment_method=data.payment_method,
            transaction_id=data.transaction_id,
            status=data.status,
        )
        db.add(payment)
        if auto_commit:
            await db.commit()
        else:
            await db.flush()
        return payment

    @staticmethod
    async def record_payment(
        db: AsyncSession,
        caller: Caller,
        bill_id: UUID,
        data: PaymentCreate,
    ) -> Optional[Tuple[Payment, BillStatus]]:
        """
        Insert the payment and update the bill status atomically.

        Returns:
            (payment, resulting bill status), or None if the bill does not exist

        Raises:
            PermissionDenied: the bill belongs to someone else
        """
        bill = await BillService.get_bill_by_id(db, bill_id)
        if bill is None:
            return None
        ensure(can_create_payment(caller, bill))

        try:
            payment = await PaymentService.create_payment(db, caller, bill, data, auto_commit=False)
            bill.status = derive_bill_status(bill.status, payment.status)
            await db.flush()
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error(
                "Payment rolled back",
                extra={"bill_id": str(bill_id), "customer_id": str(caller.profile_id)},
                exc_info=True,
            )
            raise

        logger.info(
            "Payment recorded",
            extra={
                "payment_id": str(payment.id),
                "bill_id": str(bill.id),
                "amount": str(payment.amount),
                "method": payment.payment_method.value,
                "bill_status": bill.status.value,
            },
        )
        return payment, bill.status

"""Complaint Service

Lifecycle: open -> in_progress -> resolved/closed. Only membership in
ComplaintStatus is enforced; any status may follow any other.
"""

from typing import Optional, List, Dict, Any
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from app.core.policy import (
    Caller,
    can_create_complaint,
    can_edit_complaint,
    can_respond_to_complaint,
    can_view_owned,
    ensure,
    scope_to_caller,
)
from app.models.complaint import Complaint
from app.models.enums import ComplaintStatus
from app.schemas.complaint import ComplaintCreate

logger = logging.getLogger(__name__)


class ComplaintService:
    @staticmethod
    async def get_complaint_by_id(db: AsyncSession, complaint_id: UUID) -> Optional[Complaint]:
        result = await db.execute(
            select(Complaint)
            .options(selectinload(Complaint.customer))
            .where(Complaint.id == complaint_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_visible_complaint(
        db: AsyncSession, caller: Caller, complaint_id: UUID
    ) -> Optional[Complaint]:
        complaint = await ComplaintService.get_complaint_by_id(db, complaint_id)
        if complaint is not None:
            ensure(can_view_owned(caller, complaint))
        return complaint

    @staticmethod
    async def list_complaints(db: AsyncSession, caller: Caller) -> List[Complaint]:
        stmt = select(Complaint).options(selectinload(Complaint.customer))
        stmt = scope_to_caller(stmt, Complaint, caller)
        result = await db.execute(stmt.order_by(Complaint.created_at.desc(), Complaint.id.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def create_complaint(db: AsyncSession, caller: Caller, data: ComplaintCreate) -> Complaint:
        """File a complaint as the caller. Always starts OPEN."""
        ensure(can_create_complaint(caller, caller.profile_id))
        complaint = Complaint(
            customer_id=caller.profile_id,
            subject=data.subject,
            description=data.description,
            priority=data.priority,
            status=ComplaintStatus.OPEN,
        )
        db.add(complaint)
        await db.commit()
        logger.info(
            "Complaint filed",
            extra={"complaint_id": str(complaint.id), "priority": complaint.priority.value},
        )
        return complaint

    @staticmethod
    async def update_complaint(
        db: AsyncSession,
        caller: Caller,
        complaint: Complaint,
        changes: Dict[str, Any],
    ) -> Complaint:
        """Owner edits subject, description or priority."""
        ensure(can_edit_complaint(caller, complaint))
        for field, value in changes.items():
            setattr(complaint, field, value)
        await db.commit()
        return complaint

    @staticmethod
    async def respond(
        db: AsyncSession,
        caller: Caller,
        complaint: Complaint,
        status: ComplaintStatus,
        admin_response: Optional[str],
    ) -> Complaint:
        """Admin sets status and response in the same write."""
        ensure(can_respond_to_complaint(caller))
        previous = complaint.status
        complaint.status = status
        complaint.admin_response = admin_response
        await db.commit()
        logger.info(
            "Complaint responded",
            extra={
                "complaint_id": str(complaint.id),
                "from_status": previous.value if previous else None,
                "to_status": status.value,
            },
        )
        return complaint

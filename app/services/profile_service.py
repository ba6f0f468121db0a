"""Profile Service"""

from typing import Optional, List, Dict, Any
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.policy import Caller, can_update_profile, can_view_profile, ensure
from app.models.profile import Profile

logger = logging.getLogger(__name__)


class ProfileService:
    @staticmethod
    async def get_profile_by_id(db: AsyncSession, profile_id: UUID) -> Optional[Profile]:
        result = await db.execute(select(Profile).where(Profile.id == profile_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_profile_by_user_id(db: AsyncSession, user_id: UUID) -> Optional[Profile]:
        result = await db.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_visible_profile(
        db: AsyncSession, caller: Caller, profile_id: UUID
    ) -> Optional[Profile]:
        """Profile by ID if it exists; PermissionDenied if the caller may not see it."""
        profile = await ProfileService.get_profile_by_id(db, profile_id)
        if profile is not None:
            ensure(can_view_profile(caller, profile))
        return profile

    @staticmethod
    async def get_profile_by_meter(db: AsyncSession, meter_number: str) -> Optional[Profile]:
        result = await db.execute(select(Profile).where(Profile.meter_number == meter_number))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_customers(db: AsyncSession) -> List[Profile]:
        """Non-admin profiles, newest first"""
        result = await db.execute(
            select(Profile)
            .where(Profile.is_admin.is_(False))
            .order_by(Profile.created_at.desc(), Profile.id.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def update_profile(
        db: AsyncSession,
        caller: Caller,
        profile: Profile,
        changes: Dict[str, Any],
    ) -> Profile:
        """
        Apply a partial update.

        Customers may only touch contact fields on their own profile; admins
        may change anything. A meter number can belong to one profile only.

        Raises:
            PermissionDenied: caller may not change these fields
            ValueError: meter number already assigned elsewhere
        """
        ensure(can_update_profile(caller, profile, changes.keys()))

        meter_number = changes.get("meter_number")
        if meter_number and meter_number != profile.meter_number:
            holder = await ProfileService.get_profile_by_meter(db, meter_number)
            if holder is not None and holder.id != profile.id:
                raise ValueError(f"Meter number {meter_number} is already assigned")

        for field, value in changes.items():
            setattr(profile, field, value)

        await db.commit()
        await db.refresh(profile)
        logger.info(
            "Profile updated",
            extra={
                "profile_id": str(profile.id),
                "fields": sorted(changes),
                "by_admin": caller.is_admin,
            },
        )
        return profile

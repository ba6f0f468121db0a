"""User Service - registration and authentication"""

from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from app.models.user import User
from app.models.profile import Profile
from app.core.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user-related operations"""

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: UUID) -> Optional[User]:
        """Get user (with profile) by ID, or None."""
        result = await db.execute(
            select(User)
            .options(selectinload(User.profile))
            .where(User.id == user_id)
        )
        return result.scalar_one_or_none()
    
    @staticmethod
    async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
        """Get user (with profile) by email, or None."""
        result = await db.execute(
            select(User)
            .options(selectinload(User.profile))
            .where(User.email == email)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def register_user(
        db: AsyncSession,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        phone_number: Optional[str] = None,
        is_admin: bool = False,
        auto_commit: bool = True,
    ) -> User:
        """
        Create a user and its profile in one transaction.

        The profile's full name falls back to the email address, the same way
        sign-up metadata is treated when the name field is left blank.

        Raises:
            ValueError: if the email is already registered
        """
        if await UserService.get_user_by_email(db, email):
            raise ValueError("A user with this email already exists")

        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            is_active=True,
        )
        user.profile = Profile(
            full_name=full_name or email,
            phone_number=phone_number,
            is_admin=is_admin,
        )
        db.add(user)

        if auto_commit:
            await db.commit()
        else:
            await db.flush()

        logger.info("User registered", extra={"user_id": str(user.id), "is_admin": is_admin})
        return user

    @staticmethod
    async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
        """Return the active user matching the credentials, else None."""
        user = await UserService.get_user_by_email(db, email)
        if not user or not user.is_active:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

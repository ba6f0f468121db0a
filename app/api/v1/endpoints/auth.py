from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.core import security
from app.models.user import User
from app.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, Token
from app.schemas.profile import ProfileResponse
from app.schemas.responses import SuccessResponse
from app.services.user_service import UserService

router = APIRouter()


def _issue_tokens(user: User) -> Token:
    claims = {
        "sub": str(user.id),
        "profile_id": str(user.profile.id),
        "is_admin": bool(user.profile.is_admin),
    }
    return Token(
        access_token=security.create_access_token(data=claims),
        refresh_token=security.create_refresh_token(data={"sub": str(user.id)}),
        token_type="bearer",
        user_id=str(user.id),
        profile_id=str(user.profile.id),
        is_admin=bool(user.profile.is_admin),
    )


@router.post("/register", response_model=SuccessResponse[ProfileResponse])
async def register(
    register_in: RegisterRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Customer sign-up. Creates the login and its profile together; the meter
    number is provisioned later.
    """
    try:
        user = await UserService.register_user(
            db,
            email=register_in.email,
            password=register_in.password,
            full_name=register_in.full_name,
            phone_number=register_in.phone_number,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SuccessResponse(
        data=ProfileResponse.model_validate(user.profile),
        message="Account created successfully"
    )


@router.post("/login", response_model=SuccessResponse[Token])
async def login(
    login_data: LoginRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """Returns JWT access and refresh tokens plus the caller's role."""
    user = await UserService.authenticate_user(db, email=login_data.email, password=login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return SuccessResponse(data=_issue_tokens(user), message="Login successful")


@router.post("/refresh", response_model=SuccessResponse[Token])
async def refresh(
    refresh_in: RefreshRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """Exchange a refresh token for a new token pair."""
    payload = security.decode_token(refresh_in.refresh_token)
    if not payload or payload.get("type") != "refresh" or not payload.get("sub"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    user = await UserService.get_user_by_id(db, user_id)
    if not user or not user.is_active or user.profile is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")
    return SuccessResponse(data=_issue_tokens(user), message="Token refreshed")

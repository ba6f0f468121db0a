"""API Dependencies"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.database import get_db
from app.core.security import decode_token
from app.core.policy import Caller
from app.services.user_service import UserService
from app.models.user import User

# Security scheme for bearer token
security = HTTPBearer()


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    """
    Get current authenticated user (with profile loaded) from a JWT access token.
    
    Raises:
        HTTPException: If token is invalid or user not found
    """
    payload = decode_token(credentials.credentials)
    if not payload:
        raise _credentials_error()
    
    if payload.get("type") != "access":
        raise _credentials_error("Invalid token type")
    
    user_id_str: Optional[str] = payload.get("sub")
    if not user_id_str:
        raise _credentials_error()
    
    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise _credentials_error("Invalid user ID")
    
    user = await UserService.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )
    
    return user


async def get_current_caller(current_user: User = Depends(get_current_user)) -> Caller:
    """Bundle the user and profile into the context passed to services."""
    if current_user.profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return Caller(user=current_user, profile=current_user.profile)


async def require_admin(caller: Caller = Depends(get_current_caller)) -> Caller:
    """
    Get current caller, requiring the admin flag.
    
    Raises:
        HTTPException: 403 if the caller is a customer
    """
    if not caller.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )
    return caller

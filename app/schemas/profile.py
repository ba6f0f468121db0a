"""Profile Pydantic Schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class ProfileResponse(BaseModel):
    id: UUID
    user_id: UUID
    full_name: str
    phone_number: Optional[str] = None
    address: Optional[str] = None
    meter_number: Optional[str] = None
    is_admin: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProfileContactUpdate(BaseModel):
    """Fields a customer may change on their own profile"""
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    meter_number: Optional[str] = Field(None, max_length=100)

    model_config = ConfigDict(extra="forbid")


class ProfileAdminUpdate(ProfileContactUpdate):
    """Admins may also promote or demote"""
    is_admin: Optional[bool] = None

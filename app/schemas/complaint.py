from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ComplaintStatus, ComplaintPriority


class ComplaintCreate(BaseModel):
    subject: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    priority: ComplaintPriority = ComplaintPriority.MEDIUM

    model_config = ConfigDict(extra="forbid")


class ComplaintUpdate(BaseModel):
    """Owner edits; status and response belong to staff"""
    subject: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    priority: Optional[ComplaintPriority] = None

    model_config = ConfigDict(extra="forbid")


class ComplaintRespond(BaseModel):
    """Staff action: new status and the response shown to the customer"""
    status: ComplaintStatus
    admin_response: Optional[str] = ""

    model_config = ConfigDict(extra="forbid")


class ComplaintResponse(BaseModel):
    id: UUID
    customer_id: UUID
    customer_name: Optional[str] = None
    subject: str
    description: str
    status: ComplaintStatus
    priority: ComplaintPriority
    admin_response: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

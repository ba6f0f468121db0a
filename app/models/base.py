"""Base Models and Mixins for DRY principles"""

import uuid
from typing import Optional
from sqlalchemy import Column, DateTime, ForeignKey, inspect
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declared_attr

from app.database import Base
from app.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all models.
    
    Provides:
    - UUID primary key
    - created_at timestamp
    """
    __abstract__ = True
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False, index=True)


class UpdatedAtMixin:
    """
    Mixin for mutable records.

    Provides:
    - updated_at timestamp, refreshed on every UPDATE
    """
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class CustomerScopedMixin:
    """
    Mixin for records owned by a customer profile.
    
    Provides:
    - customer_id foreign key (cascade-deleted with the profile)
    - Relationship to the profile (configured in concrete models)
    """
    
    @declared_attr
    def customer_id(cls):
        return Column(
            UUID(as_uuid=True),
            ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
            index=True
        )

    @property
    def customer_name(self) -> Optional[str]:
        """Owner's full name when the customer relationship is already loaded"""
        if "customer" in inspect(self).unloaded:
            return None
        return self.customer.full_name if self.customer is not None else None

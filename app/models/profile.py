"""Customer / administrator profile"""

from sqlalchemy import Column, String, Text, Boolean, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, UpdatedAtMixin


class Profile(BaseModel, UpdatedAtMixin):
    """
    Application-level identity: contact details, meter assignment and the
    admin flag that separates customers from staff.
    """
    __tablename__ = "profiles"

    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True
    )
    full_name = Column(String(255), nullable=False)
    phone_number = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    # NULL until a meter is provisioned
    meter_number = Column(String(100), unique=True, nullable=True)
    is_admin = Column(Boolean, default=False, nullable=False, index=True)

    user = relationship("User", back_populates="profile")
    bills = relationship("Bill", back_populates="customer", passive_deletes=True)
    payments = relationship("Payment", back_populates="customer", passive_deletes=True)
    complaints = relationship("Complaint", back_populates="customer", passive_deletes=True)

    def __repr__(self) -> str:
        role = "admin" if self.is_admin else "customer"
        return f"<Profile {self.full_name} ({role})>"

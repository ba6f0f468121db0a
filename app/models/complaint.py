"""Customer support ticket"""

from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, UpdatedAtMixin, CustomerScopedMixin
from app.models.enums import ComplaintStatus, ComplaintPriority, enum_values


class Complaint(BaseModel, UpdatedAtMixin, CustomerScopedMixin):
    __tablename__ = "complaints"

    subject = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        ENUM(ComplaintStatus, name="complaint_status", values_callable=enum_values),
        default=ComplaintStatus.OPEN,
        nullable=False,
        index=True
    )
    priority = Column(
        ENUM(ComplaintPriority, name="complaint_priority", values_callable=enum_values),
        default=ComplaintPriority.MEDIUM,
        nullable=False
    )
    admin_response = Column(Text, nullable=True)

    customer = relationship("Profile", back_populates="complaints")

    def __repr__(self) -> str:
        return f"<Complaint {self.subject!r} ({self.status})>"

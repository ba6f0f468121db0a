"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, UpdatedAtMixin, CustomerScopedMixin
from app.models.enums import (
    BillStatus,
    PaymentMethod,
    PaymentStatus,
    ComplaintStatus,
    ComplaintPriority,
)
from app.models.user import User
from app.models.profile import Profile
from app.models.bill import Bill
from app.models.payment import Payment
from app.models.complaint import Complaint


__all__ = [
    # Base classes
    "BaseModel",
    "UpdatedAtMixin",
    "CustomerScopedMixin",
    
    # Enums
    "BillStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ComplaintStatus",
    "ComplaintPriority",
    
    # Identity
    "User",
    "Profile",
    
    # Billing
    "Bill",
    "Payment",
    
    # Support
    "Complaint",
]

"""Centralized Enum Definitions"""

import enum


class BillStatus(str, enum.Enum):
    """Bill payment status"""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class PaymentMethod(str, enum.Enum):
    """Channels a customer can report a payment through"""
    MPESA = "mpesa"
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"


class PaymentStatus(str, enum.Enum):
    """Externally asserted payment outcome"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class ComplaintStatus(str, enum.Enum):
    """Complaint lifecycle: open -> in_progress -> resolved/closed"""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class ComplaintPriority(str, enum.Enum):
    """Complaint priority chosen by the customer"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum values (lowercase) rather than member names"""
    return [member.value for member in enum_cls]

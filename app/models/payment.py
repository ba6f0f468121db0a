"""Recorded payment against a bill"""

from sqlalchemy import Column, DateTime, Numeric, String, ForeignKey
from sqlalchemy.dialects.postgresql import UUID, ENUM
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, CustomerScopedMixin
from app.models.enums import PaymentMethod, PaymentStatus, enum_values
from app.utils.time import get_utc_now


class Payment(BaseModel, CustomerScopedMixin):
    """
    An assertion that a bill was paid through some channel. The result comes
    from outside (M-Pesa receipt, bank slip, cash desk); nothing here talks to
    a gateway.
    """
    __tablename__ = "payments"

    bill_id = Column(
        UUID(as_uuid=True),
        ForeignKey("bills.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(
        ENUM(PaymentMethod, name="payment_method", values_callable=enum_values),
        nullable=False
    )
    transaction_id = Column(String(255), nullable=True)
    payment_date = Column(DateTime, default=get_utc_now, nullable=False, index=True)
    status = Column(
        ENUM(PaymentStatus, name="payment_status", values_callable=enum_values),
        default=PaymentStatus.COMPLETED,
        nullable=False,
        index=True
    )

    bill = relationship("Bill", back_populates="payments")
    customer = relationship("Profile", back_populates="payments")

    def __repr__(self) -> str:
        return f"<Payment {self.amount} via {self.payment_method} - {self.status}>"

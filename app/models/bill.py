"""Water bill for one billing period"""

from sqlalchemy import CheckConstraint, Column, Date, Numeric, String, event
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import relationship

from app.config import settings
from app.core.billing import compute_charges
from app.models.base import BaseModel, UpdatedAtMixin, CustomerScopedMixin
from app.models.enums import BillStatus, enum_values


class Bill(BaseModel, UpdatedAtMixin, CustomerScopedMixin):
    """
    Links two meter readings and a rate to a derived charge.
    units_consumed and amount are derived; see recompute_charges().
    """
    __tablename__ = "bills"
    __table_args__ = (
        CheckConstraint("units_consumed = current_reading - previous_reading", name="ck_bills_units_consumed"),
        CheckConstraint(
            "amount = round((current_reading - previous_reading) * rate_per_unit, 2)",
            name="ck_bills_amount",
        ),
    )
    
    meter_number = Column(String(100), nullable=False, index=True)
    previous_reading = Column(Numeric(10, 2), nullable=False, default=0)
    current_reading = Column(Numeric(10, 2), nullable=False)
    rate_per_unit = Column(Numeric(10, 2), nullable=False, default=lambda: settings.DEFAULT_RATE_PER_UNIT)
    units_consumed = Column(Numeric(10, 2), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    bill_month = Column(String(50), nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(
        ENUM(BillStatus, name="bill_status", values_callable=enum_values),
        default=BillStatus.PENDING,
        nullable=False,
        index=True
    )
    
    customer = relationship("Profile", back_populates="bills")
    payments = relationship("Payment", back_populates="bill", passive_deletes=True)

    def recompute_charges(self, reject_negative: bool = False, warn: bool = True) -> None:
        """Refresh units_consumed and amount from readings and rate"""
        if self.previous_reading is None:
            self.previous_reading = 0
        if self.rate_per_unit is None:
            self.rate_per_unit = settings.DEFAULT_RATE_PER_UNIT
        self.units_consumed, self.amount = compute_charges(
            self.previous_reading,
            self.current_reading,
            self.rate_per_unit,
            reject_negative=reject_negative,
            warn=warn,
        )
    
    def __repr__(self) -> str:
        return f"<Bill {self.bill_month} {self.amount} - {self.status}>"


@event.listens_for(Bill, "before_insert")
@event.listens_for(Bill, "before_update")
def _derive_bill_charges(mapper, connection, target: Bill) -> None:
    # Stored charges always match the readings at flush time. Services have
    # already reported negative consumption by then.
    target.recompute_charges(warn=False)

"""Bill charge derivation.

Consumption and amount are pure functions of the two meter readings and the
rate. They are never taken from a client payload; callers recompute them
whenever a reading or the rate changes.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from app.core.logging import get_logger

logger = get_logger(__name__)

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


class NegativeConsumptionError(ValueError):
    """Current reading is below the previous reading"""

    def __init__(self, previous: Decimal, current: Decimal):
        self.previous = previous
        self.current = current
        super().__init__(
            f"Current reading {current} is lower than previous reading {previous}"
        )


def to_decimal(value: Number) -> Decimal:
    """Coerce to Decimal without going through binary float repr"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_currency(value: Number) -> Decimal:
    """Round half away from zero to two decimal places"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_units_consumed(previous: Number, current: Number) -> Decimal:
    """units_consumed = current - previous (may be negative)"""
    return to_decimal(current) - to_decimal(previous)


def compute_amount(previous: Number, current: Number, rate: Number) -> Decimal:
    """amount = (current - previous) * rate, rounded to cents"""
    return quantize_currency(compute_units_consumed(previous, current) * to_decimal(rate))


def compute_charges(
    previous: Number,
    current: Number,
    rate: Number,
    reject_negative: bool = False,
    warn: bool = True,
) -> tuple[Decimal, Decimal]:
    """
    Derive (units_consumed, amount) for a bill.

    A current reading below the previous one (meter rollover or a typo) yields
    negative consumption. It is kept unless reject_negative is set, and
    logged unless warn is off.

    Raises:
        NegativeConsumptionError: if reject_negative and current < previous
    """
    previous_d = to_decimal(previous)
    current_d = to_decimal(current)
    if current_d < previous_d:
        if reject_negative:
            raise NegativeConsumptionError(previous_d, current_d)
        if warn:
            logger.warning(
                "Negative consumption computed",
                extra={"previous_reading": str(previous_d), "current_reading": str(current_d)},
            )
    units = quantize_currency(compute_units_consumed(previous_d, current_d))
    return units, compute_amount(previous_d, current_d, rate)

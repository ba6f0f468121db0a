"""UTC clock helpers. Timestamps are stored as TIMESTAMP WITHOUT TIME ZONE."""

from datetime import date, datetime, timezone


def get_utc_now() -> datetime:
    """Current UTC time as a naive datetime, for created_at/payment_date columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_today() -> date:
    """Calendar date in UTC; due dates are compared against this"""
    return get_utc_now().date()

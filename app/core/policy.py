"""Row-level authorization.

Every read and write goes through these checks, keyed on the caller's
profile and admin flag. Customers reach only rows whose customer_id is their
own profile; admins reach everything.
"""

from dataclasses import dataclass
from typing import Any, Iterable
from uuid import UUID

from sqlalchemy import Select

from app.models.profile import Profile
from app.models.user import User

# Fields a customer may change on their own profile
CONTACT_FIELDS = frozenset({"full_name", "phone_number", "address", "meter_number"})


class PermissionDenied(Exception):
    """Caller is not allowed to perform the action on the row"""

    def __init__(self, message: str = "Not enough permissions"):
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Caller:
    """Authenticated identity passed explicitly into every service call"""
    user: User
    profile: Profile

    @property
    def profile_id(self) -> UUID:
        return self.profile.id

    @property
    def is_admin(self) -> bool:
        return bool(self.profile.is_admin)


def ensure(allowed: bool, message: str = "Not enough permissions") -> None:
    if not allowed:
        raise PermissionDenied(message)


def owns(caller: Caller, record: Any) -> bool:
    return record.customer_id == caller.profile_id


# Profiles

def can_view_profile(caller: Caller, profile: Profile) -> bool:
    return caller.is_admin or profile.id == caller.profile_id


def can_update_profile(caller: Caller, profile: Profile, fields: Iterable[str]) -> bool:
    if caller.is_admin:
        return True
    return profile.id == caller.profile_id and set(fields) <= CONTACT_FIELDS


# Customer-owned rows: bills, payments, complaints

def can_view_owned(caller: Caller, record: Any) -> bool:
    return caller.is_admin or owns(caller, record)


def can_create_bill(caller: Caller) -> bool:
    return caller.is_admin


def can_update_bill(caller: Caller) -> bool:
    return caller.is_admin


def can_create_payment(caller: Caller, bill: Any) -> bool:
    # Only the bill's owner pays it, and the payment is filed under that owner.
    return owns(caller, bill)


def can_create_complaint(caller: Caller, customer_id: UUID) -> bool:
    return customer_id == caller.profile_id


def can_edit_complaint(caller: Caller, complaint: Any) -> bool:
    return owns(caller, complaint)


def can_respond_to_complaint(caller: Caller) -> bool:
    return caller.is_admin


def scope_to_caller(stmt: Select, model: Any, caller: Caller) -> Select:
    """Restrict a SELECT on a customer-owned model to the caller's rows"""
    if caller.is_admin:
        return stmt
    return stmt.where(model.customer_id == caller.profile_id)

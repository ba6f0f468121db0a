"""Unit tests for ProfileService and UserService."""

import pytest
from unittest.mock import AsyncMock, patch

from app.core.policy import PermissionDenied
from app.core.security import verify_password
from app.models.user import User
from app.services.profile_service import ProfileService
from app.services.user_service import UserService
from tests.factories import make_caller


@pytest.mark.asyncio
async def test_customer_updates_own_contact_fields(db, customer):
    profile = customer.profile

    with patch("app.services.profile_service.ProfileService.get_profile_by_meter", new_callable=AsyncMock) as mock_meter:
        mock_meter.return_value = None
        await ProfileService.update_profile(
            db, customer, profile, {"address": "Plot 12, Kilimani", "meter_number": "MTR-900"}
        )

    assert profile.address == "Plot 12, Kilimani"
    assert profile.meter_number == "MTR-900"
    assert db.commit.called
    db.refresh.assert_awaited_once_with(profile)


@pytest.mark.asyncio
async def test_customer_cannot_grant_self_admin(db, customer):
    with pytest.raises(PermissionDenied):
        await ProfileService.update_profile(db, customer, customer.profile, {"is_admin": True})

    assert customer.profile.is_admin is False
    assert not db.commit.called


@pytest.mark.asyncio
async def test_customer_cannot_edit_another_profile(db, customer):
    other = make_caller().profile

    with pytest.raises(PermissionDenied):
        await ProfileService.update_profile(db, customer, other, {"address": "Somewhere"})


@pytest.mark.asyncio
async def test_admin_may_promote_customer(db, admin, customer):
    await ProfileService.update_profile(db, admin, customer.profile, {"is_admin": True})

    assert customer.profile.is_admin is True


@pytest.mark.asyncio
async def test_meter_number_must_be_unique(db, customer):
    holder = make_caller(meter_number="MTR-TAKEN").profile

    with patch("app.services.profile_service.ProfileService.get_profile_by_meter", new_callable=AsyncMock) as mock_meter:
        mock_meter.return_value = holder
        with pytest.raises(ValueError, match="already assigned"):
            await ProfileService.update_profile(db, customer, customer.profile, {"meter_number": "MTR-TAKEN"})

    assert customer.profile.meter_number == "MTR-001"
    assert not db.commit.called


@pytest.mark.asyncio
async def test_register_user_creates_profile(db):
    with patch("app.services.user_service.UserService.get_user_by_email", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = None
        user = await UserService.register_user(db, email="jane@example.com", password="Secret123!")

    assert isinstance(user, User)
    assert user.profile is not None
    assert user.profile.full_name == "jane@example.com"
    assert user.profile.is_admin is False
    assert verify_password("Secret123!", user.hashed_password)
    db.add.assert_called_once_with(user)
    assert db.commit.called


@pytest.mark.asyncio
async def test_register_user_duplicate_email(db, customer):
    with patch("app.services.user_service.UserService.get_user_by_email", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = customer.user
        with pytest.raises(ValueError, match="already exists"):
            await UserService.register_user(db, email=customer.user.email, password="Secret123!")

    assert not db.add.called


@pytest.mark.asyncio
async def test_authenticate_user(db):
    user = User(email="jane@example.com", is_active=True)
    from app.core.security import get_password_hash
    user.hashed_password = get_password_hash("Secret123!")

    with patch("app.services.user_service.UserService.get_user_by_email", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = user
        assert await UserService.authenticate_user(db, "jane@example.com", "Secret123!") is user
        assert await UserService.authenticate_user(db, "jane@example.com", "wrong") is None

        user.is_active = False
        assert await UserService.authenticate_user(db, "jane@example.com", "Secret123!") is None

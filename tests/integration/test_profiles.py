"""Integration tests: Profile endpoints and meter provisioning."""

import pytest
from tests.conftest import requires_db

pytestmark = requires_db
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_read_own_profile(async_client: AsyncClient, api_base: str, registered_customer: dict):
    resp = await async_client.get(f"{api_base}/profiles/me", headers=registered_customer["headers"])
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["id"] == registered_customer["profile_id"]
    assert data["meter_number"] == registered_customer["meter_number"]
    assert data["address"] == "Plot 12, Kilimani"


@pytest.mark.asyncio
async def test_customer_cannot_promote_self(async_client: AsyncClient, api_base: str, registered_customer: dict):
    resp = await async_client.patch(
        f"{api_base}/profiles/me",
        headers=registered_customer["headers"],
        json={"is_admin": True},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_meter_number_already_assigned(
    async_client: AsyncClient, api_base: str, registered_customer: dict, other_customer: dict
):
    resp = await async_client.patch(
        f"{api_base}/profiles/me",
        headers=other_customer["headers"],
        json={"meter_number": registered_customer["meter_number"]},
    )
    assert resp.status_code == 400
    assert "already assigned" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_customers_see_only_their_own_profile(
    async_client: AsyncClient, api_base: str, registered_customer: dict, other_customer: dict
):
    resp = await async_client.get(
        f"{api_base}/profiles/{other_customer['profile_id']}",
        headers=registered_customer["headers"],
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_admin_lists_and_edits_customers(
    async_client: AsyncClient, api_base: str, registered_admin: dict, registered_customer: dict
):
    resp = await async_client.get(f"{api_base}/profiles/customers", headers=registered_admin["headers"])
    assert resp.status_code == 200
    customers = resp.json()["data"]
    ids = [c["id"] for c in customers]
    assert registered_customer["profile_id"] in ids
    assert registered_admin["profile_id"] not in ids
    assert all(c["is_admin"] is False for c in customers)

    resp = await async_client.patch(
        f"{api_base}/profiles/{registered_customer['profile_id']}",
        headers=registered_admin["headers"],
        json={"meter_number": f"{registered_customer['meter_number']}-B"},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["meter_number"].endswith("-B")


@pytest.mark.asyncio
async def test_customer_cannot_list_customers(async_client: AsyncClient, api_base: str, registered_customer: dict):
    resp = await async_client.get(f"{api_base}/profiles/customers", headers=registered_customer["headers"])
    assert resp.status_code == 403

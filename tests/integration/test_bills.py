"""Integration tests: Bill endpoints and charge derivation."""

import pytest
from decimal import Decimal
from tests.conftest import requires_db, create_bill

pytestmark = requires_db
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_admin_creates_bill_with_derived_charges(
    async_client: AsyncClient, api_base: str, registered_admin: dict, registered_customer: dict
):
    bill = await create_bill(async_client, api_base, registered_admin, registered_customer, rate_per_unit="50")

    assert Decimal(bill["units_consumed"]) == Decimal("50")
    assert Decimal(bill["amount"]) == Decimal("2500")
    assert bill["status"] == "pending"
    assert bill["meter_number"] == registered_customer["meter_number"]
    assert bill["customer_id"] == registered_customer["profile_id"]


@pytest.mark.asyncio
async def test_default_rate_and_previous_reading(
    async_client: AsyncClient, api_base: str, registered_admin: dict, registered_customer: dict
):
    resp = await async_client.post(
        f"{api_base}/bills",
        headers=registered_admin["headers"],
        json={
            "customer_id": registered_customer["profile_id"],
            "current_reading": "12.5",
            "bill_month": "February 2026",
            "due_date": "2026-03-01",
        },
    )
    assert resp.status_code == 200, resp.text
    bill = resp.json()["data"]
    assert Decimal(bill["previous_reading"]) == Decimal("0")
    assert Decimal(bill["rate_per_unit"]) == Decimal("50")
    assert Decimal(bill["amount"]) == Decimal("625.00")


@pytest.mark.asyncio
async def test_negative_consumption_is_stored(
    async_client: AsyncClient, api_base: str, registered_admin: dict, registered_customer: dict
):
    bill = await create_bill(
        async_client, api_base, registered_admin, registered_customer,
        previous_reading="150", current_reading="100",
    )
    assert Decimal(bill["units_consumed"]) == Decimal("-50")
    assert Decimal(bill["amount"]) == Decimal("-2500")


@pytest.mark.asyncio
async def test_client_cannot_supply_amount(
    async_client: AsyncClient, api_base: str, registered_admin: dict, registered_customer: dict
):
    resp = await async_client.post(
        f"{api_base}/bills",
        headers=registered_admin["headers"],
        json={
            "customer_id": registered_customer["profile_id"],
            "current_reading": "150",
            "amount": "1",
            "bill_month": "January 2026",
            "due_date": "2026-02-01",
        },
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_customer_cannot_create_bill(async_client: AsyncClient, api_base: str, registered_customer: dict):
    resp = await async_client.post(
        f"{api_base}/bills",
        headers=registered_customer["headers"],
        json={
            "customer_id": registered_customer["profile_id"],
            "current_reading": "150",
            "bill_month": "January 2026",
            "due_date": "2026-02-01",
        },
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_update_recomputes_charges(
    async_client: AsyncClient, api_base: str, registered_admin: dict, registered_customer: dict
):
    bill = await create_bill(async_client, api_base, registered_admin, registered_customer)
    resp = await async_client.patch(
        f"{api_base}/bills/{bill['id']}",
        headers=registered_admin["headers"],
        json={"current_reading": "175.25"},
    )
    assert resp.status_code == 200, resp.text
    updated = resp.json()["data"]
    assert Decimal(updated["units_consumed"]) == Decimal("75.25")
    assert Decimal(updated["amount"]) == Decimal("3762.50")


@pytest.mark.asyncio
async def test_customers_only_see_their_bills(
    async_client: AsyncClient,
    api_base: str,
    registered_admin: dict,
    registered_customer: dict,
    other_customer: dict,
):
    first = await create_bill(async_client, api_base, registered_admin, registered_customer, bill_month="January 2026")
    second = await create_bill(async_client, api_base, registered_admin, registered_customer, bill_month="February 2026")
    foreign = await create_bill(async_client, api_base, registered_admin, other_customer)

    resp = await async_client.get(f"{api_base}/bills", headers=registered_customer["headers"])
    assert resp.status_code == 200
    ids = [b["id"] for b in resp.json()["data"]]
    # Newest first
    assert ids == [second["id"], first["id"]]

    # Repeated reads return the same sequence
    again = await async_client.get(f"{api_base}/bills", headers=registered_customer["headers"])
    assert [b["id"] for b in again.json()["data"]] == ids

    resp = await async_client.get(f"{api_base}/bills/{foreign['id']}", headers=registered_customer["headers"])
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_admin_sees_all_bills_with_customer_names(
    async_client: AsyncClient,
    api_base: str,
    registered_admin: dict,
    registered_customer: dict,
    other_customer: dict,
):
    first = await create_bill(async_client, api_base, registered_admin, registered_customer)
    second = await create_bill(async_client, api_base, registered_admin, other_customer)

    resp = await async_client.get(f"{api_base}/bills", headers=registered_admin["headers"])
    assert resp.status_code == 200
    by_id = {b["id"]: b for b in resp.json()["data"]}
    assert first["id"] in by_id and second["id"] in by_id
    assert by_id[first["id"]]["customer_name"].startswith("Customer ")


@pytest.mark.asyncio
async def test_missing_bill(async_client: AsyncClient, api_base: str, registered_admin: dict):
    resp = await async_client.get(
        f"{api_base}/bills/00000000-0000-0000-0000-000000000000",
        headers=registered_admin["headers"],
    )
    assert resp.status_code == 404

"""Tests for wallet and purchase API endpoints"""

import pytest
from fastapi import status
from httpx import AsyncClient


@pytest.mark.asyncio
class TestCreateWallet:
    """Test POST /api/v1/create-wallet"""

    async def test_create_then_return_existing(self, async_client: AsyncClient, consumer, auth_headers):
        first = await async_client.post("/api/v1/create-wallet", headers=auth_headers(consumer))

        assert first.status_code == status.HTTP_200_OK
        created = first.json()
        assert created["success"] is True
        assert created["wallet"]["user_id"] == str(consumer.user_id)
        assert created["wallet"]["address"].startswith("0x")
        assert created["wallet"]["balance_inr"] == 0

        second = await async_client.post("/api/v1/create-wallet", headers=auth_headers(consumer))

        existing = second.json()
        assert "success" not in existing
        assert existing["wallet"]["id"] == created["wallet"]["id"]

    async def test_requires_authentication(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/create-wallet")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
class TestPurchaseCredits:
    """Test POST /api/v1/purchase-credits and the wallet reads"""

    async def test_purchase_flow(self, async_client: AsyncClient, consumer, auth_headers):
        headers = auth_headers(consumer)
        await async_client.post("/api/v1/create-wallet", headers=headers)

        response = await async_client.post(
            "/api/v1/purchase-credits", headers=headers, json={"credits": 10, "price_per_credit": 150}
        )

        assert response.status_code == status.HTTP_200_OK
        purchase = response.json()["purchase"]
        assert purchase["credits"] == 10
        assert purchase["inr_amount"] == 1500
        assert purchase["status"] == "completed"

        assets = (await async_client.get("/api/v1/wallet/assets", headers=headers)).json()
        bcc = next(a for a in assets if a["symbol"] == "BCC")
        assert bcc["balance"] == 10
        assert bcc["inr_value"] == 1500

        transactions = (await async_client.get("/api/v1/wallet/transactions", headers=headers)).json()
        assert [t["type"] for t in transactions] == ["buy"]

        purchases = (await async_client.get("/api/v1/purchases", headers=headers)).json()
        assert len(purchases) == 1

    async def test_invalid_amount(self, async_client: AsyncClient, consumer, auth_headers):
        headers = auth_headers(consumer)
        await async_client.post("/api/v1/create-wallet", headers=headers)

        response = await async_client.post(
            "/api/v1/purchase-credits", headers=headers, json={"credits": 0, "price_per_credit": 150}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Invalid purchase amount"}

    async def test_purchase_without_wallet(self, async_client: AsyncClient, consumer, auth_headers):
        response = await async_client.post(
            "/api/v1/purchase-credits",
            headers=auth_headers(consumer),
            json={"credits": 1, "price_per_credit": 150},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Wallet not found. Please create a wallet first."}

    async def test_get_wallet_before_creation(self, async_client: AsyncClient, generator, auth_headers):
        response = await async_client.get("/api/v1/wallet", headers=auth_headers(generator))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_market_price(async_client: AsyncClient):
    response = await async_client.get("/api/v1/market/price")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"symbol": "BCC", "price_inr": 150.0}

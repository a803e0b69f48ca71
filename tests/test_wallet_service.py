"""Tests for wallet creation and credit purchases"""

from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from bluechain_mrv.exceptions import NotFoundError, StoreError, ValidationError
from bluechain_mrv.models import Asset, Purchase, WalletTransaction
from bluechain_mrv.services.realtime_service import wallet_topic
from bluechain_mrv.services.wallet_service import (
    DEFAULT_ASSETS,
    WalletService,
    generate_wallet_address,
)


class TestWalletAddress:
    """Test wallet address generation"""

    def test_address_format(self):
        address = generate_wallet_address()

        assert address.startswith("0x")
        assert len(address) == 42
        assert all(c in "0123456789ABCDEF" for c in address[2:])

    def test_addresses_are_random(self):
        assert generate_wallet_address() != generate_wallet_address()


@pytest.mark.asyncio
class TestCreateWallet:
    """Test WalletService.create_wallet"""

    async def test_create_wallet_with_default_assets(self, db_session, consumer):
        service = WalletService(db_session)

        wallet, created = await service.create_wallet(consumer)

        assert created is True
        assert wallet.user_id == consumer.user_id
        assert wallet.balance_inr == 0

        assets = await service.list_assets(consumer)
        assert [a.symbol for a in assets] == [a["symbol"] for a in DEFAULT_ASSETS]
        assert all(a.balance == 0 and a.inr_value == 0 for a in assets)

    async def test_create_wallet_is_idempotent(self, db_session, consumer):
        service = WalletService(db_session)

        first, created_first = await service.create_wallet(consumer)
        second, created_second = await service.create_wallet(consumer)

        assert created_first is True
        assert created_second is False
        assert first.id == second.id

        count = (await db_session.execute(select(func.count(Asset.id)))).scalar_one()
        assert count == len(DEFAULT_ASSETS)

    async def test_get_wallet_without_wallet(self, db_session, consumer):
        service = WalletService(db_session)

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_wallet(consumer)

        assert exc_info.value.message == "Wallet not found. Please create a wallet first."


@pytest.mark.asyncio
class TestPurchaseCredits:
    """Test WalletService.purchase_credits"""

    async def test_purchase_updates_ledger(self, db_session, consumer, broker):
        service = WalletService(db_session, broker)
        wallet, _ = await service.create_wallet(consumer)

        purchase = await service.purchase_credits(consumer, 10, 150)

        assert purchase.credits == 10
        assert purchase.inr_amount == 1500
        assert purchase.wallet_hash == wallet.address
        assert purchase.status == "completed"

        assets = {a.symbol: a for a in await service.list_assets(consumer)}
        assert assets["BCC"].balance == 10
        assert assets["BCC"].inr_value == 1500

        transactions = await service.list_transactions(consumer)
        assert len(transactions) == 1
        assert transactions[0].type == "buy"
        assert transactions[0].token == "BCC"
        assert transactions[0].amount == 10

    async def test_purchases_accumulate(self, db_session, consumer, broker):
        service = WalletService(db_session, broker)
        await service.create_wallet(consumer)

        await service.purchase_credits(consumer, 10, 150)
        await service.purchase_credits(consumer, 2.5, 200)

        assets = {a.symbol: a for a in await service.list_assets(consumer)}
        assert assets["BCC"].balance == 12.5
        assert assets["BCC"].inr_value == 2000
        assert len(await service.list_purchases(consumer)) == 2

    async def test_purchase_recreates_missing_bcc_asset(self, db_session, consumer, broker):
        service = WalletService(db_session, broker)
        await service.create_wallet(consumer)
        for asset in await service.list_assets(consumer):
            if asset.symbol == "BCC":
                await db_session.delete(asset)
        await db_session.commit()

        await service.purchase_credits(consumer, 4, 100)

        assets = {a.symbol: a for a in await service.list_assets(consumer)}
        assert assets["BCC"].balance == 4
        assert assets["BCC"].inr_value == 400

    @pytest.mark.parametrize(
        "credits,price",
        [(0, 150), (-5, 150), (10, 0), (None, 150), (10, None), ("ten", 150)],
    )
    async def test_invalid_amount_rejected(self, db_session, consumer, broker, credits, price):
        service = WalletService(db_session, broker)
        await service.create_wallet(consumer)

        with pytest.raises(ValidationError) as exc_info:
            await service.purchase_credits(consumer, credits, price)

        assert exc_info.value.message == "Invalid purchase amount"
        count = (await db_session.execute(select(func.count(Purchase.id)))).scalar_one()
        assert count == 0

    async def test_purchase_without_wallet(self, db_session, consumer, broker):
        service = WalletService(db_session, broker)

        with pytest.raises(NotFoundError):
            await service.purchase_credits(consumer, 10, 150)

    async def test_failed_commit_leaves_no_partial_rows(self, db_session, consumer, broker):
        service = WalletService(db_session, broker)
        await service.create_wallet(consumer)

        failure = OperationalError("INSERT INTO purchases", {}, Exception("disk I/O error"))
        with patch.object(db_session, "commit", side_effect=failure):
            with pytest.raises(StoreError) as exc_info:
                await service.purchase_credits(consumer, 10, 150)

        assert "disk I/O error" in exc_info.value.message
        purchases = (await db_session.execute(select(func.count(Purchase.id)))).scalar_one()
        transactions = (await db_session.execute(select(func.count(WalletTransaction.id)))).scalar_one()
        assert purchases == 0
        assert transactions == 0

        assets = {a.symbol: a for a in await service.list_assets(consumer)}
        assert assets["BCC"].balance == 0

    async def test_purchase_publishes_wallet_event(self, db_session, consumer, broker):
        received = []

        async def listener(event):
            received.append(event)

        service = WalletService(db_session, broker)
        wallet, _ = await service.create_wallet(consumer)
        broker.subscribe(wallet_topic(wallet.id), listener)

        await service.purchase_credits(consumer, 3, 150)

        assert len(received) == 1
        assert received[0]["type"] == "wallet.transaction"
        assert received[0]["data"]["type"] == "buy"
        assert received[0]["data"]["amount"] == 3

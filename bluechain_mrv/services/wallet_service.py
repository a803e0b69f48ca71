"""Wallet ledger: wallet creation, BCC purchases and balance mirroring"""

import logging
import secrets
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.database import commit_or_raise
from bluechain_mrv.exceptions import NotFoundError, ValidationError
from bluechain_mrv.models import (
    Asset,
    Purchase,
    PurchaseStatus,
    TransactionStatus,
    TransactionType,
    Wallet,
    WalletTransaction,
)
from bluechain_mrv.monitoring.metrics import (
    credit_purchases_total,
    credits_purchased_total,
    wallets_created_total,
)
from bluechain_mrv.schemas.wallet import TransactionResponse
from bluechain_mrv.services.realtime_service import EventBroker, event_broker, wallet_topic
from bluechain_mrv.services.role_gate import Caller
from bluechain_mrv.services.validation import optional_number

logger = logging.getLogger(__name__)

BCC_SYMBOL = "BCC"
BCC_ASSET = {"name": "Blue Carbon Credits", "symbol": BCC_SYMBOL, "icon": "🌊"}

DEFAULT_ASSETS = [
    BCC_ASSET,
    {"name": "USD Coin", "symbol": "USDC", "icon": "💵"},
    {"name": "Ethereum", "symbol": "ETH", "icon": "⟠"},
    {"name": "Polygon", "symbol": "MATIC", "icon": "🟣"},
]

RECENT_TRANSACTIONS_LIMIT = 20


def generate_wallet_address() -> str:
    """Return a `0x`-prefixed address of 40 uppercase hex characters"""
    return "0x" + "".join(secrets.choice("0123456789ABCDEF") for _ in range(40))


class WalletService:
    """Service for wallet and purchase ledger operations"""

    def __init__(self, db: AsyncSession, broker: Optional[EventBroker] = None):
        self.db = db
        self.broker = broker or event_broker

    async def create_wallet(self, caller: Caller) -> Tuple[Wallet, bool]:
        """
        Return the caller's wallet, creating it with zero-balance default assets.

        Returns:
            (wallet, created) where `created` is False if it already existed
        """
        existing = await self.find_wallet(caller)
        if existing is not None:
            return existing, False

        wallet = Wallet(
            user_id=caller.user_id,
            address=generate_wallet_address(),
            balance_inr=0,
        )
        self.db.add(wallet)
        await self.db.flush()

        self.db.add_all(
            Asset(wallet_id=wallet.id, balance=0, inr_value=0, **asset)
            for asset in DEFAULT_ASSETS
        )
        await commit_or_raise(self.db)
        await self.db.refresh(wallet)

        wallets_created_total.inc()
        logger.info(f"Created wallet {wallet.address} for user {caller.user_id}")
        return wallet, True

    async def find_wallet(self, caller: Caller) -> Optional[Wallet]:
        result = await self.db.execute(select(Wallet).where(Wallet.user_id == caller.user_id))
        return result.scalar_one_or_none()

    async def get_wallet(self, caller: Caller) -> Wallet:
        wallet = await self.find_wallet(caller)
        if wallet is None:
            raise NotFoundError("Wallet not found. Please create a wallet first.")
        return wallet

    async def list_assets(self, caller: Caller) -> List[Asset]:
        wallet = await self.get_wallet(caller)
        result = await self.db.execute(
            select(Asset).where(Asset.wallet_id == wallet.id).order_by(Asset.created_at)
        )
        return list(result.scalars().all())

    async def list_transactions(self, caller: Caller) -> List[WalletTransaction]:
        """Most recent transactions first"""
        wallet = await self.get_wallet(caller)
        result = await self.db.execute(
            select(WalletTransaction)
            .where(WalletTransaction.wallet_id == wallet.id)
            .order_by(WalletTransaction.created_at.desc())
            .limit(RECENT_TRANSACTIONS_LIMIT)
        )
        return list(result.scalars().all())

    async def list_purchases(self, caller: Caller) -> List[Purchase]:
        result = await self.db.execute(
            select(Purchase)
            .where(Purchase.user_id == caller.user_id)
            .order_by(Purchase.created_at.desc())
        )
        return list(result.scalars().all())

    async def purchase_credits(self, caller: Caller, credits, price_per_credit) -> Purchase:
        """
        Buy BCC credits into the caller's wallet.

        The purchase row, the BCC asset balance and the `buy` transaction are
        committed together; if any write fails none of them persist.

        Raises:
            ValidationError: credits or price missing or not positive
            NotFoundError: caller has no wallet
            StoreError: the commit failed
        """
        try:
            credits = optional_number(credits, "credits")
            price_per_credit = optional_number(price_per_credit, "price_per_credit")
        except ValidationError:
            raise ValidationError("Invalid purchase amount")
        if not credits or not price_per_credit or credits <= 0 or price_per_credit <= 0:
            raise ValidationError("Invalid purchase amount")

        wallet = await self.get_wallet(caller)
        inr_amount = credits * price_per_credit

        purchase = Purchase(
            user_id=caller.user_id,
            wallet_id=wallet.id,
            credits=credits,
            price_per_credit=price_per_credit,
            inr_amount=inr_amount,
            wallet_hash=wallet.address,
            status=PurchaseStatus.COMPLETED.value,
        )
        self.db.add(purchase)

        result = await self.db.execute(
            select(Asset).where(Asset.wallet_id == wallet.id, Asset.symbol == BCC_SYMBOL)
        )
        bcc_asset = result.scalar_one_or_none()
        if bcc_asset is not None:
            bcc_asset.balance = bcc_asset.balance + credits
            bcc_asset.inr_value = bcc_asset.inr_value + inr_amount
        else:
            self.db.add(
                Asset(wallet_id=wallet.id, balance=credits, inr_value=inr_amount, **BCC_ASSET)
            )

        transaction = WalletTransaction(
            wallet_id=wallet.id,
            type=TransactionType.BUY.value,
            token=BCC_SYMBOL,
            amount=credits,
            inr_value=inr_amount,
            status=TransactionStatus.COMPLETED.value,
        )
        self.db.add(transaction)

        await commit_or_raise(self.db)
        await self.db.refresh(purchase)
        await self.db.refresh(transaction)

        credit_purchases_total.inc()
        credits_purchased_total.inc(credits)
        logger.info(
            f"User {caller.user_id} bought {credits} {BCC_SYMBOL} for INR {inr_amount} into {wallet.address}"
        )

        await self.broker.publish_event(
            "wallet.transaction",
            TransactionResponse.model_validate(transaction).model_dump(mode="json"),
            {wallet_topic(wallet.id)},
        )
        return purchase

"""Wallet and carbon credit purchase endpoints"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bluechain_mrv.api.dependencies import get_current_user
from bluechain_mrv.config import settings
from bluechain_mrv.database import get_db
from bluechain_mrv.schemas.wallet import (
    AssetResponse,
    CreateWalletResponse,
    MarketPriceResponse,
    PurchaseEnvelope,
    PurchaseRequest,
    PurchaseResponse,
    TransactionResponse,
    WalletResponse,
)
from bluechain_mrv.services.realtime_service import EventBroker, get_event_broker
from bluechain_mrv.services.role_gate import Caller
from bluechain_mrv.services.wallet_service import BCC_SYMBOL, WalletService

router = APIRouter(prefix="/api/v1", tags=["Wallet"])


@router.post(
    "/create-wallet",
    response_model=CreateWalletResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def create_wallet(
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Create the caller's wallet with default assets

    Returns the existing wallet (without `success`) if one already exists
    """
    wallet, created = await WalletService(db).create_wallet(caller)
    return CreateWalletResponse(
        success=True if created else None,
        wallet=WalletResponse.model_validate(wallet),
    )


@router.post("/purchase-credits", response_model=PurchaseEnvelope, status_code=status.HTTP_200_OK)
async def purchase_credits(
    payload: PurchaseRequest,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    broker: EventBroker = Depends(get_event_broker),
):
    """Buy BCC credits into the caller's wallet"""
    purchase = await WalletService(db, broker).purchase_credits(
        caller, payload.credits, payload.price_per_credit
    )
    return PurchaseEnvelope(success=True, purchase=PurchaseResponse.model_validate(purchase))


@router.get("/wallet", response_model=WalletResponse, status_code=status.HTTP_200_OK)
async def get_wallet(
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    wallet = await WalletService(db).get_wallet(caller)
    return WalletResponse.model_validate(wallet)


@router.get("/wallet/assets", response_model=List[AssetResponse], status_code=status.HTTP_200_OK)
async def get_wallet_assets(
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    assets = await WalletService(db).list_assets(caller)
    return [AssetResponse.model_validate(a) for a in assets]


@router.get(
    "/wallet/transactions",
    response_model=List[TransactionResponse],
    status_code=status.HTTP_200_OK,
)
async def get_wallet_transactions(
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Last 20 transactions, newest first"""
    transactions = await WalletService(db).list_transactions(caller)
    return [TransactionResponse.model_validate(t) for t in transactions]


@router.get("/purchases", response_model=List[PurchaseResponse], status_code=status.HTTP_200_OK)
async def list_purchases(
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    purchases = await WalletService(db).list_purchases(caller)
    return [PurchaseResponse.model_validate(p) for p in purchases]


@router.get("/market/price", response_model=MarketPriceResponse, status_code=status.HTTP_200_OK)
async def get_market_price():
    """Current BCC price in INR (no authentication required)"""
    return MarketPriceResponse(symbol=BCC_SYMBOL, price_inr=settings.bcc_price_inr)

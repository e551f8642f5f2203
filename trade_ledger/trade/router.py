"""
Trade API router.

The routes stay on the event loop so that every trade shares one set of actor
locks; the database work they await is pushed to the threadpool by the
adapters.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import (
    CurrencyLootResult,
    DistributionResult,
    LootAllResult,
    LootRequest,
    TradeBatchRequest,
    TradeOutcome,
    TransactionRequest,
)
from . import service

router = APIRouter(prefix="/trade", tags=["trade"])


@router.post("/batch", response_model=list[TradeOutcome])
async def trade_items(request: TradeBatchRequest, db: Session = Depends(get_db)):
    """
    Execute a staged trade between a player and an NPC.

    - **buy**: items the player buys from the NPC (NPC sell markup applies)
    - **sell**: items the player sells to the NPC (NPC buy markup applies)
    - **loot**: items the player takes for free
    - **give**: items the player hands over for free

    Each trade type succeeds or fails on its own.
    """
    return await service.trade_items(db, request.npc_id, request.player_id, request.trades)


@router.post("/transaction", response_model=TradeOutcome)
async def transaction(request: TransactionRequest, db: Session = Depends(get_db)):
    """Buy a single item stack from a seller at the seller's sell markup."""
    return await service.transaction(
        db,
        seller_id=request.seller_id,
        buyer_id=request.buyer_id,
        item_id=request.item_id,
        quantity=request.quantity,
    )


@router.post("/distribute/{source_id}", response_model=DistributionResult)
async def distribute_currency(source_id: int, db: Session = Depends(get_db)):
    """
    Split a character's coins evenly between the players in its zone.

    Coins that can't be split evenly are lost.
    """
    return await service.distribute_currency(db, source_id)


@router.post("/loot", response_model=CurrencyLootResult)
async def loot_currency(request: LootRequest, db: Session = Depends(get_db)):
    """Take all coins from the source."""
    return await service.loot_currency(db, request.source_id, request.destination_id)


@router.post("/loot-all", response_model=LootAllResult)
async def loot_all_items(request: LootRequest, db: Session = Depends(get_db)):
    """Take every lootable item and all coins from the source."""
    return await service.loot_all_items(db, request.source_id, request.destination_id)

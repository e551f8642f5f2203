"""Trade business logic wired to the database."""

from sqlalchemy.orm import Session

from .adapters import EventTradeReporter, SqlActorStore, SqlItemMover, ZoneRecipientResolver
from .locks import ActorLocks
from .orchestrator import TradeOrchestrator
from .schemas import (
    CurrencyLootResult,
    DistributionResult,
    LootAllResult,
    TradeBatch,
    TradeOutcome,
)
from ..config import settings

# Shared by every request so concurrent trades on one actor queue up
actor_locks = ActorLocks()


def get_orchestrator(db: Session) -> TradeOrchestrator:
    return TradeOrchestrator(
        store=SqlActorStore(db),
        mover=SqlItemMover(db),
        reporter=EventTradeReporter(db),
        recipients=ZoneRecipientResolver(db),
        settings=settings.ledger(),
        locks=actor_locks,
    )


async def trade_items(db: Session, npc_id: int, player_id: int, trades: TradeBatch) -> list[TradeOutcome]:
    return await get_orchestrator(db).trade_items(npc_id, player_id, trades)


async def transaction(
    db: Session,
    seller_id: int,
    buyer_id: int,
    item_id: int,
    quantity: int,
) -> TradeOutcome:
    return await get_orchestrator(db).transaction(seller_id, buyer_id, item_id, quantity)


async def distribute_currency(db: Session, source_id: int) -> DistributionResult:
    distribution = await get_orchestrator(db).distribute_currency(source_id)
    return DistributionResult(source_id=source_id, distribution=distribution)


async def loot_currency(db: Session, source_id: int, destination_id: int) -> CurrencyLootResult:
    return await get_orchestrator(db).loot_currency(source_id, destination_id)


async def loot_all_items(db: Session, source_id: int, destination_id: int) -> LootAllResult:
    return await get_orchestrator(db).loot_all_items(source_id, destination_id)

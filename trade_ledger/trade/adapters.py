"""
Database-backed collaborators for the trade orchestrator.

The session calls block, so each one runs in the threadpool and the event
loop that holds the actor locks stays free while the database works. A
collaborator never runs two calls on its session at the same time.
"""

import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from .schemas import TradeItem, TradeOutcome, TradeParty
from ..character.models import Character
from ..character.service import get_character
from ..core.enums import CharacterStatus, CharacterType, Denomination
from ..currency.converter import balance_from_raw
from ..currency.schemas import Currency, Distribution
from ..event import service as event_service
from ..inventory import service as inventory_service
from ..inventory.schemas import ItemMove

logger = logging.getLogger(__name__)


def character_to_party(character: Character) -> TradeParty:
    return TradeParty(
        id=character.id,
        name=character.name,
        currency=balance_from_raw({d.value: getattr(character, d.value) for d in Denomination}),
        items=[
            TradeItem(
                id=entry.id,
                name=entry.item.name,
                price=entry.item.price or 0.0,
                quantity=entry.quantity,
                lootable=bool(entry.item.lootable),
            )
            for entry in character.inventory_items
        ],
        price_modifier=character.price_modifier,
    )


class SqlActorStore:
    def __init__(self, db: Session):
        self.db = db

    def _load(self, actor_id: int) -> TradeParty:
        character = get_character(self.db, actor_id)
        self.db.refresh(character)
        return character_to_party(character)

    async def load(self, actor_id: int | str) -> TradeParty:
        return await run_in_threadpool(self._load, int(actor_id))

    def _save_currencies(self, balances: dict[int | str, Currency]) -> None:
        try:
            for actor_id, currency in balances.items():
                get_character(self.db, int(actor_id)).set_currency(currency)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug(f"Saved purses of characters {list(balances)}")

    async def save_currencies(self, balances: dict[int | str, Currency]) -> None:
        await run_in_threadpool(self._save_currencies, balances)


class SqlItemMover:
    def __init__(self, db: Session):
        self.db = db

    async def move_items(self, source: TradeParty, destination: TradeParty, items: list[TradeItem]) -> list[TradeItem]:
        prices = {item.id: item.price for item in items}
        moved = await run_in_threadpool(
            inventory_service.move_items,
            self.db,
            int(source.id),
            int(destination.id),
            [ItemMove(inventory_item_id=int(item.id), quantity=item.quantity) for item in items],
        )
        return [
            TradeItem(
                id=entry.source_inventory_item_id,
                name=entry.name,
                price=prices.get(entry.source_inventory_item_id, 0.0),
                quantity=entry.quantity,
            )
            for entry in moved
        ]


class ZoneRecipientResolver:
    """Living player characters standing in the same zone as the source."""

    def __init__(self, db: Session):
        self.db = db

    def _players_beside(self, source_id: int) -> list[int | str]:
        character = get_character(self.db, source_id)
        if character.zone_id is None:
            return []
        players = self.db.query(Character).filter(
            Character.zone_id == character.zone_id,
            Character.character_type == CharacterType.PLAYER,
            Character.status == CharacterStatus.ALIVE,
            Character.id != character.id,
        ).order_by(Character.id).all()
        return [player.id for player in players]

    async def get_eligible_recipients(self, source: TradeParty) -> list[int | str]:
        return await run_in_threadpool(self._players_beside, int(source.id))


class EventTradeReporter:
    """Records every trade outcome as a game event."""

    def __init__(self, db: Session):
        self.db = db

    async def report_trade(self, outcome: TradeOutcome) -> None:
        await run_in_threadpool(
            event_service.log_trade,
            self.db,
            character_id=int(outcome.destination_id),
            counterparty_id=int(outcome.source_id),
            cost_gp=outcome.cost_gp,
            description=outcome.message,
            data={
                "trade_type": outcome.trade_type.value,
                "cost_gp": outcome.cost_gp,
                "price_modifier": outcome.price_modifier,
                "items": [item.model_dump() for item in outcome.items],
            },
        )

    async def report_insufficient_funds(self, actor: TradeParty, message: str) -> None:
        await run_in_threadpool(
            event_service.log_insufficient_funds,
            self.db,
            character_id=int(actor.id),
            message=message,
            data={"currency": actor.currency.as_dict()},
        )

    async def report_distribution(self, source: TradeParty, distribution: Distribution) -> None:
        await run_in_threadpool(
            event_service.log_currency_distributed,
            self.db,
            source_id=int(source.id),
            data={
                "share": distribution.share.as_dict(),
                "remainder": distribution.remainder.as_dict(),
                "recipients": list(distribution.recipient_ids),
            },
        )

    async def report_currency_looted(self, source: TradeParty, destination: TradeParty, moved: Currency) -> None:
        await run_in_threadpool(
            event_service.log_currency_looted,
            self.db,
            source_id=int(source.id),
            destination_id=int(destination.id),
            data={"moved": moved.as_dict()},
        )

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .models import GameEvent
from .schemas import EventCreate
from ..core.enums import EventType
from ..core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def create_event(db: Session, event_data: EventCreate) -> GameEvent:
    event = GameEvent(**event_data.model_dump())
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.debug(f"Logged {event.event_type.value} event {event.id} for character {event.character_id}")
    return event


def get_event(db: Session, event_id: int) -> GameEvent:
    event = db.query(GameEvent).filter(GameEvent.id == event_id).first()
    if not event:
        raise NotFoundError("Event", event_id)
    return event


def get_events(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    event_type: EventType | None = None,
    character_id: int | None = None,
) -> list[GameEvent]:
    """Newest first. `character_id` matches either side of a trade."""
    query = db.query(GameEvent)
    if event_type:
        query = query.filter(GameEvent.event_type == event_type)
    if character_id is not None:
        query = query.filter(or_(
            GameEvent.character_id == character_id,
            GameEvent.counterparty_id == character_id,
        ))
    return query.order_by(GameEvent.id.desc()).offset(skip).limit(limit).all()


# One helper per kind of ledger entry
def log_trade(
    db: Session,
    character_id: int,
    counterparty_id: int,
    cost_gp: float,
    description: str,
    data: dict[str, Any],
) -> GameEvent:
    return create_event(db, EventCreate(
        event_type=EventType.TRADE,
        character_id=character_id,
        counterparty_id=counterparty_id,
        cost_gp=cost_gp or None,
        description=description[:500],
        data=data,
    ))


def log_insufficient_funds(db: Session, character_id: int, message: str, data: dict[str, Any]) -> GameEvent:
    return create_event(db, EventCreate(
        event_type=EventType.INSUFFICIENT_FUNDS,
        character_id=character_id,
        description=message[:500],
        data=data,
    ))


def log_currency_distributed(db: Session, source_id: int, data: dict[str, Any]) -> GameEvent:
    recipients = data.get("recipients", [])
    return create_event(db, EventCreate(
        event_type=EventType.CURRENCY_DISTRIBUTED,
        character_id=source_id,
        description=f"Split the purse of character {source_id} between {len(recipients)} players",
        data=data,
    ))


def log_currency_looted(db: Session, source_id: int, destination_id: int, data: dict[str, Any]) -> GameEvent:
    return create_event(db, EventCreate(
        event_type=EventType.CURRENCY_LOOTED,
        character_id=destination_id,
        counterparty_id=source_id,
        description=f"Looted the purse of character {source_id}",
        data=data,
    ))

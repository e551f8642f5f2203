from datetime import datetime

from sqlalchemy import Column, Integer, Float, String, DateTime, Enum, JSON, ForeignKey

from ..database import Base
from ..core.enums import EventType


class GameEvent(Base):
    """One line of the trade log."""

    __tablename__ = "game_events"

    id = Column(Integer, primary_key=True, index=True)
    event_type = Column(Enum(EventType), nullable=False, index=True)
    timestamp = Column(DateTime, default=datetime.utcnow, index=True)

    # Who acted (buyer, looter, splitting character) and who they dealt with
    character_id = Column(Integer, ForeignKey("characters.id"), nullable=True, index=True)
    counterparty_id = Column(Integer, nullable=True, index=True)

    # Gold that changed hands, NULL when nothing was charged
    cost_gp = Column(Float, nullable=True)

    description = Column(String(500), nullable=True)
    data = Column(JSON, default=dict)  # Items, purses, shares

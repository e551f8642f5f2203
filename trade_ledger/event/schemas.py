from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from ..core.enums import EventType


class EventCreate(BaseModel):
    event_type: EventType
    character_id: int | None = None
    counterparty_id: int | None = None
    cost_gp: float | None = Field(default=None, ge=0)
    description: str | None = Field(default=None, max_length=500)
    data: dict[str, Any] = Field(default_factory=dict)


class EventResponse(EventCreate):
    id: int
    timestamp: datetime

    class Config:
        from_attributes = True

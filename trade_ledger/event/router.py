from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..core.enums import EventType
from . import service
from .schemas import EventResponse

router = APIRouter(prefix="/events", tags=["events"])


@router.get("/", response_model=list[EventResponse])
def list_events(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    event_type: EventType | None = None,
    character_id: int | None = Query(None, description="Either side of the trade"),
    db: Session = Depends(get_db),
):
    """Trades, refused payments, splits and looted purses, newest first."""
    return service.get_events(db, skip, limit, event_type, character_id)


@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: int, db: Session = Depends(get_db)):
    return service.get_event(db, event_id)

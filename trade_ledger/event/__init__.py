from .router import router
from .models import GameEvent
from .schemas import EventCreate, EventResponse

__all__ = ["router", "GameEvent", "EventCreate", "EventResponse"]

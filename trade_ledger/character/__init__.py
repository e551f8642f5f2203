from .router import router
from .models import Character
from .schemas import (
    CharacterCreate,
    CharacterUpdate,
    CharacterResponse,
    CurrencyUpdate,
    Wealth,
)

__all__ = [
    "router",
    "Character",
    "CharacterCreate",
    "CharacterUpdate",
    "CharacterResponse",
    "CurrencyUpdate",
    "Wealth",
]

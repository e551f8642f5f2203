from .enums import (
    CharacterType,
    CharacterStatus,
    ItemType,
    Denomination,
    TradeType,
    SettlementMode,
    EventType,
)
from .exceptions import (
    GameException,
    NotFoundError,
    ValidationError,
    InventoryError,
    InsufficientFundsError,
)

__all__ = [
    "CharacterType",
    "CharacterStatus",
    "ItemType",
    "Denomination",
    "TradeType",
    "SettlementMode",
    "EventType",
    "GameException",
    "NotFoundError",
    "ValidationError",
    "InventoryError",
    "InsufficientFundsError",
]

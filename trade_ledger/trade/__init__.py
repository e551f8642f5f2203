from .router import router
from .orchestrator import TradeOrchestrator, prepare_trade, trade_sum
from .locks import ActorLocks
from .schemas import (
    TradeItem,
    TradeBatch,
    TradeParty,
    TradeOutcome,
    DroppedItem,
)

__all__ = [
    "router",
    "TradeOrchestrator",
    "prepare_trade",
    "trade_sum",
    "ActorLocks",
    "TradeItem",
    "TradeBatch",
    "TradeParty",
    "TradeOutcome",
    "DroppedItem",
]

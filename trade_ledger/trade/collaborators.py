"""
Interfaces the trade engine talks to.

The engine owns no actor state: it reads snapshots through an ActorStore,
hands new balances back to it, and leaves item movement, eligibility and
reporting to the collaborators below.
"""

from typing import Protocol

from .schemas import TradeItem, TradeOutcome, TradeParty
from ..currency.schemas import Currency, Distribution


class ActorStore(Protocol):
    async def load(self, actor_id: int | str) -> TradeParty:
        """Fresh snapshot of an actor: purse, held items and price modifier."""
        ...

    async def save_currencies(self, balances: dict[int | str, Currency]) -> None:
        """Persist several purses as one unit: either all of them are written or none."""
        ...


class ItemMover(Protocol):
    async def move_items(
        self,
        source: TradeParty,
        destination: TradeParty,
        items: list[TradeItem],
    ) -> list[TradeItem]:
        """Reassign all of the given stacks or none of them.

        Raises InventoryError when any stack can no longer be moved.
        """
        ...


class RecipientResolver(Protocol):
    async def get_eligible_recipients(self, source: TradeParty) -> list[int | str]:
        ...


class TradeReporter(Protocol):
    async def report_trade(self, outcome: TradeOutcome) -> None:
        ...

    async def report_insufficient_funds(self, actor: TradeParty, message: str) -> None:
        ...

    async def report_distribution(self, source: TradeParty, distribution: Distribution) -> None:
        ...

    async def report_currency_looted(self, source: TradeParty, destination: TradeParty, moved: Currency) -> None:
        ...

"""Trade request/response schemas."""

from typing import Iterator

from pydantic import BaseModel, Field

from ..core.enums import TradeType
from ..currency.schemas import Currency, Distribution, FundsTransfer, PriceModifier


class TradeItem(BaseModel):
    """An item stack being traded, or held by a party."""

    id: int | str = Field(..., description="Inventory entry of the party holding the item")
    name: str = ""
    price: float = Field(default=0.0, ge=0, description="Unit list price in gold")
    quantity: int = Field(default=1, ge=0)
    lootable: bool = True


class TradeBatch(BaseModel):
    """Items to trade, grouped by what the player does with them."""

    buy: list[TradeItem] = Field(default_factory=list)
    sell: list[TradeItem] = Field(default_factory=list)
    loot: list[TradeItem] = Field(default_factory=list)
    give: list[TradeItem] = Field(default_factory=list)

    def items_for(self, trade_type: TradeType) -> list[TradeItem]:
        return getattr(self, trade_type.value)

    def entries(self) -> Iterator[tuple[TradeType, list[TradeItem]]]:
        """Non-empty trade types in declaration order."""
        for trade_type in TradeType:
            items = self.items_for(trade_type)
            if items:
                yield trade_type, items


class TradeParty(BaseModel):
    """Snapshot of one side of a trade."""

    id: int | str
    name: str
    currency: Currency = Field(default_factory=Currency)
    items: list[TradeItem] = Field(default_factory=list)
    price_modifier: PriceModifier | None = None

    def held(self, item_id: int | str) -> TradeItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


class DroppedItem(BaseModel):
    item_id: int | str
    name: str = ""
    requested: int
    available: int
    reason: str


class TradeOutcome(BaseModel):
    trade_type: TradeType
    success: bool
    message: str
    source_id: int | str
    destination_id: int | str
    source_name: str = ""
    destination_name: str = ""
    cost_gp: float = 0.0
    price_modifier: int = 100
    items: list[TradeItem] = Field(default_factory=list, description="Items that were priced and moved")
    dropped: list[DroppedItem] = Field(default_factory=list)
    funds: FundsTransfer | None = None


class TradeBatchRequest(BaseModel):
    npc_id: int = Field(..., description="The merchant or container the player trades with")
    player_id: int = Field(..., description="The player character")
    trades: TradeBatch


class TransactionRequest(BaseModel):
    seller_id: int
    buyer_id: int
    item_id: int = Field(..., description="Inventory entry of the seller")
    quantity: int = Field(default=1, ge=0)


class LootRequest(BaseModel):
    source_id: int
    destination_id: int


class CurrencyLootResult(BaseModel):
    source_id: int | str
    destination_id: int | str
    moved: Currency
    destination_balance: Currency


class LootAllResult(BaseModel):
    items: TradeOutcome
    currency: CurrencyLootResult


class DistributionResult(BaseModel):
    source_id: int | str
    distribution: Distribution

from pydantic import BaseModel, Field, model_validator

from ..core.enums import Denomination, SettlementMode, TradeType

# Coin amounts stay ints once settled; floats only appear mid-calculation
Amount = int | float


class Currency(BaseModel):
    """A balance across the five coin tiers."""

    pp: Amount = 0
    gp: Amount = 0
    ep: Amount = 0
    sp: Amount = 0
    cp: Amount = 0

    class Config:
        frozen = True
        extra = "forbid"

    @classmethod
    def zero(cls) -> "Currency":
        return cls()

    def amount(self, denomination: Denomination) -> Amount:
        return getattr(self, denomination.value)

    def as_dict(self) -> dict[str, Amount]:
        return {d.value: self.amount(d) for d in Denomination}

    def replace(self, **amounts: Amount) -> "Currency":
        return self.model_copy(update=amounts)

    def plus(self, other: "Currency") -> "Currency":
        return Currency(**{d.value: self.amount(d) + other.amount(d) for d in Denomination})

    def is_empty(self) -> bool:
        return all(self.amount(d) == 0 for d in Denomination)

    def is_settled(self) -> bool:
        """True when every tier holds a non-negative whole number of coins."""
        return all(
            isinstance(self.amount(d), int) and self.amount(d) >= 0
            for d in Denomination
        )


class DenominationRates(BaseModel):
    """How many coins of each tier one gold piece is worth.

    Gold is the unit of account for prices, so its rate is fixed at 1.
    Platinum is the unit used to compare wealth and must be positive. A rate
    of 0 takes a tier out of circulation (some tables play without electrum).
    """

    pp: float = Field(default=0.1, gt=0)
    gp: float = Field(default=1.0, ge=1, le=1)
    ep: float = Field(default=2.0, ge=0)
    sp: float = Field(default=10.0, ge=0)
    cp: float = Field(default=100.0, ge=0)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_ordering(self) -> "DenominationRates":
        circulating = [getattr(self, d.value) for d in Denomination if getattr(self, d.value)]
        if circulating != sorted(circulating):
            raise ValueError("Each coin tier must be worth at least as much as the tier below it")
        return self

    def rate(self, denomination: Denomination) -> float:
        return getattr(self, denomination.value)

    def circulating(self) -> list[Denomination]:
        """Denominations in play, highest value first."""
        return [d for d in Denomination if self.rate(d) > 0]


class PriceModifier(BaseModel):
    """Merchant markup in whole percentages; 100 means list price."""

    buy: int = Field(default=100, ge=0)
    sell: int = Field(default=100, ge=0)

    class Config:
        frozen = True

    def for_trade(self, trade_type: TradeType) -> int:
        # The merchant's own action is the opposite of the player's
        if trade_type == TradeType.SELL:
            return self.buy
        return self.sell


class LedgerSettings(BaseModel):
    """Read-only configuration handed to the engine for one call."""

    rates: DenominationRates = Field(default_factory=DenominationRates)
    settlement_mode: SettlementMode = SettlementMode.DIRECT_DENOMINATION
    default_price_modifier: PriceModifier = Field(default_factory=PriceModifier)

    class Config:
        frozen = True


class FundsTransfer(BaseModel):
    """Both balances after a committed payment. Apply both or neither."""

    payer_balance: Currency
    payee_balance: Currency
    cost: Currency
    settled_in: Denomination | None = None
    settlement_mode: SettlementMode


class Distribution(BaseModel):
    share: Currency
    remainder: Currency
    source_balance: Currency
    recipient_ids: list[int | str] = Field(default_factory=list)
    distributed: bool = True

    def apply_share(self, balance: Currency) -> Currency:
        return balance.plus(self.share)

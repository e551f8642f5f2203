from .schemas import PriceModifier
from ..core.enums import TradeType

# Prices are rounded so repeated sums don't drift
PRICE_PRECISION = 5


def price_in_gold(base_price: float, modifier_percent: float = 100, quantity: float = 1) -> float:
    """Cost in gold of `quantity` units at `base_price` with a percentage markup."""
    return round((base_price * modifier_percent / 100) * quantity, PRICE_PRECISION)


def effective_modifier(modifier: PriceModifier | None, trade_type: TradeType) -> int:
    """Markup that applies to the player's side of a trade.

    Free trades (loot, give) still resolve a modifier so the reported value of
    the goods is consistent; it just never gets charged.
    """
    return (modifier or PriceModifier()).for_trade(trade_type)

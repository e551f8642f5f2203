from .schemas import (
    Currency,
    DenominationRates,
    PriceModifier,
    LedgerSettings,
    FundsTransfer,
    Distribution,
)
from .converter import (
    to_reference_unit,
    from_reference_unit,
    cost_vector,
    smoothen,
    balance_from_raw,
)
from .pricing import price_in_gold, effective_modifier
from .transfer import transfer, can_afford
from .distribution import distribute, shares_and_remainder

__all__ = [
    "Currency",
    "DenominationRates",
    "PriceModifier",
    "LedgerSettings",
    "FundsTransfer",
    "Distribution",
    "to_reference_unit",
    "from_reference_unit",
    "cost_vector",
    "smoothen",
    "balance_from_raw",
    "price_in_gold",
    "effective_modifier",
    "transfer",
    "can_afford",
    "distribute",
    "shares_and_remainder",
]

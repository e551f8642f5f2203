"""Denomination arithmetic: platinum equivalents, cost vectors and smoothing."""

import logging
import math
from typing import Any, Mapping

from .schemas import Currency, DenominationRates
from ..core.enums import Denomination
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Decimal places kept while cascading fractions between tiers
PRECISION = 5


def to_reference_unit(balance: Currency, rates: DenominationRates) -> float:
    """Total value of a balance expressed in platinum pieces. Never rounded."""
    platinum = float(balance.pp)
    for denomination in rates.circulating():
        if denomination == Denomination.PLATINUM:
            continue
        platinum += balance.amount(denomination) / rates.rate(denomination) * rates.pp
    return platinum


def from_reference_unit(platinum: float) -> Currency:
    """Collapse a platinum amount into an all-platinum balance."""
    return Currency(pp=platinum)


def cost_vector(cost_gp: float, rates: DenominationRates) -> Currency:
    """The same cost expressed in each denomination (alternatives, not a sum)."""
    return Currency(**{d.value: cost_gp * rates.rate(d) for d in Denomination})


def smoothen(balance: Currency, rates: DenominationRates) -> Currency:
    """
    Turn a balance with fractional entries into whole coins.

    Walks the circulating tiers from platinum down. Each tier keeps its whole
    coins and hands its fractional part to the next lower tier, converted at
    the ratio between the two rates, before that tier is processed. Negative
    amounts are clamped to zero. Whatever fraction copper is left with is
    truncated.
    """
    amounts = balance.as_dict()
    circulating = rates.circulating()
    carry = 0.0

    for index, denomination in enumerate(circulating):
        value = round(amounts[denomination.value] + carry, PRECISION)
        if value <= 0:
            whole, fraction = 0, 0.0
        else:
            whole = math.floor(value)
            fraction = round(value - whole, PRECISION)
        amounts[denomination.value] = whole

        carry = 0.0
        if index + 1 < len(circulating) and fraction:
            lower = circulating[index + 1]
            carry = fraction * rates.rate(lower) / rates.rate(denomination)

    # Tiers out of circulation keep their own whole coins
    for denomination in Denomination:
        if denomination not in circulating:
            amounts[denomination.value] = max(0, math.floor(round(amounts[denomination.value], PRECISION)))

    smoothed = Currency(**amounts)
    logger.debug(f"Smoothed {balance.as_dict()} into {smoothed.as_dict()}")
    return smoothed


def balance_from_raw(raw: Mapping[str, Any] | None) -> Currency:
    """Validate currency data coming from an actor sheet.

    Missing or empty entries count as zero and numeric strings are parsed.
    Unknown denominations and negative amounts are rejected.
    """
    if raw is None:
        return Currency.zero()

    known = {d.value for d in Denomination}
    unknown = set(raw) - known
    if unknown:
        raise ValidationError(f"Unknown denominations: {', '.join(sorted(unknown))}")

    amounts: dict[str, int | float] = {}
    for key, value in raw.items():
        if value is None or value == "":
            amounts[key] = 0
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid amount for {key}: {value!r}")
        if math.isnan(number) or math.isinf(number) or number < 0:
            raise ValidationError(f"Invalid amount for {key}: {value!r}")
        amounts[key] = int(number) if number.is_integer() else number

    return Currency(**amounts)

"""Moves money between two balances once the payer is known to afford it."""

import logging

from .converter import cost_vector, from_reference_unit, smoothen, to_reference_unit
from .schemas import Currency, DenominationRates, FundsTransfer
from ..core.enums import Denomination, SettlementMode
from ..core.exceptions import InsufficientFundsError

logger = logging.getLogger(__name__)

# Tolerance for float noise when comparing platinum totals
AFFORDABILITY_EPSILON = 1e-9


def can_afford(payer: Currency, cost_gp: float, rates: DenominationRates) -> bool:
    cost = cost_vector(cost_gp, rates)
    return cost.pp - to_reference_unit(payer, rates) <= AFFORDABILITY_EPSILON


def transfer(
    payer: Currency,
    payee: Currency,
    cost_gp: float,
    rates: DenominationRates,
    settlement_mode: SettlementMode = SettlementMode.DIRECT_DENOMINATION,
    payer_id: int | str = "payer",
    payer_name: str | None = None,
) -> FundsTransfer:
    """
    Pay `cost_gp` gold from `payer` to `payee`.

    Raises InsufficientFundsError when the payer's platinum-equivalent wealth
    is below the cost. Inputs are immutable, so a rejected payment leaves both
    balances exactly as they were.

    In direct-denomination mode the cost is paid in gold when the payer holds
    enough gold coins, otherwise in platinum. The two are never combined: a
    payer who can afford the cost only through lower tiers ends up with a
    negative platinum entry, which smoothing clamps to zero.
    """
    cost = cost_vector(cost_gp, rates)
    payer_platinum = to_reference_unit(payer, rates)
    payee_platinum = to_reference_unit(payee, rates)

    if cost.pp - payer_platinum > AFFORDABILITY_EPSILON:
        shortfall_gp = round((cost.pp - payer_platinum) / rates.pp, 5)
        logger.warning(
            f"{payer_name or payer_id} cannot pay {cost_gp}gp: "
            f"has {payer_platinum}pp, needs {cost.pp}pp"
        )
        raise InsufficientFundsError(payer_id, cost_gp, shortfall_gp, actor_name=payer_name)

    if settlement_mode == SettlementMode.CONVERT_TO_REFERENCE:
        payer_after = from_reference_unit(payer_platinum - cost.pp)
        payee_after = from_reference_unit(payee_platinum + cost.pp)
        settled_in = Denomination.PLATINUM
    elif settlement_mode == SettlementMode.DIRECT_DENOMINATION:
        settled_in = Denomination.GOLD if payer.gp >= cost.gp else Denomination.PLATINUM
        paid = cost.amount(settled_in)
        payer_after = payer.replace(**{settled_in.value: payer.amount(settled_in) - paid})
        payee_after = payee.replace(**{settled_in.value: payee.amount(settled_in) + paid})
    else:
        raise ValueError(f"Unknown settlement mode: {settlement_mode}")

    result = FundsTransfer(
        payer_balance=smoothen(payer_after, rates),
        payee_balance=smoothen(payee_after, rates),
        cost=cost,
        settled_in=settled_in,
        settlement_mode=settlement_mode,
    )
    logger.debug(
        f"Transferred {cost_gp}gp in {settled_in.value}: "
        f"payer {result.payer_balance.as_dict()}, payee {result.payee_balance.as_dict()}"
    )
    return result

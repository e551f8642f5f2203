import logging
import math
from typing import Sequence

from .schemas import Currency, Distribution
from ..core.enums import Denomination

logger = logging.getLogger(__name__)


def shares_and_remainder(balance: Currency, recipients: int) -> tuple[Currency, Currency]:
    """Split each denomination into `recipients` equal whole shares."""
    if recipients <= 0:
        return Currency.zero(), balance

    share: dict[str, int] = {}
    remainder: dict[str, int | float] = {}
    for denomination in Denomination:
        amount = balance.amount(denomination)
        share[denomination.value] = math.floor(amount / recipients)
        remainder[denomination.value] = amount - share[denomination.value] * recipients
    return Currency(**share), Currency(**remainder)


def distribute(source: Currency, recipient_ids: Sequence[int | str]) -> Distribution:
    """
    Split a whole balance between the given recipients.

    Every recipient gets the same share. The source always ends up empty, so
    whatever could not be divided evenly is discarded. With no recipients
    nothing happens and the source keeps its balance.
    """
    if not recipient_ids:
        logger.info("No eligible recipients, currency stays with the source")
        return Distribution(
            share=Currency.zero(),
            remainder=source,
            source_balance=source,
            recipient_ids=[],
            distributed=False,
        )

    share, remainder = shares_and_remainder(source, len(recipient_ids))
    if not remainder.is_empty():
        logger.info(f"Discarding undivided remainder {remainder.as_dict()}")

    return Distribution(
        share=share,
        remainder=remainder,
        source_balance=Currency.zero(),
        recipient_ids=list(recipient_ids),
    )

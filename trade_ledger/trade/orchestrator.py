"""
Trade orchestration between a player character and an NPC.

| Trade type | Items move      | Who pays         |
| ---------- | --------------- | ---------------- |
| buy        | NPC -> player   | player pays NPC  |
| sell       | player -> NPC   | NPC pays player  |
| loot       | NPC -> player   | free             |
| give       | player -> NPC   | free             |

Every trade type in a batch is resolved on its own: funds are checked and
persisted first, only then are the items moved. A buyer who can't pay stops
that trade type and nothing else. If the items can no longer be handed over,
both purses are put back as they were before the payment.
"""

import logging

from .collaborators import ActorStore, ItemMover, RecipientResolver, TradeReporter
from .locks import ActorLocks
from .schemas import (
    CurrencyLootResult,
    DroppedItem,
    LootAllResult,
    TradeBatch,
    TradeItem,
    TradeOutcome,
    TradeParty,
)
from ..core.enums import TradeType
from ..core.exceptions import InsufficientFundsError, InventoryError, ValidationError
from ..currency.distribution import distribute
from ..currency.pricing import PRICE_PRECISION, effective_modifier, price_in_gold
from ..currency.schemas import Currency, Distribution, FundsTransfer, LedgerSettings
from ..currency.transfer import transfer

logger = logging.getLogger(__name__)


def prepare_trade(source: TradeParty, requested: list[TradeItem]) -> tuple[list[TradeItem], list[DroppedItem]]:
    """
    Check the requested items against what the source still holds.

    Quantities are clamped to the stock left (a stack requested twice shares
    the same stock). Items the source no longer has, or has none of, are
    dropped and reported back; the rest of the trade goes ahead.
    """
    remaining = {item.id: item.quantity for item in source.items}
    items: list[TradeItem] = []
    dropped: list[DroppedItem] = []

    for request in requested:
        held = source.held(request.id)
        if held is None:
            logger.warning(
                f"Removed item '{request.name}' (id: {request.id}) from trade: "
                f"not in the inventory of {source.name}"
            )
            dropped.append(DroppedItem(
                item_id=request.id,
                name=request.name,
                requested=request.quantity,
                available=0,
                reason="not in inventory",
            ))
            continue

        available = remaining[held.id]
        quantity = min(request.quantity, available)
        if quantity <= 0:
            logger.warning(f"Removed item '{held.name}' (id: {held.id}) from trade: nothing left to trade")
            dropped.append(DroppedItem(
                item_id=held.id,
                name=held.name,
                requested=request.quantity,
                available=available,
                reason="no quantity available",
            ))
            continue

        if quantity < request.quantity:
            logger.warning(
                f"Clamped '{held.name}' (id: {held.id}) from {request.quantity} to {quantity}: "
                f"{source.name} only holds {available}"
            )
        remaining[held.id] = available - quantity
        # Price and name come from the holder, not from the request
        items.append(held.model_copy(update={"quantity": quantity}))

    return items, dropped


def trade_sum(items: list[TradeItem], modifier_percent: int) -> float:
    total = sum(price_in_gold(item.price, modifier_percent, item.quantity) for item in items)
    return round(total, PRICE_PRECISION)


class TradeOrchestrator:
    """Runs trades, single purchases, looting and purse splitting."""

    def __init__(
        self,
        store: ActorStore,
        mover: ItemMover,
        reporter: TradeReporter,
        recipients: RecipientResolver,
        settings: LedgerSettings | None = None,
        locks: ActorLocks | None = None,
    ):
        self.store = store
        self.mover = mover
        self.reporter = reporter
        self.recipients = recipients
        self.settings = settings or LedgerSettings()
        self.locks = locks or ActorLocks()

    @staticmethod
    def _check_parties(source_id: int | str, destination_id: int | str) -> None:
        # Both sides would write to the same purse and the last write would win
        if str(source_id) == str(destination_id):
            raise ValidationError(f"A character can't trade with itself (id: {source_id})")

    async def trade_items(self, npc_id: int | str, player_id: int | str, trades: TradeBatch) -> list[TradeOutcome]:
        """Resolve every non-empty trade type of a batch, one after another."""
        self._check_parties(npc_id, player_id)
        outcomes = []
        for trade_type, items in trades.entries():
            outcomes.append(await self._handle_trade_by_type(trade_type, npc_id, player_id, items))
        return outcomes

    async def _handle_trade_by_type(
        self,
        trade_type: TradeType,
        npc_id: int | str,
        player_id: int | str,
        requested: list[TradeItem],
    ) -> TradeOutcome:
        if trade_type.player_to_npc:
            source_id, destination_id = player_id, npc_id
        else:
            source_id, destination_id = npc_id, player_id

        async with self.locks.hold(source_id, destination_id):
            source = await self.store.load(source_id)
            destination = await self.store.load(destination_id)
            npc = source if source_id == npc_id else destination

            modifier = effective_modifier(
                npc.price_modifier or self.settings.default_price_modifier,
                trade_type,
            )
            items, dropped = prepare_trade(source, requested)
            cost_gp = trade_sum(items, modifier)

            outcome = TradeOutcome(
                trade_type=trade_type,
                success=False,
                message="",
                source_id=source.id,
                destination_id=destination.id,
                source_name=source.name,
                destination_name=destination.name,
                cost_gp=0.0 if trade_type.is_free else cost_gp,
                price_modifier=modifier,
                dropped=dropped,
            )

            if not items:
                outcome.message = f"{source.name} has none of the requested items anymore."
                logger.info(f"{trade_type.value}: nothing left to trade between {source.name} and {destination.name}")
                return outcome

            if not trade_type.is_free:
                funds = await self._pay(payer=destination, payee=source, cost_gp=cost_gp)
                if funds is None:
                    outcome.message = f"{destination.name} doesn't have enough funds to pay {cost_gp}gp."
                    return outcome
                outcome.funds = funds

            if not await self._hand_over(outcome, source, destination, items):
                return outcome

        outcome.success = True
        outcome.message = self._describe(outcome)
        logger.info(outcome.message)
        await self.reporter.report_trade(outcome)
        return outcome

    async def _pay(self, payer: TradeParty, payee: TradeParty, cost_gp: float) -> FundsTransfer | None:
        """Transfer and persist funds. Returns None when the payer can't afford it."""
        try:
            funds = transfer(
                payer.currency,
                payee.currency,
                cost_gp,
                self.settings.rates,
                self.settings.settlement_mode,
                payer_id=payer.id,
                payer_name=payer.name,
            )
        except InsufficientFundsError as error:
            await self.reporter.report_insufficient_funds(payer, error.detail)
            return None

        await self.store.save_currencies({
            payee.id: funds.payee_balance,
            payer.id: funds.payer_balance,
        })
        return funds

    async def _hand_over(
        self,
        outcome: TradeOutcome,
        source: TradeParty,
        destination: TradeParty,
        items: list[TradeItem],
    ) -> bool:
        """Move the items; if that fails, undo the payment recorded on the outcome."""
        try:
            outcome.items = await self.mover.move_items(source, destination, items)
        except InventoryError as error:
            if outcome.funds is not None:
                # Both snapshots were taken under the lock, so nothing else changed them
                await self.store.save_currencies({
                    source.id: source.currency,
                    destination.id: destination.currency,
                })
                outcome.funds = None
            outcome.message = f"{source.name} couldn't hand over the items: {error.detail}"
            logger.warning(f"{outcome.message} (payment refunded)")
            return False
        return True

    @staticmethod
    def _describe(outcome: TradeOutcome) -> str:
        goods = ", ".join(f"{item.quantity}x {item.name or item.id}" for item in outcome.items) or "nothing"
        if outcome.trade_type.is_free:
            return f"{outcome.destination_name} received {goods} from {outcome.source_name}."
        return (
            f"{outcome.destination_name} paid {outcome.cost_gp}gp to {outcome.source_name} "
            f"for {goods}."
        )

    async def transaction(
        self,
        seller_id: int | str,
        buyer_id: int | str,
        item_id: int | str,
        quantity: int,
    ) -> TradeOutcome:
        """Buy a single stack straight from the seller at the seller's sell markup."""
        self._check_parties(seller_id, buyer_id)

        async with self.locks.hold(seller_id, buyer_id):
            seller = await self.store.load(seller_id)
            buyer = await self.store.load(buyer_id)
            modifier = effective_modifier(
                seller.price_modifier or self.settings.default_price_modifier,
                TradeType.BUY,
            )

            outcome = TradeOutcome(
                trade_type=TradeType.BUY,
                success=False,
                message="",
                source_id=seller.id,
                destination_id=buyer.id,
                source_name=seller.name,
                destination_name=buyer.name,
                price_modifier=modifier,
            )

            sold_item = seller.held(item_id)
            if sold_item is None:
                outcome.message = f"{seller.name} doesn't possess this item anymore."
                outcome.dropped = [DroppedItem(
                    item_id=item_id,
                    requested=quantity,
                    available=0,
                    reason="not in inventory",
                )]
                logger.warning(outcome.message)
                return outcome

            quantity = min(quantity, sold_item.quantity)
            if quantity <= 0:
                outcome.message = f"Nothing to buy: {seller.name} has no {sold_item.name} left."
                return outcome

            item = sold_item.model_copy(update={"quantity": quantity})
            outcome.cost_gp = price_in_gold(item.price, modifier, quantity)
            logger.info(f"{seller.name} is selling {item.name} for {outcome.cost_gp} gold")

            funds = await self._pay(payer=buyer, payee=seller, cost_gp=outcome.cost_gp)
            if funds is None:
                outcome.message = f"{buyer.name} doesn't have enough funds to pay {outcome.cost_gp}gp."
                return outcome
            outcome.funds = funds

            if not await self._hand_over(outcome, seller, buyer, [item]):
                return outcome

        outcome.success = True
        outcome.message = self._describe(outcome)
        await self.reporter.report_trade(outcome)
        return outcome

    async def distribute_currency(self, source_id: int | str) -> Distribution:
        """Split the source's whole purse evenly between the eligible players."""
        source = await self.store.load(source_id)
        recipient_ids = [
            recipient_id
            for recipient_id in await self.recipients.get_eligible_recipients(source)
            if str(recipient_id) != str(source_id)
        ]

        async with self.locks.hold(source_id, *recipient_ids):
            source = await self.store.load(source_id)
            distribution = distribute(source.currency, recipient_ids)
            logger.debug(
                f"distributeCurrency | source {source.name} | recipients {recipient_ids} | "
                f"share {distribution.share.as_dict()} | remainder {distribution.remainder.as_dict()}"
            )
            if not distribution.distributed:
                return distribution

            balances = {}
            for recipient_id in recipient_ids:
                recipient = await self.store.load(recipient_id)
                balances[recipient.id] = distribution.apply_share(recipient.currency)
            balances[source.id] = distribution.source_balance
            await self.store.save_currencies(balances)

        logger.info(f"Split the purse of {source.name} between {len(recipient_ids)} recipients")
        await self.reporter.report_distribution(source, distribution)
        return distribution

    async def loot_currency(self, source_id: int | str, destination_id: int | str) -> CurrencyLootResult:
        """Move the source's whole purse onto the destination's."""
        self._check_parties(source_id, destination_id)

        async with self.locks.hold(source_id, destination_id):
            source = await self.store.load(source_id)
            destination = await self.store.load(destination_id)
            moved = source.currency
            destination_balance = destination.currency.plus(moved)

            await self.store.save_currencies({
                destination.id: destination_balance,
                source.id: Currency.zero(),
            })

        logger.info(f"{destination.name} looted {moved.as_dict()} from {source.name}")
        await self.reporter.report_currency_looted(source, destination, moved)
        return CurrencyLootResult(
            source_id=source.id,
            destination_id=destination.id,
            moved=moved,
            destination_balance=destination_balance,
        )

    async def loot_all_items(self, source_id: int | str, destination_id: int | str) -> LootAllResult:
        """Take every lootable item and all the coins from the source."""
        self._check_parties(source_id, destination_id)

        source = await self.store.load(source_id)
        lootable = [item for item in source.items if item.lootable and item.quantity > 0]

        batch = TradeBatch(loot=lootable)
        if lootable:
            items_outcome = (await self.trade_items(source_id, destination_id, batch))[0]
        else:
            destination = await self.store.load(destination_id)
            items_outcome = TradeOutcome(
                trade_type=TradeType.LOOT,
                success=True,
                message=f"{source.name} has nothing worth looting.",
                source_id=source.id,
                destination_id=destination.id,
                source_name=source.name,
                destination_name=destination.name,
            )

        currency_outcome = await self.loot_currency(source_id, destination_id)
        return LootAllResult(items=items_outcome, currency=currency_outcome)

import pytest

from trade_ledger.core.enums import Denomination, SettlementMode
from trade_ledger.core.exceptions import InsufficientFundsError
from trade_ledger.currency import Currency, DenominationRates, can_afford, to_reference_unit, transfer

RATES = DenominationRates()
ONE_COPPER_IN_PLATINUM = 0.001


def assert_value_conserved(payer_before, payee_before, result):
    paid = to_reference_unit(payer_before, RATES) - to_reference_unit(result.payer_balance, RATES)
    received = to_reference_unit(result.payee_balance, RATES) - to_reference_unit(payee_before, RATES)
    assert abs(paid - received) <= ONE_COPPER_IN_PLATINUM


class TestDirectDenomination:
    def test_pays_in_gold_when_buyer_has_the_gold(self):
        buyer = Currency(gp=5, pp=0)
        seller = Currency(gp=0)

        result = transfer(buyer, seller, 3, RATES)

        assert result.payer_balance == Currency(gp=2)
        assert result.payee_balance == Currency(gp=3)
        assert result.settled_in == Denomination.GOLD
        assert_value_conserved(buyer, seller, result)

    def test_falls_back_to_platinum(self):
        buyer = Currency(pp=1, gp=2)
        seller = Currency()

        result = transfer(buyer, seller, 5, RATES)

        assert result.settled_in == Denomination.PLATINUM
        # Half a platinum left over is broken into gold
        assert result.payer_balance == Currency(gp=7)
        assert result.payee_balance == Currency(gp=5)
        assert_value_conserved(buyer, seller, result)

    def test_fractional_price_is_paid_in_smaller_coins(self):
        buyer = Currency(gp=3)
        seller = Currency(gp=1)

        result = transfer(buyer, seller, 1.25, RATES)

        assert result.payer_balance == Currency(gp=1, ep=1, sp=2, cp=5)
        assert result.payee_balance == Currency(gp=2, sp=2, cp=5)
        assert result.payer_balance.is_settled()
        assert result.payee_balance.is_settled()
        assert_value_conserved(buyer, seller, result)

    def test_does_not_combine_denominations(self):
        # Affordable only through silver: platinum goes negative and is clamped
        buyer = Currency(sp=100)
        seller = Currency()

        result = transfer(buyer, seller, 5, RATES)

        assert result.settled_in == Denomination.PLATINUM
        assert result.payer_balance == Currency(sp=100)
        assert result.payee_balance == Currency(gp=5)

    def test_exact_funds_are_enough(self):
        result = transfer(Currency(gp=3), Currency(), 3, RATES)
        assert result.payer_balance == Currency()
        assert result.payee_balance == Currency(gp=3)


class TestInsufficientFunds:
    def test_empty_purse_cannot_pay(self):
        buyer = Currency(gp=0, pp=0)
        seller = Currency(gp=4)

        with pytest.raises(InsufficientFundsError) as exc_info:
            transfer(buyer, seller, 1, RATES, payer_id=7, payer_name="Pauper")

        error = exc_info.value
        assert error.status_code == 402
        assert error.actor_id == 7
        assert error.cost_gp == 1
        assert error.shortfall_gp == 1
        assert "Pauper" in error.detail
        # Inputs are untouched
        assert buyer == Currency()
        assert seller == Currency(gp=4)

    def test_shortfall_counts_every_coin(self):
        with pytest.raises(InsufficientFundsError) as exc_info:
            transfer(Currency(gp=1, sp=5), Currency(), 2, RATES)
        assert exc_info.value.shortfall_gp == 0.5

    def test_can_afford(self):
        assert can_afford(Currency(pp=1), 10, RATES)
        assert not can_afford(Currency(pp=1), 10.01, RATES)


class TestConvertToReference:
    def test_collapses_purses_into_platinum(self):
        buyer = Currency(gp=5, sp=5)
        seller = Currency(pp=1)

        result = transfer(buyer, seller, 3, RATES, SettlementMode.CONVERT_TO_REFERENCE)

        assert result.settlement_mode == SettlementMode.CONVERT_TO_REFERENCE
        # 0.25pp left: whole platinum stays platinum, the rest becomes coins below
        assert result.payer_balance == Currency(gp=2, ep=1)
        assert result.payee_balance == Currency(pp=1, gp=3)
        assert_value_conserved(buyer, seller, result)

    def test_whole_platinum_purses_stay_platinum(self):
        result = transfer(Currency(gp=30), Currency(sp=100), 10, RATES, SettlementMode.CONVERT_TO_REFERENCE)
        assert result.payer_balance == Currency(pp=2)
        assert result.payee_balance == Currency(pp=2)

    def test_still_rejects_when_short(self):
        with pytest.raises(InsufficientFundsError):
            transfer(Currency(gp=1), Currency(), 2, RATES, SettlementMode.CONVERT_TO_REFERENCE)

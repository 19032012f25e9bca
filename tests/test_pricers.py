"""
Unit tests for the bond futures pricing engine.
"""

from datetime import date, timedelta
from decimal import Decimal
import pytest

from bondfutures.config import PricingConfig
from bondfutures.conventions import round_half_up
from bondfutures.dates import FixedClock
from bondfutures.exceptions import InvalidScheduleError
from bondfutures.instruments import Bond, CashFlow, Future
from bondfutures.pricers import (
    FuturePricer,
    price_bond_future,
    calculate_tick_value,
    calculate_contract_multiplier,
)


TODAY = date(2024, 6, 1)


class BrokenScheduleBond(Bond):
    """Bond whose current coupon period cannot be measured."""

    def accrued_interest(self, today):
        raise InvalidScheduleError("coupon period spans 0 days")


@pytest.fixture
def pricer():
    """Pricer pinned to a fixed valuation date."""
    return FuturePricer(PricingConfig.default(), FixedClock(TODAY))


@pytest.fixture
def flat_bond():
    """Bond at 100 with no coupons."""
    return Bond(underlying_price=Decimal("100"))


@pytest.fixture
def coupon_bond():
    """Bond 50 days into a 90-day coupon period with two coupons ahead."""
    return Bond(
        symbol="OAT-2026",
        nominal=Decimal("100"),
        coupon_amount=Decimal("2.5"),
        underlying_price=Decimal("101.25"),
        future_coupons=(
            CashFlow(TODAY - timedelta(days=50), Decimal("2.5")),
            CashFlow(TODAY + timedelta(days=40), Decimal("2.5")),
            CashFlow(TODAY + timedelta(days=222), Decimal("2.5")),
        ),
    )


class TestTheoreticalPrice:
    """Tests for theoretical price."""

    def test_zero_horizon_price(self, pricer, flat_bond):
        """Test maturity today gives growth factor 1."""
        future = Future(maturity_date=TODAY)

        pricer.compute_theoretical_price(future, flat_bond)

        assert future.theoretical_price == Decimal("100.0000")
        assert str(future.theoretical_price) == "100.0000"

    def test_missing_maturity_is_zero_horizon(self, pricer, flat_bond):
        future = Future()
        pricer.compute_theoretical_price(future, flat_bond)
        assert future.theoretical_price == Decimal("100.0000")

    def test_one_year_growth(self, pricer, flat_bond):
        """Test continuous compounding over 365 days at 3%."""
        future = Future(maturity_date=TODAY + timedelta(days=365))

        pricer.compute_theoretical_price(future, flat_bond)

        # 100 * exp(0.03) = 103.04545...
        assert future.theoretical_price == Decimal("103.0455")

    def test_missing_clean_price_treated_as_zero(self, pricer):
        future = Future(maturity_date=TODAY + timedelta(days=365))
        pricer.compute_theoretical_price(future, Bond())
        assert future.theoretical_price == Decimal("0.0000")

    def test_cost_of_carry_formula(self, pricer, coupon_bond):
        """Test price = (clean + AI - PV coupons) * exp(r t)."""
        maturity = TODAY + timedelta(days=182)
        future = Future(maturity_date=maturity)

        pricer.compute_theoretical_price(future, coupon_bond)

        accrued = coupon_bond.accrued_interest(TODAY)
        pv = coupon_bond.present_value_of_coupons(Decimal("0.03"), TODAY)
        t = round_half_up(Decimal(182) / Decimal(365), 10)
        growth = pricer.growth_factor(t)
        expected = round_half_up((Decimal("101.25") + accrued - pv) * growth, 4)

        assert future.theoretical_price == expected
        assert expected < Decimal("101.25")

    def test_none_arguments_are_noop(self, pricer, flat_bond):
        """Test missing future or bond leaves fields untouched."""
        future = Future(maturity_date=TODAY)
        future.theoretical_price = Decimal("42")

        pricer.compute_theoretical_price(future, None)
        pricer.compute_theoretical_price(None, flat_bond)

        assert future.theoretical_price == Decimal("42")

    def test_custom_rate(self, flat_bond):
        """Test engine uses the configured rate, not a hidden constant."""
        pricer = FuturePricer(PricingConfig(risk_free_rate="0"), FixedClock(TODAY))
        future = Future(maturity_date=TODAY + timedelta(days=365))

        pricer.compute_theoretical_price(future, flat_bond)

        assert future.theoretical_price == Decimal("100.0000")

    def test_horizon_precision(self, pricer):
        """Test time to maturity is rounded to 10 places."""
        t = pricer.horizon(TODAY + timedelta(days=100))
        assert t == Decimal("0.2739726027")
        assert pricer.horizon(None) == Decimal("0")

    def test_growth_factor(self, pricer):
        """Test exp(r t) at 3% over one year."""
        assert abs(float(pricer.growth_factor(Decimal("1"))) - 1.0304545339535169) < 1e-12
        assert pricer.growth_factor(Decimal("0")) == Decimal("1")


class TestContractValueAndMargin:
    """Tests for contract value and initial margin."""

    def test_full_pipeline(self, pricer):
        """Test price 100, multiplier 1000, margin 5%."""
        future = Future(contract_multiplier=1000, percentage_margin=Decimal("5"))
        future.theoretical_price = Decimal("100")

        pricer.compute_contract_value(future)
        pricer.compute_initial_margin(future)

        assert future.contract_value == Decimal("100000.0000")
        assert future.initial_margin_amount == Decimal("5000.0000")

    def test_contract_value_rounding(self, pricer):
        future = Future(contract_multiplier=3)
        future.theoretical_price = Decimal("33.33335")
        pricer.compute_contract_value(future)
        assert future.contract_value == Decimal("100.0001")

    def test_missing_multiplier_propagates(self, pricer):
        """Test absent multiplier leaves contract value and margin unset."""
        future = Future(percentage_margin=Decimal("5"))
        future.theoretical_price = Decimal("100")

        pricer.compute_contract_value(future)
        pricer.compute_initial_margin(future)

        assert future.contract_value is None
        assert future.initial_margin_amount is None

    def test_missing_margin_percentage(self, pricer):
        future = Future(contract_multiplier=1000)
        future.theoretical_price = Decimal("100")

        pricer.compute_contract_value(future)
        pricer.compute_initial_margin(future)

        assert future.contract_value == Decimal("100000.0000")
        assert future.initial_margin_amount is None

    def test_missing_price_skips_contract_value(self, pricer):
        future = Future(contract_multiplier=1000)
        pricer.compute_contract_value(future)
        assert future.contract_value is None


class TestComputeAll:
    """Tests for the full pricing pass."""

    def test_compute_all(self, pricer, flat_bond):
        future = Future(
            maturity_date=TODAY,
            contract_multiplier=1000,
            percentage_margin=Decimal("5"),
        )

        pricer.compute_all(future, flat_bond)

        assert future.theoretical_price == Decimal("100.0000")
        assert future.contract_value == Decimal("100000.0000")
        assert future.initial_margin_amount == Decimal("5000.0000")

    def test_idempotent(self, pricer, coupon_bond):
        """Test two passes on unchanged inputs give identical fields."""
        future = Future(
            maturity_date=TODAY + timedelta(days=182),
            contract_multiplier=1000,
            percentage_margin=Decimal("2.5"),
        )

        pricer.compute_all(future, coupon_bond)
        first = dict(future.calculated_fields)
        pricer.compute_all(future, coupon_bond)

        assert future.calculated_fields == first
        assert all(v is not None for v in first.values())

    def test_recompute_overwrites(self, flat_bond):
        """Test a later valuation date overwrites previous outputs."""
        future = Future(maturity_date=TODAY + timedelta(days=365), contract_multiplier=10)

        FuturePricer(clock=FixedClock(TODAY)).compute_all(future, flat_bond)
        first_price = future.theoretical_price
        FuturePricer(clock=FixedClock(TODAY + timedelta(days=365))).compute_all(future, flat_bond)

        assert first_price == Decimal("103.0455")
        assert future.theoretical_price == Decimal("100.0000")
        assert future.contract_value == Decimal("1000.0000")

    def test_price_failure_propagates_without_rollback(self, pricer, flat_bond):
        """Test a pricing error stops the pass and leaves earlier fields as they were."""
        future = Future(
            maturity_date=TODAY,
            contract_multiplier=1000,
            percentage_margin=Decimal("5"),
        )
        pricer.compute_all(future, flat_bond)

        broken = BrokenScheduleBond(underlying_price=Decimal("90"))
        with pytest.raises(InvalidScheduleError):
            pricer.compute_all(future, broken)

        assert future.theoretical_price == Decimal("100.0000")
        assert future.contract_value == Decimal("100000.0000")
        assert future.initial_margin_amount == Decimal("5000.0000")

    def test_price_bond_future_helper(self, flat_bond):
        future = Future(maturity_date=TODAY, contract_multiplier=1000)

        result = price_bond_future(future, flat_bond, today=TODAY, risk_free_rate=0.05)

        assert result is future
        assert future.theoretical_price == Decimal("100.0000")
        assert future.contract_value == Decimal("100000.0000")


class TestContractSpecHelpers:
    """Tests for tick value / contract multiplier helpers."""

    def test_tick_value(self):
        assert calculate_tick_value(0.01, 1000) == Decimal("10")

    def test_tick_value_non_positive_inputs(self):
        assert calculate_tick_value(0, 1000) == 0
        assert calculate_tick_value(0.01, -5) == 0

    def test_contract_multiplier(self):
        assert calculate_contract_multiplier(0.01, 10) == Decimal("1000")

    def test_contract_multiplier_zero_tick_size(self):
        assert calculate_contract_multiplier(0, 5) == 0

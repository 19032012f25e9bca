"""
Bond futures pricing engine.

Derives a bond future's theoretical price, contract value and initial
margin from the underlying bond's clean price and coupon schedule.

Model (cost of carry, simplified):
    F = (Clean + AI - PV(coupons)) * exp(r * t)

where:
    Clean: bond clean price (zero if unknown)
    AI: accrued interest on the current coupon, as of today
    PV(coupons): scheduled coupons discounted at r, annual compounding
    r: flat risk-free rate (PricingConfig.risk_free_rate, 3% by default)
    t: (future maturity - today) / 365, 10 decimal places

Derived quantities:
    Contract value = F * contract multiplier
    Initial margin = contract value * margin % / 100

All monetary outputs are rounded half-up to 4 decimal places. Missing
inputs skip the corresponding step instead of raising; a zero-length
coupon period raises InvalidScheduleError.

Assumptions (documented):
1. No term structure: a single flat rate for both discounting and growth
2. ACT/365 simple day fraction, no business-day adjustment
3. Coupons are not filtered by date before discounting
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

import numpy as np

from ..config import PricingConfig
from ..conventions import Number, days_between, round_half_up, to_decimal
from ..dates import Clock, FixedClock, SystemClock, resolve_today
from ..instruments import Bond, Future


_log = logging.getLogger(__name__)


class FuturePricer:
    """
    Bond futures pricing engine.

    Stateless apart from its configuration and clock: every call reads the
    future and bond passed in and overwrites the future's calculated
    fields in place.

    Provides:
    - Theoretical price from the underlying bond
    - Contract value from the theoretical price
    - Initial margin from the contract value
    """

    def __init__(
        self,
        config: Optional[PricingConfig] = None,
        clock: Optional[Clock] = None
    ):
        """
        Initialize futures pricer.

        Args:
            config: Engine parameters (defaults to PricingConfig.default())
            clock: Source of today's date (defaults to the system clock)
        """
        self.config = config or PricingConfig.default()
        self.clock = clock or SystemClock()

    @property
    def risk_free_rate(self) -> Decimal:
        return self.config.risk_free_rate

    def today(self) -> date:
        return self.clock.today()

    def horizon(self, maturity: Optional[date], today: Optional[date] = None) -> Decimal:
        """
        Time to maturity in years.

        Args:
            maturity: Future maturity date (None means today)
            today: Evaluation date (defaults to the clock)

        Returns:
            (maturity - today) / day basis, at horizon precision
        """
        today = today or self.today()
        days = days_between(today, maturity if maturity is not None else today)
        return round_half_up(
            Decimal(days) / Decimal(self.config.day_basis),
            self.config.horizon_places
        )

    def growth_factor(self, t: Decimal) -> Decimal:
        """
        Continuous-compounding growth factor exp(r * t).

        Computed in binary floating point, brought back to Decimal
        through its shortest repr.
        """
        exponent = float(self.risk_free_rate) * float(t)
        return Decimal(repr(float(np.exp(exponent))))

    def compute_theoretical_price(self, future: Optional[Future], bond: Optional[Bond]):
        """
        Set future.theoretical_price from the underlying bond.

        No-op if either argument is None.

        Args:
            future: Future to price (mutated)
            bond: Underlying bond

        Raises:
            InvalidScheduleError: If the bond's current coupon period is empty
        """
        if future is None or bond is None:
            _log.debug("Theoretical price skipped: future or bond missing")
            return

        today = self.today()
        clean_price = bond.underlying_price if bond.underlying_price is not None else Decimal("0")
        accrued = bond.accrued_interest(today)
        pv_coupons = bond.present_value_of_coupons(
            self.risk_free_rate, today, self.config.working_places, self.config.day_basis
        )

        t = self.horizon(future.maturity_date, today)
        growth = self.growth_factor(t)

        price = round_half_up(
            (clean_price + accrued - pv_coupons) * growth,
            self.config.price_places
        )
        future.theoretical_price = price

        _log.debug(
            "Theoretical price %s: clean=%s accrued=%s pv_coupons=%s t=%s growth=%s -> %s",
            future.symbol, clean_price, accrued, pv_coupons, t, growth, price
        )

    def compute_contract_value(self, future: Future):
        """
        Set future.contract_value = theoretical price * contract multiplier.

        No-op unless both inputs are present.
        """
        if future.theoretical_price is None or future.contract_multiplier is None:
            _log.debug(
                "Contract value skipped for %s: theoretical_price=%s contract_multiplier=%s",
                future.symbol, future.theoretical_price, future.contract_multiplier
            )
            return

        future.contract_value = round_half_up(
            future.theoretical_price * Decimal(future.contract_multiplier),
            self.config.price_places
        )

    def compute_initial_margin(self, future: Future):
        """
        Set future.initial_margin_amount = contract value * margin % / 100.

        No-op unless both inputs are present.
        """
        if future.contract_value is None or future.percentage_margin is None:
            _log.debug(
                "Initial margin skipped for %s: contract_value=%s percentage_margin=%s",
                future.symbol, future.contract_value, future.percentage_margin
            )
            return

        future.initial_margin_amount = round_half_up(
            future.contract_value * future.percentage_margin / Decimal(100),
            self.config.price_places
        )

    def compute_all(self, future: Future, bond: Optional[Bond]):
        """
        Run price -> contract value -> margin in order.

        There is no rollback: if pricing raises, the later steps are not
        run and fields already written are left as they are.
        """
        self.compute_theoretical_price(future, bond)
        self.compute_contract_value(future)
        self.compute_initial_margin(future)


def price_bond_future(
    future: Future,
    bond: Bond,
    today: Optional[date] = None,
    risk_free_rate: Optional[Number] = None
) -> Future:
    """
    Price a bond future in place.

    Args:
        future: Future to price (mutated)
        bond: Underlying bond
        today: Evaluation date (defaults to the system date)
        risk_free_rate: Override of the default risk-free rate

    Returns:
        The same future, with its calculated fields set
    """
    config = PricingConfig.default()
    if risk_free_rate is not None:
        config = config.with_rate(risk_free_rate)
    clock = FixedClock(resolve_today(today=today))

    FuturePricer(config, clock).compute_all(future, bond)
    return future


def calculate_tick_value(tick_size: Number, contract_multiplier: Number) -> Decimal:
    """
    Cash value of one tick.

    Tick value = tick size * contract multiplier

    Args:
        tick_size: Minimum price increment
        contract_multiplier: Units per contract

    Returns:
        Tick value (zero if either input is not positive)
    """
    size = to_decimal(tick_size)
    multiplier = to_decimal(contract_multiplier)
    if size <= 0 or multiplier <= 0:
        return Decimal("0")
    return size * multiplier


def calculate_contract_multiplier(tick_size: Number, tick_value: Number) -> Decimal:
    """
    Contract multiplier implied by tick size and tick value.

    Multiplier = tick value / tick size

    Returns:
        Multiplier (zero if tick size is not positive)
    """
    size = to_decimal(tick_size)
    if size <= 0:
        return Decimal("0")
    return to_decimal(tick_value) / size


__all__ = [
    "FuturePricer",
    "price_bond_future",
    "calculate_tick_value",
    "calculate_contract_multiplier",
]

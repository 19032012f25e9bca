"""
Bond coupon analytics.

Works on a bond's supplied coupon schedule (a sequence of CashFlow records)
as of an explicit evaluation date.

Features:
- Next / last coupon date lookup
- Present value of scheduled coupons at a flat annual rate
- Accrued interest since the last coupon

Conventions:
- Time in years is (payment date - today) in days / 365.0
- Discounting uses annual compounding extended to fractional years:
  DF = (1 + r) ^ years, applied as a divisor
- The PV sum is kept at a fixed working precision, rounded half-up after
  every addition

Past-dated coupons are NOT excluded from the present value: their negative
year fraction gives a factor below one, which inflates the term. Whether
they should be dropped is an open question, so current behaviour is kept.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

import numpy as np

from ..conventions import Number, days_between, round_half_up, to_decimal, year_fraction
from ..exceptions import InvalidScheduleError

if TYPE_CHECKING:
    from ..instruments import CashFlow


_log = logging.getLogger(__name__)


def next_coupon_date(coupons: Optional[Iterable["CashFlow"]], today: date) -> Optional[date]:
    """
    Earliest coupon date on or after today.

    Args:
        coupons: Coupon schedule (may be None or empty)
        today: Evaluation date

    Returns:
        Coupon date, or None if every coupon is in the past
    """
    upcoming = [cf.payment_date for cf in coupons or () if cf.payment_date >= today]
    return min(upcoming) if upcoming else None


def last_coupon_date(coupons: Optional[Iterable["CashFlow"]], today: date) -> Optional[date]:
    """
    Latest coupon date strictly before today.

    Args:
        coupons: Coupon schedule (may be None or empty)
        today: Evaluation date

    Returns:
        Coupon date, or None if no coupon has been paid yet
    """
    paid = [cf.payment_date for cf in coupons or () if cf.payment_date < today]
    return max(paid) if paid else None


def discount_factor(years: float, rate: Number) -> Decimal:
    """
    Annual-compounding growth factor (1 + r) ^ years.

    Computed in binary floating point and brought back to Decimal through
    its shortest repr.
    """
    factor = np.power(1.0 + float(to_decimal(rate)), years)
    return Decimal(repr(float(factor)))


def present_value_of_coupons(
    coupons: Optional[Sequence["CashFlow"]],
    rate: Number,
    today: date,
    places: int = 10,
    day_basis: int = 365
) -> Decimal:
    """
    Sum of every scheduled coupon discounted to today.

    PV = sum(amount_i / (1 + r) ^ (days_i / 365))

    Args:
        coupons: Coupon schedule (may be None or empty)
        rate: Flat annual discount rate (decimal)
        today: Evaluation date
        places: Working precision of the running sum
        day_basis: Days per year

    Returns:
        Present value (Decimal zero for an empty schedule)
    """
    pv = Decimal("0")
    if not coupons:
        return pv

    for cf in coupons:
        years = year_fraction(today, cf.payment_date, day_basis)
        df = discount_factor(years, rate)
        pv = round_half_up(pv + to_decimal(cf.amount) / df, places)

    return pv


def accrual_fraction(last_coupon: date, next_coupon: date, today: date) -> float:
    """
    Share of the current coupon period elapsed at today.

    fraction = (today - last) / (next - last), in whole days

    Args:
        last_coupon: Start of the coupon period
        next_coupon: End of the coupon period
        today: Evaluation date

    Returns:
        Fraction as float

    Raises:
        InvalidScheduleError: If the period is zero days long or inverted
    """
    days_total = days_between(last_coupon, next_coupon)
    if days_total <= 0:
        raise InvalidScheduleError(
            f"Coupon period from {last_coupon} to {next_coupon} spans {days_total} days"
        )
    days_elapsed = days_between(last_coupon, today)
    return days_elapsed / days_total


def accrued_interest(
    coupons: Optional[Sequence["CashFlow"]],
    coupon_amount: Optional[Number],
    today: date
) -> Decimal:
    """
    Accrued interest on the current coupon as of today.

    AI = coupon_amount * (days since last coupon / days in coupon period)

    Args:
        coupons: Coupon schedule (may be None or empty)
        coupon_amount: Fixed coupon paid per period (may be None)
        today: Evaluation date

    Returns:
        Accrued interest; zero when the coupon amount or either bounding
        coupon date is missing

    Raises:
        InvalidScheduleError: If the bounding coupon dates coincide
    """
    if coupon_amount is None:
        return Decimal("0")

    last = last_coupon_date(coupons, today)
    nxt = next_coupon_date(coupons, today)
    if last is None or nxt is None:
        _log.debug("No coupon period brackets %s, accrued interest is zero", today)
        return Decimal("0")

    fraction = accrual_fraction(last, nxt, today)
    return to_decimal(coupon_amount) * Decimal(repr(fraction))


__all__ = [
    "next_coupon_date",
    "last_coupon_date",
    "discount_factor",
    "present_value_of_coupons",
    "accrual_fraction",
    "accrued_interest",
]

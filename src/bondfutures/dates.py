"""
Date utilities for bond futures pricing.

Provides:
- An injectable clock, so "today" is an explicit input to every calculation
- Coupon schedule generation from a bond's periodicity
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from .conventions import Periodicity


class Clock:
    """Source of the current date."""

    def today(self) -> date:
        raise NotImplementedError


class SystemClock(Clock):
    """Clock reading the local system date."""

    def today(self) -> date:
        return date.today()


@dataclass(frozen=True)
class FixedClock(Clock):
    """Clock pinned to a single date (valuation date)."""
    valuation_date: date

    def today(self) -> date:
        return self.valuation_date


def resolve_today(clock: Optional[Clock] = None, today: Optional[date] = None) -> date:
    """
    Pick the evaluation date from an explicit date or a clock.

    Args:
        clock: Clock to read when no explicit date is given
        today: Explicit evaluation date (wins over the clock)

    Returns:
        Evaluation date
    """
    if today is not None:
        return today
    return (clock or SystemClock()).today()


def generate_coupon_dates(
    start: date,
    maturity: date,
    periodicity: Periodicity
) -> List[date]:
    """
    Generate coupon payment dates between start and maturity.

    Dates are rolled backward from maturity in whole-month steps, keeping
    the maturity day of month (clamped to the length of shorter months).
    Periodicities that are not month-based (INFINITY, DAILY, WEEKLY) pay a
    single flow at maturity.

    Args:
        start: Accrual start (dated date); excluded from the result
        maturity: Final payment date; always included when after start
        periodicity: Payment frequency

    Returns:
        Ascending list of payment dates strictly after start
    """
    if maturity <= start:
        return []

    months = periodicity.months
    if months == 0:
        return [maturity]

    dates = [maturity]
    step = 1
    while True:
        prev_date = maturity - relativedelta(months=months * step)
        if prev_date <= start:
            break
        dates.append(prev_date)
        step += 1

    dates.reverse()
    return dates


__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "resolve_today",
    "generate_coupon_dates",
]

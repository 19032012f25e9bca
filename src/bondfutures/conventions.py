"""
Enumerations and arithmetic conventions for bond futures.

Enumerations:
- Periodicity: coupon payment frequency (months between payments)
- RateType: fixed vs variable coupon
- UnderlyingType: asset class backing a future
- SettlementMethod / CollateralMethod / DepositType: contract terms

Arithmetic:
- Monetary values are Decimal, rounded half-up to a fixed number of places
- Time is measured in whole calendar days over a 365-day year (ACT/365
  approximation, no other day count is supported)
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Union


Number = Union[Decimal, int, float, str]


class Periodicity(Enum):
    """Coupon payment frequency, valued by months between payments."""
    INFINITY = "INFINITY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SEMI_ANNUAL = "SEMI_ANNUAL"
    ANNUAL = "ANNUAL"

    @property
    def months(self) -> int:
        """Months between two coupon dates (0 when not month-based)."""
        return _PERIODICITY_MONTHS[self]

    @classmethod
    def from_string(cls, s: str) -> "Periodicity":
        """Parse periodicity from its name, tolerating case and separators."""
        key = s.upper().strip().replace("-", "_").replace(" ", "_")
        aliases = {"SEMI": cls.SEMI_ANNUAL, "SEMIANNUAL": cls.SEMI_ANNUAL}
        if key in aliases:
            return aliases[key]
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown periodicity: {s}") from None


_PERIODICITY_MONTHS = {
    Periodicity.INFINITY: 0,
    Periodicity.DAILY: 0,
    Periodicity.WEEKLY: 0,
    Periodicity.MONTHLY: 1,
    Periodicity.QUARTERLY: 3,
    Periodicity.SEMI_ANNUAL: 6,
    Periodicity.ANNUAL: 12,
}


class RateType(Enum):
    """Coupon rate type."""
    VARIABLE_RATE = "VARIABLE_RATE"
    FIXED_RATE = "FIXED_RATE"

    @property
    def label(self) -> str:
        return {"VARIABLE_RATE": "Variable", "FIXED_RATE": "Taux fixe"}[self.value]


class UnderlyingType(Enum):
    """Asset class of a future's underlying."""
    EQUITIES = "EQUITIES"
    BONDS = "BONDS"
    FUTURES = "FUTURES"
    COMMODITIES = "COMMODITIES"
    INDEX = "INDEX"
    RIGHTS = "RIGHTS"
    CURRENCY = "CURRENCY"
    MP = "MP"
    INTEREST_RATE = "INTEREST_RATE"
    ETF = "ETF"
    STOCK_NOT = "STOCK_NOT"


class SettlementMethod(Enum):
    """Contract settlement method."""
    CASH = "CASH"
    PHYSICAL = "PHYSICAL"


class CollateralMethod(Enum):
    """Accepted collateral for margin calls."""
    CASHCOLLATERAL = "CASHCOLLATERAL"
    SECCOLLATERAL = "SECCOLLATERAL"
    SECCASHCOLLATERAL = "SECCASHCOLLATERAL"


class DepositType(Enum):
    """How the initial deposit is expressed."""
    AMOUNT = "AMOUNT"
    RATE = "RATE"


def to_decimal(value: Number) -> Decimal:
    """
    Convert a number to Decimal.

    Floats go through their shortest repr so that 0.03 becomes
    Decimal("0.03") and not its exact binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_half_up(value: Decimal, places: int) -> Decimal:
    """Quantize a Decimal to a fixed number of places, rounding half-up."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def days_between(start: date, end: date) -> int:
    """Signed number of calendar days from start to end."""
    return (end - start).days


def year_fraction(start: date, end: date, day_basis: int = 365) -> float:
    """
    Signed year fraction as days / day_basis.

    Unlike a day count convention this is not floored at zero: past dates
    give negative fractions.
    """
    return days_between(start, end) / float(day_basis)


__all__ = [
    "Periodicity",
    "RateType",
    "UnderlyingType",
    "SettlementMethod",
    "CollateralMethod",
    "DepositType",
    "to_decimal",
    "round_half_up",
    "days_between",
    "year_fraction",
]

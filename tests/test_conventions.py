"""
Unit tests for conventions module.
"""

from datetime import date
from decimal import Decimal
import pytest

from bondfutures.conventions import (
    Periodicity,
    RateType,
    round_half_up,
    to_decimal,
    days_between,
    year_fraction,
)


class TestPeriodicity:
    """Tests for payment frequency enumeration."""

    def test_months(self):
        """Test months between payments."""
        assert Periodicity.MONTHLY.months == 1
        assert Periodicity.QUARTERLY.months == 3
        assert Periodicity.SEMI_ANNUAL.months == 6
        assert Periodicity.ANNUAL.months == 12

    def test_non_monthly_periodicities_have_zero_months(self):
        """Test INFINITY, DAILY and WEEKLY are not month-based."""
        assert Periodicity.INFINITY.months == 0
        assert Periodicity.DAILY.months == 0
        assert Periodicity.WEEKLY.months == 0

    def test_from_string(self):
        """Test parsing periodicity names."""
        assert Periodicity.from_string("annual") == Periodicity.ANNUAL
        assert Periodicity.from_string("semi-annual") == Periodicity.SEMI_ANNUAL
        assert Periodicity.from_string("SEMI") == Periodicity.SEMI_ANNUAL
        assert Periodicity.from_string(" quarterly ") == Periodicity.QUARTERLY

    def test_from_string_invalid(self):
        """Test unknown periodicity raises error."""
        with pytest.raises(ValueError):
            Periodicity.from_string("fortnightly")


class TestRateType:
    """Tests for rate type labels."""

    def test_labels(self):
        assert RateType.FIXED_RATE.label == "Taux fixe"
        assert RateType.VARIABLE_RATE.label == "Variable"


class TestDecimalArithmetic:
    """Tests for rounding and conversion helpers."""

    def test_round_half_up(self):
        """Test ties round away from zero."""
        assert round_half_up(Decimal("2.00005"), 4) == Decimal("2.0001")
        assert round_half_up(Decimal("2.00004"), 4) == Decimal("2.0000")
        assert round_half_up(Decimal("-2.00005"), 4) == Decimal("-2.0001")

    def test_round_half_up_keeps_trailing_zeros(self):
        """Test quantized result carries the requested exponent."""
        assert str(round_half_up(Decimal("100"), 4)) == "100.0000"

    def test_to_decimal_float_uses_repr(self):
        """Test floats convert through their shortest repr."""
        assert to_decimal(0.03) == Decimal("0.03")
        assert to_decimal(5) == Decimal("5")
        assert to_decimal("1.25") == Decimal("1.25")


class TestDayFraction:
    """Tests for the ACT/365 day fraction."""

    def test_days_between(self):
        assert days_between(date(2024, 1, 15), date(2024, 4, 15)) == 91

    def test_year_fraction_365(self):
        """Test ACT/365 year fraction."""
        yf = year_fraction(date(2024, 1, 15), date(2024, 4, 15))
        assert abs(yf - 91 / 365) < 1e-12

    def test_year_fraction_negative_for_past_dates(self):
        """Test past dates give a negative fraction."""
        yf = year_fraction(date(2024, 4, 15), date(2024, 1, 15))
        assert abs(yf + 91 / 365) < 1e-12

    def test_year_fraction_same_date(self):
        """Test year fraction for same date returns 0."""
        d = date(2024, 1, 15)
        assert year_fraction(d, d) == 0.0

    def test_year_fraction_custom_basis(self):
        """Test the day basis is configurable."""
        yf = year_fraction(date(2024, 1, 1), date(2024, 12, 31), day_basis=360)
        assert abs(yf - 365 / 360) < 1e-12

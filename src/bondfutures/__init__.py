"""
BondFutures: Bond Futures Theoretical Pricing Library

A small library for:
- Recording bond underlyings with their coupon schedules
- Recording interest-rate future contracts on those bonds
- Pricing futures by cost of carry (theoretical price, contract value,
  initial margin)
- Tabular reporting of coupon schedules and priced futures

Scope: single flat risk-free rate, ACT/365 day fraction, one currency.
"""

__version__ = "0.1.0"

# Core modules
from .conventions import (
    Periodicity,
    RateType,
    UnderlyingType,
    SettlementMethod,
    CollateralMethod,
    DepositType,
    round_half_up,
)
from .config import PricingConfig
from .dates import Clock, SystemClock, FixedClock, generate_coupon_dates
from .exceptions import PricingError, InvalidScheduleError

# Instruments
from .instruments import CashFlow, Asset, Bond, OtherAsset, Underlying, Future

# Pricers
from .pricers import (
    FuturePricer,
    price_bond_future,
    price_future,
    PricerOutput,
    calculate_tick_value,
    calculate_contract_multiplier,
)

# Reporting
from .reporting import coupon_schedule_frame, futures_display_frame, export_to_csv

__all__ = [
    # Version
    "__version__",
    # Conventions
    "Periodicity",
    "RateType",
    "UnderlyingType",
    "SettlementMethod",
    "CollateralMethod",
    "DepositType",
    "round_half_up",
    # Config
    "PricingConfig",
    # Dates
    "Clock",
    "SystemClock",
    "FixedClock",
    "generate_coupon_dates",
    # Errors
    "PricingError",
    "InvalidScheduleError",
    # Instruments
    "CashFlow",
    "Asset",
    "Bond",
    "OtherAsset",
    "Underlying",
    "Future",
    # Pricers
    "FuturePricer",
    "price_bond_future",
    "price_future",
    "PricerOutput",
    "calculate_tick_value",
    "calculate_contract_multiplier",
    # Reporting
    "coupon_schedule_frame",
    "futures_display_frame",
    "export_to_csv",
]

"""
Pricers package - instrument pricing.

Provides:
- Bond coupon analytics (accrued interest, present value of coupons)
- Bond futures pricing engine (theoretical price, contract value, margin)
- Future-level dispatch over the underlying variant
"""

from .bonds import (
    next_coupon_date,
    last_coupon_date,
    present_value_of_coupons,
    accrual_fraction,
    accrued_interest,
)
from .futures import (
    FuturePricer,
    price_bond_future,
    calculate_tick_value,
    calculate_contract_multiplier,
)
from .dispatcher import price_future, PricerOutput

__all__ = [
    "next_coupon_date",
    "last_coupon_date",
    "present_value_of_coupons",
    "accrual_fraction",
    "accrued_interest",
    "FuturePricer",
    "price_bond_future",
    "calculate_tick_value",
    "calculate_contract_multiplier",
    "price_future",
    "PricerOutput",
]

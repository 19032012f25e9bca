"""
Tabular views of bonds and priced futures.

Provides:
- Coupon schedule breakdown (discount factor and PV per coupon)
- Future listing with contract terms and calculated fields
- CSV export
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional, Union

import pandas as pd

from ..config import PricingConfig
from ..conventions import Number, days_between, round_half_up, to_decimal, year_fraction
from ..instruments import Bond, Future
from ..pricers.bonds import discount_factor


SCHEDULE_COLUMNS = [
    "payment_date",
    "amount",
    "days",
    "years",
    "discount_factor",
    "present_value",
    "is_past",
]

DISPLAY_COLUMNS = [
    "symbol",
    "description",
    "isin",
    "parent_ticker",
    "first_trading_date",
    "last_trading_date",
    "maturity_date",
    "tick_size",
    "tick_value",
    "trading_currency",
    "lot_size",
    "contract_multiplier",
    "percentage_margin",
    "theoretical_price",
    "contract_value",
    "initial_margin_amount",
    "instrument_status",
    "deposit_type",
    "underlying_identifier",
    "underlying_type",
]


def coupon_schedule_frame(
    bond: Bond,
    today: date,
    rate: Optional[Number] = None,
    config: Optional[PricingConfig] = None
) -> pd.DataFrame:
    """
    Per-coupon breakdown of a bond's present value.

    Args:
        bond: Bond with its coupon schedule
        today: Evaluation date
        rate: Discount rate (defaults to the config's risk-free rate)
        config: Engine parameters (defaults to PricingConfig.default())

    Returns:
        DataFrame with one row per coupon, ordered by payment date
    """
    config = config or PricingConfig.default()
    rate = to_decimal(rate) if rate is not None else config.risk_free_rate

    rows = []
    for cf in bond.future_coupons:
        days = days_between(today, cf.payment_date)
        years = year_fraction(today, cf.payment_date, config.day_basis)
        df = discount_factor(years, rate)
        rows.append({
            "payment_date": cf.payment_date,
            "amount": cf.amount,
            "days": days,
            "years": years,
            "discount_factor": df,
            "present_value": round_half_up(cf.amount / df, config.working_places),
            "is_past": cf.payment_date < today,
        })

    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def futures_display_frame(futures: Iterable[Future]) -> pd.DataFrame:
    """
    Listing of futures with their contract terms and calculated fields.

    Args:
        futures: Futures to list

    Returns:
        DataFrame with one row per future
    """
    rows = []
    for fut in futures:
        underlying = fut.underlying
        rows.append({
            "symbol": fut.symbol,
            "description": fut.description,
            "isin": fut.isin,
            "parent_ticker": fut.parent_ticker,
            "first_trading_date": fut.first_trading_date,
            "last_trading_date": fut.last_trading_date,
            "maturity_date": fut.maturity_date,
            "tick_size": fut.tick_size,
            "tick_value": fut.tick_value,
            "trading_currency": fut.trading_currency,
            "lot_size": fut.lot_size,
            "contract_multiplier": fut.contract_multiplier,
            "percentage_margin": fut.percentage_margin,
            "theoretical_price": fut.theoretical_price,
            "contract_value": fut.contract_value,
            "initial_margin_amount": fut.initial_margin_amount,
            "instrument_status": fut.instrument_status,
            "deposit_type": fut.deposit_type.value if fut.deposit_type else None,
            "underlying_identifier": underlying.identifier if underlying else None,
            "underlying_type": underlying.underlying_type.value if underlying else None,
        })

    return pd.DataFrame(rows, columns=DISPLAY_COLUMNS)


def total_present_value(schedule: pd.DataFrame) -> Decimal:
    """Sum of the present_value column (zero for an empty schedule)."""
    return sum(schedule["present_value"], Decimal("0"))


def export_to_csv(frame: pd.DataFrame, path: Union[str, Path]) -> str:
    """
    Write a frame to CSV, creating parent directories.

    Args:
        frame: DataFrame to export
        path: Output file path

    Returns:
        Path of the written file
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_path, index=False)
    return str(output_path)


__all__ = [
    "coupon_schedule_frame",
    "futures_display_frame",
    "total_present_value",
    "export_to_csv",
    "SCHEDULE_COLUMNS",
    "DISPLAY_COLUMNS",
]

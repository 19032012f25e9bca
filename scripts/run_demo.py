#!/usr/bin/env python
"""
Bond Futures Pricing Demo Script

This script demonstrates the full workflow of the bond futures library:
1. Build a bond and generate its coupon schedule
2. Define futures on the bond and on a non-bond underlying
3. Price the futures (theoretical price, contract value, initial margin)
4. Print and export the coupon schedule and future listing

Usage:
    python run_demo.py [--output-dir OUTPUT_DIR] [--valuation-date YYYY-MM-DD]
                       [--periodicity PERIODICITY]
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bondfutures import (
    Bond,
    Future,
    FuturePricer,
    FixedClock,
    OtherAsset,
    Periodicity,
    PricingConfig,
    Underlying,
    UnderlyingType,
    SettlementMethod,
    calculate_tick_value,
    price_future,
)
from bondfutures.reporting import (
    coupon_schedule_frame,
    futures_display_frame,
    total_present_value,
    export_to_csv,
)


def build_sample_bond(periodicity: Periodicity = Periodicity.SEMI_ANNUAL) -> Bond:
    """Five-year 2.5% bond quoted at 101.25 clean."""
    periods_per_year = 12 // periodicity.months if periodicity.months else 1
    bond = Bond(
        name="OAT 2.5% 2029",
        isin="FR0000000001",
        nominal=Decimal("100"),
        coupon_amount=Decimal("2.5") / periods_per_year,
        rate=Decimal("0.025"),
        periodicity=periodicity,
        dated_date=date(2024, 3, 15),
        maturity_date=date(2029, 3, 15),
        underlying_price=Decimal("101.25"),
    )
    return bond.with_generated_schedule()


def build_sample_futures(bond: Bond) -> list:
    """One future on the bond, one on an equity index."""
    tick_size = 0.01
    multiplier = 1000
    bond_future = Future(
        symbol="FOAT-Z24",
        description="Euro-OAT future Dec 2024",
        parent_ticker="FOAT",
        maturity_date=date(2024, 12, 10),
        tick_size=tick_size,
        tick_value=float(calculate_tick_value(tick_size, multiplier)),
        trading_currency="EUR",
        lot_size=1,
        contract_multiplier=multiplier,
        percentage_margin=Decimal("3.5"),
        settlement_method=SettlementMethod.PHYSICAL,
        underlying=Underlying.of_bond(bond),
    )
    index_future = Future(
        symbol="FCE-Z24",
        description="CAC 40 future Dec 2024",
        maturity_date=date(2024, 12, 20),
        contract_multiplier=10,
        percentage_margin=Decimal("8"),
        settlement_method=SettlementMethod.CASH,
        underlying=Underlying.of_asset(OtherAsset(symbol="CAC40"), UnderlyingType.INDEX),
    )
    return [bond_future, index_future]


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Bond Futures Pricing Demo")
    parser.add_argument(
        "--output-dir",
        type=str,
        default="./output",
        help="Output directory for reports"
    )
    parser.add_argument(
        "--valuation-date",
        type=date.fromisoformat,
        default=date(2024, 6, 3),
        help="Valuation date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--periodicity",
        type=Periodicity.from_string,
        default=Periodicity.SEMI_ANNUAL,
        help="Coupon frequency of the sample bond (e.g. annual, semi-annual, quarterly)"
    )
    parser.add_argument("--verbose", action="store_true", help="Log engine steps")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    output_dir = Path(args.output_dir)
    valuation_date = args.valuation_date
    config = PricingConfig.from_env()

    print("="*60)
    print("BOND FUTURES PRICING DEMO")
    print(f"Valuation Date: {valuation_date}")
    print(f"Risk-free rate: {config.risk_free_rate}")
    print("="*60)

    bond = build_sample_bond(args.periodicity)
    schedule = coupon_schedule_frame(bond, valuation_date, config=config)
    print(f"\nCoupon schedule for {bond.name} ({len(schedule)} coupons):")
    print(schedule.to_string(index=False))
    print(f"\n  Accrued interest: {bond.accrued_interest(valuation_date)}")
    print(f"  PV of coupons:    {bond.present_value_of_coupons(config.risk_free_rate, valuation_date)}")
    print(f"  Sum of row PVs:   {total_present_value(schedule)}")

    pricer = FuturePricer(config, FixedClock(valuation_date))
    futures = build_sample_futures(bond)

    print("\nPricing futures...")
    for fut in futures:
        output = price_future(fut, pricer=pricer)
        print(f"  {fut.symbol}: {output.status}")

    listing = futures_display_frame(futures)
    print("\n" + listing[["symbol", "theoretical_price", "contract_value", "initial_margin_amount"]].to_string(index=False))

    files = [
        export_to_csv(schedule, output_dir / "coupon_schedule.csv"),
        export_to_csv(listing, output_dir / "futures.csv"),
    ]
    print("\nExported:")
    for f in files:
        print(f"  {f}")

    print("\n" + "="*60)
    print("DEMO COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()

"""
Reporting module for bond futures.

Provides:
- Coupon schedule breakdowns
- Future listings
- CSV export
"""

from .pricing_report import (
    coupon_schedule_frame,
    futures_display_frame,
    total_present_value,
    export_to_csv,
)


__all__ = [
    "coupon_schedule_frame",
    "futures_display_frame",
    "total_present_value",
    "export_to_csv",
]

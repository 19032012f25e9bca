"""
Exceptions raised by the pricing engine.

Missing optional inputs never raise: they degrade a calculation to zero or
leave the corresponding output unset. Only structurally invalid data does.
"""


class PricingError(Exception):
    """Base class for faults raised while pricing a future."""


class InvalidScheduleError(PricingError, ValueError):
    """
    Coupon schedule cannot support an accrual calculation.

    Raised when the period between the last and next coupon dates is zero
    days (or inverted), or when a schedule is requested without the dates
    needed to build it.
    """


__all__ = [
    "PricingError",
    "InvalidScheduleError",
]

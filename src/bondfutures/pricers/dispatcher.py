"""
Future-level pricing dispatch.

Resolves what backs a future (the Underlying variant) once, hands the bond
payload to the pricing engine, and keeps a calculation failure from
leaking half-written values: a future that cannot be priced is returned
with its calculated fields cleared, so the caller can still save the base
instrument.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..conventions import UnderlyingType
from ..exceptions import PricingError
from ..instruments import Future, Underlying
from .futures import FuturePricer


_log = logging.getLogger(__name__)

STATUS_PRICED = "priced"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass
class PricerOutput:
    """Container for pricing outputs to keep return type consistent."""

    status: str
    future: Future
    details: Dict[str, Any]

    @property
    def priced(self) -> bool:
        return self.status == STATUS_PRICED

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "symbol": self.future.symbol, **self.details}


def price_future(
    future: Future,
    underlying: Optional[Underlying] = None,
    pricer: Optional[FuturePricer] = None
) -> PricerOutput:
    """
    Price a future against its underlying, isolating failures.

    Args:
        future: Future to price (mutated)
        underlying: Underlying to use (defaults to future.underlying)
        pricer: Pricing engine (defaults to FuturePricer())

    Returns:
        PricerOutput with status "priced", "skipped" (no bond underlying)
        or "failed" (calculation raised; calculated fields cleared)
    """
    underlying = underlying if underlying is not None else future.underlying

    if underlying is None:
        _log.info("Future %s has no underlying, skipping calculations", future.symbol)
        return PricerOutput(STATUS_SKIPPED, future, {"reason": "no underlying"})

    bond = underlying.bond
    if bond is None:
        if underlying.underlying_type is UnderlyingType.BONDS:
            reason = f"underlying payload {type(underlying.asset).__name__} is not a Bond"
        else:
            reason = f"underlying type {underlying.underlying_type.value} is not priced"
        _log.info(
            "Future %s underlying %s skipped: %s",
            future.symbol, underlying.identifier, reason
        )
        return PricerOutput(STATUS_SKIPPED, future, {"reason": reason})

    pricer = pricer or FuturePricer()
    try:
        pricer.compute_all(future, bond)
    except (PricingError, ArithmeticError, ValueError) as exc:
        _log.warning(
            "Calculation failed for future %s, saving without calculated fields: %s",
            future.symbol, exc, exc_info=True
        )
        future.clear_calculated_fields()
        return PricerOutput(STATUS_FAILED, future, {"error": str(exc)})

    return PricerOutput(STATUS_PRICED, future, dict(future.calculated_fields))


__all__ = [
    "price_future",
    "PricerOutput",
    "STATUS_PRICED",
    "STATUS_SKIPPED",
    "STATUS_FAILED",
]

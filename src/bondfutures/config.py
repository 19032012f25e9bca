"""
Pricing configuration.

The risk-free rate and rounding precision are explicit values rather than
constants buried in the engine, so a pricer built from the same config and
clock always produces the same numbers.

Environment overrides:
    BONDFUTURES_RISK_FREE_RATE: annual risk-free rate (decimal, e.g. "0.03")
    BONDFUTURES_PRICE_PLACES: decimal places for monetary outputs
"""

import os
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional

from .conventions import Number, to_decimal


DEFAULT_RISK_FREE_RATE = Decimal("0.03")

ENV_RISK_FREE_RATE = "BONDFUTURES_RISK_FREE_RATE"
ENV_PRICE_PLACES = "BONDFUTURES_PRICE_PLACES"


@dataclass(frozen=True)
class PricingConfig:
    """
    Parameters of the bond-future pricing engine.

    Attributes:
        risk_free_rate: Annual rate used for discounting coupons and for
            continuous-compounding growth to maturity
        price_places: Decimal places for price, contract value and margin
        horizon_places: Decimal places for the time-to-maturity in years
        working_places: Decimal places for intermediate sums (coupon PV)
        day_basis: Days per year for the simple day fraction
    """
    risk_free_rate: Number = DEFAULT_RISK_FREE_RATE
    price_places: int = 4
    horizon_places: int = 10
    working_places: int = 10
    day_basis: int = 365

    def __post_init__(self):
        try:
            rate = to_decimal(self.risk_free_rate)
        except (InvalidOperation, TypeError):
            raise ValueError(f"Invalid risk-free rate: {self.risk_free_rate!r}") from None
        if not rate.is_finite():
            raise ValueError(f"Invalid risk-free rate: {self.risk_free_rate!r}")
        object.__setattr__(self, "risk_free_rate", rate)

        for name in ("price_places", "horizon_places", "working_places"):
            if int(getattr(self, name)) < 0:
                raise ValueError(f"{name} must be non-negative")
            object.__setattr__(self, name, int(getattr(self, name)))
        if int(self.day_basis) <= 0:
            raise ValueError("day_basis must be positive")
        object.__setattr__(self, "day_basis", int(self.day_basis))

    @classmethod
    def default(cls) -> "PricingConfig":
        """Default engine parameters: 3% risk-free rate, 4-place outputs."""
        return cls()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PricingConfig":
        """
        Build a config from environment variables, falling back to defaults.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            PricingConfig
        """
        env = os.environ if environ is None else environ
        config = cls.default()

        rate = env.get(ENV_RISK_FREE_RATE)
        if rate:
            config = replace(config, risk_free_rate=rate.strip())

        places = env.get(ENV_PRICE_PLACES)
        if places:
            try:
                config = replace(config, price_places=int(places))
            except ValueError:
                raise ValueError(f"Invalid {ENV_PRICE_PLACES}: {places!r}") from None

        return config

    def with_rate(self, risk_free_rate: Number) -> "PricingConfig":
        """Copy of this config with a different risk-free rate."""
        return replace(self, risk_free_rate=risk_free_rate)


__all__ = [
    "PricingConfig",
    "DEFAULT_RISK_FREE_RATE",
    "ENV_RISK_FREE_RATE",
    "ENV_PRICE_PLACES",
]

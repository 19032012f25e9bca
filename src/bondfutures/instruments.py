"""
Instrument definitions: bonds, their coupon schedules, and bond futures.

The Bond owns an ordered tuple of CashFlow records. A Future references its
underlying through an Underlying tagged variant, which is either a bond or
some other asset kind; only the bond variant can be priced.

Engine-owned Future fields (theoretical_price, contract_value,
initial_margin_amount) stay None until a pricer writes them.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Tuple, Union

from .conventions import (
    CollateralMethod,
    DepositType,
    Number,
    Periodicity,
    RateType,
    SettlementMethod,
    UnderlyingType,
    to_decimal,
)
from .exceptions import InvalidScheduleError


def _optional_decimal(value: Optional[Number]) -> Optional[Decimal]:
    return None if value is None else to_decimal(value)


@dataclass(frozen=True)
class CashFlow:
    """A single scheduled coupon payment."""
    payment_date: date
    amount: Decimal

    def __post_init__(self):
        object.__setattr__(self, "amount", to_decimal(self.amount))


@dataclass
class Asset:
    """
    Common identification fields shared by every instrument.

    Attributes:
        name: Display name
        symbol: Trading symbol
        description: Free-text description
        isin: ISIN code
    """
    name: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    isin: Optional[str] = None


@dataclass
class Bond(Asset):
    """
    Coupon bond used as a future's underlying.

    Attributes:
        nominal: Face value
        coupon_amount: Fixed coupon paid at each scheduled date
        periodicity: Payment frequency (informational unless the schedule
            is generated with with_generated_schedule)
        maturity_date: Final maturity
        dated_date: Start of the first accrual period
        underlying_price: Clean price (quoted, excluding accrued interest)
        rate_type: Fixed or variable rate
        index_rate: Reference rate for variable-rate bonds (not priced)
        rate: Annual coupon rate, informational
        future_coupons: Coupon schedule, kept sorted by payment date
    """
    nominal: Optional[Decimal] = None
    coupon_amount: Optional[Decimal] = None
    periodicity: Periodicity = Periodicity.ANNUAL
    maturity_date: Optional[date] = None
    dated_date: Optional[date] = None
    underlying_price: Optional[Decimal] = None
    rate_type: RateType = RateType.FIXED_RATE
    index_rate: Optional[Decimal] = None
    rate: Optional[Decimal] = None
    future_coupons: Tuple[CashFlow, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for name in ("nominal", "coupon_amount", "underlying_price", "index_rate", "rate"):
            setattr(self, name, _optional_decimal(getattr(self, name)))
        self.future_coupons = tuple(
            sorted(self.future_coupons or (), key=lambda cf: cf.payment_date)
        )

    def next_coupon_date(self, today: date) -> Optional[date]:
        """Earliest coupon date on or after today, or None."""
        from .pricers.bonds import next_coupon_date
        return next_coupon_date(self.future_coupons, today)

    def last_coupon_date(self, today: date) -> Optional[date]:
        """Latest coupon date strictly before today, or None."""
        from .pricers.bonds import last_coupon_date
        return last_coupon_date(self.future_coupons, today)

    def present_value_of_coupons(
        self,
        rate: Number,
        today: date,
        places: int = 10,
        day_basis: int = 365
    ) -> Decimal:
        """
        Present value of all scheduled coupons at a flat annual rate.

        Args:
            rate: Annual discount rate (decimal)
            today: Evaluation date
            places: Working precision of the running sum
            day_basis: Days per year

        Returns:
            PV (zero for an empty schedule)
        """
        from .pricers.bonds import present_value_of_coupons
        return present_value_of_coupons(self.future_coupons, rate, today, places, day_basis)

    def accrued_interest(self, today: date) -> Decimal:
        """
        Accrued interest on the current coupon as of today.

        Raises:
            InvalidScheduleError: If the bracketing coupon period is empty
        """
        from .pricers.bonds import accrued_interest
        return accrued_interest(self.future_coupons, self.coupon_amount, today)

    def with_generated_schedule(self) -> "Bond":
        """
        Copy of this bond with coupons generated from its periodicity.

        Each date between dated_date (excluded) and maturity_date receives
        coupon_amount (zero when unset).

        Raises:
            InvalidScheduleError: If dated_date or maturity_date is missing
        """
        from .dates import generate_coupon_dates

        if self.dated_date is None or self.maturity_date is None:
            raise InvalidScheduleError(
                "Dated date and maturity date are required to generate a coupon schedule"
            )

        amount = self.coupon_amount if self.coupon_amount is not None else Decimal("0")
        dates = generate_coupon_dates(self.dated_date, self.maturity_date, self.periodicity)
        return replace(self, future_coupons=tuple(CashFlow(d, amount) for d in dates))

    @classmethod
    def from_schedule(
        cls,
        schedule: Iterable[Tuple[date, Number]],
        **kwargs
    ) -> "Bond":
        """Build a bond from (payment_date, amount) pairs."""
        coupons = tuple(CashFlow(d, to_decimal(a)) for d, a in schedule)
        return cls(future_coupons=coupons, **kwargs)


@dataclass
class OtherAsset(Asset):
    """Any underlying asset that is not a bond (equity, index, ...)."""
    identifier: Optional[str] = None


@dataclass
class Underlying:
    """
    Tagged variant describing what backs a future.

    Attributes:
        identifier: Underlying identifier
        underlying_type: Tag; BONDS means the payload is a Bond
        asset: Payload (Bond or OtherAsset)
    """
    identifier: Optional[str]
    underlying_type: UnderlyingType
    asset: Optional[Union[Bond, OtherAsset]] = None

    @classmethod
    def of_bond(cls, bond: Bond, identifier: Optional[str] = None) -> "Underlying":
        """Underlying backed by a bond."""
        return cls(
            identifier=identifier or bond.isin or bond.symbol,
            underlying_type=UnderlyingType.BONDS,
            asset=bond,
        )

    @classmethod
    def of_asset(
        cls,
        asset: OtherAsset,
        underlying_type: UnderlyingType,
        identifier: Optional[str] = None
    ) -> "Underlying":
        """Underlying backed by a non-bond asset."""
        if underlying_type is UnderlyingType.BONDS:
            raise ValueError("Use Underlying.of_bond for bond underlyings")
        return cls(
            identifier=identifier or asset.identifier or asset.symbol,
            underlying_type=underlying_type,
            asset=asset,
        )

    @property
    def is_bond(self) -> bool:
        """True only when the tag is BONDS and the payload really is a Bond."""
        return self.underlying_type is UnderlyingType.BONDS and isinstance(self.asset, Bond)

    @property
    def bond(self) -> Optional[Bond]:
        """Bond payload, or None for any other variant."""
        return self.asset if self.is_bond else None


@dataclass
class Future(Asset):
    """
    Bond future contract.

    Creation metadata is set by the caller; theoretical_price,
    contract_value and initial_margin_amount are written only by the
    pricing engine and are recomputed wholesale on every pass.

    Attributes:
        expiration_code: Exchange expiration code
        parent_ticker: Root ticker of the contract family
        full_name: Long display name
        segment: Market segment
        first_trading_date / last_trading_date: Trading window
        maturity_date: Pricing horizon
        expiry_date: Contract expiry
        tick_size / tick_value: Minimum increment and its cash value
        trading_currency: ISO currency code
        lot_size: Minimum tradable lot
        contract_multiplier: Units of underlying per contract
        underlying: What backs the future
        settlement_method / collateral_method / deposit_type: Contract terms
        instrument_status: Active flag
        percentage_margin: Initial margin as a percentage of contract value
    """
    expiration_code: Optional[str] = None
    parent_ticker: Optional[str] = None
    full_name: Optional[str] = None
    segment: Optional[str] = None

    first_trading_date: Optional[date] = None
    last_trading_date: Optional[date] = None
    maturity_date: Optional[date] = None
    expiry_date: Optional[date] = None

    tick_size: Optional[float] = None
    tick_value: Optional[float] = None
    trading_currency: Optional[str] = None
    lot_size: Optional[int] = None
    contract_multiplier: Optional[int] = None

    underlying: Optional[Underlying] = None
    settlement_method: Optional[SettlementMethod] = None
    collateral_method: CollateralMethod = CollateralMethod.CASHCOLLATERAL
    deposit_type: DepositType = DepositType.RATE
    instrument_status: bool = False

    percentage_margin: Optional[Decimal] = None
    theoretical_price: Optional[Decimal] = None
    contract_value: Optional[Decimal] = None
    initial_margin_amount: Optional[Decimal] = None

    def __post_init__(self):
        self.percentage_margin = _optional_decimal(self.percentage_margin)
        if self.deposit_type is None:
            self.deposit_type = DepositType.RATE
        if self.collateral_method is None:
            self.collateral_method = CollateralMethod.CASHCOLLATERAL
        if self.instrument_status is None:
            self.instrument_status = False

    def clear_calculated_fields(self):
        """Reset every engine-owned field to unset."""
        self.theoretical_price = None
        self.contract_value = None
        self.initial_margin_amount = None

    @property
    def calculated_fields(self) -> dict:
        return {
            "theoretical_price": self.theoretical_price,
            "contract_value": self.contract_value,
            "initial_margin_amount": self.initial_margin_amount,
        }


__all__ = [
    "CashFlow",
    "Asset",
    "Bond",
    "OtherAsset",
    "Underlying",
    "Future",
]

"""
Zero-coupon interest rate swap.

Each leg pays a single cash flow at maturity (plus an optional payment delay):

- fixed leg: a known amount N_fix, either given directly or derived from a
  fixed rate K as N * ((1 + K) ** yf - 1), yf the fixed day-count fraction
  between start and maturity;
- floating leg: N * (prod(1 + tau_k * L_k) - 1) under compound averaging, or
  N * sum(tau_k * L_k) under simple averaging, over sub-periods at the index
  tenor.

"Payer" and "receiver" refer to the fixed leg.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum

from valuation.cashflows import CashFlow, RateAveraging, SimpleCashFlow, SubPeriodsCashFlow
from valuation.engine import PricingArguments
from valuation.errors import ArgumentValidationError
from valuation.indexes.interest_rate import IborIndex
from valuation.instruments.swap import Swap
from valuation.interfaces import Calendar, DayCounter
from valuation.time import BusinessDayConvention


class SwapType(IntEnum):
    RECEIVER = -1
    PAYER = 1


class ZeroCouponSwap(Swap):
    """Two-leg swap with exactly one cash flow per leg."""

    Type = SwapType

    @dataclass
    class Arguments(Swap.Arguments):
        type: SwapType = SwapType.PAYER
        base_nominal: float | None = None
        start_date: date | None = None
        maturity_date: date | None = None
        fixed_payment: float | None = None

        def validate(self) -> None:
            if self.base_nominal is None or self.base_nominal <= 0.0:
                raise ArgumentValidationError(
                    f"base nominal must be positive, got {self.base_nominal}"
                )
            if self.start_date is None or self.maturity_date is None:
                raise ArgumentValidationError("start and maturity dates must be set")
            if self.maturity_date <= self.start_date:
                raise ArgumentValidationError(
                    f"maturity date ({self.maturity_date}) must be after "
                    f"start date ({self.start_date})"
                )
            if len(self.legs) != 2 or any(len(leg) != 1 for leg in self.legs):
                raise ArgumentValidationError(
                    "zero-coupon swap needs two legs with one cash flow each"
                )
            super().validate()

    Results = Swap.Results

    def __init__(
        self,
        type: SwapType,
        base_nominal: float,
        start_date: date,
        maturity_date: date,
        fixed_payment: float,
        ibor_index: IborIndex,
        calendar: Calendar,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
        payment_delay: int = 0,
        averaging: RateAveraging = RateAveraging.COMPOUND,
    ) -> None:
        if payment_delay < 0:
            raise ValueError("payment delay must be non-negative")
        self._type = SwapType(type)
        self._base_nominal = base_nominal
        self._start_date = start_date
        self._maturity_date = maturity_date
        self._fixed_payment = fixed_payment
        self._ibor_index = ibor_index
        self._averaging = averaging
        payment_date = calendar.advance(maturity_date, payment_delay, convention)
        fixed_leg: list[CashFlow] = [SimpleCashFlow(fixed_payment, payment_date)]
        floating_leg: list[CashFlow] = [
            SubPeriodsCashFlow(
                payment_date,
                base_nominal,
                start_date,
                maturity_date,
                ibor_index,
                averaging,
            )
        ]
        payer_fixed = self._type is SwapType.PAYER
        super().__init__([fixed_leg, floating_leg], [payer_fixed, not payer_fixed])

    @classmethod
    def from_fixed_rate(
        cls,
        type: SwapType,
        base_nominal: float,
        start_date: date,
        maturity_date: date,
        fixed_rate: float,
        fixed_day_counter: DayCounter,
        ibor_index: IborIndex,
        calendar: Calendar,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
        payment_delay: int = 0,
        averaging: RateAveraging = RateAveraging.COMPOUND,
    ) -> "ZeroCouponSwap":
        """Build the swap from a fixed rate compounded over the fixed accrual fraction."""
        fixed_payment = compounded_fixed_payment(
            base_nominal, fixed_rate, fixed_day_counter.year_fraction(start_date, maturity_date)
        )
        return cls(
            type,
            base_nominal,
            start_date,
            maturity_date,
            fixed_payment,
            ibor_index,
            calendar,
            convention,
            payment_delay,
            averaging,
        )

    # inspectors

    def type(self) -> SwapType:
        return self._type

    def base_nominal(self) -> float:
        return self._base_nominal

    def fixed_payment(self) -> float:
        return self._fixed_payment

    def start_date(self) -> date:
        return self._start_date

    def maturity_date(self) -> date:
        return self._maturity_date

    def ibor_index(self) -> IborIndex:
        return self._ibor_index

    def averaging(self) -> RateAveraging:
        return self._averaging

    def fixed_leg(self) -> list[CashFlow]:
        return self.leg(0)

    def floating_leg(self) -> list[CashFlow]:
        return self.leg(1)

    # bridge

    def setup_arguments(self, arguments: PricingArguments) -> None:
        super().setup_arguments(arguments)
        if isinstance(arguments, ZeroCouponSwap.Arguments):
            arguments.type = self._type
            arguments.base_nominal = self._base_nominal
            arguments.start_date = self._start_date
            arguments.maturity_date = self._maturity_date
            arguments.fixed_payment = self._fixed_payment

    # results

    def fixed_leg_npv(self) -> float:
        return self.leg_npv(0)

    def floating_leg_npv(self) -> float:
        return self.leg_npv(1)

    def fair_fixed_payment(self) -> float:
        """Fixed amount that would make the swap worth zero."""
        fixed_npv = self.fixed_leg_npv()
        if fixed_npv == 0.0:
            raise ValueError("fixed leg NPV is zero, cannot imply a fair fixed payment")
        return -self.floating_leg_npv() / fixed_npv * self._fixed_payment

    def fair_fixed_rate(self, day_counter: DayCounter) -> float:
        """Fixed rate giving the fair fixed payment under day_counter."""
        yf = day_counter.year_fraction(self._start_date, self._maturity_date)
        return (self.fair_fixed_payment() / self._base_nominal + 1.0) ** (1.0 / yf) - 1.0


def compounded_fixed_payment(base_nominal: float, fixed_rate: float, year_fraction: float) -> float:
    """N * ((1 + K) ** yf - 1)."""
    return base_nominal * ((1.0 + fixed_rate) ** year_fraction - 1.0)

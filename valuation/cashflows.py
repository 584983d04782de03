"""
Cash flows for single-payment legs.

- SimpleCashFlow: a known amount on a known date.
- SubPeriodsCashFlow: one payment whose amount averages index fixings over
  consecutive sub-periods, either simply (sum of tau_k * L_k) or by
  compounding (product of (1 + tau_k * L_k), minus one).

Floating amounts are not cached: each `amount()` call asks the index for its
fixings again, so the result always reflects the current evaluation date,
curves and stored history.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import date
from enum import Enum
from typing import Sequence

from valuation.indexes.interest_rate import IborIndex
from valuation.observable import Observable, Observer
from valuation.settings import Settings


class RateAveraging(Enum):
    """How periodic fixings are combined into a single floating payment."""

    SIMPLE = "simple"
    COMPOUND = "compound"

    def aggregate(self, fractions: Sequence[float], fixings: Sequence[float]) -> float:
        """Accrued rate per unit of nominal over all sub-periods."""
        if len(fractions) != len(fixings):
            raise ValueError("fractions and fixings must have the same length")
        if self is RateAveraging.SIMPLE:
            return sum(tau * rate for tau, rate in zip(fractions, fixings))
        return math.prod(1.0 + tau * rate for tau, rate in zip(fractions, fixings)) - 1.0


def averaged_amount(
    nominal: float,
    fractions: Sequence[float],
    fixings: Sequence[float],
    averaging: RateAveraging = RateAveraging.COMPOUND,
) -> float:
    """Floating amount: nominal times the averaged accrued rate."""
    return nominal * averaging.aggregate(fractions, fixings)


class CashFlow(Observable, ABC):
    """A single payment."""

    def __init__(self, payment_date: date) -> None:
        Observable.__init__(self)
        self._payment_date = payment_date

    def date(self) -> date:
        return self._payment_date

    @abstractmethod
    def amount(self) -> float:
        ...

    def accrual_start_date(self) -> date:
        return self._payment_date

    def accrual_end_date(self) -> date:
        return self._payment_date

    def has_valid_accrual_period(self) -> bool:
        return True

    def has_occurred(self, ref_date: date | None = None, include_ref_date: bool = False) -> bool:
        """
        True if the payment is in the past relative to ref_date (default: the
        evaluation date). A payment on ref_date counts as occurred unless
        include_ref_date is set.
        """
        if ref_date is None:
            ref_date = Settings.instance().evaluation_date
        if include_ref_date:
            return self._payment_date < ref_date
        return self._payment_date <= ref_date


class SimpleCashFlow(CashFlow):
    """Known amount paid on a given date."""

    def __init__(self, amount: float, payment_date: date) -> None:
        super().__init__(payment_date)
        self._amount = amount

    def amount(self) -> float:
        return self._amount

    def __repr__(self) -> str:
        return f"SimpleCashFlow({self._amount!r}, {self._payment_date})"


class SubPeriodsCashFlow(CashFlow, Observer):
    """
    Floating payment averaging index fixings over sub-periods of
    [accrual_start, accrual_end].

    Sub-period k accrues tau_k (index day counter) at the index fixing for the
    fixing date of its start.
    """

    def __init__(
        self,
        payment_date: date,
        nominal: float,
        accrual_start: date,
        accrual_end: date,
        index: IborIndex,
        averaging: RateAveraging = RateAveraging.COMPOUND,
    ) -> None:
        CashFlow.__init__(self, payment_date)
        Observer.__init__(self)
        self._nominal = nominal
        self._accrual_start = accrual_start
        self._accrual_end = accrual_end
        self._index = index
        self._averaging = averaging
        # Sub-period dates depend only on the terms; built on first use so that
        # inconsistent terms surface when the swap arguments are validated.
        self._value_dates: list[date] | None = None
        self._fixing_dates: list[date] = []
        self._fractions: list[float] = []
        self.register_with(index)

    def _build_sub_periods(self) -> None:
        if self._value_dates is not None:
            return
        value_dates = self._index.accrual_dates(self._accrual_start, self._accrual_end)
        day_counter = self._index.day_counter()
        self._fixing_dates = [self._index.fixing_date(d) for d in value_dates[:-1]]
        self._fractions = [
            day_counter.year_fraction(d1, d2)
            for d1, d2 in zip(value_dates[:-1], value_dates[1:])
        ]
        self._value_dates = value_dates

    def nominal(self) -> float:
        return self._nominal

    def accrual_start_date(self) -> date:
        return self._accrual_start

    def accrual_end_date(self) -> date:
        return self._accrual_end

    def has_valid_accrual_period(self) -> bool:
        """Sub-periods can only be built when the accrual end is after its start."""
        return self._accrual_start < self._accrual_end

    def index(self) -> IborIndex:
        return self._index

    def averaging(self) -> RateAveraging:
        return self._averaging

    def value_dates(self) -> list[date]:
        self._build_sub_periods()
        return list(self._value_dates)

    def fixing_dates(self) -> list[date]:
        self._build_sub_periods()
        return list(self._fixing_dates)

    def accrual_fractions(self) -> list[float]:
        self._build_sub_periods()
        return list(self._fractions)

    def index_fixings(self) -> list[float]:
        return [self._index.fixing(d) for d in self.fixing_dates()]

    def rate(self) -> float:
        """Averaged rate per unit of nominal, not annualized."""
        return self._averaging.aggregate(self.accrual_fractions(), self.index_fixings())

    def amount(self) -> float:
        return averaged_amount(
            self._nominal, self.accrual_fractions(), self.index_fixings(), self._averaging
        )

    def update(self) -> None:
        self.notify_observers()

    def __repr__(self) -> str:
        return (
            f"SubPeriodsCashFlow({self._index.name()!r}, {self._accrual_start}"
            f" -> {self._accrual_end}, {self._averaging.value})"
        )

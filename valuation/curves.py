"""
Interest-rate curve primitives.

This module deliberately keeps curve math minimal and explicit:
- Curves are keyed by **dates**; times are year fractions from the curve's
  reference date under the curve's day counter.
- Rates are **continuously compounded zero rates**.
- ZeroRateCurve interpolates **linearly in zero rates** between pillars, with
  flat extrapolation.

Both curves are observables: whatever changes their inputs (a quote they
watch, a relinked rate handle) is forwarded to indexes and instruments built
on top of them. Bootstrapping is out of scope.
"""

from __future__ import annotations

import math
from abc import abstractmethod
from datetime import date

from valuation.handles import Handle
from valuation.interfaces import DayCounter
from valuation.observable import Observable, Observer
from valuation.quotes import SimpleQuote
from valuation.time import Actual365Fixed


class _DateCurve(Observable, Observer):
    def __init__(self, reference_date: date, day_counter: DayCounter | None) -> None:
        Observable.__init__(self)
        Observer.__init__(self)
        self._reference_date = reference_date
        self._day_counter = day_counter or Actual365Fixed()

    def reference_date(self) -> date:
        return self._reference_date

    def day_counter(self) -> DayCounter:
        return self._day_counter

    def time_from_reference(self, d: date) -> float:
        return self._day_counter.year_fraction(self._reference_date, d)

    def discount(self, d: date) -> float:
        """Discount factor DF(d) = exp(-r(t)*t) with t the time to d."""
        t = self.time_from_reference(d)
        if t < 0:
            raise ValueError(
                f"date {d} is before curve reference date {self._reference_date}"
            )
        return self.df(t)

    def df(self, t: float) -> float:
        return math.exp(-self.zero_rate_cc(t) * t)

    @abstractmethod
    def zero_rate_cc(self, t: float) -> float:
        """Continuously compounded zero rate at time t."""
        ...

    def forward_rate(self, d1: date, d2: date, day_counter: DayCounter) -> float:
        """Simply compounded forward between d1 and d2."""
        tau = day_counter.year_fraction(d1, d2)
        if tau <= 0:
            raise ValueError("forward period must have positive length")
        return (self.discount(d1) / self.discount(d2) - 1.0) / tau

    def update(self) -> None:
        self.notify_observers()


class FlatForward(_DateCurve):
    """
    Flat continuously compounded curve.

    `rate` is either a number or a Handle to a SimpleQuote; with a handle the
    curve follows the quote and notifies its observers on every quote change.
    """

    def __init__(
        self,
        reference_date: date,
        rate: float | Handle[SimpleQuote],
        day_counter: DayCounter | None = None,
    ) -> None:
        super().__init__(reference_date, day_counter)
        if isinstance(rate, Handle):
            self._rate: Handle[SimpleQuote] = rate
        else:
            self._rate = Handle(SimpleQuote(float(rate)))
        self.register_with(self._rate)

    def zero_rate_cc(self, t: float) -> float:
        return self._rate.current_link().value()

    def bumped(self, bump: float) -> "FlatForward":
        """Return a new curve with the rate shifted by `bump` (1bp = 0.0001)."""
        return FlatForward(
            self._reference_date,
            self.zero_rate_cc(0.0) + bump,
            self._day_counter,
        )

    def __repr__(self) -> str:
        return f"FlatForward({self._reference_date}, {self._rate!r})"


class ZeroRateCurve(_DateCurve):
    """
    Zero rate curve (continuously compounded) with linear interpolation.

    - **Pillars** are increasing times (year fractions from reference_date).
    - `zero_rates_cc[i]` is the CC zero rate at `pillars[i]`.
    - `set_rates` replaces the rates in place and notifies observers.
      It is the only mutator; `pillars()` and `zero_rates()` return copies.
    """

    def __init__(
        self,
        reference_date: date,
        pillars: list[float],
        zero_rates_cc: list[float],
        day_counter: DayCounter | None = None,
    ) -> None:
        super().__init__(reference_date, day_counter)
        self._pillars = list(pillars)
        self._zero_rates_cc = list(zero_rates_cc)
        self._validate()

    def pillars(self) -> tuple[float, ...]:
        return tuple(self._pillars)

    def zero_rates(self) -> tuple[float, ...]:
        return tuple(self._zero_rates_cc)

    def _validate(self) -> None:
        if len(self._pillars) != len(self._zero_rates_cc):
            raise ValueError("pillars and zero_rates_cc must have the same length")
        for i in range(1, len(self._pillars)):
            if self._pillars[i] <= self._pillars[i - 1]:
                raise ValueError("pillars must be strictly increasing")

    def zero_rate_cc(self, t: float) -> float:
        """
        Continuously compounded zero rate at time t (year-fraction).
        Linear interpolation in zero rates. t must be >= 0.
        """
        if t < 0:
            raise ValueError("t must be >= 0")
        if not self._pillars:
            raise ValueError("curve has no pillars")
        if t <= self._pillars[0]:
            return self._zero_rates_cc[0]
        if t >= self._pillars[-1]:
            return self._zero_rates_cc[-1]
        for i in range(len(self._pillars) - 1):
            if self._pillars[i] <= t <= self._pillars[i + 1]:
                t0, t1 = self._pillars[i], self._pillars[i + 1]
                r0, r1 = self._zero_rates_cc[i], self._zero_rates_cc[i + 1]
                return r0 + (r1 - r0) * (t - t0) / (t1 - t0)
        return self._zero_rates_cc[-1]

    def set_rates(self, zero_rates_cc: list[float]) -> None:
        if len(zero_rates_cc) != len(self._pillars):
            raise ValueError("pillars and zero_rates_cc must have the same length")
        self._zero_rates_cc = list(zero_rates_cc)
        self.notify_observers()

    def bumped(self, bump: float) -> "ZeroRateCurve":
        """
        Return a new curve with a *parallel* additive shift to all zero rates.

        `bump` is expressed in absolute rate terms (e.g. 1bp = 0.0001).
        """
        return ZeroRateCurve(
            self._reference_date,
            list(self._pillars),
            [r + bump for r in self._zero_rates_cc],
            self._day_counter,
        )

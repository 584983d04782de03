"""
Protocol-based interfaces for the collaborators the valuation core consumes.

Using typing.Protocol enables structural subtyping: any calendar, day counter,
curve or fixing store that implements the required methods can be plugged in
without inheriting from anything in this package. The concrete versions shipped
in `valuation.time`, `valuation.curves` and `valuation.fixings` are deliberately
small; production systems are expected to bring their own.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from valuation.observable import Observable
    from valuation.time import BusinessDayConvention


@runtime_checkable
class Calendar(Protocol):
    """Business-day calendar."""

    name: str

    def is_business_day(self, d: date) -> bool:
        ...

    def adjust(self, d: date, convention: BusinessDayConvention) -> date:
        """Roll d onto a business day according to convention."""
        ...

    def advance(self, d: date, days: int, convention: BusinessDayConvention) -> date:
        """Move d by a number of business days (negative goes backwards)."""
        ...


@runtime_checkable
class DayCounter(Protocol):
    """Accrual day-count convention."""

    name: str

    def day_count(self, d1: date, d2: date) -> int:
        ...

    def year_fraction(self, d1: date, d2: date) -> float:
        ...


@runtime_checkable
class YieldCurve(Protocol):
    """Discount curve keyed by dates.

    Implementations are observables: anything that mutates the curve must call
    notify_observers() afterwards.
    """

    def reference_date(self) -> date:
        ...

    def discount(self, d: date) -> float:
        """Discount factor from the reference date to d."""
        ...

    def register_observer(self, observer) -> bool:
        ...


class FixingHistory(Protocol):
    """Historical fixing store.

    `get` returns None when no fixing is stored. `notifier(name)` is the
    observable that fires whenever the history of that index changes.
    """

    def get(self, name: str, d: date) -> float | None:
        ...

    def notifier(self, name: str) -> Observable:
        ...

"""
Minimal date conventions: business-day rolling, calendars, day counters and
sub-period date generation.

These are collaborators of the valuation core, not a market-conventions
library: calendars know weekends plus an explicit holiday set, and day
counters cover the handful of conventions the swap and index code needs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, timedelta
from enum import Enum
from typing import Iterable

from dateutil.relativedelta import relativedelta


class BusinessDayConvention(Enum):
    """Business day adjustment rules."""

    UNADJUSTED = "UNADJUSTED"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"


class _BaseCalendar(ABC):
    name = "base"

    @abstractmethod
    def is_business_day(self, d: date) -> bool:
        ...

    def is_holiday(self, d: date) -> bool:
        return not self.is_business_day(d)

    def adjust(
        self,
        d: date,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
    ) -> date:
        if convention is BusinessDayConvention.UNADJUSTED:
            return d
        if convention in (
            BusinessDayConvention.FOLLOWING,
            BusinessDayConvention.MODIFIED_FOLLOWING,
        ):
            adjusted = self._roll(d, 1)
            if (
                convention is BusinessDayConvention.MODIFIED_FOLLOWING
                and adjusted.month != d.month
            ):
                return self._roll(d, -1)
            return adjusted
        adjusted = self._roll(d, -1)
        if (
            convention is BusinessDayConvention.MODIFIED_PRECEDING
            and adjusted.month != d.month
        ):
            return self._roll(d, 1)
        return adjusted

    def advance(
        self,
        d: date,
        days: int,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
    ) -> date:
        """Move by business days; zero days just adjusts d."""
        if days == 0:
            return self.adjust(d, convention)
        step = 1 if days > 0 else -1
        remaining = abs(days)
        current = d
        while remaining > 0:
            current += timedelta(days=step)
            if self.is_business_day(current):
                remaining -= 1
        return current

    def business_days_between(self, d1: date, d2: date) -> int:
        """Business days in [d1, d2)."""
        count = 0
        current = d1
        while current < d2:
            if self.is_business_day(current):
                count += 1
            current += timedelta(days=1)
        return count

    def _roll(self, d: date, step: int) -> date:
        while not self.is_business_day(d):
            d += timedelta(days=step)
        return d

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NullCalendar(_BaseCalendar):
    """Every day is a business day."""

    name = "Null"

    def is_business_day(self, d: date) -> bool:
        return True


class WeekendsOnly(_BaseCalendar):
    """Saturdays and Sundays are holidays, plus any explicitly listed dates."""

    name = "Weekends only"

    def __init__(self, holidays: Iterable[date] = ()) -> None:
        self._holidays = frozenset(holidays)

    def is_business_day(self, d: date) -> bool:
        return d.weekday() < 5 and d not in self._holidays

    def holidays(self) -> frozenset[date]:
        return self._holidays

    def __eq__(self, other: object) -> bool:
        return isinstance(other, WeekendsOnly) and other._holidays == self._holidays

    def __hash__(self) -> int:
        return hash((WeekendsOnly, self._holidays))


class _DayCounter(ABC):
    name = "base"

    def day_count(self, d1: date, d2: date) -> int:
        return (d2 - d1).days

    @abstractmethod
    def year_fraction(self, d1: date, d2: date) -> float:
        ...

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self))


class Actual360(_DayCounter):
    name = "Actual/360"

    def year_fraction(self, d1: date, d2: date) -> float:
        return self.day_count(d1, d2) / 360.0


class Actual365Fixed(_DayCounter):
    name = "Actual/365 (Fixed)"

    def year_fraction(self, d1: date, d2: date) -> float:
        return self.day_count(d1, d2) / 365.0


class Thirty360(_DayCounter):
    """30/360 (bond basis)."""

    name = "30/360 (Bond Basis)"

    def day_count(self, d1: date, d2: date) -> int:
        dd1, dd2 = d1.day, d2.day
        if dd1 == 31:
            dd1 = 30
        if dd2 == 31 and dd1 >= 30:
            dd2 = 30
        return 360 * (d2.year - d1.year) + 30 * (d2.month - d1.month) + (dd2 - dd1)

    def year_fraction(self, d1: date, d2: date) -> float:
        return self.day_count(d1, d2) / 360.0


def add_months(d: date, months: int, end_of_month: bool = False) -> date:
    """Calendar-month arithmetic; end_of_month keeps month-end dates at month end."""
    result = d + relativedelta(months=months)
    if end_of_month and (d + timedelta(days=1)).month != d.month:
        result = result + relativedelta(day=31)
    return result


def sub_period_dates(
    start: date,
    end: date,
    tenor_months: int,
    calendar: _BaseCalendar,
    convention: BusinessDayConvention,
) -> list[date]:
    """
    Accrual boundaries from start to end stepping forward by tenor_months.

    Intermediate dates are adjusted with the calendar; start and end are kept as
    given. A short final stub ends the list when the tenor does not divide the
    period evenly.
    """
    if end <= start:
        raise ValueError("end date must be after start date")
    if tenor_months <= 0:
        raise ValueError("tenor_months must be positive")
    dates = [start]
    i = 1
    while True:
        unadjusted = add_months(start, i * tenor_months)
        if unadjusted >= end:
            break
        adjusted = calendar.adjust(unadjusted, convention)
        if adjusted >= end:
            break
        if adjusted > dates[-1]:
            dates.append(adjusted)
        i += 1
    dates.append(end)
    return dates

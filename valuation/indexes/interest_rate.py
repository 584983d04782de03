"""Interest-rate indexes: term (IBOR-style) and overnight."""

from __future__ import annotations

from datetime import date, timedelta

from valuation.fixings import FixingStore
from valuation.handles import Handle
from valuation.indexes.index import Index
from valuation.interfaces import Calendar, DayCounter, YieldCurve
from valuation.time import BusinessDayConvention, add_months, sub_period_dates


class IborIndex(Index):
    """
    Term rate index (e.g. Euribor6M) forecast off a single forwarding curve.

    The fixing on date d is the simply compounded forward rate between the value
    date (d + fixing_days business days) and the value date plus the tenor.
    """

    def __init__(
        self,
        family_name: str,
        tenor_months: int,
        fixing_days: int,
        currency: str,
        fixing_calendar: Calendar,
        convention: BusinessDayConvention,
        end_of_month: bool,
        day_counter: DayCounter,
        forwarding: Handle[YieldCurve] | None = None,
        fixing_store: FixingStore | None = None,
    ) -> None:
        super().__init__(fixing_store)
        if fixing_days < 0:
            raise ValueError("fixing_days must be non-negative")
        self._family_name = family_name
        self._tenor_months = tenor_months
        self._fixing_days = fixing_days
        self._currency = currency
        self._calendar = fixing_calendar
        self._convention = convention
        self._end_of_month = end_of_month
        self._day_counter = day_counter
        self._forwarding = forwarding if forwarding is not None else Handle()
        self.register_with(self._forwarding)
        self._register_with_environment()

    def name(self) -> str:
        return f"{self._family_name}{self._tenor_label()} {self._day_counter.name}"

    def _tenor_label(self) -> str:
        return f"{self._tenor_months}M"

    def family_name(self) -> str:
        return self._family_name

    def tenor_months(self) -> int:
        return self._tenor_months

    def fixing_days(self) -> int:
        return self._fixing_days

    def currency(self) -> str:
        return self._currency

    def fixing_calendar(self) -> Calendar:
        return self._calendar

    def business_day_convention(self) -> BusinessDayConvention:
        return self._convention

    def end_of_month(self) -> bool:
        return self._end_of_month

    def day_counter(self) -> DayCounter:
        return self._day_counter

    def forwarding_term_structure(self) -> Handle[YieldCurve]:
        return self._forwarding

    def value_date(self, fixing_date: date) -> date:
        return self._calendar.advance(fixing_date, self._fixing_days, BusinessDayConvention.FOLLOWING)

    def fixing_date(self, value_date: date) -> date:
        return self._calendar.advance(value_date, -self._fixing_days, BusinessDayConvention.PRECEDING)

    def maturity_date(self, value_date: date) -> date:
        return self._calendar.adjust(
            add_months(value_date, self._tenor_months, self._end_of_month),
            self._convention,
        )

    def accrual_dates(self, start: date, end: date) -> list[date]:
        """Sub-period boundaries from start to end at the index tenor."""
        return sub_period_dates(start, end, self._tenor_months, self._calendar, self._convention)

    def forecast_fixing(self, fixing_date: date) -> float:
        start = self.value_date(fixing_date)
        end = self.maturity_date(start)
        return self.forecast_rate(start, end)

    def forecast_rate(self, start: date, end: date) -> float:
        if self._forwarding.empty():
            raise ValueError(f"null term structure set to this instance of {self.name()}")
        tau = self._day_counter.year_fraction(start, end)
        curve = self._forwarding()
        return (curve.discount(start) / curve.discount(end) - 1.0) / tau

    def clone(self, forwarding: Handle[YieldCurve]) -> "IborIndex":
        """Copy of this index forecasting off a different curve."""
        return IborIndex(
            self._family_name,
            self._tenor_months,
            self._fixing_days,
            self._currency,
            self._calendar,
            self._convention,
            self._end_of_month,
            self._day_counter,
            forwarding,
            self._fixing_store,
        )


class OvernightIndex(IborIndex):
    """Overnight rate index: one business day tenor, fixed on the value date."""

    def __init__(
        self,
        family_name: str,
        fixing_days: int,
        currency: str,
        fixing_calendar: Calendar,
        day_counter: DayCounter,
        forwarding: Handle[YieldCurve] | None = None,
        fixing_store: FixingStore | None = None,
    ) -> None:
        super().__init__(
            family_name,
            0,
            fixing_days,
            currency,
            fixing_calendar,
            BusinessDayConvention.FOLLOWING,
            False,
            day_counter,
            forwarding,
            fixing_store,
        )

    def _tenor_label(self) -> str:
        return "ON"

    def maturity_date(self, value_date: date) -> date:
        return self._calendar.advance(value_date, 1, BusinessDayConvention.FOLLOWING)

    def accrual_dates(self, start: date, end: date) -> list[date]:
        """Every business day from start up to end (daily compounding periods)."""
        if end <= start:
            raise ValueError("end date must be after start date")
        dates = [start]
        current = start + timedelta(days=1)
        while current < end:
            if self._calendar.is_business_day(current):
                dates.append(current)
            current += timedelta(days=1)
        dates.append(end)
        return dates

    def clone(self, forwarding: Handle[YieldCurve]) -> "OvernightIndex":
        return OvernightIndex(
            self._family_name,
            self._fixing_days,
            self._currency,
            self._calendar,
            self._day_counter,
            forwarding,
            self._fixing_store,
        )

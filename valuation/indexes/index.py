"""
Base class for market indexes.

The fixing-resolution state machine lives here, once. Concrete indexes only
decide how to forecast (`forecast_fixing`) and, if needed, where past values
come from (`past_fixing`).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable

from valuation.errors import InvalidDate, MissingFixing
from valuation.fixings import FixingStore, default_fixing_store
from valuation.interfaces import Calendar
from valuation.observable import Observable, Observer
from valuation.settings import Settings

logger = logging.getLogger(__name__)


class Index(Observable, Observer, ABC):
    """
    A named market reference (rate or level) that can return fixings.

    An index is observed by the cash flows and instruments built on it and
    observes the curves it forecasts from, the evaluation date and its own
    fixing history. It holds no cache: every `fixing()` call resolves afresh.
    """

    def __init__(self, fixing_store: FixingStore | None = None) -> None:
        Observable.__init__(self)
        Observer.__init__(self)
        self._fixing_store = fixing_store if fixing_store is not None else default_fixing_store()

    def _register_with_environment(self) -> None:
        """Called by subclasses once name() is available."""
        self.register_with(Settings.instance().evaluation_date_observable())
        self.register_with(self._fixing_store.notifier(self.name()))

    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def fixing_calendar(self) -> Calendar:
        ...

    def is_valid_fixing_date(self, fixing_date: date) -> bool:
        return self.fixing_calendar().is_business_day(fixing_date)

    def fixing(self, fixing_date: date, forecast_todays_fixing: bool = False) -> float:
        """
        Resolve the fixing for fixing_date.

        Past dates come from the historical store only, future dates from the
        curves only. On the evaluation date a stored value wins unless
        forecast_todays_fixing is set; without a stored value the index
        forecasts, or fails if today's historic fixings are enforced.
        """
        if not self.is_valid_fixing_date(fixing_date):
            raise InvalidDate(f"Fixing date {fixing_date} is not valid for {self.name()}")

        settings = Settings.instance()
        today = settings.evaluation_date

        if fixing_date > today or (fixing_date == today and forecast_todays_fixing):
            logger.debug("%s: forecasting fixing for %s", self.name(), fixing_date)
            return self.forecast_fixing(fixing_date)

        if fixing_date < today or settings.enforces_todays_historic_fixings:
            result = self.past_fixing(fixing_date)
            if result is None:
                raise MissingFixing(f"Missing {self.name()} fixing for {fixing_date}")
            return result

        result = self.past_fixing(fixing_date)
        if result is None:
            logger.debug(
                "%s: no stored fixing for today (%s), forecasting", self.name(), fixing_date
            )
            return self.forecast_fixing(fixing_date)
        return result

    @abstractmethod
    def forecast_fixing(self, fixing_date: date) -> float:
        """Curve-based estimate of the fixing; overridden per asset class."""
        ...

    def past_fixing(self, fixing_date: date) -> float | None:
        """Stored historical fixing, or None when absent."""
        if not self.is_valid_fixing_date(fixing_date):
            raise InvalidDate(f"Fixing date {fixing_date} is not valid for {self.name()}")
        return self._fixing_store.get(self.name(), fixing_date)

    def has_historical_fixing(self, fixing_date: date) -> bool:
        return self._fixing_store.get(self.name(), fixing_date) is not None

    # historical data helpers

    def fixing_store(self) -> FixingStore:
        return self._fixing_store

    def add_fixing(self, fixing_date: date, value: float, force_overwrite: bool = False) -> None:
        self.add_fixings([(fixing_date, value)], force_overwrite)

    def add_fixings(
        self,
        fixings: Iterable[tuple[date, float]],
        force_overwrite: bool = False,
    ) -> None:
        """Store fixings after checking each date against the fixing calendar."""
        fixings = list(fixings)
        for d, _ in fixings:
            if not self.is_valid_fixing_date(d):
                raise InvalidDate(f"Fixing date {d} is not valid for {self.name()}")
        self._fixing_store.add_fixings(self.name(), fixings, force_overwrite)

    def time_series(self) -> dict[date, float]:
        return self._fixing_store.history(self.name())

    def clear_fixings(self) -> None:
        self._fixing_store.clear_history(self.name())

    def update(self) -> None:
        self.notify_observers()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name()!r})"

"""
Process-wide valuation settings.

The evaluation date ("today") decides whether an index fixing is looked up in
the historical store or forecast from a curve. It is an observable value:
moving it notifies every index and instrument registered with it, so cached
results are invalidated without rebuilding anything.

Start-up configuration comes from the environment:
- VALUATION_EVALUATION_DATE: ISO date (YYYY-MM-DD) used as the initial "today".
- VALUATION_ENFORCE_TODAYS_HISTORIC_FIXINGS: "1"/"true" to require a stored
  fixing for today instead of falling back to a forecast.
"""

from __future__ import annotations

import logging
import os
from datetime import date

from valuation.observable import Observable

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ObservableDate(Observable):
    """Date value that notifies on change. None means the system date."""

    def __init__(self, value: date | None = None) -> None:
        super().__init__()
        self._value = value

    def value(self) -> date:
        return self._value if self._value is not None else date.today()

    def is_set(self) -> bool:
        return self._value is not None

    def set(self, value: date | None) -> None:
        if value != self._value:
            self._value = value
            self.notify_observers()


class Settings:
    """Singleton holding the evaluation date and fixing-policy flags."""

    _instance: "Settings | None" = None

    def __init__(self) -> None:
        self._evaluation_date = ObservableDate(_date_from_env())
        self.enforces_todays_historic_fixings = _flag_from_env(
            "VALUATION_ENFORCE_TODAYS_HISTORIC_FIXINGS"
        )

    @classmethod
    def instance(cls) -> "Settings":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def evaluation_date(self) -> date:
        return self._evaluation_date.value()

    @evaluation_date.setter
    def evaluation_date(self, d: date | None) -> None:
        logger.debug("evaluation date set to %s", d)
        self._evaluation_date.set(d)

    def evaluation_date_observable(self) -> ObservableDate:
        """Observable to register with in order to follow evaluation-date moves."""
        return self._evaluation_date

    def anchor_evaluation_date(self) -> None:
        """Pin the evaluation date to the current system date."""
        if not self._evaluation_date.is_set():
            self._evaluation_date.set(date.today())

    def reset_evaluation_date(self) -> None:
        """Go back to following the system date."""
        self._evaluation_date.set(None)


class SavedSettings:
    """Context manager restoring evaluation date and flags on exit."""

    def __enter__(self) -> Settings:
        settings = Settings.instance()
        self._evaluation_date = settings._evaluation_date._value
        self._enforces = settings.enforces_todays_historic_fixings
        return settings

    def __exit__(self, *exc_info) -> None:
        settings = Settings.instance()
        settings.evaluation_date = self._evaluation_date
        settings.enforces_todays_historic_fixings = self._enforces


def _date_from_env() -> date | None:
    raw = os.environ.get("VALUATION_EVALUATION_DATE")
    if not raw:
        return None
    return date.fromisoformat(raw.strip())


def _flag_from_env(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUE_VALUES

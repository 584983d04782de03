"""
Historical fixing store.

Fixings are kept per upper-cased index name, keyed by date. Each name has its
own notifier so that storing a fixing for one index invalidates only the
instruments that depend on that index.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterable

from valuation.observable import Observable

logger = logging.getLogger(__name__)


class FixingStore:
    """In-memory historical fixings with per-index change notification."""

    def __init__(self) -> None:
        self._history: dict[str, dict[date, float]] = {}
        self._notifiers: dict[str, Observable] = {}

    def get(self, name: str, d: date) -> float | None:
        """Return the stored fixing, or None if absent."""
        return self._history.get(name.upper(), {}).get(d)

    def has_history(self, name: str) -> bool:
        return bool(self._history.get(name.upper()))

    def history(self, name: str) -> dict[date, float]:
        """Copy of the stored fixings for name, sorted by date."""
        series = self._history.get(name.upper(), {})
        return dict(sorted(series.items()))

    def add_fixing(
        self,
        name: str,
        d: date,
        value: float,
        force_overwrite: bool = False,
    ) -> None:
        self.add_fixings(name, [(d, value)], force_overwrite)

    def add_fixings(
        self,
        name: str,
        fixings: Iterable[tuple[date, float]],
        force_overwrite: bool = False,
    ) -> None:
        """
        Store several fixings and notify once.

        An existing, different value for the same date is an error unless
        force_overwrite is set. Nothing is stored if any fixing is rejected.
        """
        key = name.upper()
        series = self._history.get(key, {})
        updates: dict[date, float] = {}
        for d, value in fixings:
            if value is None or math.isnan(value):
                raise ValueError(f"invalid fixing value {value!r} for {name} on {d}")
            existing = series.get(d)
            if existing is not None and existing != value and not force_overwrite:
                raise ValueError(
                    f"At least one duplicated fixing provided: {name}, {d}, {value} "
                    f"while {existing} value is already present"
                )
            updates[d] = value
        if not updates:
            return
        series.update(updates)
        self._history[key] = series
        logger.debug("stored %d fixing(s) for %s", len(updates), key)
        self.notifier(key).notify_observers()

    def clear_history(self, name: str) -> None:
        key = name.upper()
        if self._history.pop(key, None) is not None:
            self.notifier(key).notify_observers()

    def clear_histories(self) -> None:
        names = list(self._history)
        self._history.clear()
        for key in names:
            self.notifier(key).notify_observers()

    def notifier(self, name: str) -> Observable:
        """Observable that fires whenever the history of `name` changes."""
        return self._notifiers.setdefault(name.upper(), Observable())

    def names(self) -> list[str]:
        return sorted(self._history)


_default_store = FixingStore()


def default_fixing_store() -> FixingStore:
    """The store indexes use unless they are given one explicitly."""
    return _default_store

"""
Subject/subscriber primitive behind lazy cache invalidation.

- Subscribers are keyed by object identity and held through weak references:
  an observer that is garbage-collected silently leaves every subject it was
  registered with.
- `notify_observers()` is single-hop. Chains (curve -> index -> instrument)
  exist only because observers that are also observables re-notify from their
  own `update()`.
- Failure policy is continue-and-collect: every subscriber registered at call
  entry is visited, failures are logged, and a NotificationError carrying all
  of them is raised once the fan-out is complete.
- There is no cycle detection. A cycle of plain observers recurses forever;
  LazyObject carries its own re-entrancy guard.
"""

from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod

from valuation.errors import NotificationError

logger = logging.getLogger(__name__)


class Observable:
    """Holds a set of observers and fans `update()` out to them."""

    def __init__(self) -> None:
        self._observers: dict[int, weakref.ref] = {}
        # Visited set of the notification currently in progress (None when idle).
        self._delivered: set[int] | None = None

    def register_observer(self, observer: "Observer") -> bool:
        """Add observer; returns False if it was already registered."""
        key = id(observer)
        if key in self._observers:
            return False
        observers = self._observers

        def _drop(_ref: weakref.ref, key: int = key) -> None:
            observers.pop(key, None)

        self._observers[key] = weakref.ref(observer, _drop)
        return True

    def unregister_observer(self, observer: "Observer") -> bool:
        """Remove observer; returns False if it was not registered."""
        return self._observers.pop(id(observer), None) is not None

    def observer_count(self) -> int:
        return len(self._observers)

    def is_observed_by(self, observer: "Observer") -> bool:
        return id(observer) in self._observers

    def notify_observers(self) -> None:
        """Call `update()` once on every observer registered at entry.

        A re-entrant call on the same subject during delivery shares the visited
        set of the outer call, so nobody is notified twice.
        """
        snapshot = list(self._observers.items())
        outermost = self._delivered is None
        if outermost:
            self._delivered = set()
        delivered = self._delivered
        errors: list[BaseException] = []
        try:
            for key, ref in snapshot:
                if key in delivered:
                    continue
                observer = ref()
                if observer is None:
                    continue
                delivered.add(key)
                try:
                    observer.update()
                except Exception as exc:
                    logger.exception(
                        "observer %s failed while notified by %s",
                        type(observer).__name__,
                        type(self).__name__,
                    )
                    errors.append(exc)
        finally:
            if outermost:
                self._delivered = None
        if errors:
            raise NotificationError(errors)


class Observer(ABC):
    """Receives change notifications from the observables it registered with."""

    def __init__(self) -> None:
        self._observables: dict[int, Observable] = {}

    def register_with(self, observable: "Observable | None") -> None:
        if observable is None:
            return
        observable.register_observer(self)
        self._observables[id(observable)] = observable

    def unregister_with(self, observable: "Observable | None") -> None:
        if observable is None:
            return
        observable.unregister_observer(self)
        self._observables.pop(id(observable), None)

    def unregister_with_all(self) -> None:
        for observable in list(self._observables.values()):
            observable.unregister_observer(self)
        self._observables.clear()

    def observables(self) -> list[Observable]:
        return list(self._observables.values())

    @abstractmethod
    def update(self) -> None:
        """Something this observer depends on has changed."""
        ...

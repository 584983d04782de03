"""
Lazy, all-or-nothing recalculation.

A LazyObject keeps a single `calculated` flag. Any notification clears it and
is forwarded to the object's own observers; the next `calculate()` reruns
`perform_calculations()` from scratch.
"""

from __future__ import annotations

import logging
from abc import abstractmethod

from valuation.observable import Observable, Observer

logger = logging.getLogger(__name__)


class LazyObject(Observable, Observer):
    """Observable observer whose results are recomputed on demand."""

    def __init__(self) -> None:
        Observable.__init__(self)
        Observer.__init__(self)
        self._calculated = False
        self._frozen = False
        self._always_forward = False
        self._updating = False

    def update(self) -> None:
        # Guards against cycles that route a notification back to this object.
        if self._updating:
            return
        self._updating = True
        try:
            if self._calculated or self._always_forward:
                self._calculated = False
                if not self._frozen:
                    self.notify_observers()
        finally:
            self._updating = False

    def calculate(self) -> None:
        if not self._calculated and not self._frozen:
            # Set first so that re-entrant calls during the computation are no-ops.
            self._calculated = True
            try:
                logger.debug("recalculating %s", type(self).__name__)
                self.perform_calculations()
            except Exception:
                self._calculated = False
                raise

    def recalculate(self) -> None:
        """Force a full recalculation and tell observers about it."""
        was_frozen = self._frozen
        self._calculated = False
        self._frozen = False
        try:
            self.calculate()
        finally:
            self._frozen = was_frozen
            self.notify_observers()

    def is_calculated(self) -> bool:
        return self._calculated

    def freeze(self) -> None:
        """Keep serving the current results even if inputs change."""
        self._frozen = True

    def unfreeze(self) -> None:
        if self._frozen:
            self._frozen = False
            # Inputs may have changed while frozen.
            self._calculated = False
            self.notify_observers()

    def always_forward_notifications(self) -> None:
        """Forward every notification, even when nothing is cached yet."""
        self._always_forward = True

    @abstractmethod
    def perform_calculations(self) -> None:
        ...

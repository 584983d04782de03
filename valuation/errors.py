"""
Error taxonomy for the valuation core.

All valuation errors derive from ValueError, the same exception the curve and
engine code has always raised for bad input, so callers that already catch
ValueError keep working. They are deterministic input/configuration errors and
are never retried.
"""

from __future__ import annotations


class ValuationError(ValueError):
    """Base class for errors raised by the valuation core."""


class InvalidDate(ValuationError):
    """A fixing was requested for a date the index calendar does not allow."""


class MissingFixing(ValuationError):
    """A historical fixing is required but the store has none for that date."""


class ArgumentValidationError(ValuationError):
    """Engine arguments are structurally inconsistent (e.g. maturity <= start)."""


class UnsupportedPairing(ValuationError):
    """The engine does not recognize the instrument's arguments or results type."""


class NotificationError(RuntimeError):
    """One or more observers raised while being notified.

    Every subscriber is still visited; the collected exceptions are kept in
    `errors` in delivery order.
    """

    def __init__(self, errors: list[BaseException]) -> None:
        self.errors = list(errors)
        detail = "; ".join(f"{type(e).__name__}: {e}" for e in self.errors)
        super().__init__(
            f"{len(self.errors)} observer(s) failed during notification: {detail}"
        )

"""Observable market quotes."""

from __future__ import annotations

from valuation.observable import Observable


class SimpleQuote(Observable):
    """A single market value that notifies its observers when it changes."""

    def __init__(self, value: float | None = None) -> None:
        super().__init__()
        self._value = value

    def value(self) -> float:
        if self._value is None:
            raise ValueError("invalid SimpleQuote")
        return self._value

    def is_valid(self) -> bool:
        return self._value is not None

    def set_value(self, value: float | None) -> float:
        """Set a new value and return the change; observers are notified only on change."""
        diff = 0.0
        if value is not None and self._value is not None:
            diff = value - self._value
        if value != self._value:
            self._value = value
            self.notify_observers()
        return diff

    def reset(self) -> None:
        self.set_value(None)

    def __repr__(self) -> str:
        return f"SimpleQuote({self._value!r})"

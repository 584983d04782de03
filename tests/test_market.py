"""Tests for the shared market container."""

from datetime import date

import pytest

from valuation.curves import FlatForward
from valuation.market import Market
from valuation.observable import Observer

TODAY = date(2024, 1, 15)


class Recorder(Observer):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def update(self) -> None:
        self.calls += 1


def test_handle_before_curve_is_set() -> None:
    """Handles can be taken before the curve exists and see it once linked."""
    market = Market()
    handle = market.handle("USD_DISC")
    assert handle.empty()
    assert "USD_DISC" not in market
    with pytest.raises(KeyError):
        market.curve("USD_DISC")

    curve = FlatForward(TODAY, 0.05)
    market.set_curve("USD_DISC", curve)
    assert handle.current_link() is curve
    assert market.names() == ["USD_DISC"]


def test_set_curve_notifies_handle_observers() -> None:
    """Replacing a curve notifies everything built on its handle."""
    market = Market({"EUR": FlatForward(TODAY, 0.03)})
    obs = Recorder()
    obs.register_with(market.handle("EUR"))
    market.set_curve("EUR", FlatForward(TODAY, 0.04))
    assert obs.calls == 1

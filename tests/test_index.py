"""Tests for fixing resolution on an equity index."""

import math
from datetime import date

import pytest

from valuation.curves import FlatForward
from valuation.errors import InvalidDate, MissingFixing
from valuation.fixings import FixingStore
from valuation.handles import Handle, RelinkableHandle
from valuation.indexes import EquityIndex
from valuation.observable import Observer
from valuation.quotes import SimpleQuote
from valuation.settings import Settings
from valuation.time import Actual365Fixed, WeekendsOnly

TODAY = date(2024, 1, 15)
FUTURE = date(2024, 7, 15)
EXPECTED_FORWARD = 100.0 * math.exp(0.03 * 182 / 365)


class Recorder(Observer):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def update(self) -> None:
        self.calls += 1


class SpyStore(FixingStore):
    def __init__(self) -> None:
        super().__init__()
        self.gets = 0

    def get(self, name, d):
        self.gets += 1
        return super().get(name, d)


class SpyCurve(FlatForward):
    def __init__(self, rate: float) -> None:
        super().__init__(TODAY, rate, Actual365Fixed())
        self.discounts = 0

    def discount(self, d):
        self.discounts += 1
        return super().discount(d)


@pytest.fixture
def store() -> SpyStore:
    return SpyStore()


@pytest.fixture
def interest() -> SpyCurve:
    return SpyCurve(0.05)


@pytest.fixture
def dividend() -> SpyCurve:
    return SpyCurve(0.02)


@pytest.fixture
def index(store, interest, dividend) -> EquityIndex:
    return EquityIndex(
        "SPX",
        "USD",
        WeekendsOnly(),
        Handle(interest),
        Handle(dividend),
        Handle(SimpleQuote(100.0)),
        fixing_store=store,
    )


def test_fixing_date_must_be_a_business_day(index) -> None:
    """Saturdays are invalid fixing dates and are rejected before any lookup."""
    saturday = date(2024, 1, 13)
    assert not index.is_valid_fixing_date(saturday)
    assert index.is_valid_fixing_date(date(2024, 1, 12))
    with pytest.raises(InvalidDate):
        index.fixing(saturday)
    with pytest.raises(InvalidDate):
        index.add_fixing(saturday, 1.0)


def test_validity_matches_calendar(index) -> None:
    """Fixing-date validity is the calendar's business-day test, day by day."""
    calendar = index.fixing_calendar()
    for offset in range(60):
        d = date.fromordinal(TODAY.toordinal() + offset)
        assert index.is_valid_fixing_date(d) == calendar.is_business_day(d)


def test_past_fixing_comes_from_store_only(index, interest, dividend) -> None:
    """A past date returns the stored value without touching the curves."""
    index.add_fixing(date(2024, 1, 12), 98.0)
    assert index.fixing(date(2024, 1, 12)) == 98.0
    assert interest.discounts == 0
    assert dividend.discounts == 0


def test_missing_past_fixing_raises(index) -> None:
    """A past date with no stored value is an error, never a forecast."""
    with pytest.raises(MissingFixing, match="Missing SPX fixing for 2024-01-11"):
        index.fixing(date(2024, 1, 11))


def test_future_fixing_is_forecast_without_store(index, store) -> None:
    """A future date is forecast from spot and curves; history is not consulted."""
    assert index.fixing(FUTURE) == pytest.approx(EXPECTED_FORWARD, rel=1e-12)
    assert store.gets == 0


def test_todays_fixing_prefers_stored_value(index, store) -> None:
    """On the evaluation date a stored value wins unless forecasting is forced."""
    index.add_fixing(TODAY, 101.5)
    assert index.fixing(TODAY) == 101.5

    store.gets = 0
    assert index.fixing(TODAY, forecast_todays_fixing=True) == pytest.approx(100.0)
    assert store.gets == 0


def test_todays_fixing_falls_back_to_forecast(index) -> None:
    """No stored value for today: the index forecasts."""
    assert index.fixing(TODAY) == pytest.approx(100.0)


def test_enforced_todays_fixing_raises_when_missing(index) -> None:
    """With enforced historic fixings, today behaves like a past date."""
    Settings.instance().enforces_todays_historic_fixings = True
    with pytest.raises(MissingFixing):
        index.fixing(TODAY)
    index.add_fixing(TODAY, 101.5)
    assert index.fixing(TODAY) == 101.5


def test_spot_falls_back_to_todays_fixing() -> None:
    """Without a spot quote the forecast starts from today's stored level."""
    store = FixingStore()
    idx = EquityIndex(
        "SX5E", "EUR", WeekendsOnly(),
        Handle(FlatForward(TODAY, 0.05, Actual365Fixed())),
        Handle(FlatForward(TODAY, 0.02, Actual365Fixed())),
        fixing_store=store,
    )
    with pytest.raises(MissingFixing):
        idx.fixing(FUTURE)
    idx.add_fixing(TODAY, 100.0)
    assert idx.fixing(FUTURE) == pytest.approx(EXPECTED_FORWARD, rel=1e-12)


def test_forecast_requires_interest_curve() -> None:
    """An empty interest-rate handle cannot forecast."""
    idx = EquityIndex("SPX", "USD", WeekendsOnly(), spot=Handle(SimpleQuote(100.0)), fixing_store=FixingStore())
    with pytest.raises(ValueError, match="null interest rate term structure"):
        idx.fixing(FUTURE)


def test_clone_uses_new_curves_and_shares_history(index) -> None:
    """A clone forecasts off its own curves and sees the same history."""
    flat = index.clone(
        Handle(FlatForward(TODAY, 0.02, Actual365Fixed())),
        Handle(FlatForward(TODAY, 0.02, Actual365Fixed())),
    )
    assert flat.name() == index.name()
    assert flat.fixing(FUTURE) == pytest.approx(100.0, rel=1e-12)
    assert index.fixing(FUTURE) == pytest.approx(EXPECTED_FORWARD, rel=1e-12)

    index.add_fixing(date(2024, 1, 12), 98.0)
    assert flat.fixing(date(2024, 1, 12)) == 98.0


def test_relinking_clone_curves_leaves_original_alone(index) -> None:
    """The clone follows its own handles; the original keeps forecasting as before."""
    interest = RelinkableHandle(FlatForward(TODAY, 0.05, Actual365Fixed()))
    clone = index.clone(interest.handle())
    before = index.fixing(FUTURE)

    interest.link_to(FlatForward(TODAY, 0.0, Actual365Fixed()))

    assert clone.fixing(FUTURE) == pytest.approx(100.0)
    assert index.fixing(FUTURE) == before
    assert clone.fixing_calendar() is index.fixing_calendar()


def test_moving_evaluation_date_switches_branch(index) -> None:
    """A forecast date becomes a past date once the evaluation date moves past it."""
    assert index.fixing(FUTURE) == pytest.approx(EXPECTED_FORWARD, rel=1e-12)

    Settings.instance().evaluation_date = date(2024, 8, 1)
    with pytest.raises(MissingFixing):
        index.fixing(FUTURE)

    index.add_fixing(FUTURE, 97.0)
    assert index.fixing(FUTURE) == 97.0


def test_index_notifies_on_market_changes(store) -> None:
    """Relinking a curve, storing a fixing and moving the date all notify."""
    curve = RelinkableHandle(FlatForward(TODAY, 0.05, Actual365Fixed()))
    idx = EquityIndex("SPX", "USD", WeekendsOnly(), curve.handle(), fixing_store=store)
    obs = Recorder()
    obs.register_with(idx)

    curve.link_to(FlatForward(TODAY, 0.04, Actual365Fixed()))
    assert obs.calls == 1

    idx.add_fixing(date(2024, 1, 12), 98.0)
    assert obs.calls == 2

    Settings.instance().evaluation_date = date(2024, 1, 16)
    assert obs.calls == 3


def test_time_series_and_clear(index) -> None:
    """The history view is sorted and clearing empties it."""
    index.add_fixings([(date(2024, 1, 12), 98.0), (date(2024, 1, 11), 97.0)])
    assert list(index.time_series().values()) == [97.0, 98.0]
    assert index.has_historical_fixing(date(2024, 1, 11))
    index.clear_fixings()
    assert index.time_series() == {}

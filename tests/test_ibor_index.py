"""Tests for term and overnight interest-rate indexes."""

import math
from datetime import date

import pytest

from valuation.curves import FlatForward
from valuation.errors import MissingFixing
from valuation.fixings import FixingStore
from valuation.handles import Handle
from valuation.indexes import IborIndex, OvernightIndex
from valuation.time import Actual360, Actual365Fixed, BusinessDayConvention, WeekendsOnly

TODAY = date(2024, 1, 15)


def euribor6m(curve=None, store=None) -> IborIndex:
    return IborIndex(
        "Euribor",
        6,
        2,
        "EUR",
        WeekendsOnly(),
        BusinessDayConvention.MODIFIED_FOLLOWING,
        False,
        Actual360(),
        Handle(curve) if curve is not None else None,
        store or FixingStore(),
    )


def test_ibor_dates() -> None:
    """Value date is two business days after fixing; maturity is six months later."""
    idx = euribor6m()
    assert idx.name() == "Euribor6M Actual/360"
    assert idx.value_date(TODAY) == date(2024, 1, 17)
    assert idx.fixing_date(date(2024, 1, 17)) == TODAY
    assert idx.maturity_date(date(2024, 1, 17)) == date(2024, 7, 17)


def test_ibor_forecast_from_forwarding_curve() -> None:
    """The forecast is the simple forward over the index period."""
    idx = euribor6m(FlatForward(TODAY, 0.03, Actual365Fixed()))
    expected = (math.exp(0.03 * 182 / 365) - 1.0) / (182 / 360)
    assert idx.fixing(TODAY) == pytest.approx(expected, rel=1e-12)


def test_ibor_without_curve_cannot_forecast() -> None:
    """An empty forwarding handle is reported when a forecast is needed."""
    idx = euribor6m()
    with pytest.raises(ValueError, match="null term structure"):
        idx.fixing(date(2024, 2, 15))


def test_ibor_past_fixing_from_store() -> None:
    """Past rates come from the store under the index name."""
    store = FixingStore()
    store.add_fixing("Euribor6M Actual/360", date(2024, 1, 12), 0.0391)
    idx = euribor6m(store=store)
    assert idx.fixing(date(2024, 1, 12)) == 0.0391
    with pytest.raises(MissingFixing):
        idx.fixing(date(2024, 1, 11))


def test_ibor_accrual_dates() -> None:
    """Sub-periods step at the index tenor."""
    idx = euribor6m()
    assert idx.accrual_dates(TODAY, date(2025, 1, 15)) == [
        TODAY,
        date(2024, 7, 15),
        date(2025, 1, 15),
    ]


def test_ibor_clone_switches_curve() -> None:
    """A clone with another curve forecasts off that curve."""
    idx = euribor6m(FlatForward(TODAY, 0.03, Actual365Fixed()))
    other = idx.clone(Handle(FlatForward(TODAY, 0.04, Actual365Fixed())))
    assert other.name() == idx.name()
    assert other.fixing(date(2024, 2, 15)) > idx.fixing(date(2024, 2, 15))


def test_overnight_index() -> None:
    """Overnight: one business day tenor and daily accrual boundaries."""
    estr = OvernightIndex("Estr", 0, "EUR", WeekendsOnly(), Actual360(), fixing_store=FixingStore())
    assert estr.name() == "EstrON Actual/360"
    assert estr.maturity_date(date(2024, 1, 19)) == date(2024, 1, 22)
    assert estr.accrual_dates(TODAY, date(2024, 1, 22)) == [
        date(2024, 1, 15),
        date(2024, 1, 16),
        date(2024, 1, 17),
        date(2024, 1, 18),
        date(2024, 1, 19),
        date(2024, 1, 22),
    ]

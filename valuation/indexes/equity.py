"""Equity index: forecasts with an interest-rate and a dividend curve."""

from __future__ import annotations

from datetime import date

from valuation.errors import MissingFixing
from valuation.fixings import FixingStore
from valuation.handles import Handle
from valuation.indexes.index import Index
from valuation.interfaces import Calendar, YieldCurve
from valuation.quotes import SimpleQuote
from valuation.settings import Settings


class EquityIndex(Index):
    """
    Equity index with forward level F(d) = S * DF_div(d) / DF_int(d).

    S is the spot quote when one is linked, otherwise the index's own fixing
    on the evaluation date.
    """

    def __init__(
        self,
        name: str,
        currency: str,
        fixing_calendar: Calendar,
        interest: Handle[YieldCurve] | None = None,
        dividend: Handle[YieldCurve] | None = None,
        spot: Handle[SimpleQuote] | None = None,
        fixing_store: FixingStore | None = None,
    ) -> None:
        super().__init__(fixing_store)
        self._name = name
        self._currency = currency
        self._calendar = fixing_calendar
        self._interest = interest if interest is not None else Handle()
        self._dividend = dividend if dividend is not None else Handle()
        self._spot = spot if spot is not None else Handle()
        self.register_with(self._interest)
        self.register_with(self._dividend)
        self.register_with(self._spot)
        self._register_with_environment()

    def name(self) -> str:
        return self._name

    def fixing_calendar(self) -> Calendar:
        return self._calendar

    def currency(self) -> str:
        return self._currency

    def equity_interest_rate_curve(self) -> Handle[YieldCurve]:
        return self._interest

    def equity_dividend_curve(self) -> Handle[YieldCurve]:
        return self._dividend

    def spot(self) -> Handle[SimpleQuote]:
        return self._spot

    def forecast_fixing(self, fixing_date: date) -> float:
        if self._interest.empty():
            raise ValueError(
                f"null interest rate term structure set to this instance of {self.name()}"
            )
        dividend_discount = 1.0 if self._dividend.empty() else self._dividend().discount(fixing_date)
        interest_discount = self._interest().discount(fixing_date)
        return self._spot_level() * dividend_discount / interest_discount

    def _spot_level(self) -> float:
        if not self._spot.empty() and self._spot().is_valid():
            return self._spot().value()
        today = Settings.instance().evaluation_date
        level = self.past_fixing(today) if self.is_valid_fixing_date(today) else None
        if level is None:
            raise MissingFixing(
                f"Cannot forecast {self.name()}: missing both spot quote and "
                f"historical fixing for {today}"
            )
        return level

    def clone(
        self,
        interest: Handle[YieldCurve],
        dividend: Handle[YieldCurve] | None = None,
    ) -> "EquityIndex":
        """Copy sharing name, currency, calendar and history but using other curves."""
        return EquityIndex(
            self._name,
            self._currency,
            self._calendar,
            interest,
            dividend,
            self._spot,
            self._fixing_store,
        )

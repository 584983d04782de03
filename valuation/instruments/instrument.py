"""Base class for instruments priced through a pluggable engine."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from valuation.engine import PricingArguments, PricingEngine, PricingResults
from valuation.errors import UnsupportedPairing
from valuation.lazy import LazyObject

logger = logging.getLogger(__name__)


class Instrument(LazyObject):
    """
    An instrument knows its own terms but not how it is priced.

    Valuation runs setup_arguments -> validate -> engine.calculate ->
    fetch_results, only when the cached results are stale. Nothing is copied
    back unless the whole cycle succeeds, so a failed valuation leaves the
    previously fetched values untouched.
    """

    def __init__(self) -> None:
        super().__init__()
        self._engine: PricingEngine | None = None
        self._npv: float | None = None
        self._error_estimate: float | None = None
        self._valuation_date: date | None = None
        self._additional_results: dict[str, Any] = {}

    def set_pricing_engine(self, engine: PricingEngine | None) -> None:
        if self._engine is not None:
            self.unregister_with(self._engine)
        self._engine = engine
        if self._engine is not None:
            self.register_with(self._engine)
        self.update()

    def pricing_engine(self) -> PricingEngine | None:
        return self._engine

    def setup_arguments(self, arguments: PricingArguments) -> None:
        """Fill the engine's arguments from this instrument's terms."""
        raise UnsupportedPairing(
            f"{type(self).__name__} cannot fill {type(arguments).__name__}"
        )

    def fetch_results(self, results: PricingResults) -> None:
        """Copy engine outputs into this instrument."""
        if not isinstance(results, PricingResults):
            raise UnsupportedPairing("no results returned from pricing engine")
        self._npv = results.value
        self._error_estimate = results.error_estimate
        self._valuation_date = results.valuation_date
        self._additional_results = dict(results.additional_results)

    @staticmethod
    def _require_type(obj: object, expected: type, what: str) -> None:
        if not isinstance(obj, expected):
            raise UnsupportedPairing(
                f"wrong {what} type: expected {expected.__qualname__}, "
                f"got {type(obj).__qualname__}"
            )

    def is_expired(self) -> bool:
        return False

    def setup_expired(self) -> None:
        """Results of an instrument with no future cash flows."""
        self._npv = 0.0
        self._error_estimate = 0.0
        self._valuation_date = None
        self._additional_results = {}

    def calculate(self) -> None:
        if not self._calculated and not self._frozen:
            if self.is_expired():
                self.setup_expired()
                self._calculated = True
            else:
                super().calculate()

    def perform_calculations(self) -> None:
        if self._engine is None:
            raise ValueError("null pricing engine")
        engine = self._engine
        logger.debug("pricing %s with %s", type(self).__name__, type(engine).__name__)
        engine.reset()
        arguments = engine.get_arguments()
        self.setup_arguments(arguments)
        arguments.validate()
        engine.calculate()
        self.fetch_results(engine.get_results())

    # results

    def npv(self) -> float:
        self.calculate()
        if self._npv is None:
            raise ValueError("NPV not provided")
        return self._npv

    def error_estimate(self) -> float:
        self.calculate()
        if self._error_estimate is None:
            raise ValueError("error estimate not provided")
        return self._error_estimate

    def valuation_date(self) -> date:
        self.calculate()
        if self._valuation_date is None:
            raise ValueError("valuation date not provided")
        return self._valuation_date

    def result(self, name: str) -> Any:
        self.calculate()
        try:
            return self._additional_results[name]
        except KeyError:
            raise ValueError(f"{name} not provided") from None

    def additional_results(self) -> dict[str, Any]:
        self.calculate()
        return dict(self._additional_results)

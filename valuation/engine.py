"""
Pricing engine seam.

Design intent:
- Instruments describe **what** is priced and fill an Arguments snapshot.
- Engines decide **how**: they validate the snapshot and write a Results bag.
- Either side can be swapped independently: any engine whose Arguments/Results
  types match can price an instrument, and an engine prices every instrument
  that can fill its Arguments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from datetime import date
from typing import Any, Generic, TypeVar

from valuation.observable import Observable, Observer


class PricingArguments:
    """Snapshot written by the instrument, read and validated by the engine."""

    def validate(self) -> None:
        """Raise ArgumentValidationError if the snapshot is inconsistent."""


@dataclass
class PricingResults:
    """Values written by the engine, read by the instrument."""

    value: float | None = None
    error_estimate: float | None = None
    valuation_date: date | None = None
    additional_results: dict[str, Any] = field(default_factory=dict)

    def reset(self) -> None:
        """Restore every field to its default."""
        fresh = type(self)()
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))


ArgumentsT = TypeVar("ArgumentsT", bound=PricingArguments)
ResultsT = TypeVar("ResultsT", bound=PricingResults)


class PricingEngine(Observable, Observer, ABC):
    """Abstract base class for pricing engines.

    Engines observe the market data they read (typically curve handles) and
    forward changes to the instruments that use them.
    """

    def __init__(self) -> None:
        Observable.__init__(self)
        Observer.__init__(self)

    @abstractmethod
    def get_arguments(self) -> PricingArguments:
        ...

    @abstractmethod
    def get_results(self) -> PricingResults:
        ...

    @abstractmethod
    def reset(self) -> None:
        ...

    @abstractmethod
    def calculate(self) -> None:
        """Price the current arguments into the results bag."""
        ...

    def update(self) -> None:
        self.notify_observers()


class GenericEngine(PricingEngine, Generic[ArgumentsT, ResultsT]):
    """Engine owning one Arguments and one Results instance of fixed types."""

    arguments_type: type[PricingArguments] = PricingArguments
    results_type: type[PricingResults] = PricingResults

    def __init__(self) -> None:
        super().__init__()
        self.arguments: ArgumentsT = self.arguments_type()  # type: ignore[assignment]
        self.results: ResultsT = self.results_type()  # type: ignore[assignment]

    def get_arguments(self) -> ArgumentsT:
        return self.arguments

    def get_results(self) -> ResultsT:
        return self.results

    def reset(self) -> None:
        """Start the next valuation from empty arguments and default results."""
        self.arguments = self.arguments_type()  # type: ignore[assignment]
        self.results.reset()

"""Generic multi-leg swap."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from valuation.cashflows import CashFlow
from valuation.engine import PricingArguments, PricingResults
from valuation.errors import ArgumentValidationError
from valuation.instruments.instrument import Instrument


class Swap(Instrument):
    """
    Exchange of cash-flow legs.

    payer[j] True means leg j is paid (multiplier -1), False received (+1).
    NPV = sum_j multiplier_j * PV(leg_j), and reported leg NPVs carry the sign.
    """

    @dataclass
    class Arguments(PricingArguments):
        legs: list[list[CashFlow]] = field(default_factory=list)
        payer: list[float] = field(default_factory=list)

        def validate(self) -> None:
            if len(self.legs) != len(self.payer):
                raise ArgumentValidationError(
                    "number of legs and multipliers differ"
                )
            for j, leg in enumerate(self.legs):
                for cf in leg:
                    if not cf.has_valid_accrual_period():
                        raise ArgumentValidationError(
                            f"leg #{j}: accrual end must be after accrual start, "
                            f"got {cf.accrual_start_date()} -> {cf.accrual_end_date()}"
                        )

    @dataclass
    class Results(PricingResults):
        leg_npv: list[float | None] = field(default_factory=list)
        start_discounts: list[float | None] = field(default_factory=list)
        end_discounts: list[float | None] = field(default_factory=list)
        npv_date_discount: float | None = None

    def __init__(self, legs: list[list[CashFlow]], payer: list[bool]) -> None:
        super().__init__()
        if len(legs) != len(payer):
            raise ValueError("size mismatch between payer and legs")
        self._legs = [list(leg) for leg in legs]
        self._payer = [-1.0 if p else 1.0 for p in payer]
        self._leg_npv: list[float | None] = [None] * len(self._legs)
        self._start_discounts: list[float | None] = [None] * len(self._legs)
        self._end_discounts: list[float | None] = [None] * len(self._legs)
        self._npv_date_discount: float | None = None
        for leg in self._legs:
            for cf in leg:
                self.register_with(cf)

    def number_of_legs(self) -> int:
        return len(self._legs)

    def leg(self, j: int) -> list[CashFlow]:
        return self._legs[j]

    def payer(self, j: int) -> bool:
        return self._payer[j] < 0

    def start_date(self) -> date:
        return min(cf.accrual_start_date() for leg in self._legs for cf in leg)

    def maturity_date(self) -> date:
        return max(cf.date() for leg in self._legs for cf in leg)

    def is_expired(self) -> bool:
        return all(cf.has_occurred() for leg in self._legs for cf in leg)

    def setup_expired(self) -> None:
        super().setup_expired()
        n = len(self._legs)
        self._leg_npv = [0.0] * n
        self._start_discounts = [0.0] * n
        self._end_discounts = [0.0] * n
        self._npv_date_discount = 0.0

    def setup_arguments(self, arguments: PricingArguments) -> None:
        self._require_type(arguments, Swap.Arguments, "argument")
        arguments.legs = [list(leg) for leg in self._legs]
        arguments.payer = list(self._payer)

    def fetch_results(self, results: PricingResults) -> None:
        self._require_type(results, Swap.Results, "result")
        n = len(self._legs)
        leg_npv = _padded(results.leg_npv, n)
        start_discounts = _padded(results.start_discounts, n)
        end_discounts = _padded(results.end_discounts, n)
        super().fetch_results(results)
        self._leg_npv = leg_npv
        self._start_discounts = start_discounts
        self._end_discounts = end_discounts
        self._npv_date_discount = results.npv_date_discount

    def leg_npv(self, j: int) -> float:
        if not 0 <= j < len(self._legs):
            raise IndexError(f"leg #{j} doesn't exist")
        self.calculate()
        value = self._leg_npv[j]
        if value is None:
            raise ValueError("result not available")
        return value

    def start_discounts(self, j: int) -> float | None:
        self.calculate()
        return self._start_discounts[j]

    def end_discounts(self, j: int) -> float | None:
        self.calculate()
        return self._end_discounts[j]

    def npv_date_discount(self) -> float | None:
        self.calculate()
        return self._npv_date_discount


def _padded(values: list, n: int) -> list:
    return list(values) + [None] * (n - len(values))

"""Discounting engines for swaps (single discount curve)."""

from __future__ import annotations

from datetime import date

from valuation.engine import GenericEngine
from valuation.handles import Handle
from valuation.instruments.swap import Swap
from valuation.instruments.zerocouponswap import ZeroCouponSwap
from valuation.interfaces import YieldCurve
from valuation.settings import Settings


class DiscountingSwapEngine(GenericEngine[Swap.Arguments, Swap.Results]):
    """
    Discount every cash flow still to be paid on one curve.

    Leg NPV_j = multiplier_j * sum_i CF_i * DF(t_i) / DF(npv_date).
    Cash flows paid on or before the settlement date are skipped, unless
    include_settlement_date_flows is set and they fall on the settlement date.
    """

    arguments_type = Swap.Arguments
    results_type = Swap.Results

    def __init__(
        self,
        discount_curve: Handle[YieldCurve] | None = None,
        include_settlement_date_flows: bool | None = None,
        settlement_date: date | None = None,
        npv_date: date | None = None,
    ) -> None:
        super().__init__()
        self._discount_curve = discount_curve if discount_curve is not None else Handle()
        self._include_settlement_date_flows = include_settlement_date_flows
        self._settlement_date = settlement_date
        self._npv_date = npv_date
        self.register_with(self._discount_curve)

    def discount_curve(self) -> Handle[YieldCurve]:
        return self._discount_curve

    def calculate(self) -> None:
        if self._discount_curve.empty():
            raise ValueError("discounting term structure handle is empty")
        curve = self._discount_curve()
        arguments = self.arguments
        results = self.results

        ref_date = curve.reference_date()
        settlement_date = self._settlement_date or Settings.instance().evaluation_date
        if settlement_date < ref_date:
            settlement_date = ref_date
        npv_date = self._npv_date or ref_date
        include = bool(self._include_settlement_date_flows)

        npv_date_discount = curve.discount(npv_date)
        results.valuation_date = npv_date
        results.npv_date_discount = npv_date_discount

        value = 0.0
        n = len(arguments.legs)
        results.leg_npv = [0.0] * n
        results.start_discounts = [None] * n
        results.end_discounts = [None] * n
        for j, leg in enumerate(arguments.legs):
            pv = 0.0
            for cf in leg:
                if cf.has_occurred(settlement_date, include):
                    continue
                pv += cf.amount() * curve.discount(cf.date())
            leg_npv = arguments.payer[j] * pv / npv_date_discount
            results.leg_npv[j] = leg_npv
            if leg:
                start = min(cf.accrual_start_date() for cf in leg)
                end = max(cf.date() for cf in leg)
                if start >= ref_date:
                    results.start_discounts[j] = curve.discount(start)
                if end >= ref_date:
                    results.end_discounts[j] = curve.discount(end)
            value += leg_npv

        results.value = value
        results.error_estimate = None
        results.additional_results["settlement_date"] = settlement_date


class DiscountingZeroCouponSwapEngine(DiscountingSwapEngine):
    """
    Discounting engine for zero-coupon swaps.

    Uses the zero-coupon Arguments so the swap's terms are validated (positive
    nominal, maturity after start, one cash flow per leg) and reports the two
    projected payments as additional results.
    """

    arguments_type = ZeroCouponSwap.Arguments
    results_type = ZeroCouponSwap.Results

    def calculate(self) -> None:
        super().calculate()
        arguments = self.arguments
        fixed_leg, floating_leg = arguments.legs
        self.results.additional_results.update(
            {
                "fixed_payment": fixed_leg[0].amount(),
                "floating_payment": floating_leg[0].amount(),
                "base_nominal": arguments.base_nominal,
                "start_date": arguments.start_date,
                "maturity_date": arguments.maturity_date,
            }
        )

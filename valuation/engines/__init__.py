"""Pricing engine implementations."""

from valuation.engines.discounting import DiscountingSwapEngine, DiscountingZeroCouponSwapEngine

__all__ = ["DiscountingSwapEngine", "DiscountingZeroCouponSwapEngine"]

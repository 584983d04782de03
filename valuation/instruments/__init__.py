"""Instruments: lazily valued terms, priced through pluggable engines."""

from valuation.instruments.instrument import Instrument
from valuation.instruments.swap import Swap
from valuation.instruments.zerocouponswap import SwapType, ZeroCouponSwap

__all__ = ["Instrument", "Swap", "SwapType", "ZeroCouponSwap"]

"""
Risk measures implemented via "bump and reprice".

The bump is applied by relinking the market's curve handle, so every
instrument built on that handle is invalidated and reprices lazily; the
original curve is linked back afterwards, even if repricing fails.
"""

from __future__ import annotations

from dataclasses import dataclass

from valuation.instruments.instrument import Instrument
from valuation.market import Market


@dataclass
class PV01Parallel:
    """Parallel PV01: sensitivity to a parallel shift of one curve."""

    curve_name: str
    bump_bp: float = 1.0

    @property
    def name(self) -> str:
        return f"PV01_{self.curve_name}"

    def compute(self, instrument: Instrument, market: Market) -> float:
        """NPV(bumped) - NPV(base)."""
        bump = self.bump_bp / 10000.0
        curve = market.curve(self.curve_name)
        base = instrument.npv()
        market.set_curve(self.curve_name, curve.bumped(bump))
        try:
            bumped = instrument.npv()
        finally:
            market.set_curve(self.curve_name, curve)
        return bumped - base


def pv01_parallel(
    instrument: Instrument,
    market: Market,
    curve_name: str,
    bump_bp: float = 1.0,
) -> float:
    """
    PV01: change in NPV when the curve is bumped by bump_bp basis points (parallel).
    bump_bp is in basis points; bump = bump_bp / 10000 (additive to zero rates).
    """
    return PV01Parallel(curve_name=curve_name, bump_bp=bump_bp).compute(instrument, market)

"""
Shared market container.

`Market` maps curve names (e.g. "USD_DISC") to relinkable handles. Indexes,
engines and instruments are built on the handles, never on the curves
themselves, so that:
- replacing a curve is a single `set_curve` call that invalidates every
  instrument depending on it, and
- scenario and risk code can swap a curve temporarily and put it back.
"""

from __future__ import annotations

from valuation.handles import Handle, RelinkableHandle
from valuation.interfaces import YieldCurve


class Market:
    """Named, relinkable curve handles shared across instruments."""

    def __init__(self, curves: dict[str, YieldCurve] | None = None) -> None:
        self._handles: dict[str, RelinkableHandle[YieldCurve]] = {}
        for name, curve in (curves or {}).items():
            self.set_curve(name, curve)

    def handle(self, name: str) -> Handle[YieldCurve]:
        """Read-only handle for name, created empty if the curve is not set yet."""
        return self._relinkable(name).handle()

    def curve(self, name: str) -> YieldCurve:
        """Return the curve currently linked under name. Raises KeyError if not found."""
        handle = self._handles.get(name)
        if handle is None or handle.empty():
            raise KeyError(name)
        return handle.current_link()

    def set_curve(self, name: str, curve: YieldCurve | None) -> None:
        """Link name to curve; everything built on the handle is notified."""
        self._relinkable(name).link_to(curve)

    def names(self) -> list[str]:
        return sorted(n for n, h in self._handles.items() if not h.empty())

    def __contains__(self, name: str) -> bool:
        handle = self._handles.get(name)
        return handle is not None and not handle.empty()

    def _relinkable(self, name: str) -> RelinkableHandle[YieldCurve]:
        handle = self._handles.get(name)
        if handle is None:
            handle = RelinkableHandle()
            self._handles[name] = handle
        return handle

"""Valuation core: change propagation, index fixings, and the instrument/engine bridge."""

from valuation.cashflows import (
    CashFlow,
    RateAveraging,
    SimpleCashFlow,
    SubPeriodsCashFlow,
    averaged_amount,
)
from valuation.curves import FlatForward, ZeroRateCurve
from valuation.engine import GenericEngine, PricingArguments, PricingEngine, PricingResults
from valuation.engines import DiscountingSwapEngine, DiscountingZeroCouponSwapEngine
from valuation.errors import (
    ArgumentValidationError,
    InvalidDate,
    MissingFixing,
    NotificationError,
    UnsupportedPairing,
    ValuationError,
)
from valuation.fixings import FixingStore, default_fixing_store
from valuation.handles import Handle, RelinkableHandle
from valuation.indexes import EquityIndex, IborIndex, Index, OvernightIndex
from valuation.instruments import Instrument, Swap, SwapType, ZeroCouponSwap
from valuation.interfaces import Calendar, DayCounter, FixingHistory, YieldCurve
from valuation.lazy import LazyObject
from valuation.market import Market
from valuation.observable import Observable, Observer
from valuation.quotes import SimpleQuote
from valuation.risk import PV01Parallel, pv01_parallel
from valuation.settings import SavedSettings, Settings
from valuation.time import (
    Actual360,
    Actual365Fixed,
    BusinessDayConvention,
    NullCalendar,
    Thirty360,
    WeekendsOnly,
)

__all__ = [
    # graph
    "Observable",
    "Observer",
    "Handle",
    "RelinkableHandle",
    "SimpleQuote",
    "LazyObject",
    "Settings",
    "SavedSettings",
    # collaborators
    "Calendar",
    "DayCounter",
    "YieldCurve",
    "FixingHistory",
    "NullCalendar",
    "WeekendsOnly",
    "BusinessDayConvention",
    "Actual360",
    "Actual365Fixed",
    "Thirty360",
    "FlatForward",
    "ZeroRateCurve",
    "FixingStore",
    "default_fixing_store",
    # indexes
    "Index",
    "EquityIndex",
    "IborIndex",
    "OvernightIndex",
    # cash flows
    "CashFlow",
    "SimpleCashFlow",
    "SubPeriodsCashFlow",
    "RateAveraging",
    "averaged_amount",
    # bridge
    "PricingArguments",
    "PricingResults",
    "PricingEngine",
    "GenericEngine",
    "Instrument",
    "Swap",
    "SwapType",
    "ZeroCouponSwap",
    "DiscountingSwapEngine",
    "DiscountingZeroCouponSwapEngine",
    # market and risk
    "Market",
    "PV01Parallel",
    "pv01_parallel",
    # errors
    "ValuationError",
    "InvalidDate",
    "MissingFixing",
    "ArgumentValidationError",
    "UnsupportedPairing",
    "NotificationError",
]

__version__ = "0.1.0"

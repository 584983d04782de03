"""Market indexes: shared fixing resolution plus asset-class forecasting."""

from valuation.indexes.equity import EquityIndex
from valuation.indexes.index import Index
from valuation.indexes.interest_rate import IborIndex, OvernightIndex

__all__ = ["Index", "EquityIndex", "IborIndex", "OvernightIndex"]

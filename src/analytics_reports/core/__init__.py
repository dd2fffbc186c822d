"""
Core reporting module.

Contains the data models and the HTTP client that executes reporting queries.
"""

from .client import AnalyticsClient, QueryError, QueryExecutor
from .models import (
    BrowserStat,
    DateRange,
    PageStat,
    ReferrerStat,
    TimeSeriesPoint,
)

__all__ = [
    "DateRange", "TimeSeriesPoint",
    "ReferrerStat", "BrowserStat", "PageStat",
    "AnalyticsClient", "QueryError", "QueryExecutor",
]

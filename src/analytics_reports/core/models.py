"""
Pydantic models for report data.
"""
from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict, model_validator

# =============================================================================
# Query Models
# =============================================================================

class DateRange(BaseModel):
    """Inclusive calendar date range for queries."""
    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError("End date must be on or after start date")
        return self

    @classmethod
    def last_n_days(cls, days: int, today: date | None = None) -> "DateRange":
        """Range ending today and starting exactly ``days`` days earlier.

        Args:
            days: Number of days to look back (0 gives a single-day range)
            today: Reference date, defaults to ``date.today()``
        """
        if days < 0:
            raise ValueError(f"Number of days must not be negative, got {days}")
        end = today or date.today()
        try:
            start = end - timedelta(days=days)
        except OverflowError:
            raise ValueError(f"Cannot look back {days} days from {end}") from None
        return cls(start=start, end=end)

    @property
    def start_str(self) -> str:
        """Start date as YYYY-MM-DD."""
        return self.start.strftime("%Y-%m-%d")

    @property
    def end_str(self) -> str:
        """End date as YYYY-MM-DD."""
        return self.end.strftime("%Y-%m-%d")


# =============================================================================
# Report Records
# =============================================================================

class TimeSeriesPoint(BaseModel):
    """Visitors and page views for one bucket (a day, or the first day of a month)."""
    model_config = ConfigDict(frozen=True)

    bucket: date
    visitors: int = 0
    page_views: int = 0


class ReferrerStat(BaseModel):
    """Page views attributed to a full referrer URL."""
    model_config = ConfigDict(frozen=True)

    url: str
    page_views: int


class BrowserStat(BaseModel):
    """Sessions for a single browser."""
    model_config = ConfigDict(frozen=True)

    browser: str
    sessions: int


class PageStat(BaseModel):
    """Page views for a single page path."""
    model_config = ConfigDict(frozen=True)

    url: str
    page_views: int

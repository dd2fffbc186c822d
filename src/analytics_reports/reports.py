"""
Report builder: turns day counts and date ranges into reporting queries and
maps the tabular rows that come back into typed records.
"""
import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime
from typing import Any, TypeVar

from .core.client import QueryExecutor
from .core.models import BrowserStat, DateRange, PageStat, ReferrerStat, TimeSeriesPoint

logger = logging.getLogger(__name__)

T = TypeVar("T")

YEAR_MONTH = "yearMonth"
DEFAULT_OTHER_LABEL = "Other"


class RowParseError(ValueError):
    """Raised when a row returned by the reporting API cannot be mapped."""


def _rows(response: dict[str, Any] | None) -> list[list[Any]]:
    """Extract the row list, treating a missing response or null rows as empty."""
    if not response:
        return []
    return response.get("rows") or []


def _map_rows(rows: list[list[Any]], arity: int, mapper: Callable[[Sequence[Any]], T]) -> list[T]:
    records = []
    for index, row in enumerate(rows):
        if not isinstance(row, (list, tuple)):
            raise RowParseError(f"Row {index} is not a list of cells: {row!r}")
        if len(row) != arity:
            raise RowParseError(f"Row {index} has {len(row)} cells, expected {arity}: {row!r}")
        try:
            records.append(mapper(row))
        except (TypeError, ValueError) as exc:
            raise RowParseError(f"Row {index} could not be parsed: {row!r}") from exc
    return records


def parse_bucket(value: str, group_by: str) -> date:
    """Parse a time bucket value.

    ``yearMonth`` buckets are YYYYMM and map to the first day of the month;
    every other grouping is read as YYYYMMDD.
    """
    if group_by == YEAR_MONTH:
        fmt, width = "%Y%m", 6
    else:
        fmt, width = "%Y%m%d", 8

    # strptime accepts single-digit month and day fields
    text = str(value)
    if len(text) != width or not text.isdigit():
        raise ValueError(f"Bucket {text!r} is not a {width}-digit {group_by} value")
    return datetime.strptime(text, fmt).date()


def fold_remainder(
    stats: list[BrowserStat],
    max_results: int,
    other_label: str = DEFAULT_OTHER_LABEL,
) -> list[BrowserStat]:
    """Keep the top ``max_results - 1`` entries and fold the rest into one row.

    The input is expected to be sorted by sessions, descending. Lists that
    already fit are returned unchanged.
    """
    if max_results < 1:
        raise ValueError(f"max_results must be at least 1, got {max_results}")

    if len(stats) <= max_results:
        return list(stats)

    kept = stats[:max_results - 1]
    tail = stats[max_results - 1:]
    other = BrowserStat(browser=other_label, sessions=sum(stat.sessions for stat in tail))
    return [*kept, other]


class ReportBuilder:
    """Builds reports for one site on top of a query executor."""

    def __init__(self, executor: QueryExecutor, site_id: str, other_label: str = DEFAULT_OTHER_LABEL):
        self.executor = executor
        self._site_id = site_id
        self.other_label = other_label

    @property
    def site_id(self) -> str:
        return self._site_id

    def set_site_id(self, site_id: str) -> "ReportBuilder":
        """Point the builder at another site. No validation is performed."""
        self._site_id = site_id
        return self

    def get_site_id(self) -> str:
        return self._site_id

    def for_site(self, site_id: str) -> "ReportBuilder":
        """Return a new builder for ``site_id`` that shares this executor."""
        return ReportBuilder(self.executor, site_id, other_label=self.other_label)

    # =========================================================================
    # VISITORS AND PAGE VIEWS
    # =========================================================================

    async def get_visitors_and_page_views(
        self,
        days: int = 365,
        group_by: str = "date",
        today: date | None = None,
    ) -> list[TimeSeriesPoint]:
        period = DateRange.last_n_days(days, today)
        return await self.get_visitors_and_page_views_for_period(period.start, period.end, group_by)

    async def get_visitors_and_page_views_for_period(
        self,
        start_date: date,
        end_date: date,
        group_by: str = "date",
    ) -> list[TimeSeriesPoint]:
        """Visitors and page views per day (``date``) or per month (``yearMonth``).

        Other ``group_by`` values are sent to the API as-is and their bucket
        values are read as YYYYMMDD.

        Raises:
            RowParseError: If a bucket value does not match the expected format
        """
        response = await self.perform_query(
            start_date, end_date, "ga:visits,ga:pageviews", {"dimensions": f"ga:{group_by}"}
        )

        return _map_rows(
            _rows(response),
            3,
            lambda row: TimeSeriesPoint(
                bucket=parse_bucket(row[0], group_by),
                visitors=int(row[1]),
                page_views=int(row[2]),
            ),
        )

    # =========================================================================
    # REFERRERS
    # =========================================================================

    async def get_top_referrers(
        self,
        days: int = 365,
        max_results: int = 20,
        today: date | None = None,
    ) -> list[ReferrerStat]:
        period = DateRange.last_n_days(days, today)
        return await self.get_top_referrers_for_period(period.start, period.end, max_results)

    async def get_top_referrers_for_period(
        self,
        start_date: date,
        end_date: date,
        max_results: int = 20,
    ) -> list[ReferrerStat]:
        """Full referrer URLs ordered by page views, descending."""
        response = await self.perform_query(
            start_date,
            end_date,
            "ga:pageviews",
            {"dimensions": "ga:fullReferrer", "sort": "-ga:pageviews", "max-results": max_results},
        )

        return _map_rows(
            _rows(response),
            2,
            lambda row: ReferrerStat(url=row[0], page_views=int(row[1])),
        )

    # =========================================================================
    # BROWSERS
    # =========================================================================

    async def get_top_browsers(
        self,
        days: int = 365,
        max_results: int = 6,
        today: date | None = None,
    ) -> list[BrowserStat]:
        period = DateRange.last_n_days(days, today)
        return await self.get_top_browsers_for_period(period.start, period.end, max_results)

    async def get_top_browsers_for_period(
        self,
        start_date: date,
        end_date: date,
        max_results: int = 6,
    ) -> list[BrowserStat]:
        """Browsers ordered by sessions, descending.

        All browsers are fetched. When there are more than ``max_results``,
        the tail is folded into a single row labelled ``other_label``.
        """
        response = await self.perform_query(
            start_date, end_date, "ga:sessions", {"dimensions": "ga:browser", "sort": "-ga:sessions"}
        )

        browsers = _map_rows(
            _rows(response),
            2,
            lambda row: BrowserStat(browser=row[0], sessions=int(row[1])),
        )
        return fold_remainder(browsers, max_results, self.other_label)

    # =========================================================================
    # PAGES
    # =========================================================================

    async def get_most_visited_pages(
        self,
        days: int = 365,
        max_results: int = 20,
        today: date | None = None,
    ) -> list[PageStat]:
        period = DateRange.last_n_days(days, today)
        return await self.get_most_visited_pages_for_period(period.start, period.end, max_results)

    async def get_most_visited_pages_for_period(
        self,
        start_date: date,
        end_date: date,
        max_results: int = 20,
    ) -> list[PageStat]:
        """Page paths ordered by page views, descending."""
        response = await self.perform_query(
            start_date,
            end_date,
            "ga:pageviews",
            {"dimensions": "ga:pagePath", "sort": "-ga:pageviews", "max-results": max_results},
        )

        return _map_rows(
            _rows(response),
            2,
            lambda row: PageStat(url=row[0], page_views=int(row[1])),
        )

    # =========================================================================
    # RAW QUERIES
    # =========================================================================

    async def perform_query(
        self,
        start_date: date,
        end_date: date,
        metrics: str,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Run a query through the executor and return its raw response."""
        logger.debug(f"Site {self._site_id}: {metrics} {start_date}..{end_date}")
        return await self.executor.execute(
            self._site_id,
            start_date.strftime("%Y-%m-%d"),
            end_date.strftime("%Y-%m-%d"),
            metrics,
            options if options is not None else {},
        )

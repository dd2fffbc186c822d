"""
JSON report routes.

Each endpoint accepts either a ``days`` look-back or a custom ``start``/``end``
pair and returns the report records as JSON.
"""

import logging
from datetime import date

import httpx
from fastapi import APIRouter, HTTPException, Query

from ..config import AnalyticsConfig
from ..core.client import QueryError
from ..core.models import DateRange
from ..reports import ReportBuilder, RowParseError

logger = logging.getLogger(__name__)


def _parse_period(
    days: int,
    custom_start: str | None = None,
    custom_end: str | None = None,
    today: date | None = None,
) -> DateRange:
    """Parse a day count or custom dates into a date range.

    Args:
        days: Number of days to look back from today
        custom_start: Custom start date in YYYY-MM-DD format
        custom_end: Custom end date in YYYY-MM-DD format
        today: Reference date, defaults to ``date.today()``

    Returns:
        The resolved DateRange

    Raises:
        HTTPException: If the day count or custom dates are invalid
    """
    today = today or date.today()

    if custom_start or custom_end:
        if not custom_start or not custom_end:
            raise HTTPException(
                status_code=400,
                detail="Both start and end dates are required for custom date range"
            )

        try:
            start = date.fromisoformat(custom_start)
            end = date.fromisoformat(custom_end)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail="Invalid date format. Use YYYY-MM-DD (e.g., 2024-01-15)"
            ) from None

        if end < start:
            raise HTTPException(
                status_code=400,
                detail="End date must be on or after start date"
            )

        if end > today:
            raise HTTPException(
                status_code=400,
                detail="End date cannot be in the future"
            )

        return DateRange(start=start, end=end)

    if days < 0:
        raise HTTPException(status_code=400, detail="days must not be negative")

    try:
        return DateRange.last_n_days(days, today)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None


async def _run_report(coro):
    """Await a report, turning upstream failures into 502 responses."""
    try:
        return await coro
    except (QueryError, RowParseError, httpx.HTTPError) as exc:
        logger.warning(f"Report query failed: {exc}")
        raise HTTPException(status_code=502, detail=f"Reporting API error: {exc}") from exc


def _records_json(records) -> list[dict]:
    return [record.model_dump(mode="json") for record in records]


def create_reports_router(builder: ReportBuilder, config: AnalyticsConfig | None = None) -> APIRouter:
    """Create the JSON report router.

    Args:
        builder: Report builder the endpoints query
        config: Optional configuration supplying default days and limits

    Returns:
        APIRouter with /visitors, /referrers, /browsers and /pages
    """
    router = APIRouter()

    default_days = config.default_days if config else 365
    max_referrers = config.max_referrers if config else 20
    max_browsers = config.max_browsers if config else 6
    max_pages = config.max_pages if config else 20

    @router.get("/visitors")
    async def visitors(
        days: int = default_days,
        group_by: str = Query("date", description="date or yearMonth"),
        start: str | None = Query(None, description="Custom start date (YYYY-MM-DD)"),
        end: str | None = Query(None, description="Custom end date (YYYY-MM-DD)"),
    ):
        """Visitors and page views over time."""
        period = _parse_period(days, start, end)
        points = await _run_report(
            builder.get_visitors_and_page_views_for_period(period.start, period.end, group_by)
        )
        return {
            "site_id": builder.site_id,
            "start": period.start_str,
            "end": period.end_str,
            "group_by": group_by,
            "data": _records_json(points),
        }

    @router.get("/referrers")
    async def referrers(
        days: int = default_days,
        limit: int = Query(max_referrers, ge=1),
        start: str | None = Query(None, description="Custom start date (YYYY-MM-DD)"),
        end: str | None = Query(None, description="Custom end date (YYYY-MM-DD)"),
    ):
        """Top referrers by page views."""
        period = _parse_period(days, start, end)
        stats = await _run_report(
            builder.get_top_referrers_for_period(period.start, period.end, limit)
        )
        return {
            "site_id": builder.site_id,
            "start": period.start_str,
            "end": period.end_str,
            "data": _records_json(stats),
        }

    @router.get("/browsers")
    async def browsers(
        days: int = default_days,
        limit: int = Query(max_browsers, ge=1),
        start: str | None = Query(None, description="Custom start date (YYYY-MM-DD)"),
        end: str | None = Query(None, description="Custom end date (YYYY-MM-DD)"),
    ):
        """Top browsers by sessions, with the long tail folded into one row."""
        period = _parse_period(days, start, end)
        stats = await _run_report(
            builder.get_top_browsers_for_period(period.start, period.end, limit)
        )
        return {
            "site_id": builder.site_id,
            "start": period.start_str,
            "end": period.end_str,
            "data": _records_json(stats),
        }

    @router.get("/pages")
    async def pages(
        days: int = default_days,
        limit: int = Query(max_pages, ge=1),
        start: str | None = Query(None, description="Custom start date (YYYY-MM-DD)"),
        end: str | None = Query(None, description="Custom end date (YYYY-MM-DD)"),
    ):
        """Most visited pages by page views."""
        period = _parse_period(days, start, end)
        stats = await _run_report(
            builder.get_most_visited_pages_for_period(period.start, period.end, limit)
        )
        return {
            "site_id": builder.site_id,
            "start": period.start_str,
            "end": period.end_str,
            "data": _records_json(stats),
        }

    return router

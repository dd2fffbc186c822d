"""
Report helpers over an analytics reporting API.

Usage:
    from analytics_reports import setup_analytics

    analytics = setup_analytics(
        site_id="ga:12345678",
        access_token="ya29....",
    )

    pages = await analytics.reports.get_most_visited_pages(days=30)

    # Expose JSON endpoints
    app.include_router(analytics.reports_router, prefix="/admin/analytics")
"""

from .config import DEFAULT_API_URL, AnalyticsConfig, load_config
from .core.client import AnalyticsClient, QueryError, QueryExecutor
from .core.models import BrowserStat, DateRange, PageStat, ReferrerStat, TimeSeriesPoint
from .reports import ReportBuilder, RowParseError, fold_remainder
from .routes import create_reports_router

__version__ = "0.1.0"
__all__ = [
    "setup_analytics", "Analytics", "AnalyticsConfig", "load_config",
    "AnalyticsClient", "QueryExecutor", "QueryError",
    "ReportBuilder", "RowParseError", "fold_remainder",
    "DateRange", "TimeSeriesPoint", "ReferrerStat", "BrowserStat", "PageStat",
]


class Analytics:
    """Main reporting interface for a site."""

    def __init__(self, config: AnalyticsConfig, executor: QueryExecutor | None = None):
        self.config = config
        self.client = executor or AnalyticsClient.from_config(config)
        self.reports = ReportBuilder(self.client, config.site_id, other_label=config.other_label)
        self.reports_router = create_reports_router(self.reports, config)

    @property
    def site_id(self) -> str:
        return self.reports.site_id


def setup_analytics(
    site_id: str,
    access_token: str,
    api_url: str = DEFAULT_API_URL,
    timeout_seconds: float = 30.0,
    executor: QueryExecutor | None = None,
) -> Analytics:
    """
    Set up reporting for a site.

    Args:
        site_id: Reporting view identifier (e.g., "ga:12345678")
        access_token: OAuth bearer token with read access to the view
        api_url: Reporting API endpoint
        timeout_seconds: HTTP timeout per query
        executor: Optional executor to use instead of the HTTP client

    Returns:
        Analytics instance with ``reports`` and ``reports_router``
    """
    config = AnalyticsConfig(
        site_id=site_id,
        access_token=access_token,
        api_url=api_url,
        timeout_seconds=timeout_seconds,
    )
    return Analytics(config, executor=executor)

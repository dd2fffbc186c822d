"""
Configuration for analytics reports.
"""
import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://www.googleapis.com/analytics/v3/data/ga"

# Site identifiers for the reporting API look like "ga:12345678"
SITE_ID_PREFIX = "ga:"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


@dataclass
class AnalyticsConfig:
    """Configuration for a single reporting instance."""

    # Required
    site_id: str  # Reporting view identifier (e.g., "ga:12345678")
    access_token: str

    # Transport
    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = 30.0

    # Report defaults
    default_days: int = 365
    max_referrers: int = 20
    max_browsers: int = 6
    max_pages: int = 20
    other_label: str = "Other"  # Label of the folded browser row

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds}")

        for name in ("max_referrers", "max_browsers", "max_pages"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")

        if self.default_days < 0:
            raise ValueError(f"default_days must not be negative, got {self.default_days}")

        self._warn_suspicious_values()

    def _warn_suspicious_values(self) -> None:
        """Log warnings for values the reporting API is likely to reject."""
        if not self.site_id.startswith(SITE_ID_PREFIX):
            logger.warning(
                f"Site id {self.site_id!r} does not start with {SITE_ID_PREFIX!r}; "
                f"the reporting API will probably reject it"
            )
        if not self.access_token:
            logger.warning(f"Site {self.site_id}: No access token configured")
        else:
            logger.debug(f"Site {self.site_id}: Using API endpoint {self.api_url}")


def load_config() -> AnalyticsConfig:
    """Build an AnalyticsConfig from ANALYTICS_* environment variables."""
    return AnalyticsConfig(
        site_id=os.getenv("ANALYTICS_SITE_ID", ""),
        access_token=os.getenv("ANALYTICS_ACCESS_TOKEN", ""),
        api_url=os.getenv("ANALYTICS_API_URL") or DEFAULT_API_URL,
        timeout_seconds=_env_float("ANALYTICS_TIMEOUT_SECONDS", 30.0),
        default_days=_env_int("ANALYTICS_DEFAULT_DAYS", 365),
        max_referrers=_env_int("ANALYTICS_MAX_REFERRERS", 20),
        max_browsers=_env_int("ANALYTICS_MAX_BROWSERS", 6),
        max_pages=_env_int("ANALYTICS_MAX_PAGES", 20),
        other_label=os.getenv("ANALYTICS_OTHER_LABEL") or "Other",
    )

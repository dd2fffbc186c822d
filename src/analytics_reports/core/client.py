"""
HTTP client for the analytics reporting API.

The reporting API answers a metrics/dimensions query over a date range with
a JSON body whose ``rows`` key holds the tabular result.
"""
import logging
from typing import Any, Protocol

import httpx

from ..config import AnalyticsConfig

logger = logging.getLogger(__name__)


class QueryError(RuntimeError):
    """Raised when the reporting API answers with an error object."""

    def __init__(self, message: str, code: int | None = None, errors: list | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.errors = errors or []


class QueryExecutor(Protocol):
    """Anything that can run a reporting query for a site."""

    async def execute(
        self,
        site_id: str,
        start_date: str,
        end_date: str,
        metrics: str,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        ...


class AnalyticsClient:
    """Client for running reporting queries over HTTP."""

    def __init__(
        self,
        access_token: str,
        api_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.access_token = access_token
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: AnalyticsConfig) -> "AnalyticsClient":
        return cls(
            access_token=config.access_token,
            api_url=config.api_url,
            timeout=config.timeout_seconds,
        )

    async def execute(
        self,
        site_id: str,
        start_date: str,
        end_date: str,
        metrics: str,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """Execute a reporting query.

        Args:
            site_id: Reporting view identifier (e.g., "ga:12345678")
            start_date: First day of the range, YYYY-MM-DD
            end_date: Last day of the range, YYYY-MM-DD
            metrics: Comma separated metric expressions
            options: Extra query parameters forwarded verbatim
                (``dimensions``, ``sort``, ``max-results``)

        Returns:
            The decoded JSON response

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            QueryError: If the response body carries an error object
        """
        params = {
            "ids": site_id,
            "start-date": start_date,
            "end-date": end_date,
            "metrics": metrics,
        }
        params.update(self._stringify(options or {}))

        logger.debug(f"Querying {metrics} for {site_id} from {start_date} to {end_date} ({options})")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(
                self.api_url,
                headers={"Authorization": f"Bearer {self.access_token}"},
                params=params,
            )
            response.raise_for_status()
            data = response.json()

        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            if isinstance(error, dict):
                raise QueryError(
                    error.get("message") or "Reporting query failed",
                    code=error.get("code"),
                    errors=error.get("errors"),
                )
            raise QueryError(f"Reporting query failed: {error}")

        return data

    @staticmethod
    def _stringify(options: dict[str, Any]) -> dict[str, str]:
        """Render option values as query-string text, dropping unset ones."""
        return {key: str(value) for key, value in options.items() if value is not None}

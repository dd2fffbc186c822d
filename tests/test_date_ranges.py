"""Tests for day-count and custom date range parsing in report routes."""

from datetime import date, timedelta

import pytest
from fastapi import HTTPException

from analytics_reports.routes.reports import _parse_period

TODAY = date(2024, 6, 30)


class TestDayCountRanges:
    """Test look-back period parsing."""

    def test_7_days(self):
        """7 days ends today and starts 7 days earlier."""
        period = _parse_period(7, today=TODAY)

        assert period.end == TODAY
        assert period.start == TODAY - timedelta(days=7)

    def test_365_days(self):
        period = _parse_period(365, today=TODAY)

        assert period.end == TODAY
        assert period.start == date(2023, 7, 1)

    def test_zero_days_is_today_only(self):
        period = _parse_period(0, today=TODAY)
        assert period.start == period.end == TODAY

    def test_defaults_to_real_today(self):
        period = _parse_period(30)
        assert period.end == date.today()

    def test_negative_days_raises_400(self):
        with pytest.raises(HTTPException) as exc_info:
            _parse_period(-1, today=TODAY)

        assert exc_info.value.status_code == 400

    def test_days_past_earliest_date_raises_400(self):
        """Look-backs before year 1 are rejected instead of overflowing."""
        with pytest.raises(HTTPException) as exc_info:
            _parse_period(1_000_000, today=TODAY)

        assert exc_info.value.status_code == 400
        assert "1000000" in exc_info.value.detail

    def test_days_past_timedelta_limit_raises_400(self):
        with pytest.raises(HTTPException) as exc_info:
            _parse_period(10**12, today=TODAY)

        assert exc_info.value.status_code == 400


class TestCustomDateRanges:
    """Test custom date range parsing."""

    def test_custom_date_range(self):
        """Custom start and end dates are parsed correctly."""
        period = _parse_period(30, "2024-01-01", "2024-01-31", today=TODAY)

        assert period.start == date(2024, 1, 1)
        assert period.end == date(2024, 1, 31)

    def test_custom_dates_override_days(self):
        period = _parse_period(365, "2024-06-01", "2024-06-15", today=TODAY)

        assert period.start == date(2024, 6, 1)
        assert period.end == date(2024, 6, 15)

    def test_single_day_range(self):
        period = _parse_period(30, "2024-03-15", "2024-03-15", today=TODAY)
        assert period.start == period.end == date(2024, 3, 15)

    def test_leap_year_date(self):
        period = _parse_period(30, "2024-02-29", "2024-03-01", today=TODAY)
        assert period.start == date(2024, 2, 29)

    def test_today_as_end_date(self):
        period = _parse_period(30, "2024-01-01", TODAY.isoformat(), today=TODAY)
        assert period.end == TODAY


class TestCustomDateValidation:
    """Test validation of custom date inputs."""

    def test_missing_start_date_raises_400(self):
        with pytest.raises(HTTPException) as exc_info:
            _parse_period(30, None, "2024-01-31", today=TODAY)

        assert exc_info.value.status_code == 400
        assert "Both start and end dates are required" in exc_info.value.detail

    def test_missing_end_date_raises_400(self):
        with pytest.raises(HTTPException) as exc_info:
            _parse_period(30, "2024-01-01", None, today=TODAY)

        assert exc_info.value.status_code == 400
        assert "Both start and end dates are required" in exc_info.value.detail

    def test_invalid_date_format_raises_400(self):
        with pytest.raises(HTTPException) as exc_info:
            _parse_period(30, "01-01-2024", "2024-01-31", today=TODAY)

        assert exc_info.value.status_code == 400
        assert "Invalid date format" in exc_info.value.detail
        assert "YYYY-MM-DD" in exc_info.value.detail

    def test_end_before_start_raises_400(self):
        with pytest.raises(HTTPException) as exc_info:
            _parse_period(30, "2024-01-31", "2024-01-01", today=TODAY)

        assert exc_info.value.status_code == 400
        assert "End date must be on or after start date" in exc_info.value.detail

    def test_future_end_date_raises_400(self):
        future = (TODAY + timedelta(days=1)).isoformat()

        with pytest.raises(HTTPException) as exc_info:
            _parse_period(30, "2024-01-01", future, today=TODAY)

        assert exc_info.value.status_code == 400
        assert "cannot be in the future" in exc_info.value.detail


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

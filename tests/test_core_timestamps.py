"""Unit tests for timestamp utilities."""

from datetime import datetime, timedelta, timezone

from src.core.utils.timestamps import normalize_timestamp, utc_now


class TestNormalizeTimestamp:
    """Test normalize_timestamp function."""

    def test_normalize_aware_datetime(self):
        """Test normalizing a UTC datetime object."""
        dt = datetime(2025, 11, 18, 10, 30, 0, 123456, tzinfo=timezone.utc)
        assert normalize_timestamp(dt) == "2025-11-18T10:30:00.123Z"

    def test_naive_datetime_is_treated_as_utc(self):
        """Test that naive datetimes are not shifted."""
        dt = datetime(2025, 11, 18, 10, 30, 0)
        assert normalize_timestamp(dt) == "2025-11-18T10:30:00.000Z"

    def test_other_timezones_are_converted(self):
        """Test converting a non-UTC offset to UTC."""
        dt = datetime(2025, 11, 18, 19, 30, 0, tzinfo=timezone(timedelta(hours=9)))
        assert normalize_timestamp(dt) == "2025-11-18T10:30:00.000Z"

    def test_normalize_iso_string(self):
        """Test normalizing ISO format timestamp string with Z suffix."""
        assert normalize_timestamp("2025-11-18T10:30:00.500Z") == "2025-11-18T10:30:00.500Z"

    def test_invalid_value_returns_current_time(self):
        """Test that unparsable values fall back to now."""
        result = normalize_timestamp("not-a-date")
        parsed = datetime.fromisoformat(result.replace("Z", "+00:00"))
        assert abs((utc_now() - parsed).total_seconds()) < 5

    def test_none_returns_current_time(self):
        """Test normalizing None returns current time."""
        result = normalize_timestamp(None)
        assert result.endswith("Z")
        assert "T" in result


class TestUtcNow:
    """Test utc_now function."""

    def test_is_timezone_aware(self):
        assert utc_now().tzinfo is not None

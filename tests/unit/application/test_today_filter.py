"""
Unit tests for the today filter.
"""

from datetime import datetime, timedelta, timezone

from upload_dashboard.application.today_filter import day_bounds, filter_files_uploaded_today
from upload_dashboard.domain.models.files import RemoteFileRecord


def record(name: str, uploaded_at: str) -> RemoteFileRecord:
    return RemoteFileRecord(filename=name, path=f"uploads/{name}", uploaded_at=uploaded_at)


NOW = datetime(2026, 10, 19, 15, 30, 0)


class TestDayBounds:
    """Test day boundary computation"""

    def test_naive_bounds(self):
        start, end = day_bounds(NOW)
        assert start == datetime(2026, 10, 19, 0, 0, 0)
        assert end == datetime(2026, 10, 19, 23, 59, 59, 999999)

    def test_aware_bounds_keep_zone(self):
        tz = timezone(timedelta(hours=2))
        start, end = day_bounds(datetime(2026, 10, 19, 1, 0, tzinfo=tz))
        assert start.tzinfo is tz
        assert start == datetime(2026, 10, 19, 0, 0, tzinfo=tz)


class TestFilterBoundaries:
    """Boundary behaviour around local midnight"""

    def test_midnight_today_included(self):
        result = filter_files_uploaded_today([record("a", "2026-10-19T00:00:00.000")], NOW)
        assert len(result) == 1

    def test_end_of_today_included(self):
        result = filter_files_uploaded_today([record("a", "2026-10-19T23:59:59.999")], NOW)
        assert len(result) == 1

    def test_end_of_yesterday_excluded(self):
        result = filter_files_uploaded_today([record("a", "2026-10-18T23:59:59.999")], NOW)
        assert result == []

    def test_midnight_tomorrow_excluded(self):
        result = filter_files_uploaded_today([record("a", "2026-10-20T00:00:00.000")], NOW)
        assert result == []


class TestFilterBehaviour:
    """General filter behaviour"""

    def test_order_preserved(self):
        records = [
            record("b", "2026-10-19T12:00:00"),
            record("old", "2026-01-01T12:00:00"),
            record("a", "2026-10-19T08:00:00"),
        ]
        result = filter_files_uploaded_today(records, NOW)
        assert [r.filename for r in result] == ["b", "a"]

    def test_invalid_timestamp_excluded(self):
        records = [record("bad", "not-a-date"), record("empty", "")]
        assert filter_files_uploaded_today(records, NOW) == []

    def test_utc_timestamp_converted_to_reference_zone(self):
        """A 'Z' timestamp is compared in the reference time's zone"""
        tz = timezone(timedelta(hours=2))
        now = datetime(2026, 10, 19, 12, 0, tzinfo=tz)

        # 22:00Z on the 18th is 00:00 on the 19th at UTC+2
        records = [
            record("in", "2026-10-18T22:00:00.000Z"),
            record("out", "2026-10-18T21:59:59.999Z"),
        ]
        result = filter_files_uploaded_today(records, now)
        assert [r.filename for r in result] == ["in"]

    def test_naive_timestamp_with_aware_now(self):
        tz = timezone(timedelta(hours=-5))
        now = datetime(2026, 10, 19, 12, 0, tzinfo=tz)
        result = filter_files_uploaded_today([record("a", "2026-10-19T06:00:00")], now)
        assert len(result) == 1

    def test_pure(self):
        records = [record("a", "2026-10-19T08:00:00")]
        first = filter_files_uploaded_today(records, NOW)
        second = filter_files_uploaded_today(records, NOW)
        assert first == second
        assert len(records) == 1

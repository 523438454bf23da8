# taskmanager/test/unit/test_datetime_utils.py

# Para Rodar o Script:
# pytest taskmanager/test/unit/test_datetime_utils.py -v

from datetime import datetime, timedelta, timezone

import pytest
import pytz

from taskmanager.shared.utils.datetime_utils import DateTimeUtil


class TestDateTimeUtil:
    """Test suite for DateTimeUtil class."""

    def test_utcnow(self):
        """Test utcnow() method generates timezone-aware UTC time."""
        dt = DateTimeUtil.utcnow()
        assert dt.tzinfo is not None
        assert dt.utcoffset() == timedelta(0)

    def test_ensure_utc_localizes_naive(self):
        naive = datetime(2024, 1, 10, 12, 0, 0)
        aware = DateTimeUtil.ensure_utc(naive)
        assert aware.tzinfo is not None
        assert aware.hour == 12

    def test_ensure_utc_converts_aware(self):
        sp_time = pytz.timezone("America/Sao_Paulo").localize(datetime(2024, 1, 10, 9, 0, 0))
        utc_time = DateTimeUtil.ensure_utc(sp_time)
        assert utc_time.utcoffset() == timedelta(0)
        assert utc_time.hour == 12

    def test_ensure_utc_none(self):
        assert DateTimeUtil.ensure_utc(None) is None

    def test_from_timestamp(self):
        dt = DateTimeUtil.from_timestamp(0)
        assert dt == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value,expected", [
        ("15m", timedelta(minutes=15)),
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("30s", timedelta(seconds=30)),
        ("900", timedelta(seconds=900)),
        (60, timedelta(seconds=60)),
        (timedelta(minutes=5), timedelta(minutes=5)),
    ])
    def test_parse_duration(self, value, expected):
        assert DateTimeUtil.parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", "15x", "0m", "-5m", 0])
    def test_parse_duration_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            DateTimeUtil.parse_duration(value)

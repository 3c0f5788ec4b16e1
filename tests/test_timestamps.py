from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from scoutwindow.utils.timestamps import (
    ceil_days,
    ceil_hours,
    days,
    parse_timestamp,
    resolve_timezone,
    shift_days,
)


def test_parse_iso_with_z_suffix():
    parsed = parse_timestamp('2026-02-02T23:00:00Z')
    assert parsed == datetime(2026, 2, 2, 23, 0, tzinfo=timezone.utc)


def test_parse_naive_string_uses_given_timezone():
    tz = resolve_timezone('+01:00')
    parsed = parse_timestamp('2026-02-02T12:00:00', tz)
    assert parsed == datetime(2026, 2, 2, 11, 0, tzinfo=timezone.utc)
    assert parsed.tzinfo is timezone.utc


def test_zone_local_values_become_utc_instants():
    london = ZoneInfo('Europe/London')
    assert parse_timestamp(datetime(2026, 3, 30), london) == datetime(2026, 3, 29, 23, 0, tzinfo=timezone.utc)
    assert parse_timestamp(date(2026, 1, 30), london).tzinfo is timezone.utc
    aware = datetime(2026, 7, 1, 9, 0, tzinfo=london)
    assert parse_timestamp(aware).tzinfo is timezone.utc


def test_parse_date_is_midnight():
    parsed = parse_timestamp(date(2025, 9, 1))
    assert parsed == datetime(2025, 9, 1, tzinfo=timezone.utc)


def test_parse_rfc2822():
    parsed = parse_timestamp('Mon, 01 Sep 2025 19:00:00 +0100')
    assert parsed == datetime(2025, 9, 1, 18, 0, tzinfo=timezone.utc)


def test_parse_textual_date():
    assert parse_timestamp('1 September 2025') == datetime(2025, 9, 1, tzinfo=timezone.utc)


def test_parse_epoch_seconds():
    assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize('value', [None, '', '   ', 'next tuesday', True, float('nan'), object(), [2025]])
def test_unparseable_values_become_none(value):
    assert parse_timestamp(value) is None


def test_resolve_timezone_variants():
    assert resolve_timezone(None) is timezone.utc
    assert resolve_timezone('GMT') is timezone.utc
    assert resolve_timezone('-05:30').utcoffset(None) == -timedelta(hours=5, minutes=30)
    with pytest.raises(ValueError):
        resolve_timezone('Mars/Olympus_Mons')
    with pytest.raises(ValueError):
        resolve_timezone('+25:00')


def test_ceil_rounding():
    assert ceil_days(timedelta(hours=1)) == 1
    assert ceil_days(timedelta(days=2)) == 2
    assert ceil_days(timedelta(0)) == 0
    assert ceil_days(-timedelta(hours=30)) == -1
    assert ceil_hours(timedelta(minutes=61)) == 2


def test_day_arithmetic_saturates():
    assert days(10**10) == timedelta.max
    assert days(-10**10) == timedelta.min
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert shift_days(start, 2) == datetime(2026, 1, 3, tzinfo=timezone.utc)
    assert shift_days(start, 10**9 - 1) == datetime.max.replace(tzinfo=timezone.utc)
    assert shift_days(start, -10**12) == datetime.min.replace(tzinfo=timezone.utc)

"""Lenient timestamp parsing and day arithmetic for window boundaries."""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from email.utils import parsedate_to_datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")

_TEXT_FORMATS = (
    "%d %B %Y", "%d %b %Y", "%B %d, %Y", "%b %d, %Y",
    "%Y/%m/%d", "%d/%m/%Y",
)


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Resolve 'UTC', a fixed offset like '+02:00', or an IANA name.

    Raises ValueError for identifiers that cannot be resolved.
    """
    tz_name = (name or '').strip()
    if not tz_name or tz_name.lower() in {'utc', 'z', 'gmt'}:
        return timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh, mm = int(hh_s), int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == '+' else -1
        return timezone(sign * timedelta(hours=hh, minutes=mm))

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def _localize(value: datetime, tz: tzinfo) -> datetime:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=tz)
    return value


def _parse_text(text: str, tz: tzinfo) -> Optional[datetime]:
    st = text.strip()
    if not st:
        return None
    # ISO-like, normalise the 'Z' suffix
    try:
        return _localize(datetime.fromisoformat(st.replace('Z', '+00:00')), tz)
    except ValueError:
        pass
    try:
        return _localize(parsedate_to_datetime(st), tz)
    except (TypeError, ValueError, IndexError):
        pass
    for fmt in _TEXT_FORMATS:
        try:
            return datetime.strptime(st, fmt).replace(tzinfo=tz)
        except ValueError:
            continue
    return None


def _to_instant(value: datetime) -> Optional[datetime]:
    try:
        return value.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        logger.warning(f"Timestamp {value!r} falls outside the representable range, treating as absent")
        return None


def _coerce(value: Any, tz: tzinfo) -> Optional[datetime]:
    if isinstance(value, datetime):
        return _localize(value, tz)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=tz)
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning(f"Epoch value {value!r} is out of range, treating as absent")
            return None
    if isinstance(value, str):
        parsed = _parse_text(value, tz)
        if parsed is None:
            logger.warning(f"Unparseable timestamp {value!r}, treating as absent")
        return parsed

    logger.warning(f"Unsupported timestamp type {type(value).__name__}, treating as absent")
    return None


def parse_timestamp(value: Any, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Coerce a caller-supplied timestamp into a UTC datetime.

    Accepts datetimes, dates (midnight in ``tz``), epoch seconds, ISO 8601
    strings (including a trailing ``Z``), RFC 2822 strings and a few common
    textual date forms. Naive values are interpreted in ``tz`` (UTC when
    omitted). Anything else yields ``None`` rather than raising, so a bad
    record degrades to "no boundary" instead of breaking the caller.

    Results are always UTC instants, so day and hour counts measure elapsed
    time even across a DST change.
    """
    tz = tz or timezone.utc
    if value is None or isinstance(value, bool):
        return None
    moment = _coerce(value, tz)
    if moment is None:
        return None
    return _to_instant(moment)


def ceil_days(delta: timedelta) -> int:
    """Whole days covering ``delta``, rounded up (a partial day counts)."""
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def ceil_hours(delta: timedelta) -> int:
    return math.ceil(delta.total_seconds() / SECONDS_PER_HOUR)


def days(n: int) -> timedelta:
    """``timedelta(days=n)``, saturating at ``timedelta.max`` / ``timedelta.min``."""
    try:
        return timedelta(days=n)
    except OverflowError:
        return timedelta.max if n > 0 else timedelta.min


def shift_days(moment: datetime, n: int) -> datetime:
    """Move an aware ``moment`` by ``n`` days, saturating at the datetime range."""
    try:
        return moment + timedelta(days=n)
    except OverflowError:
        edge = datetime.max if n > 0 else datetime.min
        return edge.replace(tzinfo=timezone.utc)

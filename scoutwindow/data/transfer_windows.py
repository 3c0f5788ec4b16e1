"""
Transfer window calendar for European football leagues.

Season windows from 2022-23 through 2026-27, stored as ISO date strings of the
opening day and the deadline day. A deadline day counts in full: the window
closes at the end of that day in the configured timezone.

Window Keys Format: "<YYYY-YY>::<SUMMER|WINTER|FULL>"
- SUMMER: Summer transfer window
- WINTER: Winter/January transfer window
- FULL: From the summer opening to the winter deadline of the season
"""
import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Optional

from scoutwindow.config.window_config import get_window_timezone
from scoutwindow.models.errors import UnknownWindowKeyError
from scoutwindow.models.window import WindowSpec
from scoutwindow.services.window_status_service import resolve_now

logger = logging.getLogger(__name__)

SEGMENTS = ("SUMMER", "WINTER", "FULL")

# (opening day, deadline day) per season and segment
WINDOWS = {
    "2022-23": {
        "SUMMER": ("2022-06-10", "2022-09-01"),
        "WINTER": ("2023-01-01", "2023-01-31"),
    },
    "2023-24": {
        "SUMMER": ("2023-06-14", "2023-09-01"),
        "WINTER": ("2024-01-01", "2024-02-01"),
    },
    "2024-25": {
        "SUMMER": ("2024-06-14", "2024-08-30"),
        "WINTER": ("2025-01-01", "2025-02-03"),
    },
    "2025-26": {
        # Premier League opened in two stages around the Club World Cup; collapsed to the main run
        "SUMMER": ("2025-06-16", "2025-09-01"),
        "WINTER": ("2026-01-01", "2026-02-02"),
    },
    # Provisional until the leagues publish their 2026-27 deadlines
    "2026-27": {
        "SUMMER": ("2026-06-15", "2026-09-01"),
        "WINTER": ("2027-01-01", "2027-02-01"),
    },
}


def get_supported_seasons() -> list[str]:
    """Return list of supported season slugs."""
    return list(WINDOWS.keys())


def get_supported_window_keys() -> list[str]:
    """Return every key accepted by parse_window_key, in calendar order."""
    return [f"{season}::{segment}" for season in WINDOWS for segment in SEGMENTS]


def _bounds(open_day: str, deadline_day: str, tz: tzinfo) -> tuple[datetime, datetime]:
    opens = datetime.fromisoformat(open_day).replace(tzinfo=tz)
    closes = datetime.fromisoformat(deadline_day).replace(tzinfo=tz) + timedelta(days=1)
    # Deadline day ends at local midnight; hand back absolute UTC instants
    return opens.astimezone(timezone.utc), closes.astimezone(timezone.utc)


def parse_window_key(window_key: str, tz: Optional[tzinfo] = None) -> tuple[datetime, datetime]:
    """Resolve a window key to aware (opens_at, closes_at) datetimes

    Raises:
        UnknownWindowKeyError: malformed key, unknown segment or unknown season
    """
    tz = tz or get_window_timezone()
    try:
        season, segment = window_key.split("::")
    except (AttributeError, ValueError):
        raise UnknownWindowKeyError(str(window_key))
    segment = segment.strip().upper()
    season = season.strip()

    if season not in WINDOWS:
        raise UnknownWindowKeyError(window_key, reason=f"Unknown season '{season}'")

    if segment == "FULL":
        opens, _ = _bounds(*WINDOWS[season]["SUMMER"], tz)
        _, closes = _bounds(*WINDOWS[season]["WINTER"], tz)
    elif segment in ("SUMMER", "WINTER"):
        opens, closes = _bounds(*WINDOWS[season][segment], tz)
    else:
        raise UnknownWindowKeyError(window_key, reason="segment must be SUMMER, WINTER, or FULL")

    logger.debug(f"parse_window_key -> season='{season}', segment='{segment}', opens={opens}, closes={closes}")
    return opens, closes


def window_spec_for_key(
    window_key: str,
    grace_days: Optional[int] = None,
    paperwork_buffer_days: Optional[int] = None,
) -> WindowSpec:
    """Build a WindowSpec for a calendar window, e.g. '2025-26::WINTER'."""
    opens, closes = parse_window_key(window_key)
    return WindowSpec(
        window_open_at=opens,
        window_close_at=closes,
        grace_days=grace_days,
        paperwork_buffer_days=paperwork_buffer_days,
    )


def find_window_for(moment: Any) -> Optional[str]:
    """Return the SUMMER/WINTER key whose window contains ``moment``, or the next one to open.

    Returns None when ``moment`` is after the last window in the calendar.
    """
    when = resolve_now(moment)
    tz = get_window_timezone()
    for season in WINDOWS:
        for segment in ("SUMMER", "WINTER"):
            opens, closes = _bounds(*WINDOWS[season][segment], tz)
            if when < closes:
                return f"{season}::{segment}"
    return None

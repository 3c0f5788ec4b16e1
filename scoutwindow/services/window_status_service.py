"""Transfer window status calculation.

Classifies a request's transfer window at an explicit instant and produces the
metadata the badge, smart-view filters and dashboard alerts are built from.
Every function here is pure: ``now`` is always passed in, nothing is cached
and nothing reads the wall clock.

Evaluation order (first match wins):

1. no boundaries at all                       -> NO_WINDOW
2. open >= close                              -> INVALID_RANGE
3. close has passed                           -> CLOSED / GRACE_PERIOD / EXPIRED
4. close is near (paperwork or closes-soon)   -> CLOSES_SOON
5. open is still ahead                        -> OPENS_SOON
6. anything else                              -> OPEN

Close-based checks run before the open-based one so an obligation to finish a
deal outranks a future opening.
"""
import logging
from datetime import datetime
from typing import Any, Optional, Union

from scoutwindow.config.window_config import WindowThresholds, get_window_config, get_window_timezone
from scoutwindow.models.errors import InvalidTimestampError
from scoutwindow.models.window import (
    BadgeData,
    UrgencyLevel,
    WindowSpec,
    WindowStatus,
    WindowStatusCode,
)
from scoutwindow.utils.timestamps import (
    ceil_days,
    ceil_hours,
    days,
    parse_timestamp,
    shift_days,
)

logger = logging.getLogger(__name__)


def _plural(count: int, word: str = 'day') -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def resolve_now(now: Any) -> datetime:
    """Interpret the caller-supplied evaluation instant; naive values use the configured timezone."""
    resolved = parse_timestamp(now, get_window_timezone())
    if resolved is None:
        raise InvalidTimestampError(now)
    return resolved


def calculate_window_status(
    now: Any,
    window_open_at: Any = None,
    window_close_at: Any = None,
    grace_days: Optional[int] = None,
    paperwork_buffer_days: Optional[int] = None,
    thresholds: Optional[WindowThresholds] = None,
) -> WindowStatus:
    """Classify a transfer window at ``now``.

    Args:
        now: The evaluation instant. Required; naive values use the configured timezone.
        window_open_at: When the window opens, or None.
        window_close_at: When the window closes, or None.
        grace_days: Days after close during which a deal is still actionable (default 3).
        paperwork_buffer_days: Days before close treated as the paperwork deadline (default 3).
        thresholds: Day cutoffs; defaults to the configured thresholds.

    Returns:
        WindowStatus: status, urgency, message and signed countdown to the next boundary.

    Raises:
        InvalidTimestampError: if ``now`` cannot be interpreted. Window timestamps
            never raise; unparseable ones are treated as absent.
    """
    config = get_window_config()
    thresholds = thresholds or config.thresholds
    spec = WindowSpec(
        window_open_at=window_open_at,
        window_close_at=window_close_at,
        grace_days=grace_days,
        paperwork_buffer_days=paperwork_buffer_days,
    )
    return evaluate_window(spec, resolve_now(now), thresholds)


def evaluate_window(
    spec: WindowSpec,
    now: datetime,
    thresholds: Optional[WindowThresholds] = None,
) -> WindowStatus:
    """Classify an already-built WindowSpec at an aware ``now``."""
    thresholds = thresholds or get_window_config().thresholds
    open_at = spec.window_open_at
    close_at = spec.window_close_at
    grace = spec.grace_days
    buffer = spec.paperwork_buffer_days

    if open_at is None and close_at is None:
        return WindowStatus(
            status=WindowStatusCode.NO_WINDOW,
            urgency_level=UrgencyLevel.NONE,
            message='No transfer window specified',
            can_transfer=True,
        )

    if open_at is not None and close_at is not None and open_at >= close_at:
        logger.warning(f"Window opens at {open_at.isoformat()} but closes at {close_at.isoformat()}")
        return WindowStatus(
            status=WindowStatusCode.INVALID_RANGE,
            urgency_level=UrgencyLevel.NONE,
            message='Invalid window configuration',
        )

    if close_at is not None and now >= close_at:
        return _after_close(now, close_at, grace)

    if close_at is not None:
        window_is_open = open_at is None or now >= open_at
        closing = _closing_soon(now, close_at, buffer, thresholds, window_is_open)
        if closing is not None:
            return closing

    if open_at is not None and now < open_at:
        return _before_open(now, open_at, thresholds)

    if close_at is None:
        return WindowStatus(
            status=WindowStatusCode.OPEN,
            urgency_level=UrgencyLevel.NONE,
            message='Open - no closing date',
            can_transfer=True,
        )

    days_to_close = ceil_days(close_at - now)
    return WindowStatus(
        status=WindowStatusCode.OPEN,
        urgency_level=UrgencyLevel.NONE,
        message=f"Open - Closes in {_plural(days_to_close)}",
        days_remaining=days_to_close,
        hours_remaining=ceil_hours(close_at - now),
        can_transfer=True,
    )


def _after_close(now: datetime, close_at: datetime, grace: int) -> WindowStatus:
    if grace == 0:
        days_since = ceil_days(now - close_at)
        return WindowStatus(
            status=WindowStatusCode.CLOSED,
            urgency_level=UrgencyLevel.NONE,
            message='Transfer window closed',
            days_remaining=-days_since,
        )

    grace_end = shift_days(close_at, grace)
    if now <= grace_end:
        days_left = ceil_days(grace_end - now)
        return WindowStatus(
            status=WindowStatusCode.GRACE_PERIOD,
            urgency_level=UrgencyLevel.CRITICAL,
            message=f"Grace period - {_plural(days_left)} left",
            days_remaining=days_left,
            hours_remaining=ceil_hours(grace_end - now),
            can_transfer=True,
        )

    days_over = ceil_days(now - grace_end)
    return WindowStatus(
        status=WindowStatusCode.EXPIRED,
        urgency_level=UrgencyLevel.NONE,
        message='Transfer window closed',
        days_remaining=-days_over,
    )


def _closing_soon(
    now: datetime,
    close_at: datetime,
    buffer: int,
    thresholds: WindowThresholds,
    window_is_open: bool,
) -> Optional[WindowStatus]:
    remaining = close_at - now
    days_to_close = ceil_days(remaining)
    paperwork_deadline = shift_days(close_at, -buffer)

    if buffer > 0 and now >= paperwork_deadline:
        urgency = UrgencyLevel.CRITICAL
        message = f"Paperwork deadline passed! Closes in {_plural(days_to_close)}"
    elif remaining <= days(thresholds.critical_days):
        urgency = UrgencyLevel.CRITICAL
        message = f"Closes in {_plural(ceil_hours(remaining), 'hour')}"
    elif buffer > 0 and now >= shift_days(close_at, -2 * buffer):
        days_to_paperwork = ceil_days(paperwork_deadline - now)
        urgency = UrgencyLevel.HIGH
        message = f"Paperwork deadline in {_plural(days_to_paperwork)} - Closes in {days_to_close}"
    elif remaining <= days(thresholds.closes_soon_days):
        urgency = UrgencyLevel.MEDIUM
        message = f"Closes in {_plural(days_to_close)}"
    else:
        return None

    return WindowStatus(
        status=WindowStatusCode.CLOSES_SOON,
        urgency_level=urgency,
        message=message,
        days_remaining=days_to_close,
        hours_remaining=ceil_hours(remaining),
        can_transfer=window_is_open,
    )


def _before_open(now: datetime, open_at: datetime, thresholds: WindowThresholds) -> WindowStatus:
    until_open = open_at - now
    days_to_open = ceil_days(until_open)

    if until_open <= days(thresholds.opens_soon_medium_days):
        urgency = UrgencyLevel.MEDIUM
    elif until_open <= days(thresholds.opens_soon_days):
        urgency = UrgencyLevel.LOW
    else:
        # Far-future openings keep OPENS_SOON but carry no urgency, so no badge is drawn
        urgency = UrgencyLevel.NONE

    return WindowStatus(
        status=WindowStatusCode.OPENS_SOON,
        urgency_level=urgency,
        message=f"Opens in {_plural(days_to_open)}",
        days_remaining=days_to_open,
        hours_remaining=ceil_hours(until_open),
    )


# Palette per urgency tier: (background, text, border)
_URGENCY_PALETTE = {
    UrgencyLevel.NONE: ('bg-gray-100', 'text-gray-800', 'border-gray-200'),
    UrgencyLevel.LOW: ('bg-blue-100', 'text-blue-800', 'border-blue-200'),
    UrgencyLevel.MEDIUM: ('bg-yellow-100', 'text-yellow-800', 'border-yellow-200'),
    UrgencyLevel.HIGH: ('bg-orange-100', 'text-orange-800', 'border-orange-200'),
    UrgencyLevel.CRITICAL: ('bg-red-100', 'text-red-800', 'border-red-200'),
}

_STATUS_PALETTE_OVERRIDES = {
    WindowStatusCode.OPEN: ('bg-green-100', 'text-green-800', 'border-green-200'),
    WindowStatusCode.NO_WINDOW: ('bg-gray-50', 'text-gray-600', 'border-gray-100'),
    WindowStatusCode.INVALID_RANGE: ('bg-purple-100', 'text-purple-800', 'border-purple-200'),
}

_STATUS_ICONS = {
    WindowStatusCode.OPEN: '🟢',
    WindowStatusCode.CLOSES_SOON: '🟡',
    WindowStatusCode.GRACE_PERIOD: '⚠️',
    WindowStatusCode.OPENS_SOON: '🔵',
    WindowStatusCode.CLOSED: '⚫',
    WindowStatusCode.EXPIRED: '⚫',
    WindowStatusCode.NO_WINDOW: '➖',
    WindowStatusCode.INVALID_RANGE: '❗',
}

_STATUS_LABELS = {
    WindowStatusCode.OPEN: 'Open',
    WindowStatusCode.CLOSES_SOON: 'Closing Soon',
    WindowStatusCode.GRACE_PERIOD: 'Grace Period',
    WindowStatusCode.OPENS_SOON: 'Opens Soon',
    WindowStatusCode.CLOSED: 'Closed',
    WindowStatusCode.EXPIRED: 'Expired',
    WindowStatusCode.NO_WINDOW: 'No Window',
    WindowStatusCode.INVALID_RANGE: 'Invalid Window',
}

_URGENCY_DESCRIPTIONS = {
    UrgencyLevel.CRITICAL: 'Immediate action required',
    UrgencyLevel.HIGH: 'Act within days',
    UrgencyLevel.MEDIUM: 'Plan accordingly',
    UrgencyLevel.LOW: 'No immediate rush',
    UrgencyLevel.NONE: 'No time constraints',
}


def format_countdown(days_remaining: Optional[int], hours_remaining: Optional[int] = None) -> Optional[str]:
    """Compact countdown like "in 5d", "in 6h", "today" or "3d overdue"."""
    if days_remaining is None:
        return None
    if days_remaining > 1:
        return f"in {days_remaining}d"
    if days_remaining == 1:
        if hours_remaining is not None and 0 < hours_remaining < 24:
            return f"in {hours_remaining}h"
        return "in 1d"
    if days_remaining == 0:
        return "today"
    return f"{-days_remaining}d overdue"


def get_badge_data(status: WindowStatus) -> BadgeData:
    """Map a WindowStatus to badge colors, icon, label and countdown."""
    palette = _URGENCY_PALETTE[status.urgency_level]
    if status.urgency_level is UrgencyLevel.NONE:
        palette = _STATUS_PALETTE_OVERRIDES.get(status.status, palette)
    color, text_color, border_color = palette

    icon = _STATUS_ICONS[status.status]
    if status.status is WindowStatusCode.CLOSES_SOON and status.urgency_level is UrgencyLevel.CRITICAL:
        icon = '🔴'

    return BadgeData(
        status=status.status,
        label=get_status_label(status.status),
        color=color,
        text_color=text_color,
        border_color=border_color,
        icon=icon,
        urgency_level=status.urgency_level,
        countdown=format_countdown(status.days_remaining, status.hours_remaining),
    )


def get_urgency_description(urgency_level: Union[UrgencyLevel, str]) -> str:
    try:
        return _URGENCY_DESCRIPTIONS[UrgencyLevel(urgency_level)]
    except ValueError:
        return ''


def get_status_label(status: Union[WindowStatusCode, str]) -> str:
    try:
        return _STATUS_LABELS[WindowStatusCode(status)]
    except ValueError:
        return 'Unknown'

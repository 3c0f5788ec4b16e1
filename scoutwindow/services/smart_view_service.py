"""
Smart View Service

Buckets scouting requests into the sidebar smart views ("Open now",
"Closes ≤7d", "Opens ≤30d", ...) by running each request's own window through
the status calculator, so the list filters and sidebar counts
agree with the badge shown on the card.
"""

import logging
from typing import Any, Iterable, Optional

from scoutwindow.config.window_config import WindowThresholds, get_window_config
from scoutwindow.models.errors import UnknownSmartViewError
from scoutwindow.models.window import UrgencyLevel, WindowSpec, WindowStatus, WindowStatusCode
from scoutwindow.services.window_status_service import evaluate_window, resolve_now

logger = logging.getLogger(__name__)

OPEN_NOW = 'open-now'
CLOSES_SOON = 'closes-soon'
OPENS_SOON = 'opens-soon'
GRACE = 'grace'
EXPIRED = 'expired'
NO_WINDOW = 'no-window'
INVALID = 'invalid'

SMART_VIEWS = (OPEN_NOW, CLOSES_SOON, OPENS_SOON, GRACE, EXPIRED, NO_WINDOW, INVALID)

# Filter chip values used by the request list map onto the same views
_VIEW_ALIASES = {
    'open': OPEN_NOW,
    'closing-soon': CLOSES_SOON,
    'grace-period': GRACE,
}


def normalize_view(view: str) -> str:
    key = (view or '').strip().lower().replace('_', '-')
    key = _VIEW_ALIASES.get(key, key)
    if key not in SMART_VIEWS:
        raise UnknownSmartViewError(view)
    return key


def evaluate_request(
    record: Any,
    now: Any,
    thresholds: Optional[WindowThresholds] = None,
) -> WindowStatus:
    """Run a single request record (mapping or ORM-like object) through the calculator."""
    return evaluate_window(WindowSpec.from_record(record), resolve_now(now), thresholds)


def matches_view(
    status: WindowStatus,
    view: str,
    thresholds: Optional[WindowThresholds] = None,
) -> bool:
    """Check whether an evaluated window belongs in a smart view."""
    view = normalize_view(view)
    thresholds = thresholds or get_window_config().thresholds
    code = status.status

    if view == OPEN_NOW:
        return code in (WindowStatusCode.OPEN, WindowStatusCode.CLOSES_SOON) and status.can_transfer
    if view == CLOSES_SOON:
        return (
            code is WindowStatusCode.CLOSES_SOON
            and status.days_remaining is not None
            and status.days_remaining <= thresholds.closes_soon_days
        )
    if view == OPENS_SOON:
        return code is WindowStatusCode.OPENS_SOON and status.urgency_level is not UrgencyLevel.NONE
    if view == GRACE:
        return code is WindowStatusCode.GRACE_PERIOD
    if view == EXPIRED:
        return code in (WindowStatusCode.EXPIRED, WindowStatusCode.CLOSED)
    if view == NO_WINDOW:
        return code is WindowStatusCode.NO_WINDOW
    return code is WindowStatusCode.INVALID_RANGE


def filter_requests(
    records: Iterable[Any],
    view: str,
    now: Any,
    thresholds: Optional[WindowThresholds] = None,
) -> list:
    """Return the records whose window falls into ``view`` at ``now``, preserving order."""
    view = normalize_view(view)
    moment = resolve_now(now)
    matched = []
    for record in records:
        status = evaluate_request(record, moment, thresholds)
        if matches_view(status, view, thresholds):
            matched.append(record)
    logger.debug(f"Smart view '{view}' matched {len(matched)} requests")
    return matched


def count_smart_views(
    records: Iterable[Any],
    now: Any,
    thresholds: Optional[WindowThresholds] = None,
) -> dict:
    """Count requests per smart view for the sidebar.

    Returns:
        dict: ``{'total': n, 'open-now': n, 'closes-soon': n, ...}``. A request
        can appear in more than one view (e.g. open-now and closes-soon).
    """
    moment = resolve_now(now)
    counts = {view: 0 for view in SMART_VIEWS}
    total = 0
    for record in records:
        total += 1
        status = evaluate_request(record, moment, thresholds)
        for view in SMART_VIEWS:
            if matches_view(status, view, thresholds):
                counts[view] += 1
    return {'total': total, **counts}

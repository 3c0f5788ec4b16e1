"""Live countdown support for window badges.

The calculator has no notion of time passing. A caller that shows a live
countdown owns its own timer and calls ``WindowBadgeTracker.refresh(now)`` on
each tick; the tracker re-evaluates the window and reports whether the badge
actually changed so the caller can skip redundant re-renders.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from scoutwindow.config.window_config import WindowThresholds, get_window_config
from scoutwindow.models.window import BadgeData, WindowSpec, WindowStatus
from scoutwindow.services.window_status_service import evaluate_window, get_badge_data, resolve_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeSnapshot:
    status: WindowStatus
    badge: BadgeData
    changed: bool
    evaluated_at: datetime


class WindowBadgeTracker:
    """Holds the last evaluation for one window and diffs successive refreshes."""

    def __init__(
        self,
        spec: WindowSpec,
        thresholds: Optional[WindowThresholds] = None,
        refresh_seconds: Optional[int] = None,
    ):
        config = get_window_config()
        self.spec = spec
        self.thresholds = thresholds or config.thresholds
        self.refresh_interval = timedelta(seconds=refresh_seconds or config.badge_refresh_seconds)
        self._last: Optional[BadgeSnapshot] = None

    @classmethod
    def for_record(cls, record: Any, **kwargs) -> 'WindowBadgeTracker':
        return cls(WindowSpec.from_record(record), **kwargs)

    @property
    def last(self) -> Optional[BadgeSnapshot]:
        return self._last

    def refresh(self, now: Any) -> BadgeSnapshot:
        moment = resolve_now(now)
        status = evaluate_window(self.spec, moment, self.thresholds)
        badge = get_badge_data(status)
        changed = self._last is None or self._last.status != status or self._last.badge != badge
        if changed and self._last is not None:
            logger.debug(
                f"Window badge moved {self._last.status.status.value} -> {status.status.value} "
                f"({badge.countdown})"
            )
        self._last = BadgeSnapshot(status=status, badge=badge, changed=changed, evaluated_at=moment)
        return self._last

    def next_refresh_at(self, now: Any) -> datetime:
        return resolve_now(now) + self.refresh_interval

"""Service for summarising a tenant's transfer windows on the dashboard"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from scoutwindow.config.window_config import WindowThresholds, get_window_config
from scoutwindow.models.window import UrgencyLevel, WindowStatusCode
from scoutwindow.services import smart_view_service
from scoutwindow.services.window_status_service import resolve_now

logger = logging.getLogger(__name__)


@dataclass
class TransferWindowSummary:
    """Window counts shown on the dashboard card and used for alert banners."""
    active: int = 0
    upcoming: int = 0
    expiring: int = 0
    grace: int = 0
    expired: int = 0
    critical: int = 0
    closes_soon_days: int = 7

    def to_dict(self) -> dict:
        return {
            'active': self.active,
            'upcoming': self.upcoming,
            'expiring': self.expiring,
            'grace': self.grace,
            'expired': self.expired,
            'critical': self.critical,
        }


def summarize_transfer_windows(
    records: Iterable[Any],
    now: Any,
    thresholds: Optional[WindowThresholds] = None,
) -> TransferWindowSummary:
    """Aggregate window statuses across a tenant's requests

    Args:
        records: Request records (mappings or ORM-like objects) carrying window fields
        now: Evaluation instant shared by every record
        thresholds: Optional day cutoffs, defaults to the configured ones

    Returns:
        TransferWindowSummary: active = open now, upcoming = opens within the
        opens-soon horizon, expiring = closes within the closes-soon cutoff
    """
    thresholds = thresholds or get_window_config().thresholds
    moment = resolve_now(now)
    summary = TransferWindowSummary(closes_soon_days=thresholds.closes_soon_days)

    for record in records:
        status = smart_view_service.evaluate_request(record, moment, thresholds)
        if smart_view_service.matches_view(status, smart_view_service.OPEN_NOW, thresholds):
            summary.active += 1
        if smart_view_service.matches_view(status, smart_view_service.OPENS_SOON, thresholds):
            summary.upcoming += 1
        if smart_view_service.matches_view(status, smart_view_service.CLOSES_SOON, thresholds):
            summary.expiring += 1
        if status.status is WindowStatusCode.GRACE_PERIOD:
            summary.grace += 1
        if status.status in (WindowStatusCode.EXPIRED, WindowStatusCode.CLOSED):
            summary.expired += 1
        if status.urgency_level is UrgencyLevel.CRITICAL:
            summary.critical += 1

    logger.info(f"Transfer window summary: {summary.to_dict()}")
    return summary


def _windows(count: int) -> str:
    return f"{count} transfer window{'s' if count != 1 else ''}"


def build_window_alerts(summary: TransferWindowSummary) -> list[dict]:
    """Build dashboard alert banners from a window summary

    Returns:
        list: ``{'type': 'warning' | 'error', 'message': str}`` entries, most urgent first
    """
    alerts = []
    if summary.grace > 0:
        alerts.append({
            'type': 'error',
            'message': f"{_windows(summary.grace)} in grace period - act now",
        })
    if summary.expiring > 0:
        alerts.append({
            'type': 'warning',
            'message': f"{_windows(summary.expiring)} closing in next {summary.closes_soon_days} days",
        })
    return alerts


def get_dashboard_window_stats(
    records: Iterable[Any],
    now: Any,
    thresholds: Optional[WindowThresholds] = None,
) -> dict:
    """Summary plus alerts in the shape the dashboard stats payload expects."""
    moment = resolve_now(now)
    summary = summarize_transfer_windows(records, moment, thresholds)
    return {
        'transfer_windows': summary.to_dict(),
        'alerts': build_window_alerts(summary),
        'last_updated': moment.isoformat(),
    }

from datetime import timedelta

from scoutwindow.data.sample_requests import build_sample_requests
from scoutwindow.services.dashboard_alert_service import (
    TransferWindowSummary,
    build_window_alerts,
    get_dashboard_window_stats,
    summarize_transfer_windows,
)


def test_summary_over_sample_requests(now):
    summary = summarize_transfer_windows(build_sample_requests(now), now)
    assert summary.to_dict() == {
        'active': 3,
        'upcoming': 1,
        'expiring': 2,
        'grace': 1,
        'expired': 2,
        'critical': 2,
    }


def test_alerts_list_grace_before_expiring():
    alerts = build_window_alerts(TransferWindowSummary(expiring=2, grace=1))
    assert alerts == [
        {'type': 'error', 'message': '1 transfer window in grace period - act now'},
        {'type': 'warning', 'message': '2 transfer windows closing in next 7 days'},
    ]


def test_no_alerts_when_nothing_is_pressing():
    assert build_window_alerts(TransferWindowSummary(active=4, upcoming=2)) == []


def test_single_expiring_window_message(now):
    records = [{'window_open_at': now - timedelta(days=20), 'window_close_at': now + timedelta(days=5)}]
    stats = get_dashboard_window_stats(records, now)
    assert stats['transfer_windows']['expiring'] == 1
    assert stats['alerts'] == [
        {'type': 'warning', 'message': '1 transfer window closing in next 7 days'},
    ]
    assert stats['last_updated'] == now.isoformat()


def test_empty_tenant(now):
    stats = get_dashboard_window_stats([], now)
    assert stats['transfer_windows'] == TransferWindowSummary().to_dict()
    assert stats['alerts'] == []

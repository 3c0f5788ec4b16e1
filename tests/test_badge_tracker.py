from datetime import timedelta

from scoutwindow.models.window import WindowSpec, WindowStatusCode
from scoutwindow.services.badge_tracker import WindowBadgeTracker


def test_first_refresh_reports_change(now):
    tracker = WindowBadgeTracker(WindowSpec(window_close_at=now + timedelta(days=45)))
    snapshot = tracker.refresh(now)
    assert snapshot.changed is True
    assert snapshot.status.status is WindowStatusCode.OPEN
    assert snapshot.badge.countdown == 'in 45d'
    assert tracker.last is snapshot


def test_refresh_within_same_hour_is_unchanged(now):
    tracker = WindowBadgeTracker(WindowSpec(window_close_at=now + timedelta(days=45)))
    tracker.refresh(now)
    snapshot = tracker.refresh(now + timedelta(seconds=60))
    assert snapshot.changed is False


def test_refresh_across_close_moves_into_grace(now):
    close = now + timedelta(minutes=30)
    tracker = WindowBadgeTracker.for_record({'window_close_at': close, 'grace_days': 3})
    before = tracker.refresh(now)
    after = tracker.refresh(now + timedelta(hours=1))
    assert before.status.status is WindowStatusCode.CLOSES_SOON
    assert after.status.status is WindowStatusCode.GRACE_PERIOD
    assert after.changed is True


def test_next_refresh_uses_configured_interval(now):
    tracker = WindowBadgeTracker(WindowSpec())
    assert tracker.next_refresh_at(now) == now + timedelta(seconds=60)

    fast = WindowBadgeTracker(WindowSpec(), refresh_seconds=5)
    assert fast.next_refresh_at(now) == now + timedelta(seconds=5)

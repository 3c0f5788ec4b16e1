from datetime import timedelta

import pytest

from scoutwindow.models.window import UrgencyLevel, WindowStatus, WindowStatusCode
from scoutwindow.services.window_status_service import (
    calculate_window_status,
    format_countdown,
    get_badge_data,
    get_status_label,
    get_urgency_description,
)


@pytest.mark.parametrize('days_remaining, hours_remaining, expected', [
    (None, None, None),
    (5, 110, 'in 5d'),
    (1, 24, 'in 1d'),
    (1, 6, 'in 6h'),
    (1, None, 'in 1d'),
    (0, 0, 'today'),
    (-3, None, '3d overdue'),
])
def test_format_countdown(days_remaining, hours_remaining, expected):
    assert format_countdown(days_remaining, hours_remaining) == expected


def test_badge_palette_follows_urgency(now):
    expected = {
        UrgencyLevel.LOW: 'bg-blue-100',
        UrgencyLevel.MEDIUM: 'bg-yellow-100',
        UrgencyLevel.HIGH: 'bg-orange-100',
        UrgencyLevel.CRITICAL: 'bg-red-100',
    }
    for level, color in expected.items():
        status = WindowStatus(
            status=WindowStatusCode.CLOSES_SOON, urgency_level=level, message='', days_remaining=4,
        )
        assert get_badge_data(status).color == color


def test_open_badge_is_green_with_countdown(now):
    status = calculate_window_status(now, now - timedelta(days=30), now + timedelta(days=45))
    badge = get_badge_data(status)
    assert badge.color == 'bg-green-100'
    assert badge.text_color == 'text-green-800'
    assert badge.border_color == 'border-green-200'
    assert badge.label == 'Open'
    assert badge.countdown == 'in 45d'


def test_critical_closing_badge_uses_red_icon(now):
    status = calculate_window_status(now, None, now + timedelta(days=2))
    badge = get_badge_data(status)
    assert badge.icon == '🔴'
    assert badge.color == 'bg-red-100'
    assert badge.countdown == 'in 2d'


def test_expired_badge_is_gray_and_overdue(now):
    status = calculate_window_status(now, None, now - timedelta(days=10))
    badge = get_badge_data(status)
    assert badge.status is WindowStatusCode.EXPIRED
    assert badge.color == 'bg-gray-100'
    assert badge.countdown == '7d overdue'


def test_no_window_badge_omits_countdown(now):
    badge = get_badge_data(calculate_window_status(now, None, None))
    assert badge.countdown is None
    assert badge.label == 'No Window'
    assert badge.to_dict()['status'] == 'NO_WINDOW'


def test_invalid_range_badge_is_distinct(now):
    badge = get_badge_data(calculate_window_status(now, now + timedelta(days=2), now))
    assert badge.label == 'Invalid Window'
    assert badge.color == 'bg-purple-100'


def test_grace_period_countdown_same_day(now):
    status = calculate_window_status(now, None, now - timedelta(days=3), grace_days=3)
    assert get_badge_data(status).countdown == 'today'


@pytest.mark.parametrize('level, text', [
    (UrgencyLevel.CRITICAL, 'Immediate action required'),
    ('high', 'Act within days'),
    ('medium', 'Plan accordingly'),
    (UrgencyLevel.LOW, 'No immediate rush'),
    ('none', 'No time constraints'),
    ('panic', ''),
])
def test_urgency_descriptions(level, text):
    assert get_urgency_description(level) == text


def test_status_labels():
    assert get_status_label(WindowStatusCode.CLOSES_SOON) == 'Closing Soon'
    assert get_status_label('GRACE_PERIOD') == 'Grace Period'
    assert get_status_label('SOMETHING_ELSE') == 'Unknown'

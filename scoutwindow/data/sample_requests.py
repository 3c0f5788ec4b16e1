"""Scenario request records covering every window status, positioned relative to ``now``."""
from datetime import timedelta
from typing import Any

from scoutwindow.services.window_status_service import resolve_now


def build_sample_requests(now: Any) -> list[dict]:
    """Return request records whose windows land in each status at ``now``.

    Each record carries an ``expected_status`` key naming the status the
    calculator should report with default thresholds.
    """
    moment = resolve_now(now)

    def at(days: float):
        return moment + timedelta(days=days)

    scenarios = [
        ('open', 'Premier League Summer Window', 'Arsenal FC', 'ST', 'HIGH',
         at(-30), at(45), 3, 'OPEN'),
        ('closes-soon', 'Bundesliga Window', 'Bayern Munich', 'CAM', 'URGENT',
         at(-60), at(7), 3, 'CLOSES_SOON'),
        ('paperwork', 'Serie A Window', 'AC Milan', 'CB', 'URGENT',
         at(-45), at(2), 3, 'CLOSES_SOON'),
        ('grace', 'La Liga Window', 'Real Madrid', 'LW', 'URGENT',
         at(-90), at(-1), 3, 'GRACE_PERIOD'),
        ('opens-soon', 'Allsvenskan Winter Window', 'AIK Stockholm', 'RB', 'MEDIUM',
         at(14), at(75), 3, 'OPENS_SOON'),
        ('far-future', 'MLS Summer Window', 'LA Galaxy', 'CM', 'LOW',
         at(60), at(120), 3, 'OPENS_SOON'),
        ('expired', 'Saudi Pro League', 'Al Hilal', 'CDM', 'LOW',
         at(-120), at(-10), 3, 'EXPIRED'),
        ('closed', 'Eredivisie Window', 'Ajax', 'RW', 'MEDIUM',
         at(-100), at(-2), 0, 'CLOSED'),
        ('no-window', 'Free Agent Signing', 'Inter Miami', 'GK', 'MEDIUM',
         None, None, 0, 'NO_WINDOW'),
        ('invalid', 'Ligue 1 Window', 'Olympique Lyonnais', 'LB', 'LOW',
         at(10), at(5), 3, 'INVALID_RANGE'),
    ]

    return [
        {
            'id': f"sample-{slug}",
            'title': title,
            'club': club,
            'position': position,
            'priority': priority,
            'window_open_at': opens,
            'window_close_at': closes,
            'grace_days': grace_days,
            'paperwork_buffer_days': 3,
            'expected_status': expected,
        }
        for slug, title, club, position, priority, opens, closes, grace_days, expected in scenarios
    ]

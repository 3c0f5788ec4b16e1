import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from scoutwindow.config.window_config import reset_window_config

_ENV_KEYS = (
    'TRANSFER_WINDOW_GRACE_DAYS',
    'TRANSFER_WINDOW_PAPERWORK_BUFFER_DAYS',
    'TRANSFER_WINDOW_OPENS_SOON_DAYS',
    'TRANSFER_WINDOW_CLOSES_SOON_DAYS',
    'TRANSFER_WINDOW_CRITICAL_DAYS',
    'TRANSFER_WINDOW_TIMEZONE',
    'TRANSFER_WINDOW_BADGE_REFRESH_SECONDS',
)


@pytest.fixture(autouse=True)
def clean_window_config(monkeypatch):
    """Every test starts from the built-in defaults regardless of any local .env."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_window_config()
    yield
    reset_window_config()


@pytest.fixture
def now():
    return datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

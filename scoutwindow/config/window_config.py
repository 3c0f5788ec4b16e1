"""Transfer window engine configuration"""
import logging
import os
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Optional

import dotenv

from scoutwindow.utils.timestamps import resolve_timezone

dotenv.load_dotenv(dotenv.find_dotenv())

logger = logging.getLogger(__name__)

DEFAULT_GRACE_DAYS = 3
DEFAULT_PAPERWORK_BUFFER_DAYS = 3
DEFAULT_OPENS_SOON_DAYS = 30
DEFAULT_CLOSES_SOON_DAYS = 7
DEFAULT_CRITICAL_DAYS = 1
DEFAULT_TIMEZONE = 'UTC'
DEFAULT_BADGE_REFRESH_SECONDS = 60


@dataclass(frozen=True)
class WindowThresholds:
    """Day cutoffs used to escalate urgency around a window's boundaries."""
    opens_soon_days: int = DEFAULT_OPENS_SOON_DAYS
    opens_soon_medium_days: int = DEFAULT_CLOSES_SOON_DAYS
    closes_soon_days: int = DEFAULT_CLOSES_SOON_DAYS
    critical_days: int = DEFAULT_CRITICAL_DAYS


@dataclass(frozen=True)
class WindowConfig:
    grace_days: int = DEFAULT_GRACE_DAYS
    paperwork_buffer_days: int = DEFAULT_PAPERWORK_BUFFER_DAYS
    thresholds: WindowThresholds = field(default_factory=WindowThresholds)
    timezone: str = DEFAULT_TIMEZONE
    badge_refresh_seconds: int = DEFAULT_BADGE_REFRESH_SECONDS

    def to_dict(self) -> dict:
        return {
            'grace_days': self.grace_days,
            'paperwork_buffer_days': self.paperwork_buffer_days,
            'opens_soon_days': self.thresholds.opens_soon_days,
            'opens_soon_medium_days': self.thresholds.opens_soon_medium_days,
            'closes_soon_days': self.thresholds.closes_soon_days,
            'critical_days': self.thresholds.critical_days,
            'timezone': self.timezone,
            'badge_refresh_seconds': self.badge_refresh_seconds,
        }


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default
    if value < minimum:
        logger.warning(f"{name}={value} is below {minimum}, using {default}")
        return default
    return value


def load_window_config() -> WindowConfig:
    """Build a WindowConfig from the current environment

    Returns:
        WindowConfig with env overrides applied over the built-in defaults
    """
    closes_soon_days = _env_int('TRANSFER_WINDOW_CLOSES_SOON_DAYS', DEFAULT_CLOSES_SOON_DAYS)
    thresholds = WindowThresholds(
        opens_soon_days=_env_int('TRANSFER_WINDOW_OPENS_SOON_DAYS', DEFAULT_OPENS_SOON_DAYS),
        opens_soon_medium_days=closes_soon_days,
        closes_soon_days=closes_soon_days,
        critical_days=_env_int('TRANSFER_WINDOW_CRITICAL_DAYS', DEFAULT_CRITICAL_DAYS),
    )
    return WindowConfig(
        grace_days=_env_int('TRANSFER_WINDOW_GRACE_DAYS', DEFAULT_GRACE_DAYS),
        paperwork_buffer_days=_env_int(
            'TRANSFER_WINDOW_PAPERWORK_BUFFER_DAYS', DEFAULT_PAPERWORK_BUFFER_DAYS
        ),
        thresholds=thresholds,
        timezone=(os.getenv('TRANSFER_WINDOW_TIMEZONE') or DEFAULT_TIMEZONE).strip(),
        badge_refresh_seconds=_env_int(
            'TRANSFER_WINDOW_BADGE_REFRESH_SECONDS', DEFAULT_BADGE_REFRESH_SECONDS, minimum=1
        ),
    )


_window_config: Optional[WindowConfig] = None


def get_window_config() -> WindowConfig:
    """Return the process-wide config, loading it on first use."""
    global _window_config
    if _window_config is None:
        _window_config = load_window_config()
        logger.debug(f"Loaded transfer window config: {_window_config.to_dict()}")
    return _window_config


def reset_window_config() -> None:
    """Drop the cached config so the next call re-reads the environment."""
    global _window_config
    _window_config = None


def validate_window_config(config: Optional[WindowConfig] = None) -> tuple[bool, Optional[str]]:
    """Validate threshold ordering and the configured timezone

    Returns:
        Tuple of (is_valid, error_message)
    """
    config = config or get_window_config()
    thresholds = config.thresholds

    if thresholds.critical_days > thresholds.closes_soon_days:
        return False, "TRANSFER_WINDOW_CRITICAL_DAYS must not exceed TRANSFER_WINDOW_CLOSES_SOON_DAYS"

    if thresholds.opens_soon_medium_days > thresholds.opens_soon_days:
        return False, "TRANSFER_WINDOW_OPENS_SOON_DAYS must be at least the closes-soon cutoff"

    try:
        resolve_timezone(config.timezone)
    except ValueError as e:
        return False, str(e)

    return True, None


def get_window_timezone(config: Optional[WindowConfig] = None) -> tzinfo:
    """Timezone used for naive timestamps and bare dates; UTC if misconfigured."""
    config = config or get_window_config()
    try:
        return resolve_timezone(config.timezone)
    except ValueError:
        logger.warning(f"TRANSFER_WINDOW_TIMEZONE={config.timezone!r} is invalid, using UTC")
        return resolve_timezone('UTC')

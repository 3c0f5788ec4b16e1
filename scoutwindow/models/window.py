"""Window input/output types shared by the status engine and its consumers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from scoutwindow.config.window_config import get_window_config, get_window_timezone
from scoutwindow.utils.timestamps import parse_timestamp

logger = logging.getLogger(__name__)

# Largest day count a timedelta can hold
MAX_DAY_COUNT = timedelta.max.days


class WindowStatusCode(str, Enum):
    NO_WINDOW = 'NO_WINDOW'
    INVALID_RANGE = 'INVALID_RANGE'
    OPENS_SOON = 'OPENS_SOON'
    OPEN = 'OPEN'
    CLOSES_SOON = 'CLOSES_SOON'
    GRACE_PERIOD = 'GRACE_PERIOD'
    CLOSED = 'CLOSED'
    EXPIRED = 'EXPIRED'


class UrgencyLevel(str, Enum):
    NONE = 'none'
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    CRITICAL = 'critical'


class WindowSpec(BaseModel):
    """Transfer window fields carried by a scouting request.

    Field values are coerced leniently: timestamps that cannot be parsed become
    ``None`` and bad day counts fall back to safe values, so building a spec
    from a stored record never raises.
    """
    model_config = ConfigDict(extra='ignore', frozen=True, populate_by_name=True)

    window_open_at: Optional[datetime] = Field(
        None, validation_alias=AliasChoices('window_open_at', 'windowOpenAt')
    )
    window_close_at: Optional[datetime] = Field(
        None, validation_alias=AliasChoices('window_close_at', 'windowCloseAt')
    )
    grace_days: int = Field(
        default_factory=lambda: get_window_config().grace_days,
        validation_alias=AliasChoices('grace_days', 'graceDays'),
    )
    paperwork_buffer_days: int = Field(
        default_factory=lambda: get_window_config().paperwork_buffer_days,
        validation_alias=AliasChoices('paperwork_buffer_days', 'paperworkBufferDays'),
    )

    @field_validator('window_open_at', 'window_close_at', mode='before')
    @classmethod
    def coerce_timestamp(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value, get_window_timezone())

    @field_validator('grace_days', 'paperwork_buffer_days', mode='before')
    @classmethod
    def coerce_day_count(cls, value: Any, info) -> int:
        config = get_window_config()
        default = config.grace_days if info.field_name == 'grace_days' else config.paperwork_buffer_days
        if value is None or isinstance(value, bool):
            return default
        try:
            count = int(value)
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"{info.field_name}={value!r} is not a day count, using {default}")
            return default
        if count < 0:
            logger.warning(f"{info.field_name}={count} is negative, clamping to 0")
            return 0
        if count > MAX_DAY_COUNT:
            logger.warning(f"{info.field_name}={count} exceeds {MAX_DAY_COUNT}, clamping")
            return MAX_DAY_COUNT
        return count

    @classmethod
    def from_record(cls, record: Any) -> 'WindowSpec':
        """Build a spec from a mapping or an object exposing window attributes.

        Both snake_case (ORM rows) and camelCase (API payloads) names are read.
        """
        data = {}
        for snake, camel in (
            ('window_open_at', 'windowOpenAt'),
            ('window_close_at', 'windowCloseAt'),
            ('grace_days', 'graceDays'),
            ('paperwork_buffer_days', 'paperworkBufferDays'),
        ):
            value = _read_field(record, snake, camel)
            if value is not None:
                data[snake] = value
        return cls(**data)


def _read_field(record: Any, *names: str) -> Any:
    for name in names:
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class WindowStatus:
    """Classification of a window at one instant. Recomputed, never stored."""
    status: WindowStatusCode
    urgency_level: UrgencyLevel
    message: str
    days_remaining: Optional[int] = None
    hours_remaining: Optional[int] = None
    can_transfer: bool = False

    def to_dict(self) -> dict:
        return {
            'status': self.status.value,
            'urgency_level': self.urgency_level.value,
            'message': self.message,
            'days_remaining': self.days_remaining,
            'hours_remaining': self.hours_remaining,
            'can_transfer': self.can_transfer,
        }


@dataclass(frozen=True)
class BadgeData:
    """Display metadata for a window badge."""
    status: WindowStatusCode
    label: str
    color: str
    text_color: str
    border_color: str
    icon: str
    urgency_level: UrgencyLevel
    countdown: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'status': self.status.value,
            'label': self.label,
            'color': self.color,
            'text_color': self.text_color,
            'border_color': self.border_color,
            'icon': self.icon,
            'urgency_level': self.urgency_level.value,
            'countdown': self.countdown,
        }

"""Common exceptions shared across the window status engine."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class InvalidTimestampError(ValueError):
    """Raised when the evaluation instant itself cannot be interpreted."""

    value: Any
    field: str = 'now'

    def __post_init__(self) -> None:
        super().__init__(f"Cannot interpret {self.field}={self.value!r} as a timestamp")


@dataclass(eq=False)
class UnknownWindowKeyError(KeyError):
    """Raised for malformed window keys or seasons missing from the calendar."""

    window_key: str
    reason: str = "window_key must be '<YYYY-YY>::<SUMMER|WINTER|FULL>'"

    def __post_init__(self) -> None:
        super().__init__(f"{self.reason} (got {self.window_key!r})")

    def __str__(self) -> str:
        return f"{self.reason} (got {self.window_key!r})"


@dataclass(eq=False)
class UnknownSmartViewError(ValueError):
    """Raised when a smart view name is not one of the supported filters."""

    view: str

    def __post_init__(self) -> None:
        super().__init__(f"Unknown smart view '{self.view}'")

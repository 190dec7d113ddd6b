"""Double-press interval and the process-wide default."""

import math
import os
from typing import Optional, Union

from doubletap.errors import InvalidIntervalError

__all__ = ["Wait", "DEFAULT_INTERVAL", "get_default_interval", "set_default_interval", "to_seconds"]

DEFAULT_INTERVAL = 0.3


class Wait:
    def __init__(self, milli: int = 0, seconds: float = 0):
        if milli < 0 or seconds < 0:
            raise InvalidIntervalError("Time cannot be negative")

        if milli == 0 and seconds == 0:
            raise InvalidIntervalError("Time cannot be zero")

        self._milliseconds = milli
        self._seconds = seconds

    @property
    def milliseconds(self):
        return self._milliseconds + self._seconds * 1000

    @property
    def seconds(self) -> float:
        return self.milliseconds / 1000

    def __repr__(self):
        return f"Wait({self.seconds}s)"


def to_seconds(value: Union[float, int, Wait]) -> float:
    """Return a positive number of seconds, or raise InvalidIntervalError."""
    if isinstance(value, Wait):
        return value.seconds
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidIntervalError(f"Unsupported interval type {type(value)}")
    if math.isnan(value) or value <= 0:
        raise InvalidIntervalError(f"Interval must be a positive duration, got {value}")
    return float(value)


def _from_environ() -> float:
    raw = os.environ.get("DOUBLETAP_INTERVAL")
    if not raw:
        return DEFAULT_INTERVAL
    try:
        return to_seconds(float(raw))
    except ValueError as exc:
        raise InvalidIntervalError(f"DOUBLETAP_INTERVAL must be a positive number, got {raw!r}") from exc


_default_interval = _from_environ()


def get_default_interval() -> float:
    return _default_interval


def set_default_interval(value: Optional[Union[float, int, Wait]]) -> float:
    """Set the default interval for new bindings; ``None`` restores 0.3s."""
    global _default_interval  # pylint: disable=global-statement
    _default_interval = DEFAULT_INTERVAL if value is None else to_seconds(value)
    return _default_interval

"""
Clock abstraction for deterministic testing

Identifiers carry whole Unix seconds, so clocks here speak integer epoch
seconds rather than datetimes.
"""

import time
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Protocol for clocks - allows deterministic testing"""

    def now(self) -> int:
        """Return current Unix time in whole seconds"""
        ...


class SystemClock:
    """Production clock backed by the OS wall clock"""

    def now(self) -> int:
        return int(time.time())


class FrozenClock:
    """
    Controllable clock for deterministic tests

    Time only moves when the test moves it.
    """

    def __init__(self, initial: int | datetime = 0) -> None:
        """
        Args:
            initial: Starting time as epoch seconds or a datetime (naive means UTC)
        """
        self._current = _to_seconds(initial)

    def now(self) -> int:
        return self._current

    def set(self, value: int | datetime) -> None:
        """Jump to a specific time"""
        self._current = _to_seconds(value)

    def advance(self, seconds: int) -> None:
        """Advance time by specified seconds"""
        self._current += seconds


def _to_seconds(value: int | datetime) -> int:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return int(value)


default_clock: Clock = SystemClock()

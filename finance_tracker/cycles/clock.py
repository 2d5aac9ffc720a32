"""
Time Sources

Anything that needs "now" takes a Clock instead of calling datetime.now()
directly. Production code uses SystemClock; tests use FixedClock so month
boundaries can be crossed deterministically.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, tzinfo
from typing import Optional


class Clock(ABC):
    """Source of the current moment."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current moment."""
        pass


class SystemClock(Clock):
    """
    Wall clock of the running process.

    With tz=None the result is naive local time, which is what the
    device calendar shows. Pass a tzinfo to get aware datetimes.
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


class FixedClock(Clock):
    """A clock that only moves when told to."""

    def __init__(self, moment: datetime):
        self._moment = moment

    def now(self) -> datetime:
        return self._moment

    def set(self, moment: datetime) -> None:
        self._moment = moment

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock forward by delta and return the new moment."""
        self._moment = self._moment + delta
        return self._moment

"""
Cycle Keys

A cycle key is the monthly accounting period a record belongs to,
written as "YYYY-MM". Mandatory expenses and gains are stamped with the
cycle of their last payment; comparing that stamp with the current
cycle tells whether the bill is already settled this month.

Comparison is plain string equality. Keys are never parsed to decide
whether they are current.
"""

import re
from datetime import date, datetime, tzinfo
from typing import Optional, Union

from finance_tracker.cycles.clock import Clock, SystemClock


CYCLE_KEY_PATTERN = re.compile(r"(\d{4})-(0[1-9]|1[0-2])")

DateLike = Union[date, datetime]


class InvalidCycleKeyError(ValueError):
    """A string that is not a YYYY-MM cycle key."""
    pass


def cycle_key_from_date(value: DateLike, tz: Optional[tzinfo] = None) -> str:
    """
    Derive the cycle key for a date.

    Args:
        value: A date or datetime. Its own calendar fields are used.
        tz: When given and value is an aware datetime, the value is
            converted to this timezone first. Naive datetimes and plain
            dates are assumed to already be in the target calendar.

    Returns:
        The "YYYY-MM" key for the value's month.
    """
    if tz is not None and isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(tz)
    return f"{value.year:04d}-{value.month:02d}"


def current_cycle_key(
    clock: Optional[Clock] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """Cycle key for the clock's current moment. Reads the clock every call."""
    clock = clock or SystemClock(tz)
    return cycle_key_from_date(clock.now(), tz)


def is_cycle_key_current(
    key: Optional[str],
    clock: Optional[Clock] = None,
    tz: Optional[tzinfo] = None,
) -> bool:
    """True iff key is exactly the current cycle key. Empty keys are never current."""
    if not key:
        return False
    return key == current_cycle_key(clock, tz)


def parse_cycle_key(key: str) -> tuple[int, int]:
    """
    Split a cycle key into (year, month).

    Raises:
        InvalidCycleKeyError: If key is not of the form YYYY-MM.
    """
    match = CYCLE_KEY_PATTERN.fullmatch(key or "")
    if match is None:
        raise InvalidCycleKeyError(f"Not a cycle key: {key!r}")
    return int(match.group(1)), int(match.group(2))


def is_valid_cycle_key(key: Optional[str]) -> bool:
    return bool(key) and CYCLE_KEY_PATTERN.fullmatch(key) is not None


class CycleKeyDeriver:
    """
    Cycle key operations bound to one clock and calendar timezone.

    Built once at startup from configuration and handed to whoever
    stamps or checks payment cycles.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        timezone: Optional[tzinfo] = None,
    ):
        self._timezone = timezone
        self._clock = clock or SystemClock(timezone)

    @property
    def timezone(self) -> Optional[tzinfo]:
        return self._timezone

    def cycle_key_from_date(self, value: DateLike) -> str:
        return cycle_key_from_date(value, self._timezone)

    def current_cycle_key(self) -> str:
        return current_cycle_key(self._clock, self._timezone)

    def is_cycle_key_current(self, key: Optional[str]) -> bool:
        return is_cycle_key_current(key, self._clock, self._timezone)

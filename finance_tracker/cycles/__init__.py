"""Monthly accounting cycles."""

from finance_tracker.cycles.clock import Clock, FixedClock, SystemClock
from finance_tracker.cycles.keys import (
    CycleKeyDeriver,
    InvalidCycleKeyError,
    current_cycle_key,
    cycle_key_from_date,
    is_cycle_key_current,
    is_valid_cycle_key,
    parse_cycle_key,
)

__all__ = [
    # Clocks
    "Clock",
    "FixedClock",
    "SystemClock",
    # Cycle keys
    "CycleKeyDeriver",
    "InvalidCycleKeyError",
    "current_cycle_key",
    "cycle_key_from_date",
    "is_cycle_key_current",
    "is_valid_cycle_key",
    "parse_cycle_key",
]

"""Tests for cycle keys and clocks."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from finance_tracker.cycles import (
    CycleKeyDeriver,
    FixedClock,
    InvalidCycleKeyError,
    SystemClock,
    current_cycle_key,
    cycle_key_from_date,
    is_cycle_key_current,
    is_valid_cycle_key,
    parse_cycle_key,
)


class TestCycleKeyFromDate:
    """Tests for deriving YYYY-MM keys."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (date(2024, 3, 15), "2024-03"),
            (date(2024, 1, 1), "2024-01"),
            (date(2024, 11, 30), "2024-11"),
            (date(2024, 12, 31), "2024-12"),
        ],
    )
    def test_known_dates(self, value, expected):
        """Test keys for known calendar dates."""
        assert cycle_key_from_date(value) == expected

    def test_same_month_same_key(self):
        """Test that day and time of day don't affect the key."""
        first = datetime(2024, 2, 1, 0, 0, 0)
        last = datetime(2024, 2, 29, 23, 59, 59)
        assert cycle_key_from_date(first) == cycle_key_from_date(last) == "2024-02"

    def test_year_is_zero_padded(self):
        """Test that small years are padded to four digits."""
        assert cycle_key_from_date(date(987, 5, 4)) == "0987-05"

    def test_naive_datetime_uses_its_own_fields(self):
        """Test that naive datetimes are not shifted even when tz is given."""
        value = datetime(2024, 3, 31, 23, 30)
        assert cycle_key_from_date(value, ZoneInfo("Asia/Tokyo")) == "2024-03"

    def test_aware_datetime_converted_to_timezone(self):
        """Test month rollover when converting to the configured calendar."""
        value = datetime(2024, 3, 31, 23, 30, tzinfo=timezone.utc)
        assert cycle_key_from_date(value) == "2024-03"
        assert cycle_key_from_date(value, ZoneInfo("Asia/Tokyo")) == "2024-04"
        assert cycle_key_from_date(value, ZoneInfo("America/Sao_Paulo")) == "2024-03"


class TestCurrentCycleKey:
    """Tests for clock-driven cycle checks."""

    def test_current_key_from_clock(self):
        """Test current key follows the clock."""
        clock = FixedClock(datetime(2024, 3, 15, 12, 0))
        assert current_cycle_key(clock) == "2024-03"

    def test_current_key_rereads_clock(self):
        """Test that crossing a month boundary changes the key."""
        clock = FixedClock(datetime(2024, 1, 31, 23, 59, 59))
        assert current_cycle_key(clock) == "2024-01"
        clock.advance(timedelta(seconds=1))
        assert current_cycle_key(clock) == "2024-02"

    def test_current_key_is_current(self):
        """Test the current key is reported as current."""
        clock = FixedClock(datetime(2024, 6, 10))
        assert is_cycle_key_current(current_cycle_key(clock), clock) is True

    @pytest.mark.parametrize("key", [None, "", "1999-01"])
    def test_not_current(self, key):
        """Test absent, empty and old keys are never current."""
        clock = FixedClock(datetime(2024, 6, 10))
        assert is_cycle_key_current(key, clock) is False

    def test_comparison_is_exact(self):
        """Test there is no partial or numeric matching."""
        clock = FixedClock(datetime(2024, 6, 10))
        assert is_cycle_key_current("2024-6", clock) is False
        assert is_cycle_key_current("2024-06 ", clock) is False
        assert is_cycle_key_current("2024-06-10", clock) is False

    def test_paid_last_month_becomes_stale(self):
        """Test a key stamped this month stops being current next month."""
        clock = FixedClock(datetime(2024, 11, 30, 18, 0))
        stamped = cycle_key_from_date(clock.now())
        assert is_cycle_key_current(stamped, clock) is True
        clock.set(datetime(2024, 12, 1, 0, 0))
        assert is_cycle_key_current(stamped, clock) is False


class TestCycleKeyDeriver:
    """Tests for the clock/timezone-bound deriver."""

    def test_uses_bound_clock(self):
        """Test deriver reads its own clock."""
        clock = FixedClock(datetime(2025, 7, 4, 9, 0))
        deriver = CycleKeyDeriver(clock=clock)
        assert deriver.current_cycle_key() == "2025-07"
        assert deriver.is_cycle_key_current("2025-07") is True
        assert deriver.is_cycle_key_current("2025-06") is False

    def test_uses_bound_timezone(self):
        """Test deriver converts aware times to its timezone."""
        clock = FixedClock(datetime(2025, 7, 31, 22, 0, tzinfo=timezone.utc))
        deriver = CycleKeyDeriver(clock=clock, timezone=ZoneInfo("Europe/Berlin"))
        assert deriver.timezone == ZoneInfo("Europe/Berlin")
        assert deriver.current_cycle_key() == "2025-08"
        assert deriver.cycle_key_from_date(clock.now()) == "2025-08"

    def test_default_clock_is_system_clock(self):
        """Test deriver without a clock reads a well-formed key from the wall clock."""
        before = cycle_key_from_date(SystemClock().now())
        key = CycleKeyDeriver().current_cycle_key()
        after = cycle_key_from_date(SystemClock().now())
        assert is_valid_cycle_key(key)
        assert before <= key <= after


class TestParseCycleKey:
    """Tests for cycle key parsing."""

    def test_parse_valid(self):
        """Test splitting a key into year and month."""
        assert parse_cycle_key("2024-03") == (2024, 3)
        assert parse_cycle_key("2024-12") == (2024, 12)

    @pytest.mark.parametrize("key", ["", "2024-3", "2024-13", "2024-00", "24-03", "2024/03", "2024-03-01", "2024-03\n", " 2024-03"])
    def test_parse_invalid(self, key):
        """Test malformed keys are rejected."""
        with pytest.raises(InvalidCycleKeyError):
            parse_cycle_key(key)

    def test_invalid_key_error_is_value_error(self):
        """Test callers can catch ValueError."""
        with pytest.raises(ValueError):
            parse_cycle_key("nope")

    def test_is_valid_cycle_key(self):
        """Test the boolean validity check."""
        assert is_valid_cycle_key("2024-03") is True
        assert is_valid_cycle_key("2024-13") is False
        assert not is_valid_cycle_key(None)
        assert not is_valid_cycle_key("")

    def test_trailing_newline_is_invalid(self):
        """Test a key followed by a newline is not a cycle key."""
        assert is_valid_cycle_key("2024-03\n") is False

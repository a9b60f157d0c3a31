"""Time-of-day values and the half-hour slot grid.

Times are compared on ``(hour, minute)`` pairs only, never on full
timestamps, so a checkout on one day can never leak into another day's
ordering through timezone or date arithmetic.
"""

import math
import re
from datetime import datetime, time
from decimal import Decimal
from typing import NamedTuple

from pousada.booking.errors import InvalidTimeError

MINUTES_PER_DAY = 24 * 60
SLOT_MINUTES = 30

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?$")


class TimeOfDay(NamedTuple):
    """A wall-clock time without a date. Tuple ordering is (hour, minute)."""

    hour: int
    minute: int

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeOfDay":
        """Build a time from minutes since midnight, wrapping modulo 24h."""
        minutes %= MINUTES_PER_DAY
        return cls(minutes // 60, minutes % 60)


def parse_time(value: "str | time | TimeOfDay") -> TimeOfDay:
    """Parse ``"HH:MM"`` / ``"HH:MM:SS"`` strings or ``datetime.time`` values.

    Database ``time`` columns come back with seconds; they are dropped.
    Raises ``InvalidTimeError`` for anything else.
    """
    if isinstance(value, TimeOfDay):
        return value
    if isinstance(value, time):
        return TimeOfDay(value.hour, value.minute)
    if not isinstance(value, str):
        raise InvalidTimeError(f"Invalid time of day: {value!r}")

    match = _TIME_RE.match(value.strip())
    if match is None:
        raise InvalidTimeError(f"Invalid time of day: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        raise InvalidTimeError(f"Invalid time of day: {value!r}")
    return TimeOfDay(hour, minute)


def buffer_minutes(hours: "float | int | Decimal | str") -> int:
    """Convert fractional buffer hours to whole minutes (half rounds up)."""
    try:
        amount = float(hours)
    except (TypeError, ValueError) as exc:
        raise InvalidTimeError(f"Invalid cleaning buffer: {hours!r}") from exc
    if not math.isfinite(amount) or amount < 0:
        raise InvalidTimeError(f"Invalid cleaning buffer: {hours!r}")
    return math.floor(amount * 60 + 0.5)


def add_buffer(value: "str | time | TimeOfDay", hours: "float | int | Decimal") -> TimeOfDay:
    """Add a cleaning buffer to a time of day.

    The result wraps past midnight without rolling the date: 23:30 plus one
    hour is 00:30.
    """
    start = parse_time(value)
    return TimeOfDay.from_minutes(start.total_minutes + buffer_minutes(hours))


def next_slot_at_or_after(now: datetime) -> TimeOfDay | None:
    """Return the first half-hour slot not earlier than ``now``.

    ``None`` means no slot is left on ``now``'s day (after 23:30).
    """
    minutes = now.hour * 60 + now.minute
    if now.second or now.microsecond:
        minutes += 1
    slot = -(-minutes // SLOT_MINUTES) * SLOT_MINUTES
    if slot >= MINUTES_PER_DAY:
        return None
    return TimeOfDay.from_minutes(slot)


TIME_SLOTS: tuple[TimeOfDay, ...] = tuple(
    TimeOfDay.from_minutes(m) for m in range(0, MINUTES_PER_DAY, SLOT_MINUTES)
)


def format_buffer_hours(hours: "float | int | Decimal") -> str:
    """Render a buffer for guests, e.g. ``1.5`` -> ``"1h 30m"``."""
    total = buffer_minutes(hours)
    h, m = divmod(total, 60)
    if h and m:
        return f"{h}h {m}m"
    if h:
        return f"{h} hour{'s' if h > 1 else ''}"
    if m:
        return f"{m} minutes"
    return "0 minutes"

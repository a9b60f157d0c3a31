"""Plain value types consumed by the availability core."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from pousada.booking.errors import DataError, InvalidTimeError
from pousada.booking.timeofday import TimeOfDay, parse_time

DEFAULT_CLEANING_BUFFER_HOURS = Decimal("1.0")


def to_date(value: Any) -> date:
    """Coerce an ISO date string / datetime / date to a calendar date.

    Raises ``DataError`` for anything unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            if "T" in value or " " in value.strip():
                return datetime.fromisoformat(value.strip()).date()
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise DataError(f"Unparseable date: {value!r}") from exc
    raise DataError(f"Unparseable date: {value!r}")


@dataclass(frozen=True)
class BlockedRange:
    """One interval during which an accommodation is unavailable.

    ``end_date`` is exclusive for nights; for reservations it is also the
    checkout day, partially blocked until ``end_time`` plus cleaning.
    ``end_time`` is normalised to a ``TimeOfDay``; a stored time that does
    not parse is a ``DataError``.
    """

    accommodation_id: Any
    start_date: date
    end_date: date
    end_time: TimeOfDay | str | time | None = None
    is_manual: bool = False

    def __post_init__(self) -> None:
        start = to_date(self.start_date)
        end = to_date(self.end_date)
        if start >= end:
            raise DataError(f"Blocked range must end after it starts: {start.isoformat()} -> {end.isoformat()}")
        object.__setattr__(self, "start_date", start)
        object.__setattr__(self, "end_date", end)
        if self.is_manual:
            # Manual blocks carry no checkout time semantics.
            object.__setattr__(self, "end_time", None)
        elif self.end_time is not None:
            try:
                object.__setattr__(self, "end_time", parse_time(self.end_time))
            except InvalidTimeError as exc:
                raise DataError(f"Unparseable checkout time: {self.end_time!r}") from exc

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "BlockedRange":
        """Build a range from a loosely-typed mapping (store row, JSON)."""
        try:
            return cls(
                accommodation_id=record.get("accommodation_id"),
                start_date=record["start_date"],
                end_date=record["end_date"],
                end_time=record.get("end_time") or None,
                is_manual=bool(record.get("is_manual", False)),
            )
        except KeyError as exc:
            raise DataError(f"Blocked range is missing {exc.args[0]!r}") from exc

    def nights(self) -> list[date]:
        """Every night covered, ``start_date`` inclusive to ``end_date`` exclusive."""
        return [date.fromordinal(o) for o in range(self.start_date.toordinal(), self.end_date.toordinal())]


@dataclass(frozen=True)
class Accommodation:
    """The subset of a unit the availability core needs."""

    id: Any
    capacity: int
    price_per_night: Decimal
    cleaning_buffer_hours: Decimal | float | None = None
    standard_check_in_time: str | None = None
    default_check_out_time: str | None = None
    title: str | None = None

    def __post_init__(self) -> None:
        if self.cleaning_buffer_hours is None:
            object.__setattr__(self, "cleaning_buffer_hours", DEFAULT_CLEANING_BUFFER_HOURS)
        object.__setattr__(self, "price_per_night", Decimal(str(self.price_per_night)))


@dataclass(frozen=True)
class ProposedStay:
    """A stay a guest wants to book; never persisted by the core."""

    accommodation_id: Any
    check_in_date: date
    check_in_time: str
    check_out_date: date
    check_out_time: str
    guest_count: int


def as_blocked_range(item: "BlockedRange | Mapping[str, Any]") -> BlockedRange:
    if isinstance(item, BlockedRange):
        return item
    return BlockedRange.from_record(item)

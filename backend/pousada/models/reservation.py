"""Reservation model: a guest's stay in an accommodation."""

import uuid
from datetime import date, time
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pousada.database import Base, TimestampMixin, UUIDPrimaryKeyMixin

RESERVATION_STATUSES = ("pending", "confirmed", "cancelled", "concluded")

# Statuses whose nights are unavailable to other guests.
ACTIVE_RESERVATION_STATUSES = ("pending", "confirmed")

# Allowed status changes; cancelled and concluded are final.
RESERVATION_TRANSITIONS: dict[str, tuple[str, ...]] = {
    "pending": ("confirmed", "cancelled"),
    "confirmed": ("cancelled", "concluded"),
    "cancelled": (),
    "concluded": (),
}


class Reservation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A stay of ``guest_count`` guests from check-in to check-out."""

    __tablename__ = "reservations"

    accommodation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accommodations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Profiles live in the hosted auth provider; no local FK.
    user_id: Mapped[uuid.UUID | None] = mapped_column(default=None, index=True)
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_in_time: Mapped[time] = mapped_column(Time, nullable=False)
    check_out_time: Mapped[time] = mapped_column(Time, nullable=False)
    guest_count: Mapped[int] = mapped_column(Integer, default=1)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default="pending",
        index=True,
    )  # pending, confirmed, cancelled, concluded

    # Relationships
    accommodation: Mapped["Accommodation"] = relationship(back_populates="reservations", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        Index("ix_reservations_check_in_date", "check_in_date"),
        CheckConstraint("check_out_date > check_in_date", name="ck_reservations_dates"),
        CheckConstraint("guest_count >= 1", name="ck_reservations_guest_count"),
    )

    def __repr__(self) -> str:
        return (
            f"<Reservation(id={self.id}, accommodation_id={self.accommodation_id}, "
            f"{self.check_in_date} -> {self.check_out_date}, status={self.status})>"
        )

"""Accommodation model: a bookable room or chalet of the pousada."""

from datetime import time
from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pousada.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Accommodation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A unit with its own price, capacity and cleaning buffer."""

    __tablename__ = "accommodations"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    capacity: Mapped[int] = mapped_column(nullable=False)
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    cleaning_buffer_hours: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), default=None)  # NULL = 1.0h
    standard_check_in_time: Mapped[time | None] = mapped_column(Time, default=None)
    default_check_out_time: Mapped[time | None] = mapped_column(Time, default=None)
    is_active: Mapped[bool] = mapped_column(Boolean, server_default="true")

    # Relationships
    reservations: Mapped[list["Reservation"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="accommodation", lazy="selectin", cascade="all, delete-orphan"
    )
    manual_blocks: Mapped[list["ManualBlock"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="accommodation", lazy="selectin", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Accommodation(id={self.id}, title={self.title!r}, capacity={self.capacity})>"

"""Manual block model: admin-created unavailability (maintenance, owner use)."""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pousada.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ManualBlock(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Nights ``start_date`` to ``end_date`` (exclusive) closed by an administrator."""

    __tablename__ = "manual_blocks"

    accommodation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accommodations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, default=None)

    accommodation: Mapped["Accommodation"] = relationship(back_populates="manual_blocks", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    def __repr__(self) -> str:
        return f"<ManualBlock(id={self.id}, accommodation_id={self.accommodation_id}, {self.start_date} -> {self.end_date})>"

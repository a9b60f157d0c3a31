"""SQLAlchemy models for the pousada booking store.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from pousada.models.accommodation import Accommodation
from pousada.models.manual_block import ManualBlock
from pousada.models.reservation import Reservation

__all__ = [
    "Accommodation",
    "ManualBlock",
    "Reservation",
]

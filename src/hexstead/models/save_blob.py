"""Save blob model.

The SQL store keeps each persisted blob (the tile list, the game state) as a
single row keyed by its blob name.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class SaveBlob(Base, TimestampMixin):
    """One named JSON document.

    Attributes:
        key: Blob name, e.g. ``village-game-tiles``
        payload: Serialized JSON text
    """

    __tablename__ = "save_blobs"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<SaveBlob(key={self.key!r}, size={len(self.payload)})>"

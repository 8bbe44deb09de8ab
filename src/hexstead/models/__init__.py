"""SQLAlchemy models for the Hexstead save store.

This module exports the declarative base and every mapped table.
"""

from .base import Base, TimestampMixin
from .save_blob import SaveBlob

__all__ = [
    "Base",
    "SaveBlob",
    "TimestampMixin",
]

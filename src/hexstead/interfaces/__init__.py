"""Protocol-based interfaces for Hexstead.

This module exports the storage protocol, giving a clear contract for store
implementations and enabling dependency injection and testing.
"""

from hexstead.interfaces.store import KeyValueStore

__all__ = [
    "KeyValueStore",
]

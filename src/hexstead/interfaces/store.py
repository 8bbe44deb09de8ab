"""Key/Value Store Protocol Interface.

This module defines the protocol (interface) for the stores that hold the
persisted save blobs of a Hexstead game.
"""

from typing import Protocol


class KeyValueStore(Protocol):
    """Protocol defining the interface for save blob storage.

    Values are opaque text (JSON documents). Stores do not interpret them;
    validation happens in the save-game layer.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``; absent keys are ignored."""
        ...

    def clear(self) -> None:
        """Remove every stored key."""
        ...

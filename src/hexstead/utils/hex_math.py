"""
Hexagonal coordinate system mathematics for Hexstead.

This module implements the hex coordinate operations used by the territory
map. It supports:
- Distance calculations between hexes
- Finding adjacent hexes
- Finding all hexes (or stored tiles) within a range

Coordinate Systems:
-------------------
Axial Coordinates (q, r) are used for storage and representation:
   - q: column coordinate
   - r: row coordinate
   - The third cube axis is implicit: s = -q - r

Distances use the cube form of the axial pair:
    distance = (|dq| + |dr| + |dq + dr|) / 2

Tiles are stored by a canonical string key "q,r" so that maps can be dumped
to JSON without custom key encoders.

References:
-----------
Based on the excellent guide at: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class HexCoord:
    """
    A hexagonal coordinate using the axial coordinate system.

    Attributes:
        q: Column coordinate (horizontal axis)
        r: Row coordinate (diagonal axis)

    Example:
        >>> origin = HexCoord(q=0, r=0)
        >>> neighbor = HexCoord(q=1, r=0)
        >>> hex_distance(origin, neighbor)
        1
        >>> neighbor.key
        '1,0'
    """

    q: int
    r: int

    @property
    def key(self) -> str:
        """Canonical string key used by tile maps and save files."""
        return f"{self.q},{self.r}"


def parse_key(key: str) -> HexCoord:
    """
    Parse a canonical "q,r" key back into a coordinate.

    Raises:
        ValueError: If the key is not two comma separated integers

    Example:
        >>> parse_key("-3,2")
        HexCoord(q=-3, r=2)
    """
    parts = key.split(",")
    if len(parts) != 2:
        msg = f"Invalid hex key: {key!r}"
        raise ValueError(msg)
    return HexCoord(q=int(parts[0]), r=int(parts[1]))


def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """
    Calculate the distance between two hexes.

    The distance is the minimum number of hex steps to move from hex a to
    hex b. For integer axial inputs the numerator is always even, so the
    result is exact.

    Example:
        >>> hex_distance(HexCoord(q=0, r=0), HexCoord(q=2, r=1))
        3
    """
    dq = a.q - b.q
    dr = a.r - b.r
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


# Direction vectors for the 6 neighbors in axial coordinates.
# The order is part of the contract: neighbor terrain lists follow it.
_NEIGHBOR_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),  # East
    (1, -1),  # Northeast
    (0, -1),  # Northwest
    (-1, 0),  # West
    (-1, 1),  # Southwest
    (0, 1),  # Southeast
)


def hex_neighbors(coord: HexCoord) -> list[HexCoord]:
    """
    Find all 6 adjacent hexes to the given hex.

    Example:
        >>> neighbors = hex_neighbors(HexCoord(q=0, r=0))
        >>> len(neighbors)
        6
        >>> HexCoord(q=1, r=0) in neighbors
        True
    """
    return [HexCoord(q=coord.q + dq, r=coord.r + dr) for dq, dr in _NEIGHBOR_DIRECTIONS]


def _range_offsets(n: int) -> list[tuple[int, int]]:
    if n < 0:
        msg = f"Range n must be non-negative, got {n}"
        raise ValueError(msg)

    offsets = []
    for dq in range(-n, n + 1):
        for dr in range(max(-n, -dq - n), min(n, -dq + n) + 1):
            offsets.append((dq, dr))
    return offsets


def hexes_in_range(center: HexCoord, n: int) -> list[HexCoord]:
    """
    Find all hexes within range n of the center hex (inclusive).

    The number of hexes follows the formula: 3n^2 + 3n + 1

    Raises:
        ValueError: If n is negative

    Example:
        >>> len(hexes_in_range(HexCoord(q=0, r=0), n=1))
        7
    """
    return [HexCoord(q=center.q + dq, r=center.r + dr) for dq, dr in _range_offsets(n)]


def tiles_in_range(center: HexCoord, n: int, tiles: Mapping[str, T]) -> list[T]:
    """
    Return every stored tile within range n of the center hex.

    Only the O(n^2) coordinates of the range diamond are probed, so the cost
    does not depend on the size of the map. Coordinates without a stored
    tile (off the map edge) are skipped.

    Args:
        center: The center hex coordinate
        n: The maximum distance (range)
        tiles: Tile map keyed by canonical "q,r" keys

    Returns:
        The stored tiles, in q-major order
    """
    found: list[T] = []
    for dq, dr in _range_offsets(n):
        tile = tiles.get(f"{center.q + dq},{center.r + dr}")
        if tile is not None:
            found.append(tile)
    return found


def hexagon(radius_q: int, radius_r: int) -> list[HexCoord]:
    """
    Enumerate the coordinates of a hexagonal map centred on the origin.

    Args:
        radius_q: Half-width of the map along q
        radius_r: Half-height of the map along r

    Returns:
        Coordinates with q in [-radius_q, radius_q] and r restricted to the
        hexagon slice for that column
    """
    coords = []
    for q in range(-radius_q, radius_q + 1):
        for r in range(max(-radius_r, -q - radius_r), min(radius_r, -q + radius_r) + 1):
            coords.append(HexCoord(q=q, r=r))
    return coords

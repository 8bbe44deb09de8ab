"""
Test suite for hex coordinate math operations.

This module tests the axial coordinate system used by the territory map:
- Canonical "q,r" keys
- Distance calculations
- Neighbor order
- Range queries over coordinates and stored tiles
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from hexstead.utils.hex_math import (
    HexCoord,
    hex_distance,
    hex_neighbors,
    hexagon,
    hexes_in_range,
    parse_key,
    tiles_in_range,
)

coords = st.builds(
    HexCoord,
    q=st.integers(min_value=-50, max_value=50),
    r=st.integers(min_value=-50, max_value=50),
)


class TestHexCoord:
    """Test the HexCoord dataclass."""

    def test_hex_coord_equality(self) -> None:
        assert HexCoord(q=1, r=2) == HexCoord(q=1, r=2)
        assert HexCoord(q=1, r=2) != HexCoord(q=2, r=1)

    def test_hex_coord_hash(self) -> None:
        """Coordinates can be used in sets and as dict keys."""
        assert len({HexCoord(q=1, r=2), HexCoord(q=1, r=2)}) == 1

    def test_key(self) -> None:
        assert HexCoord(q=-3, r=2).key == "-3,2"

    def test_parse_key_round_trip(self) -> None:
        assert parse_key("-3,2") == HexCoord(q=-3, r=2)

    @pytest.mark.parametrize("key", ["", "1", "1,2,3", "a,b"])
    def test_parse_key_rejects_malformed(self, key: str) -> None:
        with pytest.raises(ValueError):
            parse_key(key)


class TestHexDistance:
    def test_distance_to_self_is_zero(self) -> None:
        assert hex_distance(HexCoord(q=3, r=-1), HexCoord(q=3, r=-1)) == 0

    def test_distance_to_neighbor_is_one(self) -> None:
        origin = HexCoord(q=0, r=0)
        for neighbor in hex_neighbors(origin):
            assert hex_distance(origin, neighbor) == 1

    def test_known_distances(self) -> None:
        origin = HexCoord(q=0, r=0)
        assert hex_distance(origin, HexCoord(q=2, r=1)) == 3
        assert hex_distance(origin, HexCoord(q=2, r=-2)) == 2
        assert hex_distance(origin, HexCoord(q=-3, r=0)) == 3

    @given(a=coords, b=coords)
    def test_distance_is_symmetric_integer(self, a: HexCoord, b: HexCoord) -> None:
        distance = hex_distance(a, b)
        assert isinstance(distance, int)
        assert distance == hex_distance(b, a)
        assert distance >= 0


class TestNeighbors:
    def test_neighbor_order(self) -> None:
        assert hex_neighbors(HexCoord(q=0, r=0)) == [
            HexCoord(q=1, r=0),
            HexCoord(q=1, r=-1),
            HexCoord(q=0, r=-1),
            HexCoord(q=-1, r=0),
            HexCoord(q=-1, r=1),
            HexCoord(q=0, r=1),
        ]

    def test_neighbors_are_offsets_of_center(self) -> None:
        center = HexCoord(q=5, r=-2)
        neighbors = hex_neighbors(center)
        assert len(set(neighbors)) == 6
        assert center not in neighbors


class TestRanges:
    @pytest.mark.parametrize("n", [0, 1, 2, 3, 5])
    def test_hexes_in_range_count(self, n: int) -> None:
        assert len(hexes_in_range(HexCoord(q=2, r=-7), n)) == 3 * n * n + 3 * n + 1

    def test_hexes_in_range_respects_distance(self) -> None:
        center = HexCoord(q=1, r=1)
        for coord in hexes_in_range(center, 3):
            assert hex_distance(center, coord) <= 3

    def test_negative_range_raises(self) -> None:
        with pytest.raises(ValueError):
            hexes_in_range(HexCoord(q=0, r=0), -1)
        with pytest.raises(ValueError):
            tiles_in_range(HexCoord(q=0, r=0), -1, {})

    def test_tiles_in_range_skips_missing_tiles(self) -> None:
        tiles = {coord.key: coord for coord in hexagon(2, 2)}
        found = tiles_in_range(HexCoord(q=2, r=0), 1, tiles)
        # Three of the six neighbours of an edge hex are off the map.
        assert len(found) == 4
        assert all(hex_distance(HexCoord(q=2, r=0), coord) <= 1 for coord in found)

    def test_hexagon_size(self) -> None:
        assert len(hexagon(15, 15)) == 3 * 15 * 15 + 3 * 15 + 1

    def test_hexagon_is_range_around_origin(self) -> None:
        assert set(hexagon(3, 3)) == set(hexes_in_range(HexCoord(q=0, r=0), 3))

"""Utility functions for the Hexstead simulation."""

from hexstead.utils.hex_math import (
    HexCoord,
    hex_distance,
    hex_neighbors,
    hexes_in_range,
    parse_key,
    tiles_in_range,
)
from hexstead.utils.rng import generate_seed, seeded_random

__all__ = [
    "HexCoord",
    "generate_seed",
    "hex_distance",
    "hex_neighbors",
    "hexes_in_range",
    "parse_key",
    "seeded_random",
    "tiles_in_range",
]

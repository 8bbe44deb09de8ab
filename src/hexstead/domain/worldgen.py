"""Procedural world generation.

Terrain is a pure function of the coordinate: a hash of ``(q, r)`` is pushed
through ``sin``/``cos`` to obtain two scalars in ``[0, 100)`` that drive an
ordered decision table. AI villages are scattered on top of the terrain
using a random stream derived from the world seed.
"""

from __future__ import annotations

import logging
import math

from hexstead.utils.hex_math import HexCoord, hex_distance, hexagon
from hexstead.utils.rng import generate_seed, seeded_random

from . import territory
from .enums import BuildingType, TerrainType, UnitType, Visibility
from .formulas import level_from_distance, round_half_up, tile_bonus
from .models import Tile, VillageState, World
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)

HASH_Q = 73856093
HASH_R = 19349663

# Production of every village tile, independent of its terrain.
VILLAGE_BASE_BONUS: dict[str, float] = {"food": 5.0, "wood": 3.0, "stone": 1.0}


def _to_int32(value: int) -> int:
    """Wrap an integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def terrain_seed(q: int, r: int) -> int:
    return _to_int32(q * HASH_Q) ^ _to_int32(r * HASH_R)


def terrain_of(q: int, r: int) -> TerrainType:
    """Return the terrain generated for axial coordinate ``(q, r)``.

    Checks run in a fixed order and the first match wins; reordering them
    changes every generated world.
    """
    distance = math.sqrt(q * q + r * r)
    seed = terrain_seed(q, r)
    value = abs(math.sin(seed)) * 100
    alt = abs(math.cos(seed * 0.7)) * 100

    # Ocean and coast beyond the continent edge
    if distance > 12:
        return TerrainType.OCEAN if value < 60 else TerrainType.COAST

    if value < 5 and distance > 3:
        return TerrainType.LAKE
    if value > 85 and alt > 70:
        return TerrainType.MOUNTAIN
    if value > 75 and alt > 60:
        return TerrainType.HILL
    if value < 15:
        return TerrainType.COAST

    # Cold latitudes
    if abs(r) > 8:
        if value < 30:
            return TerrainType.SNOW
        if value < 50:
            return TerrainType.TUNDRA

    # Equator
    if abs(r) < 3:
        if value < 25:
            return TerrainType.DESERT
        if value < 40:
            return TerrainType.JUNGLE

    if value > 70:
        return TerrainType.JUNGLE if alt > 50 else TerrainType.FOREST
    if value < 20 and alt < 30:
        return TerrainType.MARSH
    return TerrainType.PLAINS if value < 50 else TerrainType.GRASSLAND


def generate_village_state(distance: int) -> VillageState:
    """Baseline progression of an AI village ``distance`` hexes from home."""
    level = max(1, distance // 2)
    upgrades = distance // 3
    return VillageState(
        exp=float(level * 100),
        level=level,
        buildings={
            BuildingType.FARM: min(5, upgrades),
            BuildingType.LUMBERMILL: min(5, upgrades),
            BuildingType.QUARRY: min(5, upgrades),
            BuildingType.MINE: min(3, upgrades // 2),
            BuildingType.LIBRARY: min(3, upgrades // 2),
            BuildingType.HOME: min(5, upgrades),
            BuildingType.BARRACKS: min(3, upgrades // 2),
            BuildingType.ARCHER_GUILD: min(2, upgrades // 3),
            BuildingType.MAGE_TOWER: min(2, upgrades // 4),
        },
        units={
            UnitType.WARRIOR: upgrades * 2,
            UnitType.ARCHER: upgrades,
            UnitType.MAGE: upgrades // 2,
        },
    )


def place_villages(
    world: World,
    *,
    seed: int,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[HexCoord]:
    """Pick AI village sites, one per target level when a site exists.

    For each target level, random points around the matching distance ring
    are sampled; the candidate whose tier is closest to the target wins,
    and sampling stops early once a candidate is within tolerance.
    """
    world_rules = rules.world
    placed: list[HexCoord] = []

    for target_level in world_rules.village_target_levels:
        rng = seeded_random(generate_seed(seed, f"village:{target_level}"))
        target_distance = target_level // world_rules.tier_per_distance
        best: HexCoord | None = None
        best_diff = math.inf

        for _ in range(world_rules.village_max_attempts):
            angle = rng.random() * math.pi * 2
            variation = (rng.random() - 0.5) * 2
            distance = max(1.0, target_distance + variation)
            coord = HexCoord(
                q=round_half_up(math.cos(angle) * distance),
                r=round_half_up(math.sin(angle) * distance),
            )

            if abs(coord.q) > world_rules.map_radius_q or abs(coord.r) > world_rules.map_radius_r:
                continue
            if coord == world.home or coord.key not in world.tiles:
                continue
            if terrain_of(coord.q, coord.r) in world_rules.village_forbidden_terrain:
                continue
            if any(
                hex_distance(other, coord) < world_rules.village_min_spacing for other in placed
            ):
                continue

            level = level_from_distance(hex_distance(world.home, coord), rules)
            diff = abs(level - target_level)
            if diff < best_diff:
                best_diff = diff
                best = coord
            if diff < world_rules.village_level_tolerance:
                break

        if best is None:
            logger.debug("no village site found for target level %s", target_level)
            continue
        placed.append(best)

    return placed


def _make_village(tile: Tile, distance: int) -> None:
    state = generate_village_state(distance)
    tile.terrain = TerrainType.GRASSLAND
    tile.is_village = True
    tile.village_state = state
    tile.village_level = state.level
    tile.bonus = dict(VILLAGE_BASE_BONUS)


def _make_home(tile: Tile, rules: RulesConfig) -> None:
    tile.terrain = TerrainType.GRASSLAND
    tile.owned = True
    tile.visibility = Visibility.OWNED
    tile.is_village = True
    tile.village_level = 1
    tile.tier = rules.world.home_tier
    tile.bonus = dict(VILLAGE_BASE_BONUS)


def generate_world(*, seed: int = 0, rules: RulesConfig = DEFAULT_RULES) -> World:
    """Build a fresh world: terrain, AI villages, home village, fog of war."""
    world_rules = rules.world
    home = HexCoord(q=world_rules.home_q, r=world_rules.home_r)
    world = World(home=home)

    for coord in hexagon(world_rules.map_radius_q, world_rules.map_radius_r):
        terrain = terrain_of(coord.q, coord.r)
        tier = level_from_distance(hex_distance(home, coord), rules)
        world.tiles[coord.key] = Tile(
            coordinate=coord,
            terrain=terrain,
            tier=tier,
            bonus=tile_bonus(terrain, tier),
        )

    for coord in place_villages(world, seed=seed, rules=rules):
        _make_village(world.tiles[coord.key], hex_distance(home, coord))

    home_tile = world.home_tile
    if home_tile is not None:
        _make_home(home_tile, rules)

    territory.recompute_visibility(world, rules)
    for tile in world.tiles.values():
        territory.refresh_neighbor_terrains(world, tile)

    logger.info(
        "generated world seed=%s tiles=%d villages=%d",
        seed,
        len(world.tiles),
        sum(1 for tile in world.tiles.values() if tile.is_village),
    )
    return world

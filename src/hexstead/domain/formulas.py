"""Cost and bonus formulas.

Every function here is pure. Rounding is half-up (``floor(x + 0.5)``) rather
than Python's banker's rounding so that saved worlds and test expectations
stay stable across versions.
"""

from __future__ import annotations

import math

from .enums import TerrainType
from .models import RESOURCE_KEYS, ResourceBonus, ResourceCost, ResourcePool
from .rules_config import DEFAULT_RULES, RulesConfig

# Level 1 production per virtual minute.
BASE_TILE_BONUS: dict[TerrainType, dict[str, float]] = {
    TerrainType.GRASSLAND: {"food": 1.0, "wood": 0.5},
    TerrainType.PLAINS: {"food": 0.5, "stone": 0.5},
    TerrainType.DESERT: {"stone": 0.5},
    TerrainType.TUNDRA: {"food": 0.5},
    TerrainType.SNOW: {},
    TerrainType.COAST: {"food": 1.0},
    TerrainType.OCEAN: {"food": 0.5},
    TerrainType.LAKE: {"food": 1.5},
    TerrainType.MOUNTAIN: {"stone": 1.5},
    TerrainType.HILL: {"stone": 1.0, "wood": 0.5},
    TerrainType.FOREST: {"wood": 1.5},
    TerrainType.JUNGLE: {"food": 0.5, "wood": 1.0},
    TerrainType.MARSH: {"food": 1.0, "wood": 0.5},
}

UPGRADE_BASE_COST: dict[str, int] = {"food": 5, "wood": 3, "stone": 1}

# (food, wood, stone) multipliers applied to the upgrade cost.
UPGRADE_TERRAIN_MULTIPLIERS: dict[TerrainType, tuple[float, float, float]] = {
    TerrainType.GRASSLAND: (1.0, 1.2, 0.8),
    TerrainType.PLAINS: (1.1, 0.9, 1.2),
    TerrainType.DESERT: (1.3, 0.7, 1.0),
    TerrainType.TUNDRA: (1.2, 1.0, 0.9),
    TerrainType.SNOW: (1.5, 1.1, 1.1),
    TerrainType.COAST: (1.0, 1.3, 0.9),
    TerrainType.OCEAN: (0.9, 1.4, 1.0),
    TerrainType.LAKE: (0.8, 1.2, 1.1),
    TerrainType.MOUNTAIN: (1.2, 1.1, 0.7),
    TerrainType.HILL: (1.1, 1.0, 0.9),
    TerrainType.FOREST: (1.1, 0.8, 1.2),
    TerrainType.JUNGLE: (1.0, 0.9, 1.1),
    TerrainType.MARSH: (1.0, 1.1, 1.0),
}

CLAIM_BASE_COST: dict[str, int] = {"food": 10, "wood": 5, "stone": 2}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


# ---------------------------------------------------------------------------
# Tile production


def base_bonus(terrain: TerrainType) -> ResourceBonus:
    """Level 1 production of a terrain type."""
    return dict(BASE_TILE_BONUS[terrain])


def tile_bonus(terrain: TerrainType, level: int = 1) -> ResourceBonus:
    """Production of a tile of ``terrain`` at ``level``, rounded to 0.1.

    The multiplier grows 10% per level with an extra 20% every 5 levels.
    """
    multiplier = 1 + (level - 1) * 0.1 + math.floor((level - 1) / 5) * 0.2
    result: ResourceBonus = {}
    for key, rate in BASE_TILE_BONUS[terrain].items():
        value = round_half_up(rate * multiplier * 10) / 10
        if value:
            result[key] = value
    return result


def level_from_distance(distance: int, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Fixed tile tier for a tile ``distance`` hexes away from home."""
    return distance * rules.world.tier_per_distance


# ---------------------------------------------------------------------------
# Tile costs


def upgrade_cost(terrain: TerrainType, current_level: int) -> ResourceCost:
    """Resources needed to raise a tile from ``current_level`` by one."""
    scale = 1 + current_level * 0.15
    food_mult, wood_mult, stone_mult = UPGRADE_TERRAIN_MULTIPLIERS[terrain]
    return {
        "food": round_half_up(UPGRADE_BASE_COST["food"] * scale * food_mult),
        "wood": round_half_up(UPGRADE_BASE_COST["wood"] * scale * wood_mult),
        "stone": round_half_up(UPGRADE_BASE_COST["stone"] * scale * stone_mult),
    }


def claim_power_cost(level: int) -> int:
    """Power needed to claim a tile: level^2 / 5, floored."""
    return math.floor((level * level) / 5)


def claim_cost(level: int) -> ResourceCost:
    """Resources needed to claim an ordinary tile of the given tier."""
    scale = 1 + (level / 5) * 0.2
    cost: ResourceCost = {key: math.floor(base * scale) for key, base in CLAIM_BASE_COST.items()}
    cost["power"] = claim_power_cost(level)
    return cost


def village_claim_cost(level: int, rules: RulesConfig = DEFAULT_RULES) -> ResourceCost:
    """Claim cost of an AI village: the ordinary cost with inflated power."""
    cost = claim_cost(level)
    cost["power"] = cost["power"] * rules.territory.village_power_multiplier
    return cost


# ---------------------------------------------------------------------------
# Village experience


def exp_for_level(level: int, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Experience needed to go from ``level`` to ``level + 1``."""
    return math.floor(rules.village.exp_base * rules.village.exp_growth ** (level - 1))


def total_exp_for_level(level: int, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Cumulative experience needed to reach ``level`` from level 1."""
    return sum(exp_for_level(i, rules) for i in range(1, level))


def level_for_exp(exp: float, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Highest level whose cumulative requirement is covered by ``exp``."""
    level = 1
    threshold = total_exp_for_level(2, rules)
    while exp >= threshold:
        level += 1
        threshold += exp_for_level(level, rules)
    return level


# ---------------------------------------------------------------------------
# Resource pool arithmetic


def can_afford(pool: ResourcePool, cost: ResourceCost) -> bool:
    return all(pool.get(key) >= amount for key, amount in cost.items())


def deduct(pool: ResourcePool, cost: ResourceCost) -> None:
    """Subtract ``cost`` from ``pool``; callers check ``can_afford`` first."""
    for key, amount in cost.items():
        setattr(pool, key, max(0.0, pool.get(key) - amount))


def credit(pool: ResourcePool, amounts: ResourceCost) -> None:
    for key, amount in amounts.items():
        setattr(pool, key, pool.get(key) + amount)


def merge_bonuses(*bonuses: ResourceBonus) -> ResourceBonus:
    """Sum sparse bonus mappings, dropping keys that end up non-positive."""
    total: dict[str, float] = {}
    for bonus in bonuses:
        for key, value in bonus.items():
            total[key] = total.get(key, 0.0) + value
    return {key: total[key] for key in RESOURCE_KEYS if total.get(key, 0.0) > 0}


def spend(pool: ResourcePool, ledger: ResourcePool, cost: ResourceCost) -> None:
    """Deduct ``cost`` from ``pool`` and add it to the ``ledger`` of spending."""
    deduct(pool, cost)
    credit(ledger, cost)

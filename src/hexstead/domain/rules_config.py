"""Declarative rule configuration for the Hexstead domain layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import TerrainType


@dataclass(frozen=True, slots=True)
class WorldRules:
    """Map size, home placement, and AI village scattering."""

    map_radius_q: int = 15
    map_radius_r: int = 15
    home_q: int = 0
    home_r: int = 0
    home_tier: int = 1
    tier_per_distance: int = 5
    village_target_levels: tuple[int, ...] = (10, 60, 110, 160, 210, 260, 310)
    village_max_attempts: int = 1000
    village_min_spacing: int = 3
    village_level_tolerance: int = 10
    village_forbidden_terrain: frozenset[TerrainType] = frozenset(
        {TerrainType.OCEAN, TerrainType.COAST, TerrainType.LAKE, TerrainType.MOUNTAIN}
    )


@dataclass(frozen=True, slots=True)
class TerritoryRules:
    """Claiming, upgrading, and visibility constants."""

    visibility_radius: int = 2
    max_tile_level: int = 100
    village_power_multiplier: int = 100


@dataclass(frozen=True, slots=True)
class EconomyRules:
    """Clock and production constants."""

    tick_virtual_seconds: float = 0.1  # per speed unit per wall-clock tick
    rate_divisor: float = 600.0  # per-minute rates to per-tick deltas at speed 1
    village_base_rates: dict[str, float] = field(
        default_factory=lambda: {"food": 5.0, "wood": 3.0, "stone": 1.0}
    )
    allowed_speeds: tuple[int, ...] = (1, 5, 20)


@dataclass(frozen=True, slots=True)
class VillageRules:
    """Starting values and progression constants for the player village."""

    base_population: int = 5
    starting_population: int = 1
    starting_building_jobs: int = 1
    starting_resources: dict[str, float] = field(
        default_factory=lambda: {"food": 20.0, "wood": 10.0, "stone": 5.0}
    )
    exp_base: int = 100
    exp_growth: float = 1.5


@dataclass(frozen=True, slots=True)
class ScoreRules:
    """Weights of the final score shown when the village starves."""

    level_points: int = 100
    building_level_points: int = 50
    unit_points: int = 25
    master_points: int = 30
    expenditure_weights: dict[str, float] = field(
        default_factory=lambda: {
            "food": 0.1,
            "wood": 0.2,
            "stone": 0.3,
            "diamond": 2.0,
            "technology": 1.0,
            "power": 0.5,
        }
    )


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    world: WorldRules = WorldRules()
    territory: TerritoryRules = TerritoryRules()
    economy: EconomyRules = EconomyRules()
    village: VillageRules = VillageRules()
    score: ScoreRules = ScoreRules()


DEFAULT_RULES = RulesConfig()

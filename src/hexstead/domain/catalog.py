"""Building, unit, and guild master catalogs.

Each entry is a frozen record; level-dependent numbers (cost, build time,
experience, production) are derived from a base value by the methods below.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .enums import BuildingType, Resource, SpecialistType, UnitType
from .models import ResourceBonus, ResourceCost

COST_GROWTH = 1.5
BUILD_TIME_GROWTH = 1.2


@dataclass(frozen=True, slots=True)
class BuildingDefinition:
    """Catalog entry describing a village building."""

    type: BuildingType
    name: str
    description: str
    max_level: int
    cost_base: dict[str, int]
    exp_per_level: int
    build_time_base: int
    bonus_per_level: dict[str, float] = field(default_factory=dict)
    population_per_level: int = 0

    def cost(self, level: int) -> ResourceCost:
        """Resources needed to reach ``level``."""
        scale = COST_GROWTH ** (level - 1)
        return {key: math.floor(base * scale) for key, base in self.cost_base.items()}

    def exp_gain(self, level: int) -> int:
        return math.floor(self.exp_per_level * level)

    def build_time(self, level: int) -> int:
        """Virtual seconds needed to reach ``level``."""
        return math.floor(self.build_time_base * BUILD_TIME_GROWTH ** (level - 1))

    def resource_bonus(self, level: int) -> ResourceBonus:
        return {key: per_level * level for key, per_level in self.bonus_per_level.items()}

    def population_bonus(self, level: int) -> int:
        return self.population_per_level * level


@dataclass(frozen=True, slots=True)
class UnitDefinition:
    """Catalog entry describing a recruitable unit."""

    type: UnitType
    name: str
    description: str
    cost: dict[str, int]
    population_cost: int
    power_bonus: int


@dataclass(frozen=True, slots=True)
class SpecialistDefinition:
    """Catalog entry describing a guild master."""

    type: SpecialistType
    name: str
    description: str
    cost: dict[str, int]
    bonus_percent: int
    resource: Resource


BUILDINGS: dict[BuildingType, BuildingDefinition] = {
    BuildingType.FARM: BuildingDefinition(
        type=BuildingType.FARM,
        name="Farm",
        description="Increases food production",
        max_level=10,
        cost_base={"wood": 10, "stone": 5},
        exp_per_level=10,
        build_time_base=30,
        bonus_per_level={"food": 2.0},
    ),
    BuildingType.LUMBERMILL: BuildingDefinition(
        type=BuildingType.LUMBERMILL,
        name="Lumbermill",
        description="Increases wood production",
        max_level=10,
        cost_base={"wood": 8, "stone": 8},
        exp_per_level=10,
        build_time_base=30,
        bonus_per_level={"wood": 1.5},
    ),
    BuildingType.QUARRY: BuildingDefinition(
        type=BuildingType.QUARRY,
        name="Quarry",
        description="Increases stone production",
        max_level=10,
        cost_base={"wood": 12, "stone": 6},
        exp_per_level=12,
        build_time_base=35,
        bonus_per_level={"stone": 1.0},
    ),
    BuildingType.MINE: BuildingDefinition(
        type=BuildingType.MINE,
        name="Mine",
        description="Increases diamond production",
        max_level=10,
        cost_base={"wood": 15, "stone": 20},
        exp_per_level=15,
        build_time_base=45,
        bonus_per_level={"diamond": 0.5},
    ),
    BuildingType.LIBRARY: BuildingDefinition(
        type=BuildingType.LIBRARY,
        name="Library",
        description="Increases technology production",
        max_level=10,
        cost_base={"wood": 20, "stone": 15, "diamond": 2},
        exp_per_level=20,
        build_time_base=50,
        bonus_per_level={"technology": 0.3},
    ),
    BuildingType.HOME: BuildingDefinition(
        type=BuildingType.HOME,
        name="Home",
        description="Increases population limit",
        max_level=10,
        cost_base={"food": 15, "wood": 20, "stone": 10},
        exp_per_level=8,
        build_time_base=40,
        population_per_level=5,
    ),
    BuildingType.BARRACKS: BuildingDefinition(
        type=BuildingType.BARRACKS,
        name="Barracks",
        description="Train warriors to defend your village",
        max_level=5,
        cost_base={"food": 30, "wood": 25, "stone": 20},
        exp_per_level=25,
        build_time_base=60,
        bonus_per_level={"technology": 1.0},
    ),
    BuildingType.ARCHER_GUILD: BuildingDefinition(
        type=BuildingType.ARCHER_GUILD,
        name="Archer Guild",
        description="Train archers to defend your village",
        max_level=5,
        cost_base={"food": 25, "wood": 30, "stone": 15},
        exp_per_level=25,
        build_time_base=60,
        bonus_per_level={"technology": 1.0},
    ),
    BuildingType.MAGE_TOWER: BuildingDefinition(
        type=BuildingType.MAGE_TOWER,
        name="Mage Tower",
        description="Train mages to defend your village",
        max_level=5,
        cost_base={"food": 20, "wood": 20, "stone": 30, "diamond": 5, "technology": 10},
        exp_per_level=30,
        build_time_base=75,
        bonus_per_level={"technology": 1.0},
    ),
}


UNITS: dict[UnitType, UnitDefinition] = {
    UnitType.WARRIOR: UnitDefinition(
        type=UnitType.WARRIOR,
        name="Warrior",
        description="Melee combat unit - generates 1 power",
        cost={"food": 10, "wood": 5, "stone": 3},
        population_cost=1,
        power_bonus=1,
    ),
    UnitType.ARCHER: UnitDefinition(
        type=UnitType.ARCHER,
        name="Archer",
        description="Ranged combat unit - generates 3 power",
        cost={"food": 15, "wood": 12, "stone": 8},
        population_cost=1,
        power_bonus=3,
    ),
    UnitType.MAGE: UnitDefinition(
        type=UnitType.MAGE,
        name="Mage",
        description="Magic combat unit - generates 5 power",
        cost={"food": 8, "wood": 8, "stone": 8, "diamond": 1},
        population_cost=1,
        power_bonus=5,
    ),
}


SPECIALISTS: dict[SpecialistType, SpecialistDefinition] = {
    SpecialistType.FARMER: SpecialistDefinition(
        type=SpecialistType.FARMER,
        name="Master Farmer",
        description="Increases food production by 2% per master",
        cost={"food": 50, "wood": 20, "stone": 10},
        bonus_percent=2,
        resource=Resource.FOOD,
    ),
    SpecialistType.LUMBERJACK: SpecialistDefinition(
        type=SpecialistType.LUMBERJACK,
        name="Master Lumberjack",
        description="Increases wood production by 2% per master",
        cost={"food": 30, "wood": 50, "stone": 15},
        bonus_percent=2,
        resource=Resource.WOOD,
    ),
    SpecialistType.STONEMASON: SpecialistDefinition(
        type=SpecialistType.STONEMASON,
        name="Master Stonemason",
        description="Increases stone production by 2% per master",
        cost={"food": 25, "wood": 30, "stone": 50},
        bonus_percent=2,
        resource=Resource.STONE,
    ),
    SpecialistType.MINER: SpecialistDefinition(
        type=SpecialistType.MINER,
        name="Master Miner",
        description="Increases diamond production by 2% per master",
        cost={"food": 40, "wood": 40, "stone": 40, "diamond": 5},
        bonus_percent=2,
        resource=Resource.DIAMOND,
    ),
    SpecialistType.SCHOLAR: SpecialistDefinition(
        type=SpecialistType.SCHOLAR,
        name="Master Scholar",
        description="Increases technology production by 2% per master",
        cost={"food": 30, "wood": 40, "stone": 30, "diamond": 3, "technology": 20},
        bonus_percent=2,
        resource=Resource.TECHNOLOGY,
    ),
}

"""Dataclasses describing every Hexstead simulation entity.

These are plain in-memory records: the rule modules mutate them directly and
the save/load layer dumps them to JSON through pydantic ``TypeAdapter``s, so
they must stay free of behaviour that cannot round-trip (no caches, no
back-references).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hexstead.utils.hex_math import HexCoord

from .enums import BuildingType, Resource, SpecialistType, TerrainType, UnitType, Visibility

# A sparse resource mapping (resource key -> amount or per-minute rate).
# Keys that would be zero are left out rather than stored.
ResourceBonus = dict[str, float]
ResourceCost = dict[str, float]

RESOURCE_KEYS: tuple[str, ...] = tuple(resource.value for resource in Resource)


@dataclass(slots=True)
class ResourcePool:
    """Six resource counters shared by every command and the tick."""

    food: float = 0.0
    wood: float = 0.0
    stone: float = 0.0
    diamond: float = 0.0
    technology: float = 0.0
    power: float = 0.0

    def get(self, key: str) -> float:
        return getattr(self, key)

    def as_dict(self) -> dict[str, float]:
        return {key: getattr(self, key) for key in RESOURCE_KEYS}

    @classmethod
    def from_mapping(cls, values: dict[str, float]) -> ResourcePool:
        return cls(**{key: float(values.get(key, 0.0)) for key in RESOURCE_KEYS})


@dataclass(slots=True)
class BuildJob:
    """A building upgrade in progress, expressed in virtual seconds."""

    start_time: float
    end_time: float


def _zero_buildings() -> dict[BuildingType, int]:
    return {building: 0 for building in BuildingType}


def _zero_units() -> dict[UnitType, int]:
    return {unit: 0 for unit in UnitType}


def _zero_masters() -> dict[SpecialistType, int]:
    return {master: 0 for master in SpecialistType}


@dataclass(slots=True)
class VillageState:
    """Progression ledger of a village (player or AI)."""

    exp: float = 0.0
    level: int = 1
    buildings: dict[BuildingType, int] = field(default_factory=_zero_buildings)
    units: dict[UnitType, int] = field(default_factory=_zero_units)
    masters: dict[SpecialistType, int] = field(default_factory=_zero_masters)
    building_queue: dict[BuildingType, BuildJob] = field(default_factory=dict)


@dataclass(slots=True)
class Tile:
    """One generated hex of the map.

    ``tier`` is fixed at generation from the distance to home and drives the
    claim cost. ``upgrade_level`` counts upgrades bought after claiming. The
    production level shown to players and used by the bonus formula is
    their sum.
    """

    coordinate: HexCoord
    terrain: TerrainType
    tier: int
    visibility: Visibility = Visibility.HIDDEN
    owned: bool = False
    upgrade_level: int = 0
    bonus: ResourceBonus = field(default_factory=dict)
    is_village: bool = False
    village_level: int | None = None
    village_state: VillageState | None = None
    neighbor_terrains: list[TerrainType] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.coordinate.key

    @property
    def level(self) -> int:
        return self.tier + self.upgrade_level


@dataclass(slots=True)
class World:
    """The territory map: every generated tile keyed by ``"q,r"``."""

    tiles: dict[str, Tile] = field(default_factory=dict)
    home: HexCoord = field(default_factory=lambda: HexCoord(q=0, r=0))

    def get(self, coord: HexCoord) -> Tile | None:
        return self.tiles.get(coord.key)

    @property
    def home_tile(self) -> Tile | None:
        return self.tiles.get(self.home.key)


@dataclass(slots=True)
class GameState:
    """Everything besides the map: the persisted "state" blob."""

    resources: ResourcePool = field(default_factory=ResourcePool)
    population: int = 1
    max_population: int = 5
    max_building_jobs: int = 1
    village_level: int = 1
    village: VillageState = field(default_factory=VillageState)
    game_time: float = 0.0
    speed: int = 1
    is_paused: bool = False
    game_over: bool = False
    expenditure: ResourcePool = field(default_factory=ResourcePool)

    @property
    def building_jobs(self) -> int:
        return len(self.village.building_queue)

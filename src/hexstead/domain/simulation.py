"""The simulation controller.

``Simulation`` owns one world, one game state, and the rules they run under.
Every query returns a copy; every command returns a ``CommandResult`` and
never raises for ordinary rejections.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass

from hexstead.utils.hex_math import HexCoord

from . import territory, tick, worldgen
from . import village as village_rules
from .enums import BuildingType, SpecialistType, UnitType
from .models import GameState, ResourceBonus, ResourcePool, Tile, VillageState, World
from .rules_config import DEFAULT_RULES, RulesConfig
from .scoring import ScoreBreakdown, compute_score
from .territory import CommandResult
from .tick import TickReport

logger = logging.getLogger(__name__)

GAME_OVER_DETAIL = "the game is over"


def new_game_state(rules: RulesConfig = DEFAULT_RULES) -> GameState:
    """Starting state of a fresh game."""
    village = rules.village
    return GameState(
        resources=ResourcePool.from_mapping(village.starting_resources),
        population=village.starting_population,
        max_population=village.base_population,
        max_building_jobs=village.starting_building_jobs,
        speed=rules.economy.allowed_speeds[0],
    )


@dataclass(slots=True)
class SimulationSnapshot:
    """The two persisted blobs: every tile, and the game state."""

    tiles: list[Tile]
    state: GameState


class Simulation:
    """Owns the territory map and the village economy."""

    def __init__(
        self,
        world: World,
        state: GameState,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        seed: int = 0,
    ) -> None:
        self.world = world
        self.state = state
        self.rules = rules
        self.seed = seed

    @classmethod
    def new(cls, *, rules: RulesConfig = DEFAULT_RULES, seed: int = 0) -> Simulation:
        world = worldgen.generate_world(seed=seed, rules=rules)
        return cls(world, new_game_state(rules), rules=rules, seed=seed)

    # ------------------------------------------------------------------
    # Queries

    def get_tile(self, coord: HexCoord) -> Tile | None:
        tile = self.world.get(coord)
        return copy.deepcopy(tile) if tile is not None else None

    def tiles(self) -> list[Tile]:
        return copy.deepcopy(list(self.world.tiles.values()))

    @property
    def resources(self) -> ResourcePool:
        return copy.deepcopy(self.state.resources)

    @property
    def village(self) -> VillageState:
        return copy.deepcopy(self.state.village)

    @property
    def game_time(self) -> float:
        return self.state.game_time

    @property
    def speed(self) -> int:
        return self.state.speed

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def tile_bonuses(self) -> ResourceBonus:
        return territory.owned_tile_bonus(self.world)

    def building_bonuses(self) -> ResourceBonus:
        return village_rules.building_bonuses(self.state.village)

    def score(self) -> ScoreBreakdown:
        return compute_score(self.state, rules=self.rules)

    # ------------------------------------------------------------------
    # Commands

    def _game_over_result(self) -> CommandResult | None:
        if self.state.game_over:
            logger.debug("command rejected: %s", GAME_OVER_DETAIL)
            return CommandResult(success=False, detail=GAME_OVER_DETAIL)
        return None

    def claim_tile(self, coord: HexCoord) -> CommandResult:
        return self._game_over_result() or territory.claim_tile(
            self.world, self.state, coord, rules=self.rules
        )

    def upgrade_tile(self, coord: HexCoord) -> CommandResult:
        return self._game_over_result() or territory.upgrade_tile(
            self.world, self.state, coord, rules=self.rules
        )

    def select_tile(self, coord: HexCoord) -> CommandResult:
        return self._game_over_result() or territory.select_tile(
            self.world, self.state, coord, rules=self.rules
        )

    def enqueue_building(self, building: BuildingType) -> CommandResult:
        return self._game_over_result() or village_rules.enqueue_building(
            self.state, building, rules=self.rules
        )

    def recruit_unit(self, unit: UnitType) -> CommandResult:
        return self._game_over_result() or village_rules.recruit_unit(
            self.state, unit, rules=self.rules
        )

    def hire_specialist(self, specialist: SpecialistType) -> CommandResult:
        return self._game_over_result() or village_rules.hire_specialist(
            self.state, specialist, rules=self.rules
        )

    def set_speed(self, speed: int) -> CommandResult:
        """Change the clock multiplier; like the speed buttons, this unpauses."""
        if speed not in self.rules.economy.allowed_speeds:
            logger.debug("command rejected: unsupported speed %s", speed)
            return CommandResult(success=False, detail=f"unsupported speed {speed}")
        self.state.speed = speed
        if not self.state.game_over:
            self.state.is_paused = False
        return CommandResult(success=True, detail=f"speed set to {speed}x")

    def toggle_pause(self) -> CommandResult:
        if self.state.game_over:
            self.state.is_paused = True
            return CommandResult(success=False, detail=GAME_OVER_DETAIL)
        self.state.is_paused = not self.state.is_paused
        detail = "paused" if self.state.is_paused else "resumed"
        return CommandResult(success=True, detail=detail)

    def reset_world(self) -> CommandResult:
        self.world = worldgen.generate_world(seed=self.seed, rules=self.rules)
        self.state = new_game_state(self.rules)
        logger.info("world reset (seed=%s)", self.seed)
        return CommandResult(success=True, detail="world reset")

    def tick(self) -> TickReport:
        return tick.run_tick(self.state, self.world, rules=self.rules)

    # ------------------------------------------------------------------
    # Persistence

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(tiles=self.tiles(), state=copy.deepcopy(self.state))

    @classmethod
    def from_snapshot(
        cls,
        snapshot: SimulationSnapshot,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        seed: int = 0,
    ) -> Simulation:
        world = World(
            tiles={tile.key: copy.deepcopy(tile) for tile in snapshot.tiles},
            home=HexCoord(q=rules.world.home_q, r=rules.world.home_r),
        )
        return cls(world, copy.deepcopy(snapshot.state), rules=rules, seed=seed)

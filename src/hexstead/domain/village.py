"""Village progression: construction queue, recruits, guild masters, levels."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .catalog import BUILDINGS, SPECIALISTS, UNITS
from .enums import BuildingType, SpecialistType, UnitType
from .formulas import (
    can_afford,
    exp_for_level,
    level_for_exp,
    merge_bonuses,
    spend,
    total_exp_for_level,
)
from .models import BuildJob, GameState, ResourceBonus, VillageState, World
from .rules_config import DEFAULT_RULES, RulesConfig
from .territory import CommandResult, sync_village_level

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExpProgress:
    """Experience gathered towards the next village level."""

    current: float
    required: int
    percent: float


def _reject(detail: str) -> CommandResult:
    logger.debug("command rejected: %s", detail)
    return CommandResult(success=False, detail=detail)


def enqueue_building(
    state: GameState,
    building: BuildingType,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> CommandResult:
    """Pay for the next level of ``building`` and put it on the queue."""
    definition = BUILDINGS[building]
    village = state.village
    next_level = village.buildings.get(building, 0) + 1

    if next_level > definition.max_level:
        return _reject(f"{building} is at max level")
    if building in village.building_queue:
        return _reject(f"{building} is already under construction")
    if state.building_jobs >= state.max_building_jobs:
        return _reject("no building jobs available")

    cost = definition.cost(next_level)
    if not can_afford(state.resources, cost):
        return _reject(f"not enough resources to build {building} level {next_level}")

    spend(state.resources, state.expenditure, cost)
    village.building_queue[building] = BuildJob(
        start_time=state.game_time,
        end_time=state.game_time + definition.build_time(next_level),
    )

    logger.info("queued %s level %d", building, next_level)
    return CommandResult(
        success=True,
        detail=f"started {building} level {next_level}",
        cost=cost,
    )


def recruit_unit(
    state: GameState,
    unit: UnitType,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> CommandResult:
    """Train one unit if resources and housing allow it."""
    definition = UNITS[unit]
    if not can_afford(state.resources, definition.cost):
        return _reject(f"not enough resources to recruit {unit}")
    if state.population + definition.population_cost > state.max_population:
        return _reject(f"not enough housing to recruit {unit}")

    spend(state.resources, state.expenditure, definition.cost)
    state.village.units[unit] = state.village.units.get(unit, 0) + 1
    state.population += definition.population_cost

    logger.info("recruited %s (population %d)", unit, state.population)
    return CommandResult(success=True, detail=f"recruited {unit}", cost=dict(definition.cost))


def hire_specialist(
    state: GameState,
    specialist: SpecialistType,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> CommandResult:
    """Hire one guild master."""
    definition = SPECIALISTS[specialist]
    if not can_afford(state.resources, definition.cost):
        return _reject(f"not enough resources to hire {specialist}")

    spend(state.resources, state.expenditure, definition.cost)
    state.village.masters[specialist] = state.village.masters.get(specialist, 0) + 1

    logger.info("hired %s", specialist)
    return CommandResult(success=True, detail=f"hired {specialist}", cost=dict(definition.cost))


def recompute_progression(
    state: GameState,
    world: World | None = None,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> bool:
    """Refresh village level and housing after an experience change.

    Levels never go down. Returns True when the village levelled up.
    """
    village = state.village
    previous = village.level
    village.level = max(previous, level_for_exp(village.exp, rules))
    state.village_level = village.level

    home_level = village.buildings.get(BuildingType.HOME, 0)
    state.max_population = rules.village.base_population + BUILDINGS[
        BuildingType.HOME
    ].population_bonus(home_level)

    if world is not None:
        sync_village_level(world, village.level)

    if village.level > previous:
        logger.info("village reached level %d", village.level)
        return True
    return False


def building_bonuses(village: VillageState) -> ResourceBonus:
    """Per-minute production granted by buildings, masters, and units."""
    totals: dict[str, float] = {}
    for building, level in village.buildings.items():
        if level <= 0:
            continue
        for key, value in BUILDINGS[building].resource_bonus(level).items():
            totals[key] = totals.get(key, 0.0) + value

    for specialist, count in village.masters.items():
        if count <= 0:
            continue
        definition = SPECIALISTS[specialist]
        key = definition.resource.value
        if key in totals:
            totals[key] += totals[key] * definition.bonus_percent * count / 100

    power = sum(UNITS[unit].power_bonus * count for unit, count in village.units.items())
    if power > 0:
        totals["power"] = totals.get("power", 0.0) + power

    return merge_bonuses(totals)


def remaining_build_time(state: GameState, building: BuildingType) -> int:
    """Whole virtual seconds until ``building`` finishes, 0 when not queued."""
    job = state.village.building_queue.get(building)
    if job is None:
        return 0
    return math.ceil(max(0.0, job.end_time - state.game_time))


def exp_progress(village: VillageState, rules: RulesConfig = DEFAULT_RULES) -> ExpProgress:
    required = exp_for_level(village.level, rules)
    current = village.exp - total_exp_for_level(village.level, rules)
    percent = min(100.0, current / required * 100) if required else 100.0
    return ExpProgress(current=current, required=required, percent=percent)


def format_time(seconds: float) -> str:
    """Render virtual seconds as ``HH:MM:SS``."""
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"

"""Economy tick orchestration for Hexstead villages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hexstead.domain import territory
from hexstead.domain import village as village_rules
from hexstead.domain.catalog import BUILDINGS
from hexstead.domain.enums import BuildingType
from hexstead.domain.models import RESOURCE_KEYS, GameState, ResourceBonus, World
from hexstead.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TickReport:
    """What happened during one tick."""

    advanced: bool = False
    game_time: float = 0.0
    completed: list[tuple[BuildingType, int]] = field(default_factory=list)
    leveled_up: bool = False
    game_over: bool = False


def run_tick(
    state: GameState,
    world: World,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> TickReport:
    """Advance the virtual clock by one tick at the current speed."""

    report = TickReport(game_time=state.game_time)
    if state.is_paused or state.game_over:
        return report

    state.game_time += state.speed * rules.economy.tick_virtual_seconds
    report.advanced = True
    report.game_time = state.game_time

    report.completed = _complete_construction(state)
    if report.completed:
        report.leveled_up = village_rules.recompute_progression(state, world, rules=rules)

    tile_bonus = territory.owned_tile_bonus(world)
    building_bonus = village_rules.building_bonuses(state.village)
    _accrue(state, tile_bonus, building_bonus, rules)

    if _is_starving(state, tile_bonus, building_bonus, rules):
        state.game_over = True
        state.is_paused = True
        report.game_over = True
        logger.info("village starved at game time %.1f", state.game_time)

    return report


def _complete_construction(state: GameState) -> list[tuple[BuildingType, int]]:
    """Resolve every queued job whose end time has passed, exactly once."""

    village = state.village
    due = [
        building
        for building, job in village.building_queue.items()
        if job.end_time <= state.game_time
    ]

    completed: list[tuple[BuildingType, int]] = []
    for building in due:
        del village.building_queue[building]
        new_level = village.buildings.get(building, 0) + 1
        village.buildings[building] = new_level
        village.exp += BUILDINGS[building].exp_gain(new_level)
        completed.append((building, new_level))
        logger.info("%s reached level %d", building, new_level)
    return completed


def _accrue(
    state: GameState,
    tile_bonus: ResourceBonus,
    building_bonus: ResourceBonus,
    rules: RulesConfig,
) -> None:
    economy = rules.economy
    scale = state.speed / economy.rate_divisor
    pool = state.resources

    for key in RESOURCE_KEYS:
        rate = (
            economy.village_base_rates.get(key, 0.0)
            + tile_bonus.get(key, 0.0)
            + building_bonus.get(key, 0.0)
        )
        if rate:
            setattr(pool, key, pool.get(key) + rate * scale)

    pool.food = max(0.0, pool.food - state.population * scale)


def _is_starving(
    state: GameState,
    tile_bonus: ResourceBonus,
    building_bonus: ResourceBonus,
    rules: RulesConfig,
) -> bool:
    if state.resources.food > 0:
        return False
    net_food = (
        rules.economy.village_base_rates.get("food", 0.0)
        + tile_bonus.get("food", 0.0)
        + building_bonus.get("food", 0.0)
        - state.population
    )
    if net_food > 0:
        return False
    return BuildingType.FARM not in state.village.building_queue

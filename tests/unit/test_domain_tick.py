"""Tests for the economy tick."""

from __future__ import annotations

import pytest

from hexstead.domain import territory
from hexstead.domain.enums import BuildingType
from hexstead.domain.models import BuildJob, ResourcePool
from hexstead.domain.simulation import new_game_state
from hexstead.domain.tick import run_tick
from hexstead.utils.hex_math import HexCoord


@pytest.fixture
def state(small_rules):
    return new_game_state(small_rules)


def test_paused_state_does_not_advance(state, small_world, small_rules) -> None:
    state.is_paused = True
    report = run_tick(state, small_world, rules=small_rules)
    assert not report.advanced
    assert state.game_time == 0.0
    assert state.resources.food == 20


def test_clock_advances_by_speed(state, small_world, small_rules) -> None:
    state.speed = 5
    report = run_tick(state, small_world, rules=small_rules)
    assert report.advanced
    assert state.game_time == pytest.approx(0.5)


def test_base_accrual(state, small_world, small_rules) -> None:
    run_tick(state, small_world, rules=small_rules)
    assert state.resources.food == pytest.approx(20 + (5 - 1) / 600)
    assert state.resources.wood == pytest.approx(10 + 3 / 600)
    assert state.resources.stone == pytest.approx(5 + 1 / 600)
    assert state.resources.diamond == 0


def test_accrual_scales_with_speed(state, small_world, small_rules) -> None:
    state.speed = 20
    run_tick(state, small_world, rules=small_rules)
    assert state.resources.wood == pytest.approx(10 + 3 / 600 * 20)


def test_owned_tiles_add_production(state, small_world, small_rules) -> None:
    state.resources = ResourcePool(food=1000, wood=1000, stone=1000, power=1000)
    coord = HexCoord(q=1, r=0)
    assert territory.claim_tile(small_world, state, coord, rules=small_rules).success
    bonus = small_world.tiles[coord.key].bonus
    wood_before = state.resources.wood

    run_tick(state, small_world, rules=small_rules)

    assert state.resources.wood == pytest.approx(wood_before + (3 + bonus.get("wood", 0)) / 600)


def test_construction_completes_exactly_once(state, small_world, small_rules) -> None:
    state.village.building_queue[BuildingType.FARM] = BuildJob(start_time=0.0, end_time=0.05)

    report = run_tick(state, small_world, rules=small_rules)
    assert report.completed == [(BuildingType.FARM, 1)]
    assert state.village.buildings[BuildingType.FARM] == 1
    assert state.village.exp == 10
    assert BuildingType.FARM not in state.village.building_queue

    report = run_tick(state, small_world, rules=small_rules)
    assert report.completed == []
    assert state.village.buildings[BuildingType.FARM] == 1
    assert state.village.exp == 10


def test_several_constructions_complete_in_one_tick(state, small_world, small_rules) -> None:
    state.max_building_jobs = 3
    state.game_time = 40.0
    state.village.building_queue[BuildingType.FARM] = BuildJob(start_time=0.0, end_time=30.0)
    state.village.building_queue[BuildingType.QUARRY] = BuildJob(start_time=0.0, end_time=35.0)
    state.village.building_queue[BuildingType.HOME] = BuildJob(start_time=0.0, end_time=40.0)

    report = run_tick(state, small_world, rules=small_rules)

    assert sorted(report.completed) == sorted(
        [(BuildingType.FARM, 1), (BuildingType.QUARRY, 1), (BuildingType.HOME, 1)]
    )
    assert state.village.exp == 10 + 12 + 8
    assert state.village.building_queue == {}
    assert state.max_population == 10

    report = run_tick(state, small_world, rules=small_rules)
    assert report.completed == []
    assert state.village.exp == 30
    assert all(
        state.village.buildings[b] == 1
        for b in (BuildingType.FARM, BuildingType.QUARRY, BuildingType.HOME)
    )


def test_construction_waits_for_end_time(state, small_world, small_rules) -> None:
    state.village.building_queue[BuildingType.FARM] = BuildJob(start_time=0.0, end_time=30.0)
    for _ in range(10):
        run_tick(state, small_world, rules=small_rules)
    assert state.village.buildings[BuildingType.FARM] == 0
    assert BuildingType.FARM in state.village.building_queue


def test_completion_levels_up_village(state, small_world, small_rules) -> None:
    state.village.exp = 95
    state.village.building_queue[BuildingType.HOME] = BuildJob(start_time=0.0, end_time=0.1)

    report = run_tick(state, small_world, rules=small_rules)

    assert report.leveled_up
    assert state.village.level == 2
    assert state.max_population == 10
    assert small_world.home_tile.village_level == 2


def test_new_farm_feeds_the_same_tick(state, small_world, small_rules) -> None:
    state.village.building_queue[BuildingType.FARM] = BuildJob(start_time=0.0, end_time=0.1)
    run_tick(state, small_world, rules=small_rules)
    assert state.resources.food == pytest.approx(20 + (5 + 2 - 1) / 600)


def test_food_is_floored_at_zero(state, small_world, small_rules) -> None:
    state.population = 50
    state.resources.food = 0.01
    run_tick(state, small_world, rules=small_rules)
    assert state.resources.food == 0.0


def test_starvation_ends_the_game(state, small_world, small_rules) -> None:
    state.population = 5
    state.resources.food = 0.0

    report = run_tick(state, small_world, rules=small_rules)

    assert report.game_over
    assert state.game_over
    assert state.is_paused

    time_at_death = state.game_time
    report = run_tick(state, small_world, rules=small_rules)
    assert not report.advanced
    assert state.game_time == time_at_death


def test_queued_farm_prevents_starvation(state, small_world, small_rules) -> None:
    state.population = 5
    state.resources.food = 0.0
    state.village.building_queue[BuildingType.FARM] = BuildJob(start_time=0.0, end_time=30.0)

    run_tick(state, small_world, rules=small_rules)

    assert not state.game_over


def test_positive_food_income_prevents_starvation(state, small_world, small_rules) -> None:
    state.population = 4
    state.resources.food = 0.0
    run_tick(state, small_world, rules=small_rules)
    assert not state.game_over
    assert state.resources.food > 0

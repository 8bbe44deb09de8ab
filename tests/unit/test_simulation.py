"""Tests for the simulation controller."""

from __future__ import annotations

import pytest

from hexstead.domain.enums import BuildingType, TileAction, UnitType
from hexstead.domain.simulation import Simulation
from hexstead.utils.hex_math import HexCoord

EAST = HexCoord(q=1, r=0)


@pytest.fixture
def simulation(small_rules):
    return Simulation.new(rules=small_rules)


def test_starting_state(simulation) -> None:
    state = simulation.state
    assert simulation.resources.as_dict() == {
        "food": 20.0,
        "wood": 10.0,
        "stone": 5.0,
        "diamond": 0.0,
        "technology": 0.0,
        "power": 0.0,
    }
    assert state.population == 1
    assert state.max_population == 5
    assert state.max_building_jobs == 1
    assert state.village_level == 1
    assert simulation.village.exp == 0
    assert simulation.village.building_queue == {}
    assert simulation.speed == 1
    assert not simulation.is_paused
    assert not simulation.game_over
    assert simulation.game_time == 0.0


def test_queries_return_copies(simulation) -> None:
    tile = simulation.get_tile(EAST)
    tile.owned = True
    assert not simulation.world.tiles[EAST.key].owned

    resources = simulation.resources
    resources.food = 0
    assert simulation.state.resources.food == 20

    assert simulation.get_tile(HexCoord(q=99, r=0)) is None
    assert len(simulation.tiles()) == len(simulation.world.tiles)


def test_claim_through_controller(simulation) -> None:
    result = simulation.claim_tile(EAST)
    assert result.success
    assert simulation.get_tile(EAST).owned
    assert simulation.tile_bonuses() == simulation.get_tile(EAST).bonus


def test_select_dispatches(simulation) -> None:
    result = simulation.select_tile(simulation.world.home)
    assert result.action == TileAction.VILLAGE_TAP
    assert result.open_village_panel


def test_set_speed(simulation) -> None:
    simulation.toggle_pause()
    assert simulation.is_paused

    result = simulation.set_speed(5)

    assert result.success
    assert simulation.speed == 5
    assert not simulation.is_paused


def test_set_speed_rejects_unknown_multiplier(simulation) -> None:
    result = simulation.set_speed(3)
    assert not result.success
    assert simulation.speed == 1


def test_toggle_pause_freezes_the_clock(simulation) -> None:
    simulation.toggle_pause()
    simulation.tick()
    assert simulation.game_time == 0.0
    simulation.toggle_pause()
    simulation.tick()
    assert simulation.game_time == pytest.approx(0.1)


def test_game_over_blocks_commands(simulation) -> None:
    simulation.state.population = 5
    simulation.state.resources.food = 0.0
    report = simulation.tick()
    assert report.game_over

    assert not simulation.claim_tile(EAST).success
    assert not simulation.enqueue_building(BuildingType.FARM).success
    assert not simulation.recruit_unit(UnitType.WARRIOR).success
    assert not simulation.toggle_pause().success
    assert simulation.is_paused

    simulation.set_speed(20)
    assert simulation.is_paused

    assert simulation.reset_world().success
    assert not simulation.game_over
    assert not simulation.is_paused
    assert simulation.resources.food == 20


def test_reset_regenerates_world(simulation) -> None:
    simulation.claim_tile(EAST)
    simulation.reset_world()
    assert not simulation.world.tiles[EAST.key].owned
    assert simulation.state.expenditure.food == 0


def test_snapshot_round_trip(simulation, small_rules) -> None:
    simulation.claim_tile(EAST)
    simulation.enqueue_building(BuildingType.FARM)
    simulation.tick()

    restored = Simulation.from_snapshot(simulation.snapshot(), rules=small_rules)

    assert restored.world == simulation.world
    assert restored.state == simulation.state


def test_score_reflects_state(simulation) -> None:
    assert simulation.score().total == 100

"""Tests for claiming, upgrading, and fog of war."""

from __future__ import annotations

import copy

from hexstead.domain import territory
from hexstead.domain.enums import TileAction, Visibility
from hexstead.domain.formulas import claim_cost, tile_bonus, upgrade_cost, village_claim_cost
from hexstead.domain.models import ResourcePool
from hexstead.domain.simulation import new_game_state
from hexstead.domain.worldgen import VILLAGE_BASE_BONUS
from hexstead.utils.hex_math import HexCoord, hex_distance, hex_neighbors

EAST = HexCoord(q=1, r=0)
EAST_2 = HexCoord(q=2, r=0)


def _assert_visibility_closure(world, rules) -> None:
    owned = [tile for tile in world.tiles.values() if tile.owned]
    for tile in world.tiles.values():
        near_owned = any(
            hex_distance(tile.coordinate, other.coordinate) <= rules.territory.visibility_radius
            for other in owned
        )
        if tile.owned:
            assert tile.visibility == Visibility.OWNED
        elif near_owned or tile.is_village:
            assert tile.visibility == Visibility.VISIBLE
        else:
            assert tile.visibility == Visibility.HIDDEN


class TestClaim:
    def test_claim_adjacent_tile(self, small_world, rich_state, small_rules) -> None:
        before = copy.deepcopy(small_world)
        tile = small_world.tiles[EAST.key]
        expected_cost = claim_cost(tile.tier)

        result = territory.claim_tile(small_world, rich_state, EAST, rules=small_rules)

        assert result.success
        assert result.action == TileAction.CLAIM
        assert result.cost == expected_cost
        assert tile.owned
        assert tile.visibility == Visibility.OWNED
        assert tile.bonus == tile_bonus(tile.terrain, tile.level)
        assert rich_state.resources.food == 10_000 - expected_cost["food"]
        assert rich_state.expenditure.power == expected_cost["power"]
        changed = [
            key
            for key, other in small_world.tiles.items()
            if other.owned != before.tiles[key].owned
        ]
        assert changed == [EAST.key]

    def test_claim_requires_owned_neighbor(self, small_world, rich_state, small_rules) -> None:
        assert small_world.tiles[EAST_2.key].visibility == Visibility.VISIBLE
        world_before = copy.deepcopy(small_world)
        state_before = copy.deepcopy(rich_state)

        result = territory.claim_tile(small_world, rich_state, EAST_2, rules=small_rules)

        assert not result.success
        assert small_world == world_before
        assert rich_state == state_before

        territory.claim_tile(small_world, rich_state, EAST, rules=small_rules)
        assert territory.claim_tile(small_world, rich_state, EAST_2, rules=small_rules).success

    def test_claim_hidden_tile_rejected(self, small_world, rich_state, small_rules) -> None:
        target = HexCoord(q=3, r=0)
        assert small_world.tiles[target.key].visibility == Visibility.HIDDEN
        result = territory.claim_tile(small_world, rich_state, target, rules=small_rules)
        assert not result.success

    def test_claim_owned_or_missing_rejected(self, small_world, rich_state, small_rules) -> None:
        assert not territory.claim_tile(
            small_world, rich_state, small_world.home, rules=small_rules
        ).success
        assert not territory.claim_tile(
            small_world, rich_state, HexCoord(q=40, r=0), rules=small_rules
        ).success

    def test_unaffordable_claim_changes_nothing(self, small_world, small_rules) -> None:
        state = new_game_state(small_rules)
        state.resources = ResourcePool(food=1.0)
        world_before = copy.deepcopy(small_world)
        state_before = copy.deepcopy(state)

        result = territory.claim_tile(small_world, state, EAST, rules=small_rules)

        assert not result.success
        assert small_world == world_before
        assert state == state_before

    def test_claim_extends_visibility(self, small_world, rich_state, small_rules) -> None:
        far = HexCoord(q=3, r=0)
        territory.claim_tile(small_world, rich_state, EAST, rules=small_rules)
        assert small_world.tiles[far.key].visibility == Visibility.VISIBLE
        _assert_visibility_closure(small_world, small_rules)

        territory.claim_tile(small_world, rich_state, EAST_2, rules=small_rules)
        _assert_visibility_closure(small_world, small_rules)

    def test_village_claim_skips_adjacency(self, small_world, rich_state, small_rules) -> None:
        target = HexCoord(q=-3, r=3)
        tile = small_world.tiles[target.key]
        tile.is_village = True
        tile.bonus = dict(VILLAGE_BASE_BONUS)
        territory.recompute_visibility(small_world, small_rules)
        assert tile.visibility == Visibility.VISIBLE
        assert not territory.has_owned_neighbor(small_world, target)

        result = territory.claim_tile(small_world, rich_state, target, rules=small_rules)

        assert result.success
        assert result.cost == village_claim_cost(tile.tier, small_rules)
        assert tile.owned
        assert tile.bonus == VILLAGE_BASE_BONUS
        _assert_visibility_closure(small_world, small_rules)

    def test_neighbor_terrains_refreshed(self, small_world, rich_state, small_rules) -> None:
        territory.claim_tile(small_world, rich_state, EAST, rules=small_rules)
        for coord in [EAST, *hex_neighbors(EAST)]:
            tile = small_world.tiles.get(coord.key)
            if tile is None:
                continue
            expected = [
                small_world.tiles[n.key].terrain
                for n in hex_neighbors(coord)
                if n.key in small_world.tiles and small_world.tiles[n.key].terrain != tile.terrain
            ]
            assert tile.neighbor_terrains == expected


class TestUpgrade:
    def test_upgrade_owned_tile(self, small_world, rich_state, small_rules) -> None:
        territory.claim_tile(small_world, rich_state, EAST, rules=small_rules)
        tile = small_world.tiles[EAST.key]
        expected_cost = upgrade_cost(tile.terrain, tile.level)
        food_before = rich_state.resources.food

        result = territory.upgrade_tile(small_world, rich_state, EAST, rules=small_rules)

        assert result.success
        assert result.cost == expected_cost
        assert tile.upgrade_level == 1
        assert tile.level == tile.tier + 1
        assert tile.bonus == tile_bonus(tile.terrain, tile.level)
        assert rich_state.resources.food == food_before - expected_cost["food"]

    def test_upgrade_requires_ownership(self, small_world, rich_state, small_rules) -> None:
        result = territory.upgrade_tile(small_world, rich_state, EAST, rules=small_rules)
        assert not result.success
        assert small_world.tiles[EAST.key].upgrade_level == 0

    def test_villages_cannot_be_upgraded(self, small_world, rich_state, small_rules) -> None:
        result = territory.upgrade_tile(
            small_world, rich_state, small_world.home, rules=small_rules
        )
        assert not result.success

    def test_max_level(self, small_world, rich_state, small_rules) -> None:
        territory.claim_tile(small_world, rich_state, EAST, rules=small_rules)
        tile = small_world.tiles[EAST.key]
        tile.upgrade_level = small_rules.territory.max_tile_level - tile.tier

        result = territory.upgrade_tile(small_world, rich_state, EAST, rules=small_rules)

        assert not result.success
        assert tile.level == small_rules.territory.max_tile_level


class TestSelect:
    def test_home_opens_village_panel(self, small_world, rich_state, small_rules) -> None:
        before = copy.deepcopy(rich_state)
        result = territory.select_tile(
            small_world, rich_state, small_world.home, rules=small_rules
        )
        assert result.success
        assert result.action == TileAction.VILLAGE_TAP
        assert result.open_village_panel
        assert rich_state == before

    def test_dispatch(self, small_world, rich_state, small_rules) -> None:
        first = territory.select_tile(small_world, rich_state, EAST, rules=small_rules)
        assert first.action == TileAction.CLAIM
        assert first.success
        second = territory.select_tile(small_world, rich_state, EAST, rules=small_rules)
        assert second.action == TileAction.UPGRADE
        assert second.success


class TestBonuses:
    def test_owned_tile_bonus_excludes_villages(self, small_world, rich_state, small_rules):
        assert territory.owned_tile_bonus(small_world) == {}
        territory.claim_tile(small_world, rich_state, EAST, rules=small_rules)
        assert territory.owned_tile_bonus(small_world) == small_world.tiles[EAST.key].bonus

    def test_sync_village_level(self, small_world) -> None:
        territory.sync_village_level(small_world, 4)
        assert small_world.home_tile.village_level == 4

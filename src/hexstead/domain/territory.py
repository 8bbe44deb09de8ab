"""Territory rules: claiming, upgrading, and fog of war."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hexstead.utils.hex_math import HexCoord, hex_neighbors, tiles_in_range

from .enums import TileAction, Visibility
from .formulas import (
    can_afford,
    claim_cost,
    merge_bonuses,
    spend,
    tile_bonus,
    upgrade_cost,
    village_claim_cost,
)
from .models import GameState, ResourceBonus, ResourceCost, Tile, World
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandResult:
    """Outcome of a player command.

    Rejections are ordinary results with ``success=False``; they leave the
    world and the resource pool untouched.
    """

    success: bool
    detail: str
    action: TileAction | None = None
    cost: ResourceCost = field(default_factory=dict)
    open_village_panel: bool = False


def _reject(detail: str, action: TileAction | None = None) -> CommandResult:
    logger.debug("command rejected: %s", detail)
    return CommandResult(success=False, detail=detail, action=action)


def recompute_visibility(world: World, rules: RulesConfig = DEFAULT_RULES) -> None:
    """Rebuild the fog of war from scratch.

    Every non-owned tile is hidden, then every tile within the visibility
    radius of an owned tile is revealed, and finally every village is
    forced to at least visible.
    """
    radius = rules.territory.visibility_radius
    owned: list[Tile] = []
    for tile in world.tiles.values():
        if tile.owned:
            tile.visibility = Visibility.OWNED
            owned.append(tile)
        else:
            tile.visibility = Visibility.HIDDEN

    for tile in owned:
        for nearby in tiles_in_range(tile.coordinate, radius, world.tiles):
            if not nearby.owned:
                nearby.visibility = Visibility.VISIBLE

    for tile in world.tiles.values():
        if tile.is_village and tile.visibility == Visibility.HIDDEN:
            tile.visibility = Visibility.VISIBLE


def refresh_neighbor_terrains(world: World, tile: Tile) -> None:
    """Store the terrains of neighbours that differ from the tile's own."""
    terrains = []
    for coord in hex_neighbors(tile.coordinate):
        neighbor = world.tiles.get(coord.key)
        if neighbor is not None and neighbor.terrain != tile.terrain:
            terrains.append(neighbor.terrain)
    tile.neighbor_terrains = terrains


def refresh_neighborhood(world: World, coord: HexCoord) -> None:
    """Refresh neighbour terrains of a tile and of the tiles around it."""
    for affected in [coord, *hex_neighbors(coord)]:
        tile = world.tiles.get(affected.key)
        if tile is not None:
            refresh_neighbor_terrains(world, tile)


def has_owned_neighbor(world: World, coord: HexCoord) -> bool:
    for neighbor in hex_neighbors(coord):
        tile = world.tiles.get(neighbor.key)
        if tile is not None and tile.owned:
            return True
    return False


def tile_claim_cost(tile: Tile, rules: RulesConfig = DEFAULT_RULES) -> ResourceCost:
    """Claim cost of a tile, priced on its fixed tier."""
    if tile.is_village:
        return village_claim_cost(tile.tier, rules)
    return claim_cost(tile.tier)


def tile_upgrade_cost(tile: Tile) -> ResourceCost:
    return upgrade_cost(tile.terrain, tile.level)


def claim_tile(
    world: World,
    state: GameState,
    coord: HexCoord,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> CommandResult:
    """Claim a visible tile that touches the player's territory.

    AI villages may be claimed without an owned neighbour, at a much higher
    power price.
    """
    tile = world.tiles.get(coord.key)
    if tile is None:
        return _reject(f"no tile at {coord.key}", TileAction.CLAIM)
    if tile.owned:
        return _reject(f"tile {coord.key} is already owned", TileAction.CLAIM)
    if tile.visibility != Visibility.VISIBLE:
        return _reject(f"tile {coord.key} is not visible", TileAction.CLAIM)
    if not tile.is_village and not has_owned_neighbor(world, coord):
        return _reject(f"tile {coord.key} is not adjacent to owned territory", TileAction.CLAIM)

    cost = tile_claim_cost(tile, rules)
    if not can_afford(state.resources, cost):
        return _reject(f"not enough resources to claim {coord.key}", TileAction.CLAIM)

    spend(state.resources, state.expenditure, cost)
    tile.owned = True
    tile.visibility = Visibility.OWNED
    if not tile.is_village:
        tile.bonus = tile_bonus(tile.terrain, tile.level)

    recompute_visibility(world, rules)
    refresh_neighborhood(world, coord)

    logger.info("claimed tile %s (%s, tier %d)", coord.key, tile.terrain, tile.tier)
    return CommandResult(
        success=True,
        detail=f"claimed {coord.key}",
        action=TileAction.CLAIM,
        cost=cost,
    )


def upgrade_tile(
    world: World,
    state: GameState,
    coord: HexCoord,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> CommandResult:
    """Raise the production level of an owned, non-village tile by one."""
    tile = world.tiles.get(coord.key)
    if tile is None:
        return _reject(f"no tile at {coord.key}", TileAction.UPGRADE)
    if not tile.owned:
        return _reject(f"tile {coord.key} is not owned", TileAction.UPGRADE)
    if tile.is_village:
        return _reject(f"village tile {coord.key} cannot be upgraded", TileAction.UPGRADE)
    if tile.level >= rules.territory.max_tile_level:
        return _reject(f"tile {coord.key} is at max level", TileAction.UPGRADE)

    cost = tile_upgrade_cost(tile)
    if not can_afford(state.resources, cost):
        return _reject(f"not enough resources to upgrade {coord.key}", TileAction.UPGRADE)

    spend(state.resources, state.expenditure, cost)
    tile.upgrade_level += 1
    tile.bonus = tile_bonus(tile.terrain, tile.level)
    refresh_neighborhood(world, coord)

    logger.info("upgraded tile %s to level %d", coord.key, tile.level)
    return CommandResult(
        success=True,
        detail=f"upgraded {coord.key} to level {tile.level}",
        action=TileAction.UPGRADE,
        cost=cost,
    )


def tap_village(world: World, coord: HexCoord) -> CommandResult:
    """Open the village panel for an owned village tile. Nothing changes."""
    tile = world.tiles.get(coord.key)
    if tile is None or not tile.is_village or not tile.owned:
        return _reject(f"tile {coord.key} is not an owned village", TileAction.VILLAGE_TAP)
    return CommandResult(
        success=True,
        detail=f"opened village at {coord.key}",
        action=TileAction.VILLAGE_TAP,
        open_village_panel=True,
    )


def select_tile(
    world: World,
    state: GameState,
    coord: HexCoord,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> CommandResult:
    """Dispatch a click on a tile to the command it stands for."""
    tile = world.tiles.get(coord.key)
    if tile is not None and tile.owned:
        if tile.is_village:
            return tap_village(world, coord)
        return upgrade_tile(world, state, coord, rules=rules)
    return claim_tile(world, state, coord, rules=rules)


def owned_tile_bonus(world: World) -> ResourceBonus:
    """Per-minute production of every owned tile except villages."""
    return merge_bonuses(
        *(tile.bonus for tile in world.tiles.values() if tile.owned and not tile.is_village)
    )


def sync_village_level(world: World, level: int) -> None:
    """Mirror the player's village level on the home tile."""
    home = world.home_tile
    if home is not None and home.village_level != level:
        home.village_level = level

"""Save and load helpers for Hexstead games.

A game is persisted as two independent JSON blobs in a key/value store: the
tile list and the game state. Each blob is loaded on its own; a blob that is
missing or fails validation is replaced by a freshly generated one without
touching the other.
"""

from __future__ import annotations

import json
import logging

from pydantic import TypeAdapter, ValidationError

from hexstead.domain import models as dm
from hexstead.domain import worldgen
from hexstead.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexstead.domain.simulation import Simulation, SimulationSnapshot, new_game_state
from hexstead.interfaces import KeyValueStore

logger = logging.getLogger(__name__)

TILES_KEY = "village-game-tiles"
STATE_KEY = "village-game-state"

TILES_ADAPTER: TypeAdapter[list[dm.Tile]] = TypeAdapter(list[dm.Tile])
STATE_ADAPTER: TypeAdapter[dm.GameState] = TypeAdapter(dm.GameState)


def dump_tiles(tiles: list[dm.Tile]) -> str:
    return TILES_ADAPTER.dump_json(tiles).decode("utf-8")


def dump_state(state: dm.GameState) -> str:
    return STATE_ADAPTER.dump_json(state).decode("utf-8")


def save_game(store: KeyValueStore, snapshot: SimulationSnapshot) -> None:
    """Write both blobs of a snapshot to the store."""

    store.set(TILES_KEY, dump_tiles(snapshot.tiles))
    store.set(STATE_KEY, dump_state(snapshot.state))


def load_tiles(store: KeyValueStore) -> list[dm.Tile] | None:
    """Return the saved tiles, or None when the blob is missing or unusable."""

    raw = store.get(TILES_KEY)
    if raw is None:
        return None
    try:
        tiles = TILES_ADAPTER.validate_json(raw)
    except (ValidationError, json.JSONDecodeError, ValueError) as exc:
        logger.warning("discarding saved tiles: %s", exc)
        return None
    if not tiles:
        logger.warning("discarding saved tiles: blob is empty")
        return None
    return tiles


def _state_problems(state: dm.GameState, rules: RulesConfig) -> list[str]:
    """List the invariants a decoded game state breaks."""

    problems: list[str] = []
    if state.speed not in rules.economy.allowed_speeds:
        problems.append(f"unsupported speed {state.speed}")
    for label, pool in (("resources", state.resources), ("expenditure", state.expenditure)):
        negative = [key for key, value in pool.as_dict().items() if value < 0]
        if negative:
            problems.append(f"negative {label}: {', '.join(negative)}")
    if state.population < 0:
        problems.append(f"negative population {state.population}")
    if state.max_population < rules.village.base_population:
        problems.append(f"max_population {state.max_population} below base")
    if state.max_building_jobs < 1:
        problems.append(f"max_building_jobs {state.max_building_jobs} below 1")
    if state.village_level < 1 or state.village.level < 1:
        problems.append("village level below 1")
    if state.game_time < 0 or state.village.exp < 0:
        problems.append("negative game time or experience")
    for label, counts in (
        ("buildings", state.village.buildings),
        ("units", state.village.units),
        ("masters", state.village.masters),
    ):
        if any(count < 0 for count in counts.values()):
            problems.append(f"negative {label}")
    return problems


def load_state(
    store: KeyValueStore,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> dm.GameState | None:
    """Return the saved game state, or None when the blob is missing or unusable.

    A blob that decodes but breaks the game invariants (unsupported speed,
    negative counters) is treated like a corrupt one.
    """

    raw = store.get(STATE_KEY)
    if raw is None:
        return None
    try:
        state = STATE_ADAPTER.validate_json(raw)
    except (ValidationError, json.JSONDecodeError, ValueError) as exc:
        logger.warning("discarding saved game state: %s", exc)
        return None
    problems = _state_problems(state, rules)
    if problems:
        logger.warning("discarding saved game state: %s", "; ".join(problems))
        return None
    return state


def load_snapshot(
    store: KeyValueStore,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    seed: int = 0,
) -> SimulationSnapshot:
    """Load both blobs, generating whichever one is missing or corrupt."""

    tiles = load_tiles(store)
    if tiles is None:
        world = worldgen.generate_world(seed=seed, rules=rules)
        tiles = list(world.tiles.values())

    state = load_state(store, rules=rules)
    if state is None:
        state = new_game_state(rules)

    return SimulationSnapshot(tiles=tiles, state=state)


def load_simulation(
    store: KeyValueStore,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    seed: int = 0,
) -> Simulation:
    """Restore a simulation from the store, best effort."""

    snapshot = load_snapshot(store, rules=rules, seed=seed)
    return Simulation.from_snapshot(snapshot, rules=rules, seed=seed)


def clear_game(store: KeyValueStore) -> None:
    store.delete(TILES_KEY)
    store.delete(STATE_KEY)

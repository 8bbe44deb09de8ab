"""Wiring helpers for Hexstead.

This module turns a ``Settings`` instance into the concrete objects the
server runs on: the rule configuration, the save store, and a simulation
restored from that store. Use these functions in production code so every
piece is built the same way.

For testing, construct a ``MemoryStore`` and a ``Simulation`` directly.

Example:
    from hexstead.factory import create_store, create_simulation
    store = create_store(settings)
    simulation = create_simulation(store, settings)
"""

from dataclasses import replace

from hexstead import savegame
from hexstead.config import Settings
from hexstead.database import create_db_engine
from hexstead.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexstead.domain.simulation import Simulation
from hexstead.interfaces import KeyValueStore
from hexstead.repository import JsonFileStore, MemoryStore, SqlKeyValueStore


def create_rules(settings: Settings) -> RulesConfig:
    """Derive the rule configuration from settings.

    Only the map size is configurable; every other constant keeps its default.
    """
    world = replace(
        DEFAULT_RULES.world,
        map_radius_q=settings.map_radius,
        map_radius_r=settings.map_radius,
    )
    return replace(DEFAULT_RULES, world=world)


def create_store(settings: Settings) -> KeyValueStore:
    """Create the save store selected by ``settings.storage_backend``.

    Args:
        settings: Application settings

    Returns:
        A store implementing the KeyValueStore protocol
    """
    if settings.storage_backend == "memory":
        return MemoryStore()
    if settings.storage_backend == "sql":
        engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        return SqlKeyValueStore(engine)
    return JsonFileStore(settings.data_dir)


def create_simulation(
    store: KeyValueStore,
    settings: Settings,
    *,
    rules: RulesConfig | None = None,
) -> Simulation:
    """Restore the saved game from ``store``, generating what is missing.

    Args:
        store: Save store to read both blobs from
        settings: Application settings (world seed, map size)
        rules: Explicit rules, overriding the ones derived from settings

    Returns:
        A ready-to-run Simulation
    """
    return savegame.load_simulation(
        store,
        rules=rules or create_rules(settings),
        seed=settings.world_seed,
    )

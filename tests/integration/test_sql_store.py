"""Integration tests for the SQL save store on a real SQLite file."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from hexstead import savegame
from hexstead.database import (
    check_database_health,
    create_db_engine,
    get_session_factory,
    get_table_names,
)
from hexstead.domain.enums import BuildingType
from hexstead.domain.rules_config import RulesConfig, WorldRules
from hexstead.domain.simulation import Simulation
from hexstead.models import SaveBlob
from hexstead.repository import SqlKeyValueStore

RULES = RulesConfig(world=WorldRules(map_radius_q=3, map_radius_r=3, village_target_levels=()))


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'hexstead.db'}", echo=False)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return SqlKeyValueStore(engine)


def test_schema_is_created(store, engine) -> None:
    assert "save_blobs" in get_table_names(engine)
    assert check_database_health(engine)


def test_wal_mode_enabled(engine) -> None:
    with engine.connect() as conn:
        mode = conn.exec_driver_sql("PRAGMA journal_mode").scalar()
    assert mode == "wal"


def test_set_get_and_upsert(store, engine) -> None:
    assert store.get("village-game-state") is None

    store.set("village-game-state", '{"speed": 1}')
    store.set("village-game-state", '{"speed": 20}')

    assert store.get("village-game-state") == '{"speed": 20}'
    with get_session_factory(engine)() as session:
        rows = session.scalars(select(SaveBlob)).all()
    assert [row.key for row in rows] == ["village-game-state"]
    assert rows[0].created_at is not None


def test_delete_and_clear(store) -> None:
    store.set("a", "1")
    store.set("b", "2")
    store.delete("a")
    store.delete("missing")
    assert store.keys() == ["b"]

    store.clear()
    assert store.keys() == []


def test_schema_creation_can_be_skipped(tmp_path) -> None:
    engine = create_db_engine(f"sqlite:///{tmp_path / 'bare.db'}", echo=False)
    try:
        SqlKeyValueStore(engine, create_schema=False)
        assert "save_blobs" not in get_table_names(engine)
    finally:
        engine.dispose()


def test_game_survives_a_new_engine(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'game.db'}"
    first_engine = create_db_engine(url, echo=False)
    simulation = Simulation.new(rules=RULES)
    simulation.enqueue_building(BuildingType.FARM)
    simulation.tick()
    savegame.save_game(SqlKeyValueStore(first_engine), simulation.snapshot())
    first_engine.dispose()

    second_engine = create_db_engine(url, echo=False)
    try:
        restored = savegame.load_simulation(SqlKeyValueStore(second_engine), rules=RULES)
    finally:
        second_engine.dispose()

    assert restored.world == simulation.world
    assert restored.state == simulation.state

"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`hexstead` package (e.g., `from hexstead.api.app import create_app`) without
requiring an editable install in CI. It also provides small worlds that
build quickly and resource pools large enough to pay for anything.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from hexstead.domain.models import ResourcePool  # noqa: E402
from hexstead.domain.rules_config import RulesConfig, WorldRules  # noqa: E402
from hexstead.domain.simulation import new_game_state  # noqa: E402
from hexstead.domain.worldgen import generate_world  # noqa: E402


@pytest.fixture
def small_rules() -> RulesConfig:
    """A radius 4 map without AI villages."""
    return RulesConfig(
        world=WorldRules(map_radius_q=4, map_radius_r=4, village_target_levels=()),
    )


@pytest.fixture
def small_world(small_rules):
    return generate_world(seed=0, rules=small_rules)


@pytest.fixture
def rich_state(small_rules):
    state = new_game_state(small_rules)
    state.resources = ResourcePool(
        food=10_000.0,
        wood=10_000.0,
        stone=10_000.0,
        diamond=1_000.0,
        technology=1_000.0,
        power=10_000.0,
    )
    return state

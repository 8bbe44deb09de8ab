"""Final score shown once the village has starved."""

from __future__ import annotations

import math
from dataclasses import dataclass

from hexstead.domain.models import RESOURCE_KEYS, GameState
from hexstead.domain.rules_config import DEFAULT_RULES, RulesConfig


@dataclass(slots=True)
class ScoreBreakdown:
    level: int
    experience: int
    buildings: int
    units: int
    masters: int
    spending: int
    time_penalty: int

    @property
    def total(self) -> int:
        return (
            self.level
            + self.experience
            + self.buildings
            + self.units
            + self.masters
            + self.spending
            - self.time_penalty
        )


def compute_score(state: GameState, *, rules: RulesConfig = DEFAULT_RULES) -> ScoreBreakdown:
    """Score a run from its progression, its spending, and its duration.

    Spending is weighted per resource so that scarce resources count more;
    every elapsed virtual second costs one point.
    """
    score_rules = rules.score
    village = state.village

    spent = sum(
        math.floor(state.expenditure.get(key)) * score_rules.expenditure_weights.get(key, 0.0)
        for key in RESOURCE_KEYS
    )

    return ScoreBreakdown(
        level=state.village_level * score_rules.level_points,
        experience=math.floor(village.exp),
        buildings=sum(village.buildings.values()) * score_rules.building_level_points,
        units=sum(village.units.values()) * score_rules.unit_points,
        masters=sum(village.masters.values()) * score_rules.master_points,
        spending=math.floor(spent),
        time_penalty=math.floor(state.game_time),
    )

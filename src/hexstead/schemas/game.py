from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from hexstead.domain import village as village_rules
from hexstead.domain.enums import BuildingType
from hexstead.domain.scoring import ScoreBreakdown
from hexstead.domain.simulation import Simulation
from hexstead.domain.territory import CommandResult


class BuildJobRead(BaseModel):
    building: BuildingType
    start_time: float
    end_time: float
    remaining_seconds: int = Field(..., ge=0)


class VillageRead(BaseModel):
    level: int
    exp: float
    exp_progress_percent: float = Field(..., ge=0.0, le=100.0)
    buildings: dict[str, int]
    units: dict[str, int]
    masters: dict[str, int]
    building_queue: list[BuildJobRead]


class GameStateRead(BaseModel):
    resources: dict[str, float]
    expenditure: dict[str, float]
    population: int
    max_population: int
    building_jobs: int
    max_building_jobs: int
    village_level: int
    village: VillageRead
    game_time: float
    game_time_display: str
    speed: int
    is_paused: bool
    game_over: bool
    tile_bonuses: dict[str, float]
    building_bonuses: dict[str, float]

    @classmethod
    def from_simulation(cls, simulation: Simulation) -> GameStateRead:
        state = simulation.state
        village = state.village
        progress = village_rules.exp_progress(village, simulation.rules)
        queue = [
            BuildJobRead(
                building=building,
                start_time=job.start_time,
                end_time=job.end_time,
                remaining_seconds=village_rules.remaining_build_time(state, building),
            )
            for building, job in village.building_queue.items()
        ]
        return cls(
            resources=state.resources.as_dict(),
            expenditure=state.expenditure.as_dict(),
            population=state.population,
            max_population=state.max_population,
            building_jobs=state.building_jobs,
            max_building_jobs=state.max_building_jobs,
            village_level=state.village_level,
            village=VillageRead(
                level=village.level,
                exp=village.exp,
                exp_progress_percent=max(0.0, progress.percent),
                buildings={str(key): value for key, value in village.buildings.items()},
                units={str(key): value for key, value in village.units.items()},
                masters={str(key): value for key, value in village.masters.items()},
                building_queue=queue,
            ),
            game_time=state.game_time,
            game_time_display=village_rules.format_time(state.game_time),
            speed=state.speed,
            is_paused=state.is_paused,
            game_over=state.game_over,
            tile_bonuses=simulation.tile_bonuses(),
            building_bonuses=simulation.building_bonuses(),
        )


class CommandResponse(BaseModel):
    success: bool
    detail: str
    action: str | None = None
    cost: dict[str, float] = Field(default_factory=dict)
    open_village_panel: bool = False

    @classmethod
    def from_result(cls, result: CommandResult) -> CommandResponse:
        return cls(
            success=result.success,
            detail=result.detail,
            action=str(result.action) if result.action is not None else None,
            cost=dict(result.cost),
            open_village_panel=result.open_village_panel,
        )


class SpeedRequest(BaseModel):
    speed: Literal[1, 5, 20] = Field(..., description="Clock multiplier")


class ScoreRead(BaseModel):
    level: int
    experience: int
    buildings: int
    units: int
    masters: int
    spending: int
    time_penalty: int
    total: int

    @classmethod
    def from_breakdown(cls, breakdown: ScoreBreakdown) -> ScoreRead:
        return cls(
            level=breakdown.level,
            experience=breakdown.experience,
            buildings=breakdown.buildings,
            units=breakdown.units,
            masters=breakdown.masters,
            spending=breakdown.spending,
            time_penalty=breakdown.time_penalty,
            total=breakdown.total,
        )


class SaveResponse(BaseModel):
    saved: bool
    keys: list[str]

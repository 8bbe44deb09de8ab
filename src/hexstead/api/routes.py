"""HTTP routes for the Hexstead API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from hexstead import savegame
from hexstead.api.runtime import ApiState
from hexstead.database import check_database_health
from hexstead.domain.enums import BuildingType, SpecialistType, UnitType, Visibility
from hexstead.repository import SqlKeyValueStore
from hexstead.schemas import (
    CommandResponse,
    GameStateRead,
    SaveResponse,
    ScoreRead,
    SpeedRequest,
    TileRead,
)
from hexstead.utils.hex_math import HexCoord

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    payload: dict[str, object] = {
        "status": "ok",
        "storage_backend": state.settings.storage_backend,
        "tick_interval_seconds": state.runner.interval_seconds,
        "ticking": state.runner.running,
    }
    if isinstance(state.store, SqlKeyValueStore):
        payload["database"] = "ok" if check_database_health(state.store.engine) else "unavailable"
    return payload


@router.get("/state", response_model=GameStateRead)
async def get_game_state(state: ApiStateDep) -> GameStateRead:
    return GameStateRead.from_simulation(state.simulation)


@router.get("/tiles", response_model=list[TileRead])
async def list_tiles(
    state: ApiStateDep,
    visibility: Annotated[Visibility | None, Query()] = None,
) -> list[TileRead]:
    tiles = state.simulation.world.tiles.values()
    return [
        TileRead.from_tile(tile, state.simulation.rules)
        for tile in tiles
        if visibility is None or tile.visibility == visibility
    ]


@router.get("/tiles/{q}/{r}", response_model=TileRead)
async def get_tile(q: int, r: int, state: ApiStateDep) -> TileRead:
    tile = state.simulation.world.get(HexCoord(q=q, r=r))
    if tile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="tile not found")
    return TileRead.from_tile(tile, state.simulation.rules)


@router.post("/tiles/{q}/{r}/claim", response_model=CommandResponse)
async def claim_tile(q: int, r: int, state: ApiStateDep) -> CommandResponse:
    return CommandResponse.from_result(state.simulation.claim_tile(HexCoord(q=q, r=r)))


@router.post("/tiles/{q}/{r}/upgrade", response_model=CommandResponse)
async def upgrade_tile(q: int, r: int, state: ApiStateDep) -> CommandResponse:
    return CommandResponse.from_result(state.simulation.upgrade_tile(HexCoord(q=q, r=r)))


@router.post("/tiles/{q}/{r}/select", response_model=CommandResponse)
async def select_tile(q: int, r: int, state: ApiStateDep) -> CommandResponse:
    return CommandResponse.from_result(state.simulation.select_tile(HexCoord(q=q, r=r)))


@router.post("/village/buildings/{building}", response_model=CommandResponse)
async def enqueue_building(building: BuildingType, state: ApiStateDep) -> CommandResponse:
    return CommandResponse.from_result(state.simulation.enqueue_building(building))


@router.post("/village/units/{unit}", response_model=CommandResponse)
async def recruit_unit(unit: UnitType, state: ApiStateDep) -> CommandResponse:
    return CommandResponse.from_result(state.simulation.recruit_unit(unit))


@router.post("/village/specialists/{specialist}", response_model=CommandResponse)
async def hire_specialist(specialist: SpecialistType, state: ApiStateDep) -> CommandResponse:
    return CommandResponse.from_result(state.simulation.hire_specialist(specialist))


@router.post("/speed", response_model=CommandResponse)
async def set_speed(request: SpeedRequest, state: ApiStateDep) -> CommandResponse:
    return CommandResponse.from_result(state.simulation.set_speed(request.speed))


@router.post("/pause", response_model=CommandResponse)
async def toggle_pause(state: ApiStateDep) -> CommandResponse:
    return CommandResponse.from_result(state.simulation.toggle_pause())


@router.post("/reset", response_model=CommandResponse)
async def reset_world(state: ApiStateDep) -> CommandResponse:
    result = state.simulation.reset_world()
    await state.runner.save()
    return CommandResponse.from_result(result)


@router.post("/save", response_model=SaveResponse)
async def save_game(state: ApiStateDep) -> SaveResponse:
    await state.runner.save()
    return SaveResponse(saved=True, keys=[savegame.TILES_KEY, savegame.STATE_KEY])


@router.get("/score", response_model=ScoreRead)
async def get_score(state: ApiStateDep) -> ScoreRead:
    return ScoreRead.from_breakdown(state.simulation.score())

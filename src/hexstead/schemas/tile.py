from __future__ import annotations

from pydantic import BaseModel, Field

from hexstead.domain import models as dm
from hexstead.domain.enums import TerrainType, Visibility
from hexstead.domain.rules_config import DEFAULT_RULES, RulesConfig
from hexstead.domain.territory import tile_claim_cost, tile_upgrade_cost


class VillageSummary(BaseModel):
    level: int = Field(..., description="Village level")
    exp: float = Field(..., description="Accumulated experience")
    buildings: dict[str, int] = Field(default_factory=dict, description="Building levels")
    units: dict[str, int] = Field(default_factory=dict, description="Unit counts")


class TileRead(BaseModel):
    q: int = Field(..., description="Axial coordinate q")
    r: int = Field(..., description="Axial coordinate r")
    terrain: TerrainType = Field(..., description="Biome of the tile")
    visibility: Visibility = Field(..., description="Fog-of-war state")
    owned: bool = Field(default=False, description="Whether the player owns the tile")
    tier: int = Field(..., description="Fixed tier derived from the distance to home")
    level: int = Field(..., description="Production level (tier plus upgrades)")
    upgrade_level: int = Field(default=0, description="Upgrades bought since claiming")
    bonus: dict[str, float] = Field(default_factory=dict, description="Per-minute production")
    is_village: bool = Field(default=False, description="Whether the tile hosts a village")
    village_level: int | None = Field(None, description="Level of the village on this tile")
    village: VillageSummary | None = Field(None, description="AI village progression")
    neighbor_terrains: list[TerrainType] = Field(
        default_factory=list, description="Differing terrains of adjacent tiles"
    )
    claim_cost: dict[str, float] | None = Field(
        None, description="Cost to claim, for tiles that are not yet owned"
    )
    upgrade_cost: dict[str, float] | None = Field(
        None, description="Cost of the next upgrade, for owned non-village tiles"
    )

    @classmethod
    def from_tile(cls, tile: dm.Tile, rules: RulesConfig = DEFAULT_RULES) -> TileRead:
        village = None
        if tile.village_state is not None:
            state = tile.village_state
            village = VillageSummary(
                level=state.level,
                exp=state.exp,
                buildings={str(key): value for key, value in state.buildings.items()},
                units={str(key): value for key, value in state.units.items()},
            )
        return cls(
            q=tile.coordinate.q,
            r=tile.coordinate.r,
            terrain=tile.terrain,
            visibility=tile.visibility,
            owned=tile.owned,
            tier=tile.tier,
            level=tile.level,
            upgrade_level=tile.upgrade_level,
            bonus=dict(tile.bonus),
            is_village=tile.is_village,
            village_level=tile.village_level,
            village=village,
            neighbor_terrains=list(tile.neighbor_terrains),
            claim_cost=None if tile.owned else tile_claim_cost(tile, rules),
            upgrade_cost=tile_upgrade_cost(tile) if tile.owned and not tile.is_village else None,
        )

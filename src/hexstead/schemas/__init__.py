from .game import (
    BuildJobRead,
    CommandResponse,
    GameStateRead,
    SaveResponse,
    ScoreRead,
    SpeedRequest,
    VillageRead,
)
from .tile import TileRead, VillageSummary

__all__ = [
    "BuildJobRead",
    "CommandResponse",
    "GameStateRead",
    "SaveResponse",
    "ScoreRead",
    "SpeedRequest",
    "TileRead",
    "VillageRead",
    "VillageSummary",
]

"""Enumerations and type aliases for the Hexstead domain."""

from __future__ import annotations

from enum import StrEnum


class TerrainType(StrEnum):
    """The thirteen biomes produced by the world generator."""

    GRASSLAND = "grassland"
    PLAINS = "plains"
    DESERT = "desert"
    TUNDRA = "tundra"
    SNOW = "snow"
    COAST = "coast"
    OCEAN = "ocean"
    LAKE = "lake"
    MOUNTAIN = "mountain"
    HILL = "hill"
    FOREST = "forest"
    JUNGLE = "jungle"
    MARSH = "marsh"


class Visibility(StrEnum):
    """Fog-of-war state of a tile."""

    HIDDEN = "hidden"
    VISIBLE = "visible"
    OWNED = "owned"


class Resource(StrEnum):
    """Keys of the shared resource pool."""

    FOOD = "food"
    WOOD = "wood"
    STONE = "stone"
    DIAMOND = "diamond"
    TECHNOLOGY = "technology"
    POWER = "power"


class BuildingType(StrEnum):
    """Buildings that can be constructed in a village."""

    FARM = "farm"
    LUMBERMILL = "lumbermill"
    QUARRY = "quarry"
    MINE = "mine"
    LIBRARY = "library"
    HOME = "home"
    BARRACKS = "barracks"
    ARCHER_GUILD = "archer_guild"
    MAGE_TOWER = "mage_tower"


class UnitType(StrEnum):
    """Recruitable units."""

    WARRIOR = "warrior"
    ARCHER = "archer"
    MAGE = "mage"


class SpecialistType(StrEnum):
    """Guild masters hired to boost one resource."""

    FARMER = "farmer"
    LUMBERJACK = "lumberjack"
    STONEMASON = "stonemason"
    MINER = "miner"
    SCHOLAR = "scholar"


class TileAction(StrEnum):
    """What a tile selection resolved to."""

    CLAIM = "claim"
    UPGRADE = "upgrade"
    VILLAGE_TAP = "village_tap"

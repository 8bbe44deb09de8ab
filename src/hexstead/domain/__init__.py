"""Domain model and rules for Hexstead.

This package holds every game rule and can run purely in-memory:

* Dataclasses describing every simulation entity (see :mod:`models`).
* Enumerations, catalogs, and rule configuration objects.
* Pure rule functions for world generation, territory, the village
  economy, and scoring.
* The :class:`~hexstead.domain.simulation.Simulation` controller that ties
  them together and is persisted through a thin save-game adapter.
"""

from . import (
    catalog,
    enums,
    formulas,
    models,
    rules_config,
    scoring,
    simulation,
    territory,
    tick,
    village,
    worldgen,
)

__all__ = [
    "catalog",
    "enums",
    "formulas",
    "models",
    "rules_config",
    "scoring",
    "simulation",
    "territory",
    "tick",
    "village",
    "worldgen",
]

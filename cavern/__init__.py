"""Procedural cave and maze map generation on walkable/transparent grids."""

from .environment.generators import (
    Cave2MapGenerator,
    CaveMapGenerator,
    DepthFirstMazeGenerator,
    PrimsMazeGenerator,
    create_generator,
)
from .environment.map import Cell, CellMap, MapLike, MapSection

__all__ = [
    "Cave2MapGenerator",
    "CaveMapGenerator",
    "Cell",
    "CellMap",
    "DepthFirstMazeGenerator",
    "MapLike",
    "MapSection",
    "PrimsMazeGenerator",
    "create_generator",
]

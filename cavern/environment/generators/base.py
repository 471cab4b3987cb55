"""Base classes for map generation."""

from __future__ import annotations

import abc
from collections.abc import Callable
from typing import TYPE_CHECKING

from cavern.environment.map import CellMap, MapLike

if TYPE_CHECKING:
    from cavern.types import TileCoord

type MapFactory = Callable[[], MapLike]


class BaseMapGenerator(abc.ABC):
    """Abstract base class for map generation strategies.

    Args:
        map_width: Width of the map to create, in tiles.
        map_height: Height of the map to create, in tiles.
        map_factory: Zero-argument callable producing an empty MapLike.
            Defaults to CellMap.
    """

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        map_factory: MapFactory = CellMap,
    ) -> None:
        self.map_width = map_width
        self.map_height = map_height
        self.map_factory = map_factory

    def _new_map(self, width: TileCoord, height: TileCoord) -> MapLike:
        game_map = self.map_factory()
        game_map.initialize(width, height)
        return game_map

    @abc.abstractmethod
    def create_map(self) -> MapLike:
        """Generate and return a finished map."""
        raise NotImplementedError

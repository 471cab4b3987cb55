"""Cave map generation with cellular automata.

CaveMapGenerator follows the classic RogueBasin recipe: random fill, a few
passes of a rule that also fills in sparse open areas, then passes of a plain
neighbor-count rule to smooth the walls.

Cave2MapGenerator roughs the cave out at half resolution, scales it up and
smooths the blocky result with one more pass (after Jeremy Kun's "cellular
automaton method for cave generation").

Both finish by stitching every isolated section into one network.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cavern import config
from cavern.environment.map import CellMap
from cavern.util import rng

from .base import BaseMapGenerator, MapFactory
from .cellular_automata import (
    AutomatonRule,
    randomly_fill_cells,
    run_big_area_generation,
    run_nearest_neighbor_generation,
    scale_up,
)
from .connectivity import connect_orphaned_sections

if TYPE_CHECKING:
    from cavern.environment.map import MapLike
    from cavern.types import TileCoord
    from cavern.util.rng import RNG

logger = logging.getLogger(__name__)

_cave_rng = rng.get("map.cave")
_cave2_rng = rng.get("map.cave2")

FIRST_PASS_RULE = AutomatonRule(
    born=config.CAVE2_FIRST_PASS_BORN, survive=config.CAVE2_FIRST_PASS_SURVIVE
)
SMOOTH_PASS_RULE = AutomatonRule(
    born=config.CAVE2_SMOOTH_PASS_BORN, survive=config.CAVE2_SMOOTH_PASS_SURVIVE
)


class CaveMapGenerator(BaseMapGenerator):
    """Generates a cave-like map with a two-phase cellular automaton."""

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        fill_probability: int = config.CAVE_FILL_PROBABILITY,
        total_iterations: int = config.CAVE_TOTAL_ITERATIONS,
        cutoff_of_big_area_fill: int = config.CAVE_CUTOFF_OF_BIG_AREA_FILL,
        random: RNG | None = None,
        map_factory: MapFactory = CellMap,
    ) -> None:
        """Initialize the cave generator.

        Args:
            map_width: Width of the map in tiles.
            map_height: Height of the map in tiles.
            fill_probability: 0-100 chance that a cell starts as floor.
                Recommended 40-60.
            total_iterations: Number of automaton passes. Recommended 2-5.
            cutoff_of_big_area_fill: Iteration at which the big-area rule
                hands over to the nearest-neighbor rule. Recommended below 4.
            random: Random source. Defaults to the "map.cave" stream.
            map_factory: Creates the empty map to start from.
        """
        super().__init__(map_width, map_height, map_factory)
        self.fill_probability = fill_probability
        self.total_iterations = total_iterations
        self.cutoff_of_big_area_fill = cutoff_of_big_area_fill
        self.rng = random if random is not None else _cave_rng

    def create_map(self) -> MapLike:
        logger.debug(
            "Generating cave %dx%d (fill=%d, iterations=%d, cutoff=%d)",
            self.map_width,
            self.map_height,
            self.fill_probability,
            self.total_iterations,
            self.cutoff_of_big_area_fill,
        )
        game_map = self._new_map(self.map_width, self.map_height)
        game_map = randomly_fill_cells(game_map, self.fill_probability, self.rng)

        for i in range(self.total_iterations):
            if i < self.cutoff_of_big_area_fill:
                game_map = run_big_area_generation(game_map)
            else:
                game_map = run_nearest_neighbor_generation(game_map)

        return connect_orphaned_sections(game_map)


class Cave2MapGenerator(BaseMapGenerator):
    """Generates a cave by roughing it out at half scale and smoothing.

    The rough map is (map_width // 2, map_height // 2), so odd target sizes
    come out one tile smaller in that dimension.
    """

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        fill_probability: int = config.CAVE2_FILL_PROBABILITY,
        random: RNG | None = None,
        map_factory: MapFactory = CellMap,
    ) -> None:
        """Initialize the generator.

        Args:
            map_width: Target width of the map in tiles.
            map_height: Target height of the map in tiles.
            fill_probability: 0-100 chance that a cell starts as floor.
                Recommended 50-70.
            random: Random source. Defaults to the "map.cave2" stream.
            map_factory: Creates the empty maps to work on.
        """
        super().__init__(map_width, map_height, map_factory)
        self.fill_probability = fill_probability
        self.rng = random if random is not None else _cave2_rng

    def create_map(self) -> MapLike:
        scale = config.CAVE2_SCALE_FACTOR
        logger.debug(
            "Generating cave v2 %dx%d (fill=%d)",
            self.map_width,
            self.map_height,
            self.fill_probability,
        )
        game_map = self._new_map(self.map_width // scale, self.map_height // scale)
        game_map = randomly_fill_cells(game_map, self.fill_probability, self.rng)
        for _ in range(config.CAVE2_INITIAL_ITERATIONS):
            game_map = FIRST_PASS_RULE.apply(game_map)

        game_map = scale_up(game_map, scale, self.map_factory)
        game_map = SMOOTH_PASS_RULE.apply(game_map)

        return connect_orphaned_sections(game_map)

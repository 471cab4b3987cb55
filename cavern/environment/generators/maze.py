"""Maze carving with Prim's algorithm and a depth-first backtracker.

Both carvers work on a solid map and start at (1, 1). Corridors advance two
cells at a time ("skip neighbors") and open the wall cell in between, which
leaves one-cell walls between parallel corridors. Cell state doubles as the
bookkeeping:

- solid (not walkable, not transparent): unvisited
- open (walkable, not transparent): visited, may still have unvisited neighbors
- final (walkable, transparent): exhausted

With an even width or height the right or bottom edge gets a two-cell-thick
wall instead of one. This is expected.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cavern import config
from cavern.environment.map import CellMap
from cavern.util import rng
from cavern.util.coordinates import from_index, to_index

from .base import BaseMapGenerator, MapFactory
from .cellular_automata import is_border_cell
from .connectivity import connect_orphaned_sections

if TYPE_CHECKING:
    from cavern.environment.map import Cell, MapLike
    from cavern.types import CellIndex, TileCoord
    from cavern.util.rng import RNG

logger = logging.getLogger(__name__)

_prims_rng = rng.get("map.maze.prims")
_depth_first_rng = rng.get("map.maze.depth_first")

_SKIP_OFFSETS = ((-2, 0), (2, 0), (0, -2), (0, 2))

START_POS = (1, 1)


@dataclass
class MazeContext:
    """Everything a carver needs: the map being carved and its random source.

    Attributes:
        width: Map width in tiles.
        height: Map height in tiles.
        game_map: The map being carved, modified in place.
        rng: Random source for every choice the carver makes.
    """

    width: TileCoord
    height: TileCoord
    game_map: MapLike
    rng: RNG

    @classmethod
    def create_solid(
        cls,
        width: TileCoord,
        height: TileCoord,
        rng: RNG,
        map_factory: MapFactory = CellMap,
    ) -> MazeContext:
        """Create a context around a freshly initialized, fully solid map."""
        game_map = map_factory()
        game_map.initialize(width, height)
        return cls(width=width, height=height, game_map=game_map, rng=rng)

    def index_of(self, cell: Cell) -> CellIndex:
        return to_index(cell.x, cell.y, self.width)

    def cell_at(self, index: CellIndex) -> Cell:
        x, y = from_index(index, self.width)
        return self.game_map.get_cell(x, y)


def get_skip_neighbors(ctx: MazeContext, cell: Cell) -> list[Cell]:
    """Return the unvisited, non-border cells two steps away along one axis."""
    results = []
    for dx, dy in _SKIP_OFFSETS:
        x, y = cell.x + dx, cell.y + dy
        if not (0 <= x < ctx.width and 0 <= y < ctx.height):
            continue
        candidate = ctx.game_map.get_cell(x, y)
        if (
            not is_border_cell(ctx.game_map, candidate)
            and not candidate.is_transparent
            and not candidate.is_walkable
        ):
            results.append(candidate)
    return results


def get_link_cell(ctx: MazeContext, start: Cell, end: Cell) -> Cell:
    """Return the wall cell halfway between two cells two steps apart."""
    return ctx.game_map.get_cell(
        start.x + (end.x - start.x) // 2, start.y + (end.y - start.y) // 2
    )


def _open_start(ctx: MazeContext) -> CellIndex:
    x, y = START_POS
    ctx.game_map.set_cell_properties(x, y, True, False)
    return to_index(x, y, ctx.width)


def _carve_to_random_neighbor(
    ctx: MazeContext, current: Cell, candidates: list[Cell]
) -> Cell:
    next_cell = candidates[ctx.rng.randrange(len(candidates))]
    link = get_link_cell(ctx, current, next_cell)
    ctx.game_map.set_cell_properties(link.x, link.y, True, True)
    ctx.game_map.set_cell_properties(next_cell.x, next_cell.y, True, False)
    return next_cell


def _finalize(ctx: MazeContext, cell: Cell) -> None:
    ctx.game_map.set_cell_properties(cell.x, cell.y, True, True)


def carve_prims_maze(ctx: MazeContext) -> None:
    """Carve a maze with randomized Prim's algorithm.

    Every iteration picks uniformly from the whole open list, not only the
    newest cells. That is what gives the result its many short branches.
    """
    open_cells: list[CellIndex] = [_open_start(ctx)]
    finalized = 0
    while open_cells:
        index = ctx.rng.randrange(len(open_cells))
        current = ctx.cell_at(open_cells[index])
        candidates = get_skip_neighbors(ctx, current)
        if candidates:
            next_cell = _carve_to_random_neighbor(ctx, current, candidates)
            open_cells.append(ctx.index_of(next_cell))
        else:
            del open_cells[index]
            _finalize(ctx, current)
            finalized += 1
    logger.debug("Prim's maze finalized %d cells", finalized)


def carve_depth_first_maze(ctx: MazeContext) -> None:
    """Carve a maze with an iterative depth-first backtracker.

    The active cell is always the top of the stack; only the direction is
    random. Dead ends pop and finalize, which produces long winding corridors.
    """
    stack: list[CellIndex] = [_open_start(ctx)]
    finalized = 0
    while stack:
        current = ctx.cell_at(stack[-1])
        candidates = get_skip_neighbors(ctx, current)
        if candidates:
            next_cell = _carve_to_random_neighbor(ctx, current, candidates)
            stack.append(ctx.index_of(next_cell))
        else:
            stack.pop()
            _finalize(ctx, current)
            finalized += 1
    logger.debug("Depth-first maze finalized %d cells", finalized)


class _MazeGenerator(BaseMapGenerator):
    _default_rng: RNG

    def __init__(
        self,
        map_width: TileCoord,
        map_height: TileCoord,
        random: RNG | None = None,
        connect_sections: bool = config.MAZE_CONNECT_SECTIONS,
        map_factory: MapFactory = CellMap,
    ) -> None:
        super().__init__(map_width, map_height, map_factory)
        self.rng = random if random is not None else self._default_rng
        self.connect_sections = connect_sections

    @abc.abstractmethod
    def _carve(self, ctx: MazeContext) -> None:
        raise NotImplementedError

    def create_map(self) -> MapLike:
        logger.debug(
            "Carving %s %dx%d", type(self).__name__, self.map_width, self.map_height
        )
        ctx = MazeContext.create_solid(
            self.map_width, self.map_height, self.rng, self.map_factory
        )
        self._carve(ctx)
        if self.connect_sections:
            return connect_orphaned_sections(ctx.game_map)
        return ctx.game_map


class PrimsMazeGenerator(_MazeGenerator):
    """Generates a maze using randomized Prim's algorithm.

    Args:
        map_width: Odd values give an even one-cell border.
        map_height: Odd values give an even one-cell border.
        random: Random source. Defaults to the "map.maze.prims" stream.
        connect_sections: Run the section stitcher over the finished maze.
        map_factory: Creates the empty map to carve.
    """

    _default_rng = _prims_rng

    def _carve(self, ctx: MazeContext) -> None:
        carve_prims_maze(ctx)


class DepthFirstMazeGenerator(_MazeGenerator):
    """Generates a maze using a depth-first backtracker.

    Takes the same arguments as PrimsMazeGenerator; the default random source
    is the "map.maze.depth_first" stream.
    """

    _default_rng = _depth_first_rng

    def _carve(self, ctx: MazeContext) -> None:
        carve_depth_first_maze(ctx)

"""Cellular automaton transforms over a MapLike grid.

Every function here is a grid -> grid transform: it reads from the map it is
given and writes into a clone, so the input is never modified. Non-walkable
cells are the automaton's "live" cells (walls), walkable cells are floor.

Border cells are never rewritten by a generation step. `randomly_fill_cells`
forces them to wall, and every later pass copies them through, so a map
produced by these functions is always enclosed.
"""

from __future__ import annotations

from collections.abc import Callable, Collection
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cavern import config

if TYPE_CHECKING:
    from cavern.environment.map import Cell, MapLike
    from cavern.util.rng import RNG


def is_border_cell(game_map: MapLike, cell: Cell) -> bool:
    """Return True for cells on the outer ring of the map."""
    return (
        cell.x == 0
        or cell.x == game_map.width - 1
        or cell.y == 0
        or cell.y == game_map.height - 1
    )


def count_walls_near(game_map: MapLike, cell: Cell, distance: int) -> int:
    """Count non-walkable cells within Chebyshev `distance` of `cell`.

    The square is clipped to the map and the cell itself is not counted.
    """
    count = 0
    for nearby in game_map.get_cells_in_square(cell.x, cell.y, distance):
        if nearby.x == cell.x and nearby.y == cell.y:
            continue
        if not nearby.is_walkable:
            count += 1
    return count


def _run_interior_pass[M: MapLike](
    game_map: M, becomes_wall: Callable[[Cell], bool]
) -> M:
    updated = game_map.clone()
    for cell in game_map.get_all_cells():
        if is_border_cell(game_map, cell):
            continue
        is_walkable = not becomes_wall(cell)
        updated.set_cell_properties(cell.x, cell.y, is_walkable, is_walkable)
    return updated


def run_generation[M: MapLike](
    game_map: M, born: Collection[int], survive: Collection[int]
) -> M:
    """Run one generation of a born/survive automaton.

    A wall stays a wall iff its wall-neighbor count is in `survive`; a floor
    cell becomes a wall iff its count is in `born`. Counts use the 8-cell
    neighborhood. Walkable and transparent are set together.

    Args:
        game_map: Source map, left untouched.
        born: Neighbor counts that turn floor into wall.
        survive: Neighbor counts that keep a wall standing.

    Returns:
        A new map holding the next generation.
    """

    def becomes_wall(cell: Cell) -> bool:
        count = count_walls_near(game_map, cell, 1)
        if cell.is_walkable:
            return count in born
        return count in survive

    return _run_interior_pass(game_map, becomes_wall)


def run_big_area_generation[M: MapLike](game_map: M) -> M:
    """Wall if crowded at distance 1 or sparse at distance 2, else floor.

    The sparse test fills in the middle of wide open areas, which is what
    keeps early iterations from producing one huge cavern.
    """

    def becomes_wall(cell: Cell) -> bool:
        return (
            count_walls_near(game_map, cell, 1) >= config.CAVE_WALL_THRESHOLD
            or count_walls_near(game_map, cell, 2) <= config.CAVE_SPARSE_THRESHOLD
        )

    return _run_interior_pass(game_map, becomes_wall)


def run_nearest_neighbor_generation[M: MapLike](game_map: M) -> M:
    """Wall iff crowded at distance 1, else floor. Smooths cave edges."""

    def becomes_wall(cell: Cell) -> bool:
        return count_walls_near(game_map, cell, 1) >= config.CAVE_WALL_THRESHOLD

    return _run_interior_pass(game_map, becomes_wall)


@dataclass(frozen=True)
class AutomatonRule:
    """A (born, survive) pair of neighbor-count sets."""

    born: frozenset[int]
    survive: frozenset[int]

    def apply[M: MapLike](self, game_map: M) -> M:
        return run_generation(game_map, self.born, self.survive)


def randomly_fill_cells[M: MapLike](
    game_map: M, fill_probability: int, random: RNG
) -> M:
    """Randomize every cell: border cells become wall, interior cells roll.

    Each interior cell draws `random.randrange(1, 100)` and becomes floor when
    the draw is below `fill_probability`, otherwise wall. With a probability of
    0 everything is wall; with 100 every interior cell is floor.

    Args:
        game_map: Map whose dimensions are used; it is not modified.
        fill_probability: 0-100 chance of each interior cell being floor.
        random: Random source for the rolls.
    """
    filled = game_map.clone()
    for cell in game_map.get_all_cells():
        if is_border_cell(game_map, cell):
            filled.set_cell_properties(cell.x, cell.y, False, False)
        elif random.randrange(1, 100) < fill_probability:
            filled.set_cell_properties(cell.x, cell.y, True, True)
        else:
            filled.set_cell_properties(cell.x, cell.y, False, False)
    return filled


def scale_up[M: MapLike](
    game_map: M, scale: int, map_factory: Callable[[], M] | None = None
) -> M:
    """Nearest-neighbor upscale by an integer factor.

    Each destination cell copies the source cell's transparency into both its
    walkable and transparent flags. Maps built by the automaton functions
    always keep the two flags equal, so nothing is lost for them.

    Args:
        game_map: Source map, left untouched.
        scale: Integer factor, at least 2.
        map_factory: Creates the empty destination map. Defaults to the
            source map's type.

    Raises:
        ValueError: If scale is less than 2.
    """
    if scale < 2:
        raise ValueError("Scale factor must be greater than 1.")
    new_width = game_map.width * scale
    new_height = game_map.height * scale
    factory = map_factory if map_factory is not None else type(game_map)
    scaled = factory()
    scaled.initialize(new_width, new_height)

    # floor(x * src / dst), computed in integers
    for cell in scaled.get_all_cells():
        base_cell = game_map.get_cell(
            cell.x * game_map.width // new_width,
            cell.y * game_map.height // new_height,
        )
        scaled.set_cell_properties(
            cell.x, cell.y, base_cell.is_transparent, base_cell.is_transparent
        )
    return scaled

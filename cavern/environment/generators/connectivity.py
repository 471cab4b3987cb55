"""Stitch isolated map sections together with straight carved tunnels.

Every section found by the flood fill (floor and wall alike) is joined to its
nearest unconnected neighbor until the union-find reports one network.
Nearness is measured between the centers of the sections' bounding boxes, but
each tunnel runs between member cells ("anchors"), so it always touches both
sections even when a concave section does not contain its own center.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .cellular_automata import is_border_cell
from .flood_fill import FloodFillAnalyzer
from .union_find import UnionFind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cavern.environment.map import Cell, MapLike, MapSection
    from cavern.types import WorldTilePos

logger = logging.getLogger(__name__)


def distance_between(start: MapSection, destination: MapSection) -> int:
    """Manhattan distance between the centers of two sections' bounds."""
    start_x, start_y = start.bounds.center()
    dest_x, dest_y = destination.bounds.center()
    return abs(start_x - dest_x) + abs(start_y - dest_y)


def find_nearest_map_section(
    map_sections: Sequence[MapSection], index: int, union_find: UnionFind
) -> int | None:
    """Find the closest section not yet connected to `map_sections[index]`.

    Ties go to the lowest index. Returns None when every other section is
    already in the same set.
    """
    start = map_sections[index]
    closest_index: int | None = None
    closest_distance = 0
    for i, candidate in enumerate(map_sections):
        if i == index or union_find.connected(i, index):
            continue
        distance = distance_between(start, candidate)
        if closest_index is None or distance < closest_distance:
            closest_distance = distance
            closest_index = i
    return closest_index


def section_anchor(game_map: MapLike, section: MapSection) -> WorldTilePos:
    """Return the member cell of `section` closest to its bounds center.

    Distance is Manhattan. Border cells are only used when the section has no
    other cells, so tunnels between anchors stay inside an enclosing wall.
    Remaining ties go to the first cell in row-major order.
    """
    center_x, center_y = section.bounds.center()
    anchor = min(
        section.cells,
        key=lambda cell: (
            is_border_cell(game_map, cell),
            abs(cell.x - center_x) + abs(cell.y - center_y),
            cell.y,
            cell.x,
        ),
    )
    return anchor.x, anchor.y


def carve_tunnel(
    source: MapLike, target: MapLike, start: WorldTilePos, end: WorldTilePos
) -> None:
    """Carve a straight floor line from start to end into `target`.

    The line is traced on `source`. Every diagonal step of the line also
    opens the cell one step in +X from the left-most of its two cells, which
    is orthogonally adjacent to both, so the tunnel can be walked with
    4-directional movement.
    """
    previous: Cell | None = None
    for cell in source.get_cells_along_line(start[0], start[1], end[0], end[1]):
        target.set_cell_properties(cell.x, cell.y, True, True)
        if previous is not None and previous.x != cell.x and previous.y != cell.y:
            left = previous if previous.x < cell.x else cell
            target.set_cell_properties(left.x + 1, left.y, True, True)
        previous = cell


def connect_orphaned_sections[M: MapLike](game_map: M) -> M:
    """Return a clone of `game_map` in which every section is joined up.

    Each pass walks the sections in order and tunnels from each one to its
    nearest not-yet-connected section. Unions made earlier in a pass are
    visible later in the same pass, so a pass may merge several sets.

    Every tunnel ends on a member cell of each section it joins and carving
    only ever adds floor, so all originally walkable cells finish in a single
    4-connected region.
    """
    map_sections = FloodFillAnalyzer(game_map).get_map_sections()
    connected = game_map.clone()
    union_find = UnionFind(len(map_sections))
    anchors = [section_anchor(game_map, section) for section in map_sections]

    passes = 0
    tunnels = 0
    while union_find.count > 1:
        passes += 1
        for i in range(len(map_sections)):
            nearest = find_nearest_map_section(map_sections, i, union_find)
            if nearest is None:
                continue
            carve_tunnel(game_map, connected, anchors[i], anchors[nearest])
            union_find.union(i, nearest)
            tunnels += 1

    logger.debug(
        "Connected %d sections with %d tunnels in %d passes",
        len(map_sections),
        tunnels,
        passes,
    )
    return connected

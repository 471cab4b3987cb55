"""Split a map into MapSections with a same-state 4-directional flood fill."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from cavern.environment.map import MapSection

if TYPE_CHECKING:
    from cavern.environment.map import Cell, MapLike


class FloodFillAnalyzer:
    """Partitions every cell of a map into maximal same-state regions.

    Floor and wall regions are found the same way, so the returned sections
    cover the whole map exactly once. Traversal uses an explicit stack rather
    than recursion, which keeps large open caves from exhausting the call stack.
    """

    # Up, left, right, down.
    _OFFSETS = ((0, -1), (-1, 0), (1, 0), (0, 1))

    def __init__(self, game_map: MapLike) -> None:
        self.game_map = game_map
        self._visited = np.full(
            (game_map.width, game_map.height), False, dtype=bool, order="F"
        )

    def get_map_sections(self) -> list[MapSection]:
        """Return all sections, ordered by their first cell in row-major order."""
        self._visited[:, :] = False
        sections: list[MapSection] = []
        for cell in self.game_map.get_all_cells():
            section = self._visit(cell)
            if section.cells:
                sections.append(section)
        return sections

    def _visit(self, seed: Cell) -> MapSection:
        section = MapSection(is_walkable=seed.is_walkable)
        stack = [seed]
        while stack:
            cell = stack.pop()
            if self._visited[cell.x, cell.y]:
                continue
            section.add_cell(cell)
            self._visited[cell.x, cell.y] = True
            for neighbor in self._neighbors(cell):
                if (
                    neighbor.is_walkable == cell.is_walkable
                    and not self._visited[neighbor.x, neighbor.y]
                ):
                    stack.append(neighbor)
        return section

    def _neighbors(self, cell: Cell) -> list[Cell]:
        neighbors = []
        for dx, dy in self._OFFSETS:
            nx, ny = cell.x + dx, cell.y + dy
            if 0 <= nx < self.game_map.width and 0 <= ny < self.game_map.height:
                neighbors.append(self.game_map.get_cell(nx, ny))
        return neighbors

from __future__ import annotations

from collections import deque

from cavern.environment.map import CellMap, MapLike
from cavern.types import WorldTilePos

_GLYPH_FLAGS = {
    ".": (True, True),
    "s": (True, False),
    "o": (False, True),
    "#": (False, False),
}


def map_from_ascii(text: str) -> CellMap:
    """Build a CellMap from rows of CellMap glyphs ('.', 's', 'o', '#').

    Leading/trailing whitespace on each row is ignored so maps can be
    written as indented triple-quoted strings.
    """
    rows = [row.strip() for row in text.strip().splitlines() if row.strip()]
    game_map = CellMap(len(rows[0]), len(rows))
    for y, row in enumerate(rows):
        assert len(row) == game_map.width, f"Row {y} has the wrong width"
        for x, glyph in enumerate(row):
            is_walkable, is_transparent = _GLYPH_FLAGS[glyph]
            game_map.set_cell_properties(x, y, is_walkable, is_transparent)
    return game_map


def floor_positions(game_map: MapLike) -> set[WorldTilePos]:
    return {(c.x, c.y) for c in game_map.get_all_cells() if c.is_walkable}


def floor_components(game_map: MapLike) -> list[set[WorldTilePos]]:
    """4-connected components of walkable cells, found by BFS."""
    remaining = floor_positions(game_map)
    components = []
    while remaining:
        start = remaining.pop()
        component = {start}
        queue = deque([start])
        while queue:
            cx, cy = queue.popleft()
            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                pos = (cx + dx, cy + dy)
                if pos in remaining:
                    remaining.remove(pos)
                    component.add(pos)
                    queue.append(pos)
        components.append(component)
    return components

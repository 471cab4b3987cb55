from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol, Self

import numpy as np
import tcod.los

from cavern.types import TileCoord
from cavern.util.coordinates import Rect, is_valid_tile_pos


@dataclass(frozen=True, slots=True)
class Cell:
    """Snapshot of one grid position.

    Cells are returned by value and carry no identity: two calls to
    `get_cell(x, y)` produce equal but distinct objects, and a snapshot does
    not follow later changes to the map.
    """

    x: TileCoord
    y: TileCoord
    is_walkable: bool
    is_transparent: bool

    @property
    def glyph(self) -> str:
        if self.is_walkable:
            return "." if self.is_transparent else "s"
        return "o" if self.is_transparent else "#"


class MapLike(Protocol):
    """The grid capability the generators are written against.

    Implementations must be constructible without arguments; `initialize()`
    then fixes the dimensions.
    """

    width: TileCoord
    height: TileCoord

    def initialize(self, width: TileCoord, height: TileCoord) -> None: ...

    def get_cell(self, x: TileCoord, y: TileCoord) -> Cell: ...

    def set_cell_properties(
        self, x: TileCoord, y: TileCoord, is_walkable: bool, is_transparent: bool
    ) -> None: ...

    def get_all_cells(self) -> Iterator[Cell]: ...

    def get_cells_in_square(
        self, x: TileCoord, y: TileCoord, distance: int
    ) -> Iterator[Cell]: ...

    def get_cells_along_line(
        self, x1: TileCoord, y1: TileCoord, x2: TileCoord, y2: TileCoord
    ) -> list[Cell]: ...

    def clone(self) -> Self: ...


class CellMap:
    """numpy-backed grid of walkable/transparent flags.

    Both arrays have shape (width, height) and Fortran order so that
    `walkable[x, y]` indexes a cell directly. A freshly initialized map is
    solid: nothing walkable, nothing transparent.
    """

    def __init__(self, width: TileCoord = 0, height: TileCoord = 0) -> None:
        self.initialize(width, height)

    def initialize(self, width: TileCoord, height: TileCoord) -> None:
        self.width: TileCoord = width
        self.height: TileCoord = height
        self.walkable = np.full((width, height), False, dtype=bool, order="F")
        self.transparent = np.full((width, height), False, dtype=bool, order="F")

    def clear(self, is_transparent: bool = False, is_walkable: bool = False) -> None:
        """Set every cell to the same properties."""
        self.walkable[:, :] = is_walkable
        self.transparent[:, :] = is_transparent

    def in_bounds(self, x: TileCoord, y: TileCoord) -> bool:
        return is_valid_tile_pos((x, y), self.width, self.height)

    def _check_bounds(self, x: TileCoord, y: TileCoord) -> None:
        # numpy would silently wrap negative indices.
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Cell ({x}, {y}) is outside a {self.width}x{self.height} map"
            )

    def get_cell(self, x: TileCoord, y: TileCoord) -> Cell:
        self._check_bounds(x, y)
        return Cell(x, y, bool(self.walkable[x, y]), bool(self.transparent[x, y]))

    def set_cell_properties(
        self, x: TileCoord, y: TileCoord, is_walkable: bool, is_transparent: bool
    ) -> None:
        self._check_bounds(x, y)
        self.walkable[x, y] = is_walkable
        self.transparent[x, y] = is_transparent

    def get_all_cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield self.get_cell(x, y)

    def get_cells_in_square(
        self, x: TileCoord, y: TileCoord, distance: int
    ) -> Iterator[Cell]:
        """Yield cells within Chebyshev `distance` of (x, y), clipped to the map.

        The center cell is included. Order is row-major.
        """
        min_x = max(0, x - distance)
        max_x = min(self.width - 1, x + distance)
        min_y = max(0, y - distance)
        max_y = min(self.height - 1, y + distance)
        for cy in range(min_y, max_y + 1):
            for cx in range(min_x, max_x + 1):
                yield self.get_cell(cx, cy)

    def get_cells_along_line(
        self, x1: TileCoord, y1: TileCoord, x2: TileCoord, y2: TileCoord
    ) -> list[Cell]:
        """Return the Bresenham line from (x1, y1) to (x2, y2), endpoints included.

        Endpoints outside the map are clamped to its edge first.
        """
        x1, y1 = self._clamp(x1, y1)
        x2, y2 = self._clamp(x2, y2)
        return [
            self.get_cell(int(x), int(y))
            for x, y in tcod.los.bresenham((x1, y1), (x2, y2)).tolist()
        ]

    def _clamp(self, x: TileCoord, y: TileCoord) -> tuple[TileCoord, TileCoord]:
        return (
            max(0, min(x, self.width - 1)),
            max(0, min(y, self.height - 1)),
        )

    def clone(self) -> Self:
        cloned = type(self)(self.width, self.height)
        cloned.walkable[:, :] = self.walkable
        cloned.transparent[:, :] = self.transparent
        return cloned

    def __str__(self) -> str:
        return "\n".join(
            "".join(self.get_cell(x, y).glyph for x in range(self.width))
            for y in range(self.height)
        )

    def __repr__(self) -> str:
        return f"CellMap(width={self.width}, height={self.height})"


@dataclass
class MapSection:
    """A maximal 4-connected group of cells sharing one walkable state.

    The bounding box grows as cells are added; `bounds` reports it as a Rect.
    """

    is_walkable: bool
    cells: set[Cell] = field(default_factory=set)
    left: TileCoord = field(default=2**31 - 1)
    top: TileCoord = field(default=2**31 - 1)
    right: TileCoord = 0
    bottom: TileCoord = 0

    def add_cell(self, cell: Cell) -> None:
        self.cells.add(cell)
        self.left = min(self.left, cell.x)
        self.right = max(self.right, cell.x)
        self.top = min(self.top, cell.y)
        self.bottom = max(self.bottom, cell.y)

    @property
    def bounds(self) -> Rect:
        return Rect(
            self.left,
            self.top,
            self.right - self.left + 1,
            self.bottom - self.top + 1,
        )

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, cell: object) -> bool:
        return cell in self.cells

    def __str__(self) -> str:
        kind = "floor" if self.is_walkable else "wall"
        return f"MapSection({kind}, cells={len(self.cells)}, bounds={self.bounds})"

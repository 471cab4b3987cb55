"""Rectangles, bounds checks and linear cell indices in tile coordinates."""

from __future__ import annotations

from cavern.types import CellIndex, TileCoord, WorldTilePos


class Rect:
    """Rectangle/bounding box in tile coordinates."""

    def __init__(self, x: TileCoord, y: TileCoord, w: TileCoord, h: TileCoord) -> None:
        self.x1: TileCoord = x
        self.y1: TileCoord = y
        self.x2: TileCoord = x + w
        self.y2: TileCoord = y + h

    @classmethod
    def from_bounds(
        cls, x1: TileCoord, y1: TileCoord, x2: TileCoord, y2: TileCoord
    ) -> Rect:
        """Create a Rect from corner coordinates (x1, y1, x2, y2)."""
        return cls(x1, y1, x2 - x1, y2 - y1)

    @property
    def width(self) -> TileCoord:
        return self.x2 - self.x1

    @property
    def height(self) -> TileCoord:
        return self.y2 - self.y1

    def center(self) -> WorldTilePos:
        return (self.x1 + self.width // 2, self.y1 + self.height // 2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rect):
            return NotImplemented
        return (self.x1, self.y1, self.x2, self.y2) == (
            other.x1,
            other.y1,
            other.x2,
            other.y2,
        )

    def __hash__(self) -> int:
        return hash((self.x1, self.y1, self.x2, self.y2))

    def __repr__(self) -> str:
        return f"Rect(x1={self.x1}, y1={self.y1}, x2={self.x2}, y2={self.y2})"


# =============================================================================
# BOUNDS CHECKING HELPERS
# =============================================================================


def is_valid_tile_pos(
    pos: WorldTilePos, map_width: TileCoord, map_height: TileCoord
) -> bool:
    """Check if a tile position is within map bounds."""
    x, y = pos
    return 0 <= x < map_width and 0 <= y < map_height


# =============================================================================
# LINEAR INDICES
# =============================================================================


def to_index(x: TileCoord, y: TileCoord, map_width: TileCoord) -> CellIndex:
    """Row-major linear index of (x, y)."""
    return y * map_width + x


def from_index(index: CellIndex, map_width: TileCoord) -> WorldTilePos:
    """Inverse of to_index()."""
    y, x = divmod(index, map_width)
    return (x, y)

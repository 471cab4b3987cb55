from __future__ import annotations

# =============================================================================
# TILE-BASED COORDINATE SYSTEMS (Always integers)
# =============================================================================

TileCoord = int  # Always integer tile position

# Map coordinates - absolute positions on a generated map
WorldTileCoord = TileCoord  # Example: x=5, y=3
WorldTilePos = tuple[WorldTileCoord, WorldTileCoord]  # Example: (5, 3)

# Linear cell index derived from a position: y * width + x.
# Cells are value snapshots, so open lists and visited sets key on this instead.
CellIndex = int

# =============================================================================
# GENERATION
# =============================================================================

# Master seed accepted by the RNG system. None means non-deterministic.
RandomSeed = int | str | None

"""Map generation algorithms for Cavern.

This package provides the map generators:
- CaveMapGenerator: Cellular automaton caves (big-area then nearest-neighbor rule)
- Cave2MapGenerator: Half-scale rough cave, upscaled and smoothed
- PrimsMazeGenerator: Randomized Prim's maze
- DepthFirstMazeGenerator: Depth-first backtracker maze

And the building blocks they are assembled from:
- cellular_automata: pure grid -> grid automaton transforms
- FloodFillAnalyzer: splits a map into same-state MapSections
- UnionFind: disjoint-set tracking of joined sections
- connect_orphaned_sections: tunnels every section into one network
"""

from .base import BaseMapGenerator, MapFactory
from .caves import Cave2MapGenerator, CaveMapGenerator
from .cellular_automata import (
    AutomatonRule,
    count_walls_near,
    is_border_cell,
    randomly_fill_cells,
    run_big_area_generation,
    run_generation,
    run_nearest_neighbor_generation,
    scale_up,
)
from .connectivity import (
    carve_tunnel,
    connect_orphaned_sections,
    distance_between,
    find_nearest_map_section,
    section_anchor,
)
from .factory import GENERATORS, create_generator
from .flood_fill import FloodFillAnalyzer
from .maze import (
    DepthFirstMazeGenerator,
    MazeContext,
    PrimsMazeGenerator,
    carve_depth_first_maze,
    carve_prims_maze,
    get_link_cell,
    get_skip_neighbors,
)
from .union_find import UnionFind

__all__ = [
    "GENERATORS",
    "AutomatonRule",
    "BaseMapGenerator",
    "Cave2MapGenerator",
    "CaveMapGenerator",
    "DepthFirstMazeGenerator",
    "FloodFillAnalyzer",
    "MapFactory",
    "MazeContext",
    "PrimsMazeGenerator",
    "UnionFind",
    "carve_depth_first_maze",
    "carve_prims_maze",
    "carve_tunnel",
    "connect_orphaned_sections",
    "count_walls_near",
    "create_generator",
    "distance_between",
    "find_nearest_map_section",
    "get_link_cell",
    "get_skip_neighbors",
    "is_border_cell",
    "randomly_fill_cells",
    "run_big_area_generation",
    "run_generation",
    "run_nearest_neighbor_generation",
    "scale_up",
    "section_anchor",
]

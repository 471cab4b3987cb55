"""
Configuration constants.

Centralizes the tuning values used by the map generators so callers that
don't pass explicit parameters get sensible, documented defaults.
"""

# =============================================================================
# GENERAL
# =============================================================================

# Master seed for the shared generator streams when rng.init() is never
# called. None means a fresh, non-deterministic seed each run.
# RANDOM_SEED = "burrow1"
RANDOM_SEED = None

# =============================================================================
# CAVE GENERATION (big-area / nearest-neighbor automaton)
# =============================================================================

# Percent chance (0-100) that an interior cell starts as floor.
# Recommended 40-60.
CAVE_FILL_PROBABILITY = 45

# Number of automaton passes. Recommended 2-5.
CAVE_TOTAL_ITERATIONS = 4

# Iteration index at which the big-area rule hands over to the
# nearest-neighbor rule. Recommended less than 4.
CAVE_CUTOFF_OF_BIG_AREA_FILL = 3

# A cell with at least this many walls in its 8-neighborhood becomes a wall.
CAVE_WALL_THRESHOLD = 5

# Big-area rule only: a cell with at most this many walls within distance 2
# becomes a wall, which breaks up large open areas.
CAVE_SPARSE_THRESHOLD = 2

# =============================================================================
# CAVE V2 GENERATION (half-scale rough pass, upscale, smooth)
# =============================================================================

# Percent chance (0-100) that an interior cell starts as floor.
# Recommended 50-70.
CAVE2_FILL_PROBABILITY = 60

CAVE2_INITIAL_ITERATIONS = 10
CAVE2_SCALE_FACTOR = 2

CAVE2_FIRST_PASS_BORN = frozenset({6, 7, 8})
CAVE2_FIRST_PASS_SURVIVE = frozenset({3, 4, 5, 6, 7, 8})

CAVE2_SMOOTH_PASS_BORN = frozenset({5, 6, 7, 8})
CAVE2_SMOOTH_PASS_SURVIVE = frozenset({5, 6, 7, 8})

# =============================================================================
# MAZE GENERATION
# =============================================================================

# Carved mazes are spanning trees and therefore already connected. Set this to
# True to run the section stitcher over the finished maze anyway.
MAZE_CONNECT_SECTIONS = False

"""Factory function for creating generators by name.

Example:
    generator = create_generator("cave2", width=80, height=50, seed=1234)
    game_map = generator.create_map()
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

from .caves import Cave2MapGenerator, CaveMapGenerator
from .maze import DepthFirstMazeGenerator, PrimsMazeGenerator

if TYPE_CHECKING:
    from cavern.types import RandomSeed

    from .base import BaseMapGenerator

GENERATORS: dict[str, type[BaseMapGenerator]] = {
    "cave": CaveMapGenerator,
    "cave2": Cave2MapGenerator,
    "prims_maze": PrimsMazeGenerator,
    "depth_first_maze": DepthFirstMazeGenerator,
}


def create_generator(
    name: str,
    width: int,
    height: int,
    seed: RandomSeed = None,
    **options: Any,
) -> BaseMapGenerator:
    """Create a configured generator by name.

    Available generators: "cave", "cave2", "prims_maze", "depth_first_maze".

    Args:
        name: Name of the generator.
        width: Map width in tiles.
        height: Map height in tiles.
        seed: If given, the generator gets its own random.Random(seed)
            instead of its shared module stream.
        **options: Extra keyword arguments for the generator's constructor,
            e.g. fill_probability or total_iterations.

    Returns:
        A generator ready for create_map().

    Raises:
        ValueError: If the generator name is not recognized.
    """
    try:
        generator_cls = GENERATORS[name]
    except KeyError:
        raise ValueError(f"Unknown generator name: {name!r}") from None
    if seed is not None:
        options["random"] = random.Random(seed)
    return generator_cls(width, height, **options)

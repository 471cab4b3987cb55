"""Tests for the Prim's and depth-first maze carvers."""

from __future__ import annotations

import random

import pytest

from cavern import config
from cavern.environment.generators.maze import (
    DepthFirstMazeGenerator,
    MazeContext,
    PrimsMazeGenerator,
    carve_depth_first_maze,
    carve_prims_maze,
    get_link_cell,
    get_skip_neighbors,
)
from cavern.environment.map import CellMap
from cavern.util import rng
from tests.helpers import floor_components, floor_positions

MAZE_GENERATORS = [PrimsMazeGenerator, DepthFirstMazeGenerator]
CARVERS = [carve_prims_maze, carve_depth_first_maze]


def room_positions(width: int, height: int) -> set[tuple[int, int]]:
    """Odd/odd interior positions, the nodes a maze must visit."""
    return {(x, y) for x in range(1, width - 1, 2) for y in range(1, height - 1, 2)}


class TestSkipNeighbors:
    def test_corner_start_has_two_neighbors(self) -> None:
        ctx = MazeContext.create_solid(7, 7, random.Random(0))

        neighbors = get_skip_neighbors(ctx, ctx.game_map.get_cell(1, 1))

        assert {(c.x, c.y) for c in neighbors} == {(3, 1), (1, 3)}

    def test_center_has_four_neighbors(self) -> None:
        ctx = MazeContext.create_solid(7, 7, random.Random(0))

        neighbors = get_skip_neighbors(ctx, ctx.game_map.get_cell(3, 3))

        assert {(c.x, c.y) for c in neighbors} == {(1, 3), (5, 3), (3, 1), (3, 5)}

    def test_border_cells_are_excluded(self) -> None:
        """In a 6x6 map the cells two steps right of and below (3, 3) are border."""
        ctx = MazeContext.create_solid(6, 6, random.Random(0))

        neighbors = get_skip_neighbors(ctx, ctx.game_map.get_cell(3, 3))

        assert {(c.x, c.y) for c in neighbors} == {(1, 3), (3, 1)}

    def test_visited_cells_are_excluded(self) -> None:
        ctx = MazeContext.create_solid(7, 7, random.Random(0))
        ctx.game_map.set_cell_properties(3, 1, True, False)
        ctx.game_map.set_cell_properties(1, 3, True, True)

        assert get_skip_neighbors(ctx, ctx.game_map.get_cell(1, 1)) == []

    def test_link_cell_is_midpoint(self) -> None:
        ctx = MazeContext.create_solid(7, 7, random.Random(0))
        get = ctx.game_map.get_cell

        assert get_link_cell(ctx, get(1, 1), get(3, 1)) == get(2, 1)
        assert get_link_cell(ctx, get(3, 5), get(3, 3)) == get(3, 4)


class TestMazeContext:
    def test_index_round_trip(self) -> None:
        ctx = MazeContext.create_solid(9, 5, random.Random(0))
        cell = ctx.game_map.get_cell(4, 3)

        assert ctx.index_of(cell) == 3 * 9 + 4
        assert ctx.cell_at(ctx.index_of(cell)) == cell

    def test_starts_solid(self) -> None:
        ctx = MazeContext.create_solid(9, 5, random.Random(0))

        assert floor_positions(ctx.game_map) == set()



class FirstChoiceRandom:
    """Always picks index 0 and records the size of every draw."""

    def __init__(self) -> None:
        self.draws: list[int] = []

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        self.draws.append(start if stop is None else stop - start)
        return 0 if stop is None else start


class TestCarverOrder:
    """With a fixed first-choice draw the two carvers produce distinct mazes."""

    def test_prims_draws_from_whole_open_list(self) -> None:
        random_source = FirstChoiceRandom()
        ctx = MazeContext.create_solid(7, 5, random_source)

        carve_prims_maze(ctx)

        # Open-list draws interleave with neighbor draws; the open list grows
        # to four cells and index 0 keeps revisiting the oldest one.
        assert random_source.draws == [1, 2, 2, 1, 3, 2, 2, 3, 1, 4, 3, 2, 1, 3, 2, 1]
        assert str(ctx.game_map) == "\n".join(
            ["#######", "#.....#", "#.#.#.#", "#.#.#.#", "#######"]
        )

    def test_depth_first_extends_from_stack_top(self) -> None:
        random_source = FirstChoiceRandom()
        ctx = MazeContext.create_solid(7, 5, random_source)

        carve_depth_first_maze(ctx)

        # Only neighbor choices are drawn; the stack top is never chosen at random.
        assert random_source.draws == [2, 2, 1, 1, 1]
        assert str(ctx.game_map) == "\n".join(
            ["#######", "#.....#", "#####.#", "#.....#", "#######"]
        )


@pytest.mark.parametrize("carve", CARVERS)
class TestCarvers:
    @pytest.mark.parametrize(("width", "height"), [(9, 7), (21, 15), (5, 5)])
    def test_carves_a_perfect_maze(self, carve, width: int, height: int) -> None:
        ctx = MazeContext.create_solid(width, height, random.Random(11))

        carve(ctx)

        rooms = room_positions(width, height)
        floor = floor_positions(ctx.game_map)
        assert rooms <= floor
        # A spanning tree over the rooms: one link per room except the first
        assert len(floor) == 2 * len(rooms) - 1
        assert len(floor_components(ctx.game_map)) == 1

    def test_every_floor_cell_ends_finalized(self, carve) -> None:
        ctx = MazeContext.create_solid(15, 11, random.Random(3))

        carve(ctx)

        assert (ctx.game_map.walkable == ctx.game_map.transparent).all()

    def test_even_dimensions_leave_thick_far_walls(self, carve) -> None:
        ctx = MazeContext.create_solid(10, 8, random.Random(5))

        carve(ctx)

        walkable = ctx.game_map.walkable
        assert not walkable[8:, :].any()
        assert not walkable[:, 6:].any()
        assert walkable[7, 5]

    def test_border_stays_solid(self, carve) -> None:
        ctx = MazeContext.create_solid(13, 9, random.Random(8))

        carve(ctx)

        walkable = ctx.game_map.walkable
        assert not walkable[0, :].any()
        assert not walkable[-1, :].any()
        assert not walkable[:, 0].any()
        assert not walkable[:, -1].any()

    def test_same_seed_same_maze(self, carve) -> None:
        first = MazeContext.create_solid(21, 15, random.Random(99))
        second = MazeContext.create_solid(21, 15, random.Random(99))

        carve(first)
        carve(second)

        assert str(first.game_map) == str(second.game_map)


@pytest.mark.parametrize("generator_cls", MAZE_GENERATORS)
class TestMazeGenerators:
    def test_create_map_dimensions(self, generator_cls) -> None:
        game_map = generator_cls(25, 17, random=random.Random(1)).create_map()

        assert (game_map.width, game_map.height) == (25, 17)
        assert len(floor_components(game_map)) == 1

    def test_does_not_stitch_by_default(self, generator_cls) -> None:
        generator = generator_cls(15, 11, random=random.Random(4))

        assert generator.connect_sections is config.MAZE_CONNECT_SECTIONS is False
        game_map = generator.create_map()

        assert len(floor_positions(game_map)) == 2 * len(room_positions(15, 11)) - 1

    def test_stitching_is_opt_in(self, generator_cls) -> None:
        game_map = generator_cls(
            15, 11, random=random.Random(4), connect_sections=True
        ).create_map()

        assert len(floor_components(game_map)) == 1
        assert not game_map.walkable[0, :].any()
        assert not game_map.walkable[:, -1].any()

    def test_default_stream_is_reproducible(self, generator_cls) -> None:
        rng.reset(2024)
        first = generator_cls(21, 15).create_map()
        rng.reset(2024)
        second = generator_cls(21, 15).create_map()

        assert str(first) == str(second)

    def test_uses_map_factory(self, generator_cls) -> None:
        class TaggedMap(CellMap):
            pass

        game_map = generator_cls(
            9, 9, random=random.Random(0), map_factory=TaggedMap
        ).create_map()

        assert isinstance(game_map, TaggedMap)

    def test_prims_and_depth_first_use_separate_streams(self, generator_cls) -> None:
        """Consuming one carver's stream never shifts the other's output."""
        other_cls = next(cls for cls in MAZE_GENERATORS if cls is not generator_cls)

        rng.reset(77)
        expected = generator_cls(21, 15).create_map()
        rng.reset(77)
        other_cls(31, 31).create_map()
        actual = generator_cls(21, 15).create_map()

        assert str(actual) == str(expected)

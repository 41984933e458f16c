"""Tests for the random mouse and mark the path algorithms."""

import logging
import random

import pytest

from maze_solver.core import (
    Actor,
    Algorithm,
    Cell,
    CellType,
    Coordinate,
    Direction,
    MazeSolver,
    StepLimitExceededError,
    TieBreak,
    TraversalEngine,
    mark_the_path,
    parse_maze_text,
    random_mouse,
    solve,
)

N, S, E, W = Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST


def cells(*specs) -> list[Cell]:
    """Build a path from (row, column) pairs; first is START, last is END."""
    path = [Cell(Coordinate(row, column), CellType.OPEN) for row, column in specs]
    path[0] = Cell(path[0].coordinate, CellType.START)
    path[-1] = Cell(path[-1].coordinate, CellType.END)
    return path


SIMPLE_PATH = cells((1, 1), (1, 2), (1, 3), (2, 3), (3, 3), (3, 2), (3, 1))
JUNCTION_PATH = cells((2, 1), (1, 1), (1, 2), (2, 2), (2, 3), (1, 3))


def dead_end_path() -> list[Cell]:
    path = cells((1, 1), (2, 1), (1, 1), (1, 2), (1, 3))
    path[2] = Cell(Coordinate(1, 1), CellType.START)
    return path


class TestSingleCorridor:
    """A maze with exactly one route must be walked exactly along it."""

    def test_random_mouse(self, simple_maze):
        for seed in range(10):
            result = random_mouse(simple_maze, Actor(), rng=random.Random(seed))
            assert result.path == SIMPLE_PATH

    def test_mark_the_path_deterministic(self, simple_maze):
        result = mark_the_path(simple_maze, Actor())
        assert result.path == SIMPLE_PATH

    def test_mark_the_path_randomized(self, simple_maze):
        for seed in range(10):
            result = mark_the_path(
                simple_maze, Actor(), randomized=True, rng=random.Random(seed)
            )
            assert result.path == SIMPLE_PATH

    def test_format_path(self, simple_maze):
        result = mark_the_path(simple_maze, Actor())
        assert result.format_path() == (
            "(1:1 START), (1:2), (1:3), (2:3), (3:3), (3:2), (3:1 END)"
        )
        assert result.steps == 6


class TestMarkThePathDeterministic:
    """Tests for the deterministic tie-break."""

    def test_ties_follow_canonical_direction_order(self, junction_maze):
        """North beats East at the start, South beats East later on."""
        result = mark_the_path(junction_maze, Actor())
        assert result.path == JUNCTION_PATH

    def test_same_maze_same_path(self, large_maze):
        first = mark_the_path(large_maze, Actor())
        second = mark_the_path(large_maze, Actor())

        assert first.path == second.path
        assert first.visit_counts == second.visit_counts

    def test_reaches_end_of_large_maze(self, large_maze):
        result = mark_the_path(large_maze, Actor())

        assert result.path[0] == large_maze.start_cell
        assert result.path[-1].cell_type is CellType.END

    def test_backs_out_of_dead_end(self, dead_end_maze):
        result = mark_the_path(dead_end_maze, Actor())

        assert result.path == dead_end_path()
        assert result.visit_counts == {
            Coordinate(1, 1): 2,
            Coordinate(2, 1): 1,
            Coordinate(1, 2): 1,
            Coordinate(1, 3): 1,
        }

    def test_never_uses_randomness(self, large_maze):
        class NoRandom(random.Random):
            def choice(self, seq):
                raise AssertionError("random source must not be used")

        result = mark_the_path(large_maze, Actor(), rng=NoRandom())
        assert result.path[-1].cell_type is CellType.END


class TestMarkThePathRandomized:
    """Tests for the randomized tie-break."""

    def test_picks_among_least_visited(self, junction_maze, first_choice_rng):
        result = mark_the_path(junction_maze, Actor(), randomized=True, rng=first_choice_rng)

        assert result.path == JUNCTION_PATH
        assert first_choice_rng.choices == [
            [N, E],  # first direction, picked before any step
            [N, E],
            [E],
            [S, E],
            [E],
            [N],
        ]

    def test_seeded_runs_are_reproducible(self, large_maze):
        first = mark_the_path(large_maze, Actor(), randomized=True, rng=random.Random(3))
        second = mark_the_path(large_maze, Actor(), randomized=True, rng=random.Random(3))

        assert first.path == second.path

    def test_always_reaches_end(self, large_maze):
        for seed in range(20):
            result = mark_the_path(large_maze, Actor(), randomized=True, rng=random.Random(seed))
            assert result.path[0] == large_maze.start_cell
            assert result.path[-1] == large_maze.end_cell


class TestRandomMouse:
    """Tests for the random mouse algorithm."""

    def test_avoids_turning_back_at_junctions(self, junction_maze, first_choice_rng):
        result = random_mouse(junction_maze, Actor(), rng=first_choice_rng)

        assert result.path == JUNCTION_PATH
        assert first_choice_rng.choices == [[N, E], [E], [S, E], [E, W], [N]]

    def test_turns_back_at_dead_end(self, dead_end_maze, first_choice_rng):
        """The only way out of a dead end is back, and no random pick is needed."""
        result = random_mouse(dead_end_maze, Actor(), rng=first_choice_rng)

        assert result.path == dead_end_path()
        assert first_choice_rng.choices == [[S, E], [E], [E]]

    def test_always_reaches_end(self, large_maze):
        for seed in range(20):
            result = random_mouse(large_maze, Actor(), rng=random.Random(seed))
            assert result.path[0] == large_maze.start_cell
            assert result.path[-1] == large_maze.end_cell

    def test_seeded_runs_are_reproducible(self, large_maze):
        first = random_mouse(large_maze, Actor(), rng=random.Random(11))
        second = random_mouse(large_maze, Actor(), rng=random.Random(11))

        assert first.path == second.path


class TestVisitCounts:
    """Visit count bookkeeping holds for every policy."""

    @pytest.mark.parametrize("policy", list(TieBreak))
    def test_every_path_cell_is_counted(self, large_maze, policy):
        result = solve(large_maze, Actor(), policy, rng=random.Random(5))

        for cell in result.path:
            assert result.visit_counts[cell.coordinate] >= 1
        assert sum(result.visit_counts.values()) == len(result.path)

    @pytest.mark.parametrize("policy", list(TieBreak))
    def test_counts_never_decrease(self, large_maze, policy):
        engine = TraversalEngine(large_maze, rng=random.Random(5))
        actor = Actor(large_maze.start)
        context = engine.new_context(policy)
        previous = dict(context.visit_counts)

        for result in engine.traverse(actor, context):
            current = dict(context.visit_counts)
            for coordinate, visits in previous.items():
                assert current[coordinate] >= visits
            assert current[result.cell.coordinate] == result.visits
            previous = current


class TestRunIsolation:
    """Every solve starts from scratch."""

    def test_actor_is_moved_to_start(self, simple_maze):
        actor = Actor(Coordinate(3, 3))

        result = mark_the_path(simple_maze, actor)

        assert result.path == SIMPLE_PATH
        assert actor.get_position() == simple_maze.end

    def test_reusing_actor_and_solver(self, large_maze):
        solver = MazeSolver(large_maze, seed=1)
        actor = Actor()

        baseline = mark_the_path(large_maze, Actor())
        solver.random_mouse(actor)
        solver.mark_the_path(actor, randomized=True)
        again = solver.mark_the_path(actor)

        assert again.path == baseline.path
        assert again.visit_counts == baseline.visit_counts

    def test_results_do_not_share_state(self, simple_maze):
        solver = MazeSolver(simple_maze)
        actor = Actor()

        first = solver.mark_the_path(actor)
        second = solver.mark_the_path(actor)

        assert first.path == second.path
        assert first.path is not second.path

    def test_seeded_solvers_replay_the_same_runs(self, large_maze):
        first = MazeSolver(large_maze, seed=9)
        second = MazeSolver(large_maze, seed=9)

        for _ in range(3):
            assert first.random_mouse(Actor()).path == second.random_mouse(Actor()).path
            assert (
                first.mark_the_path(Actor(), randomized=True).path
                == second.mark_the_path(Actor(), randomized=True).path
            )


class TestSolveResult:
    """Tests for SolveResult and the algorithm names."""

    def test_algorithm_policies(self):
        assert Algorithm.RANDOM_MOUSE.policy() is TieBreak.NONE
        assert Algorithm.RANDOM_MOUSE.policy(randomized=True) is TieBreak.NONE
        assert Algorithm.MARK_THE_PATH.policy() is TieBreak.DETERMINISTIC
        assert Algorithm.MARK_THE_PATH.policy(randomized=True) is TieBreak.RANDOMIZED

    def test_to_dict(self, simple_maze):
        result = mark_the_path(simple_maze, Actor())
        data = result.to_dict()

        assert data["maze"] == "Simple"
        assert data["algorithm"] == "mark-the-path"
        assert data["policy"] == "deterministic"
        assert data["steps"] == 6
        assert data["path"][0] == {"row": 1, "column": 1, "cell_type": "start"}
        assert data["path"][-1] == {"row": 3, "column": 1, "cell_type": "end"}
        assert data["visit_counts"][0] == {"row": 1, "column": 1, "visits": 1}
        assert len(data["visit_counts"]) == 7

    def test_random_mouse_result_algorithm(self, simple_maze):
        result = random_mouse(simple_maze, Actor())
        assert result.algorithm is Algorithm.RANDOM_MOUSE


class TestFailures:
    """Tests for runs that cannot finish."""

    def test_step_limit_on_unreachable_end(self):
        maze = parse_maze_text("S__X_G")

        with pytest.raises(StepLimitExceededError) as exc_info:
            random_mouse(maze, Actor(), rng=random.Random(0), max_steps=50)

        assert exc_info.value.path[0] == maze.start_cell
        assert len(exc_info.value.path) == 51

    def test_logs_start_and_completion(self, simple_maze, caplog):
        with caplog.at_level(logging.INFO, logger="maze_solver.core.solvers"):
            mark_the_path(simple_maze, Actor())

        assert "Starting Mark the path (deterministic) on Simple" in caplog.text
        assert "completed in 6 steps" in caplog.text

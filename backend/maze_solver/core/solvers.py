"""
Maze solving algorithms.

1. Random mouse: follows corridors and picks a random way at every junction,
   never turning straight back unless it has to. Simple but very slow on
   large mazes.
2. Mark the path: a variant of Trémaux's algorithm. Every cell entered is
   marked, and the actor always heads for the least marked neighbour. Ties
   are broken either in fixed direction order (deterministic, always the
   same path) or at random.

Neither algorithm looks for the shortest path.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .actor import Actor
from .maze import Cell, Coordinate, Maze
from .maze_engine import TieBreak, TraversalEngine

logger = logging.getLogger(__name__)


class Algorithm(Enum):
    """Named solving algorithms."""
    RANDOM_MOUSE = "random-mouse"
    MARK_THE_PATH = "mark-the-path"

    def policy(self, randomized: bool = False) -> TieBreak:
        """Get the tie-break policy this algorithm runs with."""
        if self is Algorithm.RANDOM_MOUSE:
            return TieBreak.NONE
        return TieBreak.RANDOMIZED if randomized else TieBreak.DETERMINISTIC


POLICY_LABELS = {
    TieBreak.NONE: "Random mouse",
    TieBreak.DETERMINISTIC: "Mark the path (deterministic)",
    TieBreak.RANDOMIZED: "Mark the path (randomized)",
}


@dataclass
class SolveResult:
    """Outcome of a finished solve."""
    maze_name: str
    policy: TieBreak
    path: list[Cell]
    visit_counts: dict[Coordinate, int]
    steps: int

    @property
    def algorithm(self) -> Algorithm:
        if self.policy is TieBreak.NONE:
            return Algorithm.RANDOM_MOUSE
        return Algorithm.MARK_THE_PATH

    def format_path(self) -> str:
        """Render the path as '(1:1 START), (1:2), ..., (3:1 END)'."""
        return ", ".join(str(cell) for cell in self.path)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "maze": self.maze_name,
            "algorithm": self.algorithm.value,
            "policy": self.policy.value,
            "steps": self.steps,
            "path": [cell.to_dict() for cell in self.path],
            "visit_counts": [
                {**coordinate.to_dict(), "visits": visits}
                for coordinate, visits in sorted(
                    self.visit_counts.items(),
                    key=lambda item: (item[0].row, item[0].column),
                )
            ],
        }


def solve(
    maze: Maze,
    actor: Actor,
    policy: TieBreak,
    rng: Optional[random.Random] = None,
    max_steps: Optional[int] = None,
) -> SolveResult:
    """
    Walk actor from the maze start to the maze end.

    The actor is moved to the start first and every call starts from a
    clean run, so repeated calls on the same actor are independent.

    Args:
        maze: Maze to solve.
        actor: Actor to move. Ends up on the maze end.
        policy: How directions are chosen.
        rng: Random source for the random policies.
        max_steps: Optional step limit, unbounded by default.

    Returns:
        SolveResult with the visited path and visit counts.

    Raises:
        InvalidActorStateError: If the actor cannot be placed on the start.
        TrappedActorError: If the actor cannot move at all.
        StepLimitExceededError: If max_steps is exceeded.
    """
    label = POLICY_LABELS[policy]
    logger.info(f"Starting {label} on {maze.name}")

    engine = TraversalEngine(maze, rng=rng, max_steps=max_steps)
    actor.set_position(maze.start)
    context = engine.new_context(policy)

    for _ in engine.traverse(actor, context):
        pass

    result = SolveResult(
        maze_name=maze.name,
        policy=policy,
        path=context.path,
        visit_counts=dict(context.visit_counts),
        steps=context.steps,
    )
    logger.info(f"{label} on {maze.name} completed in {result.steps} steps")
    logger.debug(result.format_path())
    return result


def random_mouse(
    maze: Maze,
    actor: Actor,
    rng: Optional[random.Random] = None,
    max_steps: Optional[int] = None,
) -> SolveResult:
    """Solve the maze with the random mouse algorithm."""
    return solve(maze, actor, TieBreak.NONE, rng=rng, max_steps=max_steps)


def mark_the_path(
    maze: Maze,
    actor: Actor,
    randomized: bool = False,
    rng: Optional[random.Random] = None,
    max_steps: Optional[int] = None,
) -> SolveResult:
    """
    Solve the maze with the mark the path algorithm.

    Args:
        randomized: Break ties between equally marked neighbours at random
            instead of in North, South, East, West order.
    """
    policy = TieBreak.RANDOMIZED if randomized else TieBreak.DETERMINISTIC
    return solve(maze, actor, policy, rng=rng, max_steps=max_steps)


class MazeSolver:
    """
    Runs the solving algorithms against one maze.

    All runs draw from the same random source, so a seeded solver replays
    the same sequence of runs.

    Example usage:
        solver = MazeSolver(maze, seed=42)
        actor = Actor()

        solver.random_mouse(actor)
        solver.mark_the_path(actor)
        solver.mark_the_path(actor, randomized=True)
    """

    def __init__(
        self,
        maze: Maze,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_steps: Optional[int] = None,
    ):
        self.maze = maze
        self.rng = rng if rng is not None else random.Random(seed)
        self.max_steps = max_steps

    def solve(self, actor: Actor, policy: TieBreak) -> SolveResult:
        return solve(self.maze, actor, policy, rng=self.rng, max_steps=self.max_steps)

    def random_mouse(self, actor: Actor) -> SolveResult:
        return self.solve(actor, TieBreak.NONE)

    def mark_the_path(self, actor: Actor, randomized: bool = False) -> SolveResult:
        policy = TieBreak.RANDOMIZED if randomized else TieBreak.DETERMINISTIC
        return self.solve(actor, policy)


if __name__ == "__main__":
    from .maze_parser import parse_maze_text

    logging.basicConfig(level=logging.INFO)

    maze = parse_maze_text("S__\nXX_\nG__", name="Sample")
    print(maze.visualize())

    solver = MazeSolver(maze)
    actor = Actor()
    for result in (
        solver.random_mouse(actor),
        solver.mark_the_path(actor),
        solver.mark_the_path(actor, randomized=True),
    ):
        print(f"{POLICY_LABELS[result.policy]}: {result.format_path()}")

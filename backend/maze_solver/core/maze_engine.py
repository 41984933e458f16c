"""
Maze Traversal Engine

Core navigation logic shared by every solving strategy:
- Possible moves from the actor's position
- Direction selection (random mouse, visit counting with
  deterministic or randomized tie-break)
- Visit counting and path accumulation
- End detection

All mutable per-run state lives in a TraversalContext, so one engine (and
one maze) can serve any number of runs without leaking state between them.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Mapping, Optional

from .actor import Actor
from .maze import Cell, Coordinate, Direction, Maze

logger = logging.getLogger(__name__)


class TieBreak(Enum):
    """How the next direction is picked."""
    NONE = "none"  # random mouse
    DETERMINISTIC = "deterministic"
    RANDOMIZED = "randomized"


class SolverError(Exception):
    """Base exception for traversal failures."""

    pass


class InvalidActorStateError(SolverError):
    """Exception raised when the actor is not where the traversal expects it."""

    pass


class TrappedActorError(SolverError):
    """Exception raised when the actor has no accessible neighbour."""

    pass


class StepLimitExceededError(SolverError):
    """Exception raised when a run takes more steps than allowed."""

    def __init__(self, message: str, path: list[Cell]):
        super().__init__(message)
        self.path = path


@dataclass
class TraversalContext:
    """Mutable state of a single run."""
    policy: TieBreak
    path: list[Cell] = field(default_factory=list)
    visit_counts: Counter = field(default_factory=Counter)
    previous_direction: Optional[Direction] = None
    steps: int = 0


@dataclass
class StepResult:
    """Result of a single traversal step."""
    step: int
    direction: Direction
    cell: Cell
    visits: int
    completed: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "step": self.step,
            "direction": self.direction.value,
            "cell": self.cell.to_dict(),
            "visits": self.visits,
            "completed": self.completed,
        }


class TraversalEngine:
    """
    Walks an actor through a maze one cell at a time.

    Example usage:
        engine = TraversalEngine(maze, rng=random.Random(7))
        context = engine.new_context(TieBreak.DETERMINISTIC)
        actor.set_position(maze.start)

        for result in engine.traverse(actor, context):
            print(result.cell)
    """

    def __init__(
        self,
        maze: Maze,
        rng: Optional[random.Random] = None,
        max_steps: Optional[int] = None,
    ):
        """
        Initialize the engine.

        Args:
            maze: Maze to traverse. Never modified.
            rng: Random source for the random policies. A fresh unseeded
                random.Random is used when omitted.
            max_steps: Optional limit on steps per run. None means unbounded,
                in which case a maze without a route to the end never finishes.
        """
        self.maze = maze
        self.rng = rng if rng is not None else random.Random()
        self.max_steps = max_steps

    def new_context(self, policy: TieBreak) -> TraversalContext:
        """
        Create the state for a new run starting at the maze start.

        The start cell is the first path element and counts as visited once.
        """
        context = TraversalContext(policy=policy)
        context.path.append(self.maze.start_cell)
        context.visit_counts[self.maze.start] += 1

        if policy is TieBreak.RANDOMIZED:
            moves = self.possible_moves(self.maze.start)
            if moves:
                context.previous_direction = self.select_avoiding_reversal(moves, None)

        return context

    def possible_moves(self, position: Coordinate) -> dict[Direction, Cell]:
        """
        Get every direction the actor may take from position.

        Args:
            position: Current actor position.

        Returns:
            Mapping of direction to the cell it leads to, in canonical
            direction order.
        """
        moves = {}
        for direction in Direction:
            neighbor = position.neighbor(direction)
            if self.maze.is_accessible(neighbor):
                moves[direction] = self.maze.get_cell(neighbor)
        return moves

    def is_at_end(self, actor: Actor) -> bool:
        return actor.get_position() == self.maze.end

    def select_direction(
        self,
        moves: dict[Direction, Cell],
        context: TraversalContext,
    ) -> Direction:
        """Pick the next direction according to the run's policy."""
        if context.policy is TieBreak.NONE:
            if len(moves) == 1:
                # Dead end or corridor: the only way is taken, even backwards
                return next(iter(moves))
            return self.select_avoiding_reversal(moves, context.previous_direction)

        candidates = self.min_visit_candidates(moves, context.visit_counts)
        if context.policy is TieBreak.DETERMINISTIC:
            return candidates[0]
        return self.rng.choice(candidates)

    def select_avoiding_reversal(
        self,
        moves: dict[Direction, Cell],
        previous_direction: Optional[Direction],
    ) -> Direction:
        """
        Randomly pick a direction other than straight back.

        If excluding the reverse would leave nothing to choose from, the
        reverse is allowed so that a dead end can always be left.
        """
        candidates = list(moves)
        if previous_direction is not None:
            forward = [d for d in candidates if d is not previous_direction.opposite]
            if forward:
                candidates = forward
        return self.rng.choice(candidates)

    @staticmethod
    def min_visit_candidates(
        moves: dict[Direction, Cell],
        visit_counts: Mapping[Coordinate, int],
    ) -> list[Direction]:
        """
        Get the directions leading to the least visited neighbours.

        Unvisited cells count as zero visits. The result keeps the canonical
        direction order of moves.
        """
        min_visits = min(visit_counts.get(cell.coordinate, 0) for cell in moves.values())
        return [
            direction
            for direction, cell in moves.items()
            if visit_counts.get(cell.coordinate, 0) == min_visits
        ]

    def step(self, actor: Actor, context: TraversalContext) -> StepResult:
        """
        Move the actor one cell.

        Args:
            actor: Actor to move.
            context: State of the current run.

        Returns:
            StepResult describing the move.

        Raises:
            InvalidActorStateError: If the actor has no position.
            TrappedActorError: If no neighbouring cell is accessible.
        """
        position = actor.get_position()
        if position is None:
            raise InvalidActorStateError("Actor has no position")

        moves = self.possible_moves(position)
        if not moves:
            raise TrappedActorError(f"No accessible cell next to {position}")

        direction = self.select_direction(moves, context)
        actor.move(direction)
        cell = moves[direction]

        context.visit_counts[cell.coordinate] += 1
        context.path.append(cell)
        context.previous_direction = direction
        context.steps += 1

        return StepResult(
            step=context.steps,
            direction=direction,
            cell=cell,
            visits=context.visit_counts[cell.coordinate],
            completed=cell.coordinate == self.maze.end,
        )

    def traverse(self, actor: Actor, context: TraversalContext) -> Iterator[StepResult]:
        """
        Step the actor until it reaches the maze end.

        Args:
            actor: Actor positioned where the context left off, i.e. on the
                maze start for a fresh context.
            context: State of the current run.

        Yields:
            One StepResult per move.

        Raises:
            InvalidActorStateError: If the actor is not where the run expects.
            StepLimitExceededError: If max_steps is set and exceeded.
        """
        expected = context.path[-1].coordinate if context.path else self.maze.start
        if actor.get_position() != expected:
            raise InvalidActorStateError(
                f"Actor should be at {expected}, found at {actor.get_position()}"
            )

        while not self.is_at_end(actor):
            if self.max_steps is not None and context.steps >= self.max_steps:
                raise StepLimitExceededError(
                    f"No route to the end found within {self.max_steps} steps",
                    path=list(context.path),
                )

            result = self.step(actor, context)
            logger.debug(
                f"step {result.step}: {result.direction.value} -> {result.cell} "
                f"(visits: {result.visits})"
            )
            yield result

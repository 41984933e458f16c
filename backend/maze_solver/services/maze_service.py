"""Maze registry and solving service."""

import logging
import random
from pathlib import Path
from typing import Optional

from maze_solver.config import get_settings
from maze_solver.core import (
    Actor,
    Algorithm,
    Maze,
    SolveResult,
    load_all_mazes,
    solve,
)

logger = logging.getLogger(__name__)


class MazeService:
    """Keeps the known mazes in memory and runs solves against them."""

    def __init__(
        self,
        mazes_dir: Optional[Path] = None,
        max_dimension: Optional[int] = None,
        max_steps: Optional[int] = None,
        random_seed: Optional[int] = None,
    ):
        self.mazes_dir = mazes_dir
        self.max_dimension = max_dimension
        self.max_steps = max_steps
        self.random_seed = random_seed
        self._mazes: dict[str, Maze] = {}

    def load(self) -> int:
        """
        (Re)load every maze file from the mazes directory.

        Returns:
            Number of mazes loaded.
        """
        if self.mazes_dir is None:
            return 0

        if not Path(self.mazes_dir).exists():
            logger.warning(f"Mazes directory not found: {self.mazes_dir}")
            return 0

        self._mazes = load_all_mazes(self.mazes_dir, max_dimension=self.max_dimension)
        logger.info(f"Loaded {len(self._mazes)} mazes from {self.mazes_dir}")
        return len(self._mazes)

    def register(self, slug: str, maze: Maze) -> None:
        """Add or replace a maze under slug."""
        self._mazes[slug] = maze

    def list_mazes(self) -> list[tuple[str, Maze]]:
        """Get all mazes ordered by slug."""
        return sorted(self._mazes.items())

    def get_maze(self, slug: str) -> Optional[Maze]:
        """Get maze by slug."""
        return self._mazes.get(slug)

    def solve(
        self,
        maze: Maze,
        algorithm: Algorithm,
        randomized: bool = False,
        seed: Optional[int] = None,
        max_steps: Optional[int] = None,
    ) -> SolveResult:
        """
        Solve a maze with a fresh actor.

        Args:
            maze: Maze to solve.
            algorithm: Algorithm to run.
            randomized: Random tie-break for mark the path.
            seed: Seed for the random source. Falls back to the configured
                seed, then to an unseeded source.
            max_steps: Step limit. Falls back to the configured limit.

        Returns:
            SolveResult of the run.
        """
        if seed is None:
            seed = self.random_seed
        if max_steps is None:
            max_steps = self.max_steps

        return solve(
            maze,
            Actor(),
            algorithm.policy(randomized),
            rng=random.Random(seed),
            max_steps=max_steps,
        )


_maze_service: Optional[MazeService] = None


def get_maze_service() -> MazeService:
    """Get the maze service singleton."""
    global _maze_service
    if _maze_service is None:
        settings = get_settings()
        _maze_service = MazeService(
            mazes_dir=settings.mazes_dir,
            max_dimension=settings.max_maze_dimension,
            max_steps=settings.max_steps,
            random_seed=settings.random_seed,
        )
        _maze_service.load()
    return _maze_service

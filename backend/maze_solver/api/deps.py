"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from maze_solver.services.maze_service import MazeService, get_maze_service


# Type aliases for cleaner route signatures
Mazes = Annotated[MazeService, Depends(get_maze_service)]

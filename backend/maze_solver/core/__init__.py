# Core module
from .maze import CellType, Direction, Coordinate, Cell, Maze, is_accessible
from .actor import Actor
from .maze_engine import (
    TieBreak,
    TraversalContext,
    TraversalEngine,
    StepResult,
    SolverError,
    InvalidActorStateError,
    TrappedActorError,
    StepLimitExceededError,
)
from .solvers import Algorithm, MazeSolver, SolveResult, solve, random_mouse, mark_the_path
from .maze_parser import (
    MazeBuildError,
    MazeParseError,
    EmptyMazeError,
    MazeValidationError,
    IllegalCharacterError,
    MissingStartError,
    MissingEndError,
    DuplicateStartError,
    DuplicateEndError,
    MazeSizeError,
    parse_maze_text,
    load_maze_file,
    load_all_mazes,
    validate_maze_text,
)

__all__ = [
    "CellType",
    "Direction",
    "Coordinate",
    "Cell",
    "Maze",
    "is_accessible",
    "Actor",
    "TieBreak",
    "TraversalContext",
    "TraversalEngine",
    "StepResult",
    "SolverError",
    "InvalidActorStateError",
    "TrappedActorError",
    "StepLimitExceededError",
    "Algorithm",
    "MazeSolver",
    "SolveResult",
    "solve",
    "random_mouse",
    "mark_the_path",
    "MazeBuildError",
    "MazeParseError",
    "EmptyMazeError",
    "MazeValidationError",
    "IllegalCharacterError",
    "MissingStartError",
    "MissingEndError",
    "DuplicateStartError",
    "DuplicateEndError",
    "MazeSizeError",
    "parse_maze_text",
    "load_maze_file",
    "load_all_mazes",
    "validate_maze_text",
]

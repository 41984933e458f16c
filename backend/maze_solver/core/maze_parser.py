"""
Maze Parser.

Builds validated Maze objects from maze text and loads maze files from the
filesystem.

Maze Format:
    S = Start position
    G = Goal (end) position
    X = Wall (impassable)
    _ = Open path

Every line is one row and all rows must have the same width.
"""

import logging
from pathlib import Path
from typing import Optional

from .maze import CellType, Coordinate, Maze

logger = logging.getLogger(__name__)


class MazeBuildError(Exception):
    """Base exception for mazes that cannot be built."""

    pass


class MazeParseError(MazeBuildError):
    """Exception raised when maze text cannot be read."""

    pass


class EmptyMazeError(MazeParseError):
    """Exception raised when the maze text is empty."""

    pass


class MazeValidationError(MazeBuildError):
    """Exception raised when maze validation fails."""

    pass


class IllegalCharacterError(MazeValidationError):
    """Exception raised for characters outside the maze notation."""

    pass


class MissingStartError(MazeValidationError):
    pass


class MissingEndError(MazeValidationError):
    pass


class DuplicateStartError(MazeValidationError):
    pass


class DuplicateEndError(MazeValidationError):
    pass


class MazeSizeError(MazeValidationError):
    """Exception raised for ragged or oversized mazes."""

    pass


VALID_CHARS = {cell_type.value for cell_type in CellType}


def parse_maze_text(
    maze_text: str,
    name: str = "Unnamed",
    max_dimension: Optional[int] = None,
) -> Maze:
    """
    Parse maze text into a Maze.

    Args:
        maze_text: Multi-line string representing the maze grid.
        name: Name of the maze.
        max_dimension: Optional upper bound for both height and width.

    Returns:
        Maze with 1-based (row, column) coordinates.

    Raises:
        EmptyMazeError: If the maze text is empty.
        MazeValidationError: If the maze is invalid. The subclass tells
            which rule was broken.
    """
    if not maze_text or not maze_text.strip():
        raise EmptyMazeError("Maze text is empty")

    # Only newlines separate rows; any other control character is illegal
    lines = maze_text.replace("\r\n", "\n").strip("\n").split("\n")
    height = len(lines)
    width = len(lines[0])

    if max_dimension is not None and (height > max_dimension or width > max_dimension):
        raise MazeSizeError(
            f"Maze is {height}x{width}, larger than the allowed "
            f"{max_dimension}x{max_dimension}"
        )

    cells: dict[Coordinate, CellType] = {}
    start: Optional[Coordinate] = None
    end: Optional[Coordinate] = None

    for row, line in enumerate(lines, start=1):
        if len(line) != width:
            raise MazeSizeError(
                f"Row {row} has {len(line)} cells, expected {width}"
            )

        for column, char in enumerate(line, start=1):
            if char not in VALID_CHARS:
                raise IllegalCharacterError(
                    f"Invalid character '{char}' at position ({row}, {column}). "
                    f"Valid characters: {', '.join(sorted(VALID_CHARS))}"
                )

            coordinate = Coordinate(row, column)
            cell_type = CellType.from_char(char)

            if cell_type is CellType.START:
                if start is not None:
                    raise DuplicateStartError(
                        f"Multiple start positions found: "
                        f"first at {start.row, start.column}, second at ({row}, {column})"
                    )
                start = coordinate
            elif cell_type is CellType.END:
                if end is not None:
                    raise DuplicateEndError(
                        f"Multiple end positions found: "
                        f"first at {end.row, end.column}, second at ({row}, {column})"
                    )
                end = coordinate

            cells[coordinate] = cell_type

    if start is None:
        raise MissingStartError("Maze must have a start position (S)")

    if end is None:
        raise MissingEndError("Maze must have an end position (G)")

    return Maze(
        cells=cells,
        height=height,
        width=width,
        start=start,
        end=end,
        name=name,
    )


def load_maze_file(
    file_path: Path | str,
    name: Optional[str] = None,
    max_dimension: Optional[int] = None,
) -> Maze:
    """
    Load and parse a maze file from the filesystem.

    Args:
        file_path: Path to the maze file.
        name: Optional name override. If not provided, uses filename.
        max_dimension: Optional upper bound for both height and width.

    Returns:
        Parsed Maze.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MazeParseError: If the maze cannot be read.
        MazeValidationError: If the maze is invalid.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Maze file not found: {file_path}")

    if not file_path.is_file():
        raise MazeParseError(f"Path is not a file: {file_path}")

    try:
        maze_text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MazeParseError(f"Failed to read maze file: {e}") from e

    if name is None:
        name = file_path.stem.replace("_", " ").replace("-", " ").title()

    return parse_maze_text(maze_text, name=name, max_dimension=max_dimension)


def load_all_mazes(
    mazes_dir: Path | str,
    max_dimension: Optional[int] = None,
) -> dict[str, Maze]:
    """
    Load all maze files from a directory.

    Files that fail to parse are skipped with a warning.

    Args:
        mazes_dir: Path to the directory containing *.txt maze files.
        max_dimension: Optional upper bound for both height and width.

    Returns:
        Mazes keyed by file stem, in filename order.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
    """
    mazes_dir = Path(mazes_dir)

    if not mazes_dir.exists():
        raise FileNotFoundError(f"Mazes directory not found: {mazes_dir}")

    if not mazes_dir.is_dir():
        raise MazeParseError(f"Path is not a directory: {mazes_dir}")

    mazes = {}
    for maze_file in sorted(mazes_dir.glob("*.txt")):
        try:
            mazes[maze_file.stem] = load_maze_file(maze_file, max_dimension=max_dimension)
        except MazeBuildError as e:
            logger.warning(f"Failed to load {maze_file}: {e}")

    return mazes


def validate_maze_text(maze_text: str) -> tuple[bool, Optional[str]]:
    """
    Validate maze text without raising exceptions.

    Args:
        maze_text: Multi-line string representing the maze grid.

    Returns:
        Tuple of (is_valid, error_message).
        error_message is None if valid.
    """
    try:
        parse_maze_text(maze_text)
        return True, None
    except MazeBuildError as e:
        return False, str(e)

"""
Maze grid model.

A maze is a rectangular grid of cells addressed by 1-based (row, column)
coordinates. Row 1 is the top line of the maze text, column 1 its first
character.

Maze Format:
    S = Start position
    G = Goal (end) position
    X = Wall (impassable)
    _ = Open path
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class CellType(Enum):
    """Types of cells in the maze."""
    OPEN = "_"
    WALL = "X"
    START = "S"
    END = "G"

    @classmethod
    def from_char(cls, char: str) -> "CellType":
        """Convert character to CellType.

        Raises:
            ValueError: If the character is not part of the maze notation.
        """
        return cls(char)


class Direction(Enum):
    """Movement directions, declared in canonical tie-break order."""
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (d_row, d_column) for this direction."""
        deltas = {
            Direction.NORTH: (-1, 0),
            Direction.SOUTH: (1, 0),
            Direction.EAST: (0, 1),
            Direction.WEST: (0, -1),
        }
        return deltas[self]

    @property
    def opposite(self) -> "Direction":
        """Get the direction pointing back the way this one came."""
        opposites = {
            Direction.NORTH: Direction.SOUTH,
            Direction.SOUTH: Direction.NORTH,
            Direction.EAST: Direction.WEST,
            Direction.WEST: Direction.EAST,
        }
        return opposites[self]


@dataclass(frozen=True)
class Coordinate:
    """2D position in the maze."""
    row: int
    column: int

    def neighbor(self, direction: Direction) -> "Coordinate":
        """Return the coordinate one step away in direction.

        No bounds checking is done here; see is_accessible.
        """
        d_row, d_column = direction.delta
        return Coordinate(self.row + d_row, self.column + d_column)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"row": self.row, "column": self.column}


@dataclass(frozen=True)
class Cell:
    """A maze position together with its classification."""
    coordinate: Coordinate
    cell_type: CellType

    @property
    def row(self) -> int:
        return self.coordinate.row

    @property
    def column(self) -> int:
        return self.coordinate.column

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "row": self.row,
            "column": self.column,
            "cell_type": self.cell_type.name.lower(),
        }

    def __str__(self) -> str:
        suffix = ""
        if self.cell_type in (CellType.START, CellType.END):
            suffix = f" {self.cell_type.name}"
        return f"({self.row}:{self.column}{suffix})"


class Maze:
    """
    Read-only grid of classified cells with a designated start and end.

    Mazes are normally produced by maze_parser.parse_maze_text, which enforces
    the structural rules (one start, one end, rectangular). The constructor
    only checks what the traversal relies on directly.
    """

    def __init__(
        self,
        cells: Mapping[Coordinate, CellType],
        height: int,
        width: int,
        start: Coordinate,
        end: Coordinate,
        name: str = "Unnamed",
    ):
        """
        Initialize a maze.

        Args:
            cells: Classification of every coordinate in the grid.
            height: Number of rows.
            width: Number of columns.
            start: Coordinate of the START cell.
            end: Coordinate of the END cell.
            name: Display name.

        Raises:
            ValueError: If dimensions are not positive or start/end do not
                point at START/END cells.
        """
        if height < 1 or width < 1:
            raise ValueError(f"Maze dimensions must be positive, got {height}x{width}")
        if cells.get(start) is not CellType.START:
            raise ValueError(f"Start {start} is not a START cell")
        if cells.get(end) is not CellType.END:
            raise ValueError(f"End {end} is not an END cell")

        self._cells = MappingProxyType(dict(cells))
        self.height = height
        self.width = width
        self.start = start
        self.end = end
        self.name = name

    @property
    def cells(self) -> Mapping[Coordinate, CellType]:
        """Read-only view of the grid."""
        return self._cells

    @property
    def start_cell(self) -> Cell:
        return Cell(self.start, CellType.START)

    @property
    def end_cell(self) -> Cell:
        return Cell(self.end, CellType.END)

    def get_cell(self, coordinate: Coordinate) -> Cell | None:
        """Get the cell at coordinate, or None if it is outside the grid."""
        cell_type = self._cells.get(coordinate)
        if cell_type is None:
            return None
        return Cell(coordinate, cell_type)

    def is_accessible(self, coordinate: Coordinate) -> bool:
        """Check whether an actor may enter the cell at coordinate."""
        return is_accessible(self, coordinate)

    def get_maze_info(self) -> dict:
        """Get maze metadata."""
        return {
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "start_position": self.start.to_dict(),
            "end_position": self.end.to_dict(),
        }

    def visualize(self, marks: Mapping[Coordinate, str] | None = None) -> str:
        """
        Generate the maze text for this grid.

        Args:
            marks: Optional characters drawn over specific coordinates,
                e.g. the cells of a solved path.

        Returns:
            Maze text, one line per row.
        """
        marks = marks or {}
        lines = []
        for row in range(1, self.height + 1):
            line = ""
            for column in range(1, self.width + 1):
                coordinate = Coordinate(row, column)
                if coordinate in marks:
                    line += marks[coordinate]
                else:
                    line += self._cells.get(coordinate, CellType.WALL).value
            lines.append(line)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<Maze {self.name} {self.height}x{self.width}>"


def is_accessible(maze: Maze, coordinate: Coordinate) -> bool:
    """
    Check whether a coordinate can be entered.

    Out-of-bounds coordinates and walls are treated the same way: both are
    simply not enterable.

    Args:
        maze: The maze grid.
        coordinate: Coordinate to check.

    Returns:
        True if the coordinate exists in the grid and is not a wall.
    """
    cell_type = maze.cells.get(coordinate)
    return cell_type is not None and cell_type is not CellType.WALL

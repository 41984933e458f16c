"""Actor that walks through a maze one cell at a time."""

from typing import Optional

from .maze import Coordinate, Direction


class Actor:
    """
    Holds the current position of whoever is walking the maze.

    An actor may be reused across solves; every solve moves it back to the
    maze start before the first step.
    """

    def __init__(self, position: Optional[Coordinate] = None):
        self.position = position

    def get_position(self) -> Optional[Coordinate]:
        return self.position

    def set_position(self, position: Coordinate) -> None:
        self.position = position

    def peek(self, direction: Direction) -> Coordinate:
        """Return the coordinate one step away without moving."""
        if self.position is None:
            raise ValueError("Actor has no position")
        return self.position.neighbor(direction)

    def move(self, direction: Direction) -> Coordinate:
        """Move one step in direction and return the new position."""
        self.position = self.peek(direction)
        return self.position

    def __repr__(self) -> str:
        return f"<Actor at {self.position}>"

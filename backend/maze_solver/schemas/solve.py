"""Solve schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from maze_solver.config import get_settings

settings = get_settings()

# Largest text a maze within max_maze_dimension can take, with a CRLF per row
MAX_GRID_DATA_LENGTH = settings.max_maze_dimension * (settings.max_maze_dimension + 2)


class SolveRequest(BaseModel):
    """Schema for a solve request.

    Exactly one of maze (a known maze slug) or grid_data (maze text) is required.
    """

    maze: Optional[str] = None
    grid_data: Optional[str] = Field(None, min_length=1, max_length=MAX_GRID_DATA_LENGTH)
    algorithm: str = Field("mark-the-path", pattern="^(random-mouse|mark-the-path)$")
    randomized: bool = False
    seed: Optional[int] = None
    max_steps: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def check_maze_source(self) -> "SolveRequest":
        if (self.maze is None) == (self.grid_data is None):
            raise ValueError("Provide exactly one of 'maze' or 'grid_data'")
        return self


class PathCell(BaseModel):
    """Schema for one cell of a solved path."""

    row: int
    column: int
    cell_type: str  # open, start, end


class CellVisits(BaseModel):
    """Schema for the visit count of one cell."""

    row: int
    column: int
    visits: int


class SolveResponse(BaseModel):
    """Schema for solve response."""

    maze: str
    algorithm: str
    policy: str  # none, deterministic, randomized
    steps: int
    path: list[PathCell]
    visit_counts: list[CellVisits]

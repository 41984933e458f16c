"""Maze routes for listing and retrieving mazes."""

from fastapi import APIRouter, HTTPException, status

from maze_solver.api.deps import Mazes
from maze_solver.schemas.maze import (
    MazeDetail,
    MazeListItem,
    MazeListResponse,
    MazePosition,
)

router = APIRouter(prefix="/maze", tags=["Mazes"])


@router.get(
    "",
    response_model=MazeListResponse,
)
async def list_mazes(service: Mazes) -> MazeListResponse:
    """List all available mazes.

    Grid data is not included - use GET /v1/maze/{slug} for full details.
    """
    maze_items = [
        MazeListItem(
            slug=slug,
            name=maze.name,
            width=maze.width,
            height=maze.height,
        )
        for slug, maze in service.list_mazes()
    ]

    return MazeListResponse(
        mazes=maze_items,
        total=len(maze_items),
    )


@router.get(
    "/{slug}",
    response_model=MazeDetail,
)
async def get_maze(slug: str, service: Mazes) -> MazeDetail:
    """Get detailed information about a specific maze.

    Returns full maze details including grid data.
    """
    maze = service.get_maze(slug)

    if maze is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Maze not found: {slug}",
        )

    return MazeDetail(
        slug=slug,
        name=maze.name,
        width=maze.width,
        height=maze.height,
        grid_data=maze.visualize(),
        start=MazePosition(row=maze.start.row, column=maze.start.column),
        end=MazePosition(row=maze.end.row, column=maze.end.column),
    )

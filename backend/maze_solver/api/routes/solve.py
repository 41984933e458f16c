"""Solve routes for running maze solving algorithms."""

import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from slowapi import Limiter
from slowapi.util import get_remote_address

from maze_solver.api.deps import Mazes
from maze_solver.config import get_settings
from maze_solver.core import (
    Algorithm,
    MazeBuildError,
    StepLimitExceededError,
    TrappedActorError,
    parse_maze_text,
)
from maze_solver.schemas.solve import SolveRequest, SolveResponse

logger = logging.getLogger(__name__)

settings = get_settings()
limiter = Limiter(key_func=get_remote_address)

router = APIRouter(tags=["Solve"])


@router.post(
    "/solve",
    response_model=SolveResponse,
)
@limiter.limit(f"{settings.rate_limit_solves}/minute")
async def solve_maze(
    request: Request,
    solve_request: SolveRequest,
    service: Mazes,
) -> SolveResponse:
    """Solve a maze.

    Runs the requested algorithm from the maze start to the maze end and
    returns every cell visited on the way, in order.
    """
    if solve_request.maze is not None:
        maze = service.get_maze(solve_request.maze)
        if maze is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Maze not found: {solve_request.maze}",
            )
    else:
        try:
            maze = parse_maze_text(
                solve_request.grid_data,
                name="Submitted maze",
                max_dimension=settings.max_maze_dimension,
            )
        except MazeBuildError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

    algorithm = Algorithm(solve_request.algorithm)

    try:
        result = await run_in_threadpool(
            service.solve,
            maze,
            algorithm,
            randomized=solve_request.randomized,
            seed=solve_request.seed,
            max_steps=solve_request.max_steps,
        )
    except (StepLimitExceededError, TrappedActorError) as e:
        logger.info(f"Solve of {maze.name} with {algorithm.value} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return SolveResponse(**result.to_dict())

"""Pytest configuration and fixtures."""

import random
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from maze_solver.main import app
from maze_solver.api.routes.solve import limiter
from maze_solver.core import Maze, parse_maze_text
from maze_solver.services.maze_service import MazeService, get_maze_service

MAZES_DIR = Path(__file__).parent.parent / "mazes"

# Single corridor: (1,1) -> (1,2) -> (1,3) -> (2,3) -> (3,3) -> (3,2) -> (3,1)
SIMPLE_MAZE = """S__
XX_
G__"""

# Two open neighbours at the start, loops further on
JUNCTION_MAZE = """__G
S__"""

# Start has a dead end to the south
DEAD_END_MAZE = """S_G
_XX"""

LARGE_MAZE = (MAZES_DIR / "large.txt").read_text()


class FirstChoiceRandom(random.Random):
    """Random source that always picks the first candidate and records each pick."""

    def __init__(self):
        super().__init__(0)
        self.choices: list[list] = []

    def choice(self, seq):
        self.choices.append(list(seq))
        return seq[0]


@pytest.fixture
def first_choice_rng() -> FirstChoiceRandom:
    """Random source with predictable picks."""
    return FirstChoiceRandom()


@pytest.fixture
def simple_maze() -> Maze:
    return parse_maze_text(SIMPLE_MAZE, name="Simple")


@pytest.fixture
def junction_maze() -> Maze:
    return parse_maze_text(JUNCTION_MAZE, name="Junction")


@pytest.fixture
def dead_end_maze() -> Maze:
    return parse_maze_text(DEAD_END_MAZE, name="Dead End")


@pytest.fixture
def large_maze() -> Maze:
    return parse_maze_text(LARGE_MAZE, name="Large")


@pytest.fixture
def maze_service() -> MazeService:
    """Maze service loaded from the bundled maze files."""
    service = MazeService(mazes_dir=MAZES_DIR, max_dimension=100, max_steps=10_000)
    service.load()
    return service


@pytest_asyncio.fixture(scope="function")
async def client(maze_service) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app.dependency_overrides[get_maze_service] = lambda: maze_service
    limiter.reset()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()

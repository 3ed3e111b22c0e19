"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import (
    Board,
    BoardConfig,
    Cell,
    GameController,
    ManualScheduler,
    place_mines,
)


# Mines used by the rigged 5x5 fixtures. Revealing (2, 2) floods every
# safe cell; (1, 1) shows 1 and touches the mine at (0, 0).
RIGGED_MINES = [(0, 0), (0, 4), (4, 4)]


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create an unpopulated 10x10 board."""
    return Board.empty(10)


@pytest.fixture
def empty_board() -> Board:
    """Create a 5x5 board with no mines for cascade testing."""
    return place_mines(5, [])


@pytest.fixture
def rigged_board() -> Board:
    """Create a 5x5 board with mines at RIGGED_MINES."""
    return place_mines(5, RIGGED_MINES)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Controller Fixtures
# ============================================================================

@pytest.fixture
def scheduler() -> ManualScheduler:
    """Create a scheduler driven by a virtual clock."""
    return ManualScheduler()


@pytest.fixture
def controller(scheduler: ManualScheduler) -> GameController:
    """Create a default 10x10, 15 mine controller with a seeded generator."""
    return GameController(
        BoardConfig(10, 15), scheduler=scheduler, rng=random.Random(1234)
    )


@pytest.fixture
def rigged_controller(
    scheduler: ManualScheduler, rigged_board: Board
) -> GameController:
    """Create a started 5x5 game on the rigged board."""
    controller = GameController(BoardConfig(5, 3), scheduler=scheduler)
    controller.state.board = rigged_board
    controller.state.first_click_done = True
    return controller


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(10, 15)


@pytest.fixture
def small_config() -> BoardConfig:
    """Create a 5x5 configuration with 3 mines."""
    return BoardConfig(5, 3)

"""
Board generation for Minesweeper.

Places mines by rejection sampling, optionally keeping a safe zone
around the first click, then computes adjacent mine counts.
"""
import logging
import random
from typing import Iterable, Optional, Set

from .board import Board, InvalidConfiguration, Position


logger = logging.getLogger(__name__)


# ============================================================================
# Safe Zone (Low-level)
# ============================================================================

def _safe_zone(board: Board, exclude: Optional[Position]) -> Set[Position]:
    """Positions within Chebyshev distance 1 of ``exclude``, clipped."""
    if exclude is None:
        return set()
    x, y = exclude
    zone = set(board.neighbors(x, y))
    if board.in_bounds(x, y):
        zone.add((x, y))
    return zone


def _in_safe_zone(x: int, y: int, exclude: Optional[Position]) -> bool:
    """Check if (x, y) is within Chebyshev distance 1 of ``exclude``."""
    if exclude is None:
        return False
    return abs(x - exclude[0]) <= 1 and abs(y - exclude[1]) <= 1


# ============================================================================
# Adjacent Counts
# ============================================================================

def calculate_adjacent_mines(board: Board) -> None:
    """Calculate adjacent mine counts for all non-mine cells."""
    for x, y in board.positions():
        cell = board.get_cell(x, y)
        if cell.is_mine:
            continue
        cell.adjacent_mines = sum(
            1 for nx, ny in board.neighbors(x, y)
            if board.get_cell(nx, ny).is_mine
        )


# ============================================================================
# Generation
# ============================================================================

def generate(
    size: int,
    mine_count: int,
    exclude: Optional[Position] = None,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Generate a populated board.

    Args:
        size: Number of rows and columns.
        mine_count: Number of mines to place.
        exclude: Optional (x, y) whose 3x3 neighborhood stays mine-free.
        rng: Random source, defaults to the module-level generator.

    Returns:
        A new board with mines placed and adjacent counts computed.

    Raises:
        InvalidConfiguration: If the mines cannot fit outside the
            safe zone.
    """
    if size < 1:
        raise InvalidConfiguration("Board size must be positive")
    if mine_count < 0:
        raise InvalidConfiguration("Number of mines cannot be negative")

    board = Board.empty(size)
    playable = size * size - len(_safe_zone(board, exclude))
    if mine_count and mine_count >= playable:
        raise InvalidConfiguration(
            f"Cannot place {mine_count} mines in {playable} playable cells"
        )

    rng = rng or random
    placed = 0
    while placed < mine_count:
        x = rng.randrange(size)
        y = rng.randrange(size)
        cell = board.get_cell(x, y)
        if cell.is_mine or _in_safe_zone(x, y, exclude):
            continue
        cell.is_mine = True
        placed += 1

    calculate_adjacent_mines(board)
    logger.debug(
        "Generated %dx%d board with %d mines (exclude=%s)",
        size, size, mine_count, exclude,
    )
    return board


def place_mines(size: int, positions: Iterable[Position]) -> Board:
    """
    Build a board from an explicit mine layout.

    Args:
        size: Number of rows and columns.
        positions: (x, y) positions that hold mines.

    Returns:
        A new board with the given mines and computed counts.
    """
    board = Board.empty(size)
    for x, y in positions:
        cell = board.get_cell(x, y)
        if cell is None:
            raise InvalidConfiguration(f"Mine position {(x, y)} out of bounds")
        cell.is_mine = True
    calculate_adjacent_mines(board)
    return board

"""
Board module for Minesweeper game.

Holds the square grid of cells, its configuration and the
neighborhood queries shared by generation, revealing and the
explosion cascade.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell


Position = Tuple[int, int]

# Largest first-click safe zone: the clicked cell plus its 8 neighbors.
SAFE_ZONE_CELLS = 9


class InvalidConfiguration(ValueError):
    """Board size and mine count cannot produce a playable board."""


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        size: Number of rows and columns of the square board.
        num_mines: Total mines to place.
    """

    size: int = 10
    num_mines: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise InvalidConfiguration("Board size must be positive")
        if self.num_mines < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        if self.num_mines == 0:
            return
        total = self.size * self.size
        playable = total - min(SAFE_ZONE_CELLS, total)
        if self.num_mines >= playable:
            raise InvalidConfiguration(
                f"Too many mines (must be fewer than {playable})"
            )

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.size * self.size


DEFAULT = BoardConfig(10, 15)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Square Minesweeper grid.

    ``x`` indexes the outer list and ``y`` the inner list, so
    ``board.get_cell(x, y)`` is ``grid[x][y]``.
    """

    size: int
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Create an empty grid unless one was supplied."""
        if not self._grid:
            self._grid = [
                [Cell() for _ in range(self.size)]
                for _ in range(self.size)
            ]

    @classmethod
    def empty(cls, size: int) -> "Board":
        """Build an unpopulated board with no mines."""
        return cls(size)

    # ========================================================================
    # Neighbor Utilities
    # ========================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.size and 0 <= y < self.size

    def neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            x: Outer index of center cell.
            y: Inner index of center cell.

        Returns:
            List of (x, y) tuples for the in-bounds Moore neighborhood,
            fewer than 8 on edges and corners.
        """
        neighbors = []
        for delta_x in (-1, 0, 1):
            for delta_y in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.in_bounds(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    # ========================================================================
    # State Accessors
    # ========================================================================

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.in_bounds(x, y):
            return None
        return self._grid[x][y]

    def positions(self) -> Iterator[Position]:
        """Iterate over every board position in row-major order."""
        for x in range(self.size):
            for y in range(self.size):
                yield x, y

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for row in self._grid:
            yield from row

    @property
    def mine_count(self) -> int:
        """Number of mines on the board."""
        return sum(1 for cell in self.cells() if cell.is_mine)

    @property
    def flag_count(self) -> int:
        """Number of flagged cells."""
        return sum(1 for cell in self.cells() if cell.flagged)

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells."""
        return sum(1 for cell in self.cells() if cell.revealed)

    def hidden_positions(self) -> List[Position]:
        """
        Get positions that can still be revealed.

        Returns:
            List of (x, y) positions that are neither revealed nor flagged.
        """
        return [
            (x, y) for x, y in self.positions()
            if self._grid[x][y].is_hidden
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for ML agent.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
                10 = hidden and exploding
        """
        obs = np.zeros((self.size, self.size), dtype=np.int8)
        for x, y in self.positions():
            obs[x, y] = self._grid[x][y].to_observation()
        return obs

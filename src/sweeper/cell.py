"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their flags
(revealed/flagged/exploding) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_OBS = -1
FLAGGED_OBS = -2
MINE_OBS = 9
EXPLODING_OBS = 10


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        revealed: Whether the cell has been uncovered. Never reverts.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        flagged: Player marker. Never set on a revealed cell.
        exploding: Set once the explosion cascade reaches this cell.
    """

    is_mine: bool = False
    revealed: bool = False
    adjacent_mines: int = 0
    flagged: bool = False
    exploding: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.revealed or self.flagged:
            return False
        self.revealed = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.revealed:
            return False
        self.flagged = not self.flagged
        return True

    def explode(self) -> bool:
        """Mark a still-hidden cell as caught in the blast."""
        if self.revealed:
            return False
        self.exploding = True
        return True

    @property
    def state(self) -> CellState:
        """Visual state derived from the revealed/flagged flags."""
        if self.flagged:
            return CellState.FLAGGED
        if self.revealed:
            return CellState.REVEALED
        return CellState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return not self.revealed and not self.flagged

    def to_observation(self) -> int:
        """
        Convert cell to observation value for ML agent.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
            10: Hidden cell marked exploding
        """
        if self.flagged:
            return FLAGGED_OBS
        if self.revealed:
            return MINE_OBS if self.is_mine else self.adjacent_mines
        if self.exploding:
            return EXPLODING_OBS
        return HIDDEN_OBS

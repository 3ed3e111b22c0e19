"""
Unit tests for board generation.

Tests mine placement, adjacent counts, the first-click safe zone and
configuration errors.
"""
import random

import pytest
from sweeper import Board, InvalidConfiguration, generate, place_mines


def _true_count(board: Board, x: int, y: int) -> int:
    """Count mines around (x, y) by brute force."""
    count = 0
    for nx in range(x - 1, x + 2):
        for ny in range(y - 1, y + 2):
            if (nx, ny) == (x, y):
                continue
            cell = board.get_cell(nx, ny)
            if cell is not None and cell.is_mine:
                count += 1
    return count


# ============================================================================
# Placement Tests
# ============================================================================

class TestMinePlacement:
    """Test mine count and adjacent counts."""

    @pytest.mark.parametrize("seed", range(20))
    def test_exact_mine_count(self, seed: int) -> None:
        """Generated boards hold exactly the requested mines."""
        board = generate(10, 15, rng=random.Random(seed))
        assert board.mine_count == 15

    @pytest.mark.parametrize("seed", range(20))
    def test_adjacent_counts_are_correct(self, seed: int) -> None:
        """Every non-mine count matches its mine neighbors."""
        board = generate(10, 15, exclude=(4, 4), rng=random.Random(seed))
        for x, y in board.positions():
            cell = board.get_cell(x, y)
            if not cell.is_mine:
                assert cell.adjacent_mines == _true_count(board, x, y)

    def test_generated_board_is_hidden(self) -> None:
        """Generation does not reveal or flag anything."""
        board = generate(10, 15, rng=random.Random(0))
        assert all(cell.is_hidden for cell in board.cells())

    def test_same_seed_same_layout(self) -> None:
        """Seeded generators reproduce the layout."""
        first = generate(10, 15, exclude=(3, 3), rng=random.Random(42))
        second = generate(10, 15, exclude=(3, 3), rng=random.Random(42))
        assert [c.is_mine for c in first.cells()] == [
            c.is_mine for c in second.cells()
        ]

    def test_dense_board_without_exclusion(self) -> None:
        """Without a safe zone every cell but one can be a mine."""
        board = generate(3, 8, rng=random.Random(7))
        assert board.mine_count == 8

    def test_module_random_used_by_default(self) -> None:
        """Generation works without an explicit random source."""
        assert generate(10, 15).mine_count == 15


# ============================================================================
# Safe Zone Tests
# ============================================================================

class TestSafeZone:
    """Test the first-click exclusion zone."""

    @pytest.mark.parametrize("seed", range(3))
    def test_no_mine_near_any_first_click(self, seed: int) -> None:
        """The clicked cell and its neighbors are never mines."""
        rng = random.Random(seed)
        for x in range(10):
            for y in range(10):
                board = generate(10, 15, exclude=(x, y), rng=rng)
                assert not board.get_cell(x, y).is_mine
                for nx, ny in board.neighbors(x, y):
                    assert not board.get_cell(nx, ny).is_mine

    @pytest.mark.parametrize("seed", range(50))
    def test_corner_first_click(self, seed: int) -> None:
        """A corner click keeps its 2x2 block clear."""
        board = generate(10, 15, exclude=(0, 0), rng=random.Random(seed))
        for position in [(0, 0), (0, 1), (1, 0), (1, 1)]:
            assert not board.get_cell(*position).is_mine

    def test_tight_corner_fill(self) -> None:
        """Mines fill every cell outside a corner safe zone but one."""
        board = generate(4, 11, exclude=(0, 0), rng=random.Random(3))
        assert board.mine_count == 11
        assert board.get_cell(1, 1).adjacent_mines > 0


# ============================================================================
# Configuration Error Tests
# ============================================================================

class TestInvalidConfiguration:
    """Test fail-fast configuration checks."""

    def test_no_playable_cells(self) -> None:
        """A 3x3 board with a centered safe zone has no room."""
        with pytest.raises(InvalidConfiguration):
            generate(3, 1, exclude=(1, 1))

    def test_mines_equal_to_playable_cells(self) -> None:
        """Mine count equal to playable cells is rejected."""
        with pytest.raises(InvalidConfiguration):
            generate(4, 12, exclude=(0, 0))

    def test_mines_fill_board_without_exclusion(self) -> None:
        """Mine count equal to cell count is rejected."""
        with pytest.raises(InvalidConfiguration):
            generate(2, 4)

    def test_zero_mines_with_full_exclusion(self) -> None:
        """No mines means nothing to place."""
        board = generate(3, 0, exclude=(1, 1))
        assert board.mine_count == 0

    def test_negative_mines(self) -> None:
        """Negative mine counts are rejected."""
        with pytest.raises(InvalidConfiguration):
            generate(5, -1)

    def test_zero_size(self) -> None:
        """Empty boards are rejected."""
        with pytest.raises(InvalidConfiguration):
            generate(0, 0)


# ============================================================================
# Explicit Layout Tests
# ============================================================================

class TestPlaceMines:
    """Test building boards from a fixed layout."""

    def test_layout_counts(self, rigged_board: Board) -> None:
        """Counts are computed for an explicit layout."""
        assert rigged_board.mine_count == 3
        assert rigged_board.get_cell(1, 1).adjacent_mines == 1
        assert rigged_board.get_cell(2, 2).adjacent_mines == 0
        assert rigged_board.get_cell(3, 3).adjacent_mines == 1

    def test_out_of_bounds_mine(self) -> None:
        """Mines outside the board are rejected."""
        with pytest.raises(InvalidConfiguration):
            place_mines(3, [(3, 0)])

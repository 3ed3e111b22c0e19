"""
Reveal engine for Minesweeper.

Flood-fill reveal of zero-count regions and chorded reveal of the
neighbors around a numbered cell.
"""
from typing import List

from .board import Board, Position


def reveal(board: Board, x: int, y: int) -> List[Position]:
    """
    Reveal a cell, expanding through zero-count cells.

    Expansion stops at numbered cells (revealed but not expanded),
    flagged cells (left hidden with their flag) and cells already
    revealed. A mine is revealed without expansion.

    Args:
        board: Board to mutate.
        x: Outer index of the cell.
        y: Inner index of the cell.

    Returns:
        Positions revealed by this call, in reveal order. Empty when
        the target is out of bounds, revealed or flagged.
    """
    revealed = []
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        cell = board.get_cell(cx, cy)
        if cell is None or not cell.reveal():
            continue
        revealed.append((cx, cy))
        if cell.is_mine or cell.adjacent_mines > 0:
            continue
        for neighbor in board.neighbors(cx, cy):
            if board.get_cell(*neighbor).is_hidden:
                stack.append(neighbor)
    return revealed


def can_chord(board: Board, x: int, y: int) -> bool:
    """Check if chord action applies: revealed cell with a count."""
    cell = board.get_cell(x, y)
    return cell is not None and cell.revealed and cell.adjacent_mines > 0


def chord_reveal(board: Board, x: int, y: int) -> List[Position]:
    """
    Reveal every unflagged hidden neighbor of a numbered cell.

    The flag count around the cell is not compared with its mine
    count, so chording next to an unflagged mine reveals it.

    Returns:
        Positions revealed, in reveal order. Empty if the chord
        does not apply.
    """
    if not can_chord(board, x, y):
        return []

    revealed = []
    for nx, ny in board.neighbors(x, y):
        if board.get_cell(nx, ny).is_hidden:
            revealed.extend(reveal(board, nx, ny))
    return revealed

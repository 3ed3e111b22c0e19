"""
Explosion cascade for a detonated mine.

Cells around the mine are marked exploding one at a time, each on
its own timer, producing a ripple the presentation layer animates.
"""
import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import ContextManager, List, Optional

from .board import Board, Position
from .scheduler import Scheduler


logger = logging.getLogger(__name__)

BLAST_RADIUS = 2
CASCADE_STEP_MS = 100


@dataclass(frozen=True)
class CascadeStep:
    """One cell of the cascade and its delay from detonation."""

    position: Position
    delay_ms: int


def blast_zone(
    board: Board, x: int, y: int, radius: int = BLAST_RADIUS
) -> List[Position]:
    """
    Positions within Chebyshev distance ``radius`` of (x, y).

    Scan order is x-offset outer, y-offset inner, each from
    ``-radius`` to ``radius``; out-of-bounds positions are dropped.
    """
    zone = []
    for delta_x in range(-radius, radius + 1):
        for delta_y in range(-radius, radius + 1):
            if board.in_bounds(x + delta_x, y + delta_y):
                zone.append((x + delta_x, y + delta_y))
    return zone


def plan_cascade(
    board: Board,
    x: int,
    y: int,
    radius: int = BLAST_RADIUS,
    step_ms: int = CASCADE_STEP_MS,
) -> List[CascadeStep]:
    """Pair each blast zone position with ``index * step_ms``."""
    return [
        CascadeStep(position, index * step_ms)
        for index, position in enumerate(blast_zone(board, x, y, radius))
    ]


def schedule_cascade(
    board: Board,
    steps: List[CascadeStep],
    scheduler: Scheduler,
    lock: Optional[ContextManager] = None,
) -> None:
    """
    Hand every cascade step to ``scheduler`` as an independent timer.

    When a step fires, the cell is marked exploding unless it has been
    revealed by then. Timers are never cancelled and only touch
    ``board``.

    Args:
        board: Board the cascade belongs to.
        steps: Output of ``plan_cascade``.
        scheduler: Timer source.
        lock: Held while a step mutates the board.
    """
    guard = lock if lock is not None else nullcontext()

    def make_callback(position: Position):
        def fire() -> None:
            with guard:
                board.get_cell(*position).explode()
        return fire

    for step in steps:
        scheduler.call_later(step.delay_ms, make_callback(step.position))

    logger.debug("Scheduled %d-cell explosion cascade", len(steps))

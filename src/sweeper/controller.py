"""
Game controller for Minesweeper.

Owns the per-game state and exposes the actions a presentation
layer wires to clicks, the once-per-second clock and the reset
button.
"""
import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .board import Board, BoardConfig, DEFAULT
from .explosion import plan_cascade, schedule_cascade
from .generator import generate
from .reveal import chord_reveal, reveal
from .scheduler import ManualScheduler, Scheduler


logger = logging.getLogger(__name__)

TICK_MS = 1000


# ============================================================================
# Game State
# ============================================================================

class GamePhase(Enum):
    """Phases of a single game. There is no won phase."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    LOST = auto()


@dataclass
class GameState:
    """
    Everything that belongs to one game.

    Attributes:
        board: Current board, unpopulated until the first reveal.
        game_over: Set when a mine detonates. Freezes all actions.
        first_click_done: Set once the board has been generated.
        elapsed_seconds: Clock value, advanced by ``tick``.
        flags_remaining: Mines minus flags placed. Can go negative.
    """

    board: Board
    flags_remaining: int
    game_over: bool = False
    first_click_done: bool = False
    elapsed_seconds: int = 0

    @classmethod
    def fresh(cls, config: BoardConfig) -> "GameState":
        """State for a new game with an unpopulated board."""
        return cls(
            board=Board.empty(config.size),
            flags_remaining=config.num_mines,
        )

    @property
    def phase(self) -> GamePhase:
        """Phase derived from the game over and first click flags."""
        if self.game_over:
            return GamePhase.LOST
        if self.first_click_done:
            return GamePhase.IN_PROGRESS
        return GamePhase.NOT_STARTED


# ============================================================================
# Game Controller
# ============================================================================

class GameController:
    """
    Public API over a Minesweeper game.

    Invalid actions are no-ops that return False. Every mutation,
    including cascade timers, runs under one re-entrant lock.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the controller with an unstarted game.

        Args:
            config: Board size and mine count (default: 10x10, 15 mines).
            scheduler: Timer source for the explosion cascade
                (default: a ManualScheduler).
            rng: Random source for board generation.
        """
        self.config = config or DEFAULT
        self.scheduler = scheduler or ManualScheduler()
        self.rng = rng
        self._lock = threading.RLock()
        self._state = GameState.fresh(self.config)

    @property
    def state(self) -> GameState:
        """Current game state."""
        return self._state

    @property
    def board(self) -> Board:
        """Board of the current game."""
        return self._state.board

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal_cell(self, x: int, y: int) -> bool:
        """
        Reveal a cell.

        The first reveal of a game regenerates the board so that
        (x, y) and its neighbors are mine-free. Revealing a mine ends
        the game and starts the explosion cascade.

        Returns:
            True if state changed.
        """
        with self._lock:
            state = self._state
            if state.game_over:
                return False
            cell = state.board.get_cell(x, y)
            if cell is None or cell.revealed or cell.flagged:
                return False

            if not state.first_click_done:
                self._handle_first_click(x, y)

            if state.board.get_cell(x, y).is_mine:
                self._detonate(x, y)
                return True

            reveal(state.board, x, y)
            return True

    def _handle_first_click(self, x: int, y: int) -> None:
        """Generate the board around the first click, keeping flags."""
        state = self._state
        flagged = [
            position for position in state.board.positions()
            if state.board.get_cell(*position).flagged
        ]
        state.board = generate(
            self.config.size, self.config.num_mines, exclude=(x, y), rng=self.rng
        )
        for position in flagged:
            state.board.get_cell(*position).flagged = True
        state.first_click_done = True
        logger.info("First click at %s, board generated", (x, y))

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a hidden cell.

        Returns:
            True if flag was toggled.
        """
        with self._lock:
            state = self._state
            if state.game_over:
                return False
            cell = state.board.get_cell(x, y)
            if cell is None or not cell.toggle_flag():
                return False
            state.flags_remaining += -1 if cell.flagged else 1
            return True

    def chord(self, x: int, y: int) -> bool:
        """
        Reveal all unflagged neighbors of a revealed numbered cell.

        Flags around the cell are not counted first, so a chord can
        hit a mine, which ends the game as a normal reveal would.

        Returns:
            True if any cell was revealed.
        """
        with self._lock:
            state = self._state
            if state.game_over:
                return False
            revealed = chord_reveal(state.board, x, y)
            for position in revealed:
                if state.board.get_cell(*position).is_mine:
                    self._detonate(*position)
                    break
            return bool(revealed)

    def tick(self) -> bool:
        """Advance the clock by one second unless the game is over."""
        with self._lock:
            if self._state.game_over:
                return False
            self._state.elapsed_seconds += 1
            return True

    def tick_for(self, state: GameState) -> bool:
        """
        Tick only if ``state`` is still the current, unfinished game.

        The identity check and the tick happen under one lock hold, so
        a ``new_game`` on another thread cannot slip in between.

        Returns:
            True if the clock advanced.
        """
        with self._lock:
            if state is not self._state:
                return False
            return self.tick()

    def new_game(self) -> GameState:
        """Replace the current game with a fresh one."""
        with self._lock:
            self._state = GameState.fresh(self.config)
            logger.info("New game started")
            return self._state

    # ========================================================================
    # Loss
    # ========================================================================

    def _detonate(self, x: int, y: int) -> None:
        """End the game and schedule the explosion cascade."""
        state = self._state
        state.game_over = True
        logger.info("Mine detonated at %s", (x, y))
        steps = plan_cascade(state.board, x, y)
        schedule_cascade(state.board, steps, self.scheduler, lock=self._lock)


# ============================================================================
# Game Clock
# ============================================================================

class GameClock:
    """
    Calls ``controller.tick`` every ``interval_ms`` through a scheduler.

    The clock follows one game: it stops for good when that game ends
    or is replaced by ``new_game``. Call ``start`` again for the next
    game.
    """

    def __init__(
        self,
        controller: GameController,
        scheduler: Scheduler,
        interval_ms: int = TICK_MS,
    ) -> None:
        self.controller = controller
        self.scheduler = scheduler
        self.interval_ms = interval_ms
        self._state: Optional[GameState] = None
        self._generation = 0

    @property
    def running(self) -> bool:
        """Whether the clock is following a live game."""
        state = self._state
        return (
            state is not None
            and state is self.controller.state
            and not state.game_over
        )

    def start(self) -> None:
        """Start following the controller's current game."""
        if self.running:
            return
        self._generation += 1
        self._state = self.controller.state
        self._schedule(self._generation, self._state)

    def _schedule(self, generation: int, state: GameState) -> None:
        self.scheduler.call_later(
            self.interval_ms, lambda: self._on_tick(generation, state)
        )

    def _on_tick(self, generation: int, state: GameState) -> None:
        if generation != self._generation:
            return
        if self.controller.tick_for(state):
            self._schedule(generation, state)

"""
Gymnasium environment wrapper for Minesweeper.

Drives a GameController so agents play by the same rules as a
human front end, including the explosion cascade on loss.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, DEFAULT, Position
from .cell import EXPLODING_OBS, FLAGGED_OBS
from .controller import GameController
from .scheduler import ManualScheduler


# ============================================================================
# Rendering
# ============================================================================

def render_board(board: Board) -> str:
    """
    Render board as ASCII string.

    ``F`` flag, ``!`` flag caught in the blast, ``*`` revealed mine,
    digit or blank for revealed cells, ``#`` hidden cell caught in the
    blast, ``.`` hidden cell.
    """
    lines = []
    for x in range(board.size):
        row_str = ""
        for y in range(board.size):
            cell = board.get_cell(x, y)
            if cell.flagged:
                row_str += "!" if cell.exploding else "F"
            elif cell.revealed and cell.is_mine:
                row_str += "*"
            elif cell.revealed:
                row_str += str(cell.adjacent_mines) if cell.adjacent_mines else " "
            elif cell.exploding:
                row_str += "#"
            else:
                row_str += "."
            row_str += " "
        lines.append(row_str)
    return "\n".join(lines)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine
        - 10 = hidden cell caught in the explosion

    Actions:
        Discrete action space of size size * size.
        Action i reveals the cell at (i // size, i % size).

    Rewards:
        - +1 for revealing a safe cell
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)

    The game has no win state, so episodes end on a mine or at
    ``max_steps``.
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 10x10 with 15 mines).
            render_mode: How to render the environment.
            max_steps: Step limit before truncation (default: cell count).
        """
        super().__init__()

        self.config = config or DEFAULT
        self.render_mode = render_mode
        self.max_steps = max_steps or self.config.total_cells
        self.scheduler = ManualScheduler()
        self.controller = GameController(self.config, scheduler=self.scheduler)

        self.observation_space = spaces.Box(
            low=FLAGGED_OBS,
            high=EXPLODING_OBS,
            shape=(self.config.size, self.config.size),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        # Board layout follows the seeded episode stream
        self.controller.rng = random.Random(
            int(self.np_random.integers(2**32))
        )
        self.controller.new_game()
        self._steps = 0

        return self.controller.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (x * size + y).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(x, y)

        terminated = self.controller.state.game_over
        if terminated:
            # Play the whole cascade so the final frame shows the blast
            self.scheduler.run_all()
        truncated = not terminated and self._steps >= self.max_steps

        observation = self.controller.board.get_observation()
        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Position:
        """Convert flat action index to (x, y) position."""
        return int(action) // self.config.size, int(action) % self.config.size

    def _calculate_reward(self, x: int, y: int) -> float:
        """
        Calculate reward for revealing a cell.

        Args:
            x: Outer index.
            y: Inner index.

        Returns:
            Reward value.
        """
        if not self.controller.reveal_cell(x, y):
            return -0.1
        if self.controller.state.game_over:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        state = self.controller.state
        return {
            "steps": self._steps,
            "revealed": state.board.revealed_count,
            "phase": state.phase.name,
            "flags_remaining": state.flags_remaining,
            "valid_actions": len(state.board.hidden_positions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.controller.board)
        if self.render_mode == "human":
            print(render_board(self.controller.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.controller.state.game_over:
            return mask
        for x, y in self.controller.board.hidden_positions():
            mask[x * self.config.size + y] = True
        return mask

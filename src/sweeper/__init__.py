"""
Minesweeper game module.

Provides the core game logic: board model, generation, reveal engine,
explosion cascade and the game controller a front end drives.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, InvalidConfiguration, DEFAULT
from .generator import generate, place_mines
from .reveal import reveal, chord_reveal
from .scheduler import Scheduler, ManualScheduler, ThreadingScheduler
from .explosion import CascadeStep, blast_zone, plan_cascade, schedule_cascade
from .controller import GameClock, GameController, GamePhase, GameState
from .environment import MinesweeperEnv, render_board

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "InvalidConfiguration",
    "DEFAULT",
    "generate",
    "place_mines",
    "reveal",
    "chord_reveal",
    "Scheduler",
    "ManualScheduler",
    "ThreadingScheduler",
    "CascadeStep",
    "blast_zone",
    "plan_cascade",
    "schedule_cascade",
    "GameClock",
    "GameController",
    "GamePhase",
    "GameState",
    "MinesweeperEnv",
    "render_board",
]

"""
mnswpr - terminal minesweeper engine.

Provides the minefield, its cells, game configuration, a game session
and a Gymnasium environment.
"""
from .cell import Cell, CellContent, CellState
from .field import Field, MAX_MINE_PERCENTAGE
from .config import GameConfig, SizePreset, TINY, SMALL, MEDIUM, LARGE, HUGE
from .game import Cursor, Direction, Game, GameStatus
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellContent",
    "CellState",
    "Field",
    "MAX_MINE_PERCENTAGE",
    "GameConfig",
    "SizePreset",
    "TINY",
    "SMALL",
    "MEDIUM",
    "LARGE",
    "HUGE",
    "Cursor",
    "Direction",
    "Game",
    "GameStatus",
    "MinesweeperEnv",
]

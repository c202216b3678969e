"""
Game session module for mnswpr.

Drives a Field for one player: cursor movement, deferred mine placement
on the first move, assisted opening and flagging, and win/lose status.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .cell import OBS_CLOSED, OBS_FLAGGED, OBS_MINE, OBS_WRONG_FLAG
from .config import GameConfig
from .field import Field


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class Direction(Enum):
    """Cursor movement directions."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


# Text symbol for each observation value that is not a plain count
SYMBOLS = {
    OBS_CLOSED: ".",
    OBS_FLAGGED: "F",
    OBS_WRONG_FLAG: "X",
    OBS_MINE: "*",
    0: " ",
}


@dataclass
class Cursor:
    """Position of the player's cursor."""

    row: int = 0
    col: int = 0


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    A single game of mnswpr.

    Mines are placed on the first opening move, keeping the cell under
    the cursor and its neighbours safe.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        """
        Initialize a new game.

        Args:
            config: Game configuration (default: tiny board, 20% mines).
        """
        self.config = config or GameConfig()
        self.field = Field(
            self.config.rows, self.config.cols, seed=self.config.seed
        )
        self.cursor = Cursor()
        self._status = GameStatus.PLAYING
        self._first_move = True

    # ========================================================================
    # Cursor
    # ========================================================================

    def move_cursor(self, direction: Direction) -> None:
        """Move the cursor one cell, stopping at the field edges."""
        last_row = self.field.rows - 1
        last_col = self.field.cols - 1
        if direction == Direction.UP and self.cursor.row > 0:
            self.cursor.row -= 1
        elif direction == Direction.DOWN and self.cursor.row < last_row:
            self.cursor.row += 1
        elif direction == Direction.LEFT and self.cursor.col > 0:
            self.cursor.col -= 1
        elif direction == Direction.RIGHT and self.cursor.col < last_col:
            self.cursor.col += 1

    # ========================================================================
    # Moves
    # ========================================================================

    def open_at(self, row: int, col: int) -> bool:
        """
        Open the cell at (row, col).

        On the first move, mines are placed around this cell. With assisted
        opening, opening a satisfied number opens all of its closed
        neighbours instead.

        Returns:
            True if the move was played, False if the game is over or the
            position is out of bounds.
        """
        if not self.is_playing or self.field.get(row, col) is None:
            return False

        if self._first_move:
            self.field.randomize(self.config.mine_percentage, row, col)
            self._first_move = False

        if (
            self.config.assisted_opening
            and self.field.is_satisfied_for_opening(row, col)
        ):
            fatal = self.field.uncover_around_cell_at(row, col)
        else:
            fatal = self.field.uncover_at(row, col)

        if fatal:
            self._status = GameStatus.LOST
        else:
            self._check_win_condition()
        return True

    def flag_at(self, row: int, col: int) -> bool:
        """
        Toggle the flag at (row, col).

        Ignored before the first opening move. With assisted flagging,
        flagging a satisfied number flags all of its closed neighbours.

        Returns:
            True if the move was played, False otherwise.
        """
        if not self.is_playing or self._first_move:
            return False
        if self.field.get(row, col) is None:
            return False

        if (
            self.config.assisted_flagging
            and self.field.is_satisfied_for_flagging(row, col)
        ):
            self.field.unflag_all_closed_around(row, col)

        self.field.toggle_flag_at(row, col)
        self._check_win_condition()
        return True

    def open_at_cursor(self) -> bool:
        """Open the cell under the cursor."""
        return self.open_at(self.cursor.row, self.cursor.col)

    def flag_at_cursor(self) -> bool:
        """Toggle the flag under the cursor."""
        return self.flag_at(self.cursor.row, self.cursor.col)

    def _check_win_condition(self) -> None:
        """Check if every empty cell is open, not closed or flagged."""
        if self.field.is_won and self.field.flagged_empty_cells == 0:
            self._status = GameStatus.WON

    def reset(self) -> None:
        """Reset to a fresh game with the same configuration."""
        self.field.reset()
        self.cursor = Cursor()
        self._status = GameStatus.PLAYING
        self._first_move = True

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        return self._status

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._status == GameStatus.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._status == GameStatus.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._status == GameStatus.LOST

    @property
    def first_move(self) -> bool:
        """Check if mines are still waiting to be placed."""
        return self._first_move

    # ========================================================================
    # Rendering
    # ========================================================================

    def render(self) -> str:
        """
        Render the game as plain text.

        The header shows mine and flag counts. The cell under the cursor is
        wrapped in brackets. After a loss every mine is shown and misplaced
        flags are marked with X.
        """
        lines = [
            f"Mines:{self.field.mine_count}    Flags:{self.field.flag_count}"
        ]
        obs = self.field.get_observation(reveal_mines=self.is_lost)

        for row in range(self.field.rows):
            row_str = ""
            for col in range(self.field.cols):
                value = int(obs[row, col])
                symbol = SYMBOLS.get(value, str(value))
                if (row, col) == (self.cursor.row, self.cursor.col):
                    row_str += f"[{symbol}]"
                else:
                    row_str += f" {symbol} "
            lines.append(row_str)

        if self.is_won:
            lines.append("You won!")
        elif self.is_lost:
            lines.append("You lost!")

        return "\n".join(lines)

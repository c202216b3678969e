"""
Cell module for the mnswpr field.

Represents a single grid position with its state
(closed/open/flagged), content (mine/empty) and neighbouring mine count.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    CLOSED = auto()
    OPEN = auto()
    FLAGGED = auto()


class CellContent(Enum):
    """What lies under a cell."""

    MINE = auto()
    EMPTY = auto()


# Observation codes shared with renderers
OBS_CLOSED = -1
OBS_FLAGGED = -2
OBS_WRONG_FLAG = -3
OBS_MINE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single cell of the field.

    Attributes:
        state: Current visual state (closed, open, or flagged).
        content: Mine or empty, fixed once mines are placed.
        neighbour_bomb_count: Count of mines in neighbouring cells (0-8).
    """

    state: CellState = CellState.CLOSED
    content: CellContent = CellContent.EMPTY
    neighbour_bomb_count: int = 0

    def set_state(self, new_state: CellState) -> None:
        """Move the cell to `new_state`."""
        self.state = new_state

    @property
    def is_closed(self) -> bool:
        """Check if cell is closed."""
        return self.state == CellState.CLOSED

    @property
    def is_open(self) -> bool:
        """Check if cell is open."""
        return self.state == CellState.OPEN

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def contains_mine(self) -> bool:
        return self.content == CellContent.MINE

    @property
    def is_empty(self) -> bool:
        return self.content == CellContent.EMPTY

    def to_observation(self, reveal_mines: bool = False) -> int:
        """
        Convert cell to an observation value for renderers and agents.

        Args:
            reveal_mines: Show the true content of closed and flagged
                cells, as on a lost game.

        Returns:
            -1: Closed cell
            -2: Flagged cell
            -3: Flag on an empty cell (only with reveal_mines)
            0-8: Open cell with neighbouring mine count
            9: Mine (open, or any mine with reveal_mines)
        """
        if reveal_mines:
            if self.contains_mine:
                return OBS_MINE
            if self.is_flagged:
                return OBS_WRONG_FLAG
            return self.neighbour_bomb_count
        if self.state == CellState.CLOSED:
            return OBS_CLOSED
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.contains_mine:
            return OBS_MINE
        return self.neighbour_bomb_count

"""
Field module for mnswpr.

Implements the minefield: grid storage, mine placement with a safe area
around the first click, neighbour counting, flood-fill reveal, flag
bookkeeping and the assisted opening/flagging operations.
"""
import random
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellContent, CellState


# ============================================================================
# Constants
# ============================================================================

# A 100% board would leave nothing to open outside the safe area
MAX_MINE_PERCENTAGE = 99

# Chebyshev radius kept mine-free around the first click
SAFE_RADIUS = 1


# ============================================================================
# Field Class
# ============================================================================

@dataclass
class Field:
    """
    Minesweeper field.

    Owns a flat row-major grid of cells plus the counters derived from it.
    Every position-taking operation returns None (or False) for positions
    outside the grid instead of raising.

    Attributes:
        rows: Number of rows, at least 1.
        cols: Number of columns, at least 1.
        seed: Seed for the mine placement RNG (None for a random seed).
        mine_count: Mines currently placed.
        flag_count: Cells currently flagged.
        closed_empty_cells: Cells that are both closed and empty. The game
            is won when it reaches 0.
        flagged_empty_cells: Cells that are both flagged and empty, i.e.
            misplaced flags.
    """

    rows: int
    cols: int
    seed: Optional[int] = None
    mine_count: int = field(default=0, init=False)
    flag_count: int = field(default=0, init=False)
    closed_empty_cells: int = field(default=0, init=False)
    flagged_empty_cells: int = field(default=0, init=False)
    _grid: List[Cell] = field(default_factory=list, init=False, repr=False)
    _rng: random.Random = field(
        default_factory=random.Random, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Normalize dimensions and build the empty grid."""
        self.rows = max(self.rows, 1)
        self.cols = max(self.cols, 1)
        self._rng = random.Random(self.seed)
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create an empty grid: all closed, no mines, zero counters."""
        self._grid = [Cell() for _ in range(self.rows * self.cols)]
        self.closed_empty_cells = self.rows * self.cols
        self.mine_count = 0
        self.flag_count = 0
        self.flagged_empty_cells = 0

    def reset(self) -> None:
        """Reset the field to an empty one with the same rows and cols."""
        self._init_grid()

    def reseed(self, seed: Optional[int]) -> None:
        """Restart the mine placement RNG from `seed`."""
        self.seed = seed
        self._rng = random.Random(seed)

    # ========================================================================
    # Addressing (Low-level)
    # ========================================================================

    def _idx_to_position(self, idx: int) -> Tuple[int, int]:
        """Flat index to (row, col). Does not check bounds."""
        return divmod(idx, self.cols)

    def _position_to_idx(self, row: int, col: int) -> int:
        """(row, col) to flat index. Does not check bounds."""
        return row * self.cols + col

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within field bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _get_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighbouring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the in-bounds cells of the
            surrounding 3x3 square, center excluded.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    # ========================================================================
    # Accessors
    # ========================================================================

    def get(self, row: int, col: int) -> Optional[Cell]:
        """
        Get a copy of the cell at (row, col).

        Returns None if the position is out of bounds. Mutating the
        returned cell does not affect the field.
        """
        if not self._is_valid_position(row, col):
            return None
        return replace(self._grid[self._position_to_idx(row, col)])

    def get_mut(self, row: int, col: int) -> Optional[Cell]:
        """Get the live cell at (row, col), or None if out of bounds."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[self._position_to_idx(row, col)]

    def get_unchecked(self, row: int, col: int) -> Cell:
        """
        Get the live cell at (row, col) for reading.

        The caller guarantees the position is in bounds.
        """
        assert self._is_valid_position(row, col), (
            f"position ({row}, {col}) outside {self.rows}x{self.cols} field"
        )
        return self._grid[self._position_to_idx(row, col)]

    def get_mut_unchecked(self, row: int, col: int) -> Cell:
        """Get the live cell at (row, col). Position must be in bounds."""
        assert self._is_valid_position(row, col), (
            f"position ({row}, {col}) outside {self.rows}x{self.cols} field"
        )
        return self._grid[self._position_to_idx(row, col)]

    @property
    def is_won(self) -> bool:
        """Check if every empty cell has left the closed state."""
        return self.closed_empty_cells == 0

    # ========================================================================
    # Mine Placement
    # ========================================================================

    def randomize(
        self, mine_percentage: int, safe_row: int, safe_col: int
    ) -> None:
        """
        Randomize the field content, keeping a safe area around a cell.

        Each cell becomes a mine with probability mine_percentage / 100,
        except the cell at (safe_row, safe_col) and its neighbours, which
        are always empty. All cells end up closed.

        Args:
            mine_percentage: Mine probability in percent, clamped to
                [0, MAX_MINE_PERCENTAGE].
            safe_row: Row of the cell about to be opened.
            safe_col: Column of the cell about to be opened.
        """
        mine_percentage = min(max(mine_percentage, 0), MAX_MINE_PERCENTAGE)

        def is_mine(row: int, col: int) -> bool:
            if self._rng.randint(1, 100) > mine_percentage:
                return False
            in_safe_area = (
                abs(row - safe_row) <= SAFE_RADIUS
                and abs(col - safe_col) <= SAFE_RADIUS
            )
            return not in_safe_area

        self._assign_content(is_mine)

    def place_mines(self, positions: Iterable[Tuple[int, int]]) -> None:
        """
        Lay out mines at exactly the given positions.

        Positions outside the field are ignored. All cells end up closed.
        """
        mines = {
            (row, col) for row, col in positions
            if self._is_valid_position(row, col)
        }
        self._assign_content(lambda row, col: (row, col) in mines)

    def _assign_content(self, is_mine: Callable[[int, int], bool]) -> None:
        """Rebuild every cell from `is_mine`, then recompute counts."""
        closed_empty_cells = 0
        mine_count = 0

        for idx in range(self.rows * self.cols):
            row, col = self._idx_to_position(idx)
            if is_mine(row, col):
                content = CellContent.MINE
                mine_count += 1
            else:
                content = CellContent.EMPTY
                closed_empty_cells += 1
            self._grid[idx] = Cell(state=CellState.CLOSED, content=content)

        self.closed_empty_cells = closed_empty_cells
        self.mine_count = mine_count
        # Every cell is closed again, so no flag survives
        self.flag_count = 0
        self.flagged_empty_cells = 0

        # Content must be settled before any count is derived
        self._recompute_neighbour_counts()

    def _recompute_neighbour_counts(self) -> None:
        """Update the neighbouring mine count of every cell."""
        for idx, cell in enumerate(self._grid):
            row, col = self._idx_to_position(idx)
            cell.neighbour_bomb_count = self._count_matching_neighbors(
                row, col, lambda c: c.contains_mine
            )

    def _count_matching_neighbors(
        self, row: int, col: int, match_fn: Callable[[Cell], bool]
    ) -> int:
        """Count in-bounds neighbours for which `match_fn` is true."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if match_fn(self.get_unchecked(neighbor_row, neighbor_col)):
                count += 1
        return count

    # ========================================================================
    # Game Actions
    # ========================================================================

    def uncover_at(self, row: int, col: int) -> Optional[bool]:
        """
        Open the cell at (row, col), flooding through zero-count cells.

        A flagged cell is protected: opening it is a no-op, even when it
        hides a mine.

        Returns:
            None if the position is out of bounds, True if the cell is an
            un-flagged mine (nothing is changed), False otherwise.
        """
        cell = self.get_mut(row, col)
        if cell is None:
            return None

        if cell.contains_mine and not cell.is_flagged:
            return True

        self._uncover_from(row, col)
        return False

    def _uncover_from(self, row: int, col: int) -> None:
        """Open the zero-count region reachable from (row, col)."""
        pending = [(row, col)]
        while pending:
            current_row, current_col = pending.pop()
            cell = self.get_mut(current_row, current_col)

            # Open and flagged cells stop the flood, so each cell opens once
            if cell is None or not cell.is_closed:
                continue

            assert cell.is_empty, (
                f"flood fill reached a mine at ({current_row}, {current_col})"
            )

            self.closed_empty_cells -= 1
            cell.set_state(CellState.OPEN)

            # Numbered cells are the edge of the region
            if cell.neighbour_bomb_count != 0:
                continue

            pending.extend(self._get_neighbors(current_row, current_col))

    def toggle_flag_at(self, row: int, col: int) -> Optional[bool]:
        """
        Toggle the flag on the cell at (row, col).

        Closed cells are flagged only while flag_count < mine_count.
        Open cells cannot be flagged.

        Returns:
            None if the position is out of bounds, True if the cell
            changed state, False otherwise.
        """
        cell = self.get_mut(row, col)
        if cell is None:
            return None

        if cell.is_closed:
            if self.flag_count >= self.mine_count:
                return False
            cell.set_state(CellState.FLAGGED)
            self.flag_count += 1
            if cell.is_empty:
                self.closed_empty_cells -= 1
                self.flagged_empty_cells += 1
            return True

        if cell.is_flagged:
            cell.set_state(CellState.CLOSED)
            self.flag_count -= 1
            if cell.is_empty:
                self.closed_empty_cells += 1
                self.flagged_empty_cells -= 1
            return True

        return False

    # ========================================================================
    # Neighbour Queries
    # ========================================================================

    def get_flagged_nbors_amt(self, row: int, col: int) -> Optional[int]:
        """Number of flagged neighbours, or None if out of bounds."""
        if not self._is_valid_position(row, col):
            return None
        return self._count_matching_neighbors(row, col, lambda c: c.is_flagged)

    def get_non_open_nbors_amt(self, row: int, col: int) -> Optional[int]:
        """Number of closed or flagged neighbours, or None if out of bounds."""
        if not self._is_valid_position(row, col):
            return None
        return self._count_matching_neighbors(
            row, col, lambda c: not c.is_open
        )

    def is_satisfied_for_opening(self, row: int, col: int) -> bool:
        """Open cell whose flagged neighbours match its mine count."""
        cell = self.get_mut(row, col)
        if cell is None or not cell.is_open:
            return False
        return (
            self.get_flagged_nbors_amt(row, col) == cell.neighbour_bomb_count
        )

    def is_satisfied_for_flagging(self, row: int, col: int) -> bool:
        """Open cell whose non-open neighbours match its mine count."""
        cell = self.get_mut(row, col)
        if cell is None or not cell.is_open:
            return False
        return (
            self.get_non_open_nbors_amt(row, col) == cell.neighbour_bomb_count
        )

    # ========================================================================
    # Assisted Actions
    # ========================================================================

    def uncover_around_cell_at(self, row: int, col: int) -> Optional[bool]:
        """
        Open every closed neighbour of the cell at (row, col).

        Stops at the first neighbour that is a mine.

        Returns:
            None if the position is out of bounds, True if a mine was
            hit, False otherwise.
        """
        if not self._is_valid_position(row, col):
            return None

        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if not self.get_unchecked(neighbor_row, neighbor_col).is_closed:
                continue
            if self.uncover_at(neighbor_row, neighbor_col):
                return True
        return False

    def unflag_all_closed_around(self, row: int, col: int) -> bool:
        """
        Toggle the flag on every closed neighbour of (row, col).

        Only closed neighbours are touched, so in practice this places
        flags, as far as the flag budget allows.

        Returns:
            False if the position is out of bounds, True otherwise.
        """
        if not self._is_valid_position(row, col):
            return False

        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self.get_unchecked(neighbor_row, neighbor_col).is_closed:
                self.toggle_flag_at(neighbor_row, neighbor_col)
        return True

    # ========================================================================
    # Observation
    # ========================================================================

    def get_observation(self, reveal_mines: bool = False) -> np.ndarray:
        """
        Get the field as a numpy array for renderers and agents.

        Args:
            reveal_mines: Show every mine and misplaced flag, as on a
                lost game.

        Returns:
            int8 array of shape (rows, cols) holding the values of
            Cell.to_observation.
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for idx, cell in enumerate(self._grid):
            row, col = self._idx_to_position(idx)
            obs[row, col] = cell.to_observation(reveal_mines)
        return obs

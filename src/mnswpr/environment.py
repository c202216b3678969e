"""
Gymnasium environment wrapper for mnswpr.

Drives a Game through the standard RL interface, so scripted players and
tests can play whole games programmatically.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import OBS_MINE, OBS_WRONG_FLAG
from .config import GameConfig
from .game import Game


# ============================================================================
# Rewards
# ============================================================================

REWARD_SAFE_OPEN = 1.0
REWARD_WIN = 10.0
REWARD_LOSS = -10.0
REWARD_FLAG = 0.0
REWARD_NO_OP = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for mnswpr.

    Observation:
        2D int8 array of Cell.to_observation values:
        - -1 = closed cell
        - -2 = flagged cell
        - 0-8 = open cell with neighbouring mine count
        After a loss, every mine shows 9 and misplaced flags show -3.

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols opens cell (i // cols, i % cols); the
        second half toggles the flag on the same cells.

    Rewards:
        - +1 for opening at least one safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for a flag toggle
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Game configuration (default: tiny board, 20% mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.game = Game(self.config)
        self.render_mode = render_mode

        rows, cols = self.game.field.rows, self.game.field.cols
        self._n_cells = rows * cols

        self.observation_space = spaces.Box(
            low=OBS_WRONG_FLAG,
            high=OBS_MINE,
            shape=(rows, cols),
            dtype=np.int8,
        )

        # Open or flag, one action each per cell
        self.action_space = spaces.Discrete(2 * self._n_cells)

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
            seed: Seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.game.field.reseed(seed)
        self.game.reset()
        self._steps = 0

        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded open or flag action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        is_flag, row, col = self._decode_action(action)
        self._steps += 1

        if is_flag:
            reward = self._apply_flag(row, col)
        else:
            reward = self._apply_open(row, col)

        terminated = not self.game.is_playing
        truncated = False

        return (
            self._get_observation(),
            reward,
            terminated,
            truncated,
            self._get_info(),
        )

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert a flat action into (is_flag, row, col)."""
        action = int(action)
        is_flag = action >= self._n_cells
        row, col = divmod(action % self._n_cells, self.game.field.cols)
        return is_flag, row, col

    def _apply_open(self, row: int, col: int) -> float:
        """Open a cell and score the outcome."""
        closed_before = self.game.field.closed_empty_cells
        if not self.game.open_at(row, col):
            return REWARD_NO_OP

        if self.game.is_lost:
            return REWARD_LOSS
        if self.game.is_won:
            return REWARD_WIN
        if self.game.field.closed_empty_cells < closed_before:
            return REWARD_SAFE_OPEN
        return REWARD_NO_OP

    def _apply_flag(self, row: int, col: int) -> float:
        """Toggle a flag and score the outcome."""
        flags_before = self.game.field.flag_count
        if not self.game.flag_at(row, col):
            return REWARD_NO_OP

        if self.game.is_won:
            return REWARD_WIN
        if self.game.field.flag_count != flags_before:
            return REWARD_FLAG
        return REWARD_NO_OP

    def _get_observation(self) -> np.ndarray:
        return self.game.field.get_observation(reveal_mines=self.game.is_lost)

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        field = self.game.field
        return {
            "steps": self._steps,
            "mines": field.mine_count,
            "flags": field.flag_count,
            "closed_empty": field.closed_empty_cells,
            "game_state": self.game.status.name,
        }

    def render(self) -> Optional[str]:
        """Render the current game state."""
        if self.render_mode == "ansi":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the game.

        Returns:
            Boolean array where True = valid action. Before the first move
            every open action is valid and no flag action is. Closed cells
            can be flagged only while flags remain, flagged cells can always
            be unflagged. With assisted opening, open actions on satisfied
            numbers with closed neighbours are valid too, and likewise
            flag actions with assisted flagging.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.game.is_playing:
            return mask

        field = self.game.field
        flags_left = field.flag_count < field.mine_count
        for row in range(field.rows):
            for col in range(field.cols):
                cell = field.get_unchecked(row, col)
                action = row * field.cols + col
                if cell.is_closed:
                    mask[action] = True
                elif cell.is_open and self.game.config.assisted_opening:
                    mask[action] = self._can_open_around(row, col)

                if self.game.first_move:
                    continue
                if cell.is_flagged or (cell.is_closed and flags_left):
                    mask[self._n_cells + action] = True
                elif cell.is_open and self.game.config.assisted_flagging:
                    mask[self._n_cells + action] = (
                        flags_left and self._can_flag_around(row, col)
                    )
        return mask

    def _can_open_around(self, row: int, col: int) -> bool:
        """Check if assisted opening at (row, col) would open a cell."""
        return (
            self.game.field.is_satisfied_for_opening(row, col)
            and self._closed_nbors_amt(row, col) > 0
        )

    def _can_flag_around(self, row: int, col: int) -> bool:
        """Check if assisted flagging at (row, col) would flag a cell."""
        return (
            self.game.field.is_satisfied_for_flagging(row, col)
            and self._closed_nbors_amt(row, col) > 0
        )

    def _closed_nbors_amt(self, row: int, col: int) -> int:
        field = self.game.field
        return (
            field.get_non_open_nbors_amt(row, col)
            - field.get_flagged_nbors_amt(row, col)
        )

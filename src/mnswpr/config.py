"""
Game configuration for mnswpr.

Board size presets and the settings of a single game. Values are
normalized rather than rejected so that any input yields a playable board.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from .field import MAX_MINE_PERCENTAGE


# ============================================================================
# Size Presets
# ============================================================================

class SizePreset(Enum):
    """Named board sizes, as (cols, rows)."""

    TINY = (20, 13)
    SMALL = (30, 20)
    MEDIUM = (40, 25)
    LARGE = (50, 30)
    HUGE = (60, 40)

    @property
    def size(self) -> Tuple[int, int]:
        """The (cols, rows) pair of this preset."""
        return self.value

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, name: str) -> "SizePreset":
        """
        Look up a preset by its lowercase name.

        Raises:
            ValueError: If no preset has that name.
        """
        for preset in cls:
            if str(preset) == name:
                return preset
        choices = ", ".join(f'"{preset}"' for preset in cls)
        raise ValueError(f'Expected one of {choices}. Got "{name}"')


# ============================================================================
# Game Configuration
# ============================================================================

@dataclass
class GameConfig:
    """
    Configuration for a game of mnswpr.

    Attributes:
        rows: Number of rows (at least 1).
        cols: Number of columns (at least 1).
        mine_percentage: Chance in percent for each cell to hold a mine,
            within [0, 99].
        assisted_opening: Opening a satisfied number opens its neighbours.
        assisted_flagging: Flagging a satisfied number flags its neighbours.
        seed: Seed for mine placement (None for random boards).
    """

    rows: int = 13
    cols: int = 20
    mine_percentage: int = 20
    assisted_opening: bool = True
    assisted_flagging: bool = True
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Normalize configuration after initialization."""
        self._normalize()

    def _normalize(self) -> None:
        """Clamp values into their playable ranges."""
        self.rows = max(self.rows, 1)
        self.cols = max(self.cols, 1)
        self.mine_percentage = min(
            max(self.mine_percentage, 0), MAX_MINE_PERCENTAGE
        )

    @classmethod
    def from_preset(cls, preset: SizePreset, **overrides: Any) -> "GameConfig":
        """Build a configuration sized after `preset`."""
        cols, rows = preset.size
        return cls(rows=rows, cols=cols, **overrides)


# Preset configurations
TINY = GameConfig.from_preset(SizePreset.TINY)
SMALL = GameConfig.from_preset(SizePreset.SMALL)
MEDIUM = GameConfig.from_preset(SizePreset.MEDIUM)
LARGE = GameConfig.from_preset(SizePreset.LARGE)
HUGE = GameConfig.from_preset(SizePreset.HUGE)

"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src and the repo root (for main.py) to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "src"))

from mnswpr import Cell, CellContent, Field, Game, GameConfig


# ============================================================================
# Field Fixtures
# ============================================================================

@pytest.fixture
def empty_field() -> Field:
    """Create a fresh 9x9 field with no mines placed."""
    return Field(9, 9)


@pytest.fixture
def seeded_field() -> Field:
    """Create a 16x16 field randomized at 30% around its center."""
    field = Field(16, 16, seed=1234)
    field.randomize(30, 8, 8)
    return field


@pytest.fixture
def corner_mine_field() -> Field:
    """Create a 5x5 field whose only mine is at (4, 4)."""
    field = Field(5, 5)
    field.place_mines([(4, 4)])
    return field


@pytest.fixture
def two_mine_field() -> Field:
    """
    Create a 3x3 field with mines at (0, 0) and (0, 2).

    Layout (counts in brackets):
        *  [2]  *
       [1] [2] [1]
       [0] [0] [0]
    """
    field = Field(3, 3)
    field.place_mines([(0, 0), (0, 2)])
    return field


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def closed_cell() -> Cell:
    """Create a closed empty cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(content=CellContent.MINE)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def small_config() -> GameConfig:
    """Small seeded configuration without assistance."""
    return GameConfig(
        rows=8,
        cols=8,
        mine_percentage=15,
        assisted_opening=False,
        assisted_flagging=False,
        seed=7,
    )


@pytest.fixture
def small_game(small_config: GameConfig) -> Game:
    """Create a game on the small configuration."""
    return Game(small_config)

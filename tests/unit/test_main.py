"""
Unit tests for the command line front end.
"""
from typing import Tuple

import pytest
from main import HELP, handle_command
from mnswpr import Game, GameConfig


# Mines down column 2 of a 5x5 board, except (1, 2)
WALL_MINES = {(0, 2), (2, 2), (3, 2), (4, 2)}


@pytest.fixture
def wall_game() -> Game:
    """Create a 5x5 game whose mines will land on a wall down column 2."""
    game = Game(GameConfig(
        rows=5,
        cols=5,
        mine_percentage=50,
        assisted_opening=False,
        assisted_flagging=False,
    ))
    rolls = iter([
        1 if (row, col) in WALL_MINES else 100
        for row in range(5)
        for col in range(5)
    ])
    game.field._rng.randint = lambda low, high: next(rolls)
    return game


# ============================================================================
# Command Tests
# ============================================================================

class TestHandleCommand:
    """Test how input lines map to game moves."""

    @pytest.mark.parametrize(
        "key, expected",
        [("d", (0, 1)), ("l", (0, 1)), ("s", (1, 0)), ("j", (1, 0))],
    )
    def test_move_keys(
        self, wall_game: Game, key: str, expected: Tuple[int, int]
    ) -> None:
        """Move keys step the cursor."""
        assert handle_command(wall_game, key) is True
        assert (wall_game.cursor.row, wall_game.cursor.col) == expected

    def test_move_keys_ignore_case(self, wall_game: Game) -> None:
        """Upper case keys work too."""
        handle_command(wall_game, "D\n")
        assert wall_game.cursor.col == 1

    def test_empty_line_opens_at_cursor(self, wall_game: Game) -> None:
        """Enter opens the cell under the cursor."""
        handle_command(wall_game, "\n")
        assert wall_game.first_move is False
        assert wall_game.field.get(0, 0).is_open is True

    def test_open_at_position(self, wall_game: Game) -> None:
        """'o ROW COL' opens that cell, not the cursor's."""
        handle_command(wall_game, "o 1 0")
        assert wall_game.field.get(1, 0).is_open is True
        assert (wall_game.cursor.row, wall_game.cursor.col) == (0, 0)

    def test_flag_at_cursor(self, wall_game: Game) -> None:
        """'f' flags the cell under the cursor."""
        handle_command(wall_game, "o 0 0")
        for key in ("d", "d", "d", "d"):
            handle_command(wall_game, key)
        handle_command(wall_game, "f")
        assert wall_game.field.get(0, 4).is_flagged is True

    def test_flag_at_position(self, wall_game: Game) -> None:
        """'f ROW COL' flags that cell."""
        handle_command(wall_game, "o 0 0")
        handle_command(wall_game, "f 2 2")
        assert wall_game.field.get(2, 2).is_flagged is True
        assert wall_game.field.flag_count == 1

    def test_restart(self, wall_game: Game) -> None:
        """'r' starts a fresh game."""
        handle_command(wall_game, "o 0 0")
        handle_command(wall_game, "o 2 2")
        assert wall_game.is_lost is True

        assert handle_command(wall_game, "r") is True
        assert wall_game.is_playing is True
        assert wall_game.first_move is True

    def test_quit(self, wall_game: Game) -> None:
        """'q' asks the caller to stop."""
        assert handle_command(wall_game, "q") is False
        assert wall_game.first_move is True

    @pytest.mark.parametrize(
        "line", ["x", "o 1", "o a b", "f 1 2 3", "d 1 1"]
    )
    def test_bad_input_prints_help(
        self, wall_game: Game, line: str, capsys: pytest.CaptureFixture
    ) -> None:
        """Unknown or malformed commands print help and change nothing."""
        assert handle_command(wall_game, line) is True
        assert HELP in capsys.readouterr().out
        assert wall_game.first_move is True
        assert (wall_game.cursor.row, wall_game.cursor.col) == (0, 0)

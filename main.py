#!/usr/bin/env python3
"""
mnswpr - Main entry point.

Usage:
    python main.py play [--size PRESET] [--rows N] [--cols N] [--mines PERCENT]
    python main.py presets
"""
import argparse
import sys
from typing import List, Optional

from mnswpr import Direction, Game, GameConfig, SizePreset


MOVES = {
    "w": Direction.UP,
    "k": Direction.UP,
    "s": Direction.DOWN,
    "j": Direction.DOWN,
    "a": Direction.LEFT,
    "h": Direction.LEFT,
    "d": Direction.RIGHT,
    "l": Direction.RIGHT,
}

HELP = (
    "Commands: w/a/s/d (or h/j/k/l) move, <enter> or o open, f flag, "
    "o ROW COL / f ROW COL act at a position, r restart, q quit"
)


def build_config(args: argparse.Namespace) -> GameConfig:
    """Build the game configuration from parsed arguments."""
    cols, rows = args.size.size
    return GameConfig(
        rows=args.rows if args.rows is not None else rows,
        cols=args.cols if args.cols is not None else cols,
        mine_percentage=args.mines,
        assisted_opening=args.assisted_opening,
        assisted_flagging=args.assisted_flagging,
        seed=args.seed,
    )


def parse_position(parts: List[str]) -> Optional[tuple]:
    """Parse 'ROW COL' arguments of a command."""
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def handle_command(game: Game, line: str) -> bool:
    """
    Apply one input line to the game.

    Returns:
        False when the player asked to quit, True otherwise.
    """
    parts = line.lower().split()
    command = parts[0] if parts else "o"

    if command == "q":
        return False
    if command == "r":
        game.reset()
    elif command in MOVES and len(parts) == 1:
        game.move_cursor(MOVES[command])
    elif command in ("o", "f"):
        if len(parts) == 1:
            position = (game.cursor.row, game.cursor.col)
        else:
            position = parse_position(parts[1:])
        if position is None:
            print(HELP)
        elif command == "o":
            game.open_at(*position)
        else:
            game.flag_at(*position)
    else:
        print(HELP)
    return True


def play(args: argparse.Namespace) -> None:
    """Play a game reading commands from stdin."""
    config = build_config(args)
    game = Game(config)

    print(
        f"Board: {config.rows}x{config.cols}, "
        f"{config.mine_percentage}% mines"
    )
    print(HELP)
    print(game.render())

    for line in sys.stdin:
        if not game.is_playing:
            if line.strip().lower() in ("", "y"):
                game.reset()
                print(game.render())
                continue
            break

        if not handle_command(game, line):
            break

        print(game.render())
        if not game.is_playing:
            print("Do you want to play again? Press <enter>/y if yes, n if no")


def presets(args: argparse.Namespace) -> None:
    """List the board size presets."""
    print(f"{'Preset':<10} {'Cols':>6} {'Rows':>6}")
    print("-" * 24)
    for preset in SizePreset:
        cols, rows = preset.size
        print(f"{str(preset):<10} {cols:>6} {rows:>6}")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="mnswpr - Minesweeper in the terminal"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--size",
        type=SizePreset.parse,
        default=SizePreset.TINY,
        help="Board size preset (tiny, small, medium, large, huge)",
    )
    play_parser.add_argument(
        "--rows", type=int, default=None, help="Override the preset rows"
    )
    play_parser.add_argument(
        "--cols", type=int, default=None, help="Override the preset columns"
    )
    play_parser.add_argument(
        "--mines", type=int, default=20, help="Mine percentage (0-99)"
    )
    play_parser.add_argument(
        "--assisted-opening",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Opening a satisfied number opens its neighbours",
    )
    play_parser.add_argument(
        "--assisted-flagging",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Flagging a satisfied number flags its neighbours",
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )

    # Presets command
    subparsers.add_parser("presets", help="List board size presets")

    args = parser.parse_args()

    if args.command == "play":
        play(args)
    elif args.command == "presets":
        presets(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

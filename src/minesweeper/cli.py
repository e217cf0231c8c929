"""
Minesweeper - terminal front end.

Usage:
    minesweeper play [--difficulty NAME | --rows R --cols C --mines M]
    minesweeper best
    minesweeper reset-times

In-game commands:
    r X Y   reveal        f X Y   flag / unflag     c X Y   chord
    h       hint          n       restart           p NAME  new preset
    q       quit
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO, Tuple

from .config import ConfigurationError, Difficulty
from .display import render_text, status_line
from .engine import GameEngine
from .records import BestTimes
from .state import GameState, GameStatus

DEFAULT_RECORDS = Path.home() / ".minesweeper" / "best_times.json"

USAGE = "Commands: r X Y | f X Y | c X Y | h | n | p NAME | q"

Command = Tuple[str, tuple]

# Verb -> engine method, and whether it takes (x, y)
VERBS = {
    "r": ("reveal", True),
    "reveal": ("reveal", True),
    "f": ("toggle_flag", True),
    "flag": ("toggle_flag", True),
    "c": ("chord", True),
    "chord": ("chord", True),
    "h": ("use_hint", False),
    "hint": ("use_hint", False),
    "n": ("restart", False),
    "restart": ("restart", False),
    "q": ("quit", False),
    "quit": ("quit", False),
}


# ============================================================================
# Input Mapping
# ============================================================================

def parse_command(line: str) -> Optional[Command]:
    """
    Map a line of text to an engine command.

    Args:
        line: Raw input such as "r 3 4" or "p expert".

    Returns:
        (method name, arguments), or None if the line is not understood.
    """
    tokens = line.split()
    if not tokens:
        return None
    verb, args = tokens[0].lower(), tokens[1:]

    if verb in ("p", "preset"):
        if len(args) != 1:
            return None
        return "new_preset", (args[0],)

    if verb not in VERBS:
        return None
    name, takes_position = VERBS[verb]
    if not takes_position:
        return (name, ()) if not args else None
    if len(args) != 2:
        return None
    try:
        x, y = int(args[0]), int(args[1])
    except ValueError:
        return None
    return name, (x, y)


def run_session(
    engine: GameEngine,
    lines: Iterable[str],
    records: Optional[BestTimes] = None,
    out: Optional[TextIO] = None,
) -> GameState:
    """
    Play commands from ``lines`` against ``engine`` until they run out.

    Returns:
        The snapshot after the last command.
    """
    out = out or sys.stdout
    show(engine.state, records, out)
    for line in lines:
        command = parse_command(line)
        if command is None:
            print(USAGE, file=out)
            continue
        name, args = command
        if name == "quit":
            break

        before = engine.state
        try:
            after = getattr(engine, name)(*args)
        except ConfigurationError as error:
            print(f"Error: {error}", file=out)
            continue

        show(after, records, out)
        if after.status is GameStatus.WON and before.status is not GameStatus.WON:
            print(f"Cleared in {after.elapsed_ms / 1000:.1f}s", file=out)
    return engine.state


def show(state: GameState, records: Optional[BestTimes], out: TextIO) -> None:
    best = records.best_time(state.difficulty) if records else None
    print(render_text(state, coordinates=True), file=out)
    print(status_line(state, best), file=out)


def _prompt_lines() -> Iterator[str]:
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


# ============================================================================
# Subcommands
# ============================================================================

def play(args: argparse.Namespace, records: BestTimes) -> int:
    """Run an interactive game."""
    engine = GameEngine()
    custom = (args.rows, args.cols, args.mines)
    try:
        if any(value is not None for value in custom):
            if any(value is None for value in custom):
                print("Custom games need --rows, --cols and --mines")
                return 2
            engine.new_game(args.rows, args.cols, args.mines, Difficulty.CUSTOM)
        else:
            engine.new_preset(args.difficulty)
    except ConfigurationError as error:
        print(f"Error: {error}")
        return 2

    records.attach(engine)
    print(USAGE)
    with engine:
        run_session(engine, _prompt_lines(), records)
    return 0


def show_best(records: BestTimes) -> int:
    """Print the leaderboard."""
    print(f"{'Difficulty':<14} {'Best Time (s)':<12}")
    print("-" * 27)
    for difficulty, seconds in records.all_times().items():
        shown = "-" if seconds is None else f"{seconds:.1f}"
        print(f"{difficulty.value:<14} {shown:<12}")
    return 0


def main(argv: Optional[list] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal"
    )
    parser.add_argument(
        "--records", type=Path, default=DEFAULT_RECORDS,
        help="JSON file holding best times",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty",
        choices=["beginner", "intermediate", "expert"],
        default="beginner",
        help="Preset board",
    )
    play_parser.add_argument("--rows", type=int, help="Rows of a custom board")
    play_parser.add_argument("--cols", type=int, help="Columns of a custom board")
    play_parser.add_argument("--mines", type=int, help="Mines on a custom board")

    subparsers.add_parser("best", help="Show best times")
    subparsers.add_parser("reset-times", help="Clear best times")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    records = BestTimes(args.records)
    if args.command == "play":
        return play(args, records)
    if args.command == "best":
        return show_best(records)
    if args.command == "reset-times":
        records.reset_all()
        print("Best times cleared.")
        return 0
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Plain-text rendering of boards and game status."""
from typing import Optional, Union

from .board import Board
from .state import GameState, GameStatus

STATUS_MESSAGES = {
    GameStatus.READY: "Tap a tile to start.",
    GameStatus.PLAYING: "Good luck!",
    GameStatus.WON: "You Win!",
    GameStatus.LOST: "Boom! You hit a mine.",
}


def render_text(source: Union[GameState, Board], coordinates: bool = False) -> str:
    """
    Render a board as text.

    Hidden tiles are ``.``, flags ``F``, mines ``*``, empty tiles a blank
    and numbered tiles their digit.

    Args:
        source: Snapshot or board to render.
        coordinates: Prefix rows and columns with their indices.
    """
    board = source.board if isinstance(source, GameState) else source
    lines = []
    if coordinates:
        lines.append("   " + "".join(f"{x % 10} " for x in range(board.cols)))
    for y, row in enumerate(board):
        row_str = f"{y:>2} " if coordinates else ""
        for tile in row:
            val = tile.to_observation()
            if val == -1:
                row_str += "."
            elif val == -2:
                row_str += "F"
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str)
    return "\n".join(lines)


def status_line(state: GameState, best_seconds: Optional[float] = None) -> str:
    """One-line summary: clock, flags, mines left, hints and message."""
    parts = [
        f"Time {state.elapsed_ms / 1000:.1f}s",
        f"Flags {state.flags_placed}",
        f"Mines {state.mines_left}",
        f"Hints {state.hints_left}",
    ]
    if best_seconds is not None:
        parts.append(f"Best ({state.difficulty.value}) {best_seconds:.1f}s")
    return " | ".join(parts) + " | " + STATUS_MESSAGES[state.status]

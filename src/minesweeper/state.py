"""
Game state snapshots.

A ``GameState`` is an immutable value describing a whole game at one point
in time. The engine replaces it wholesale on every committed command.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board
from .config import BoardConfig, Difficulty
from .tile import Tile


class GameStatus(Enum):
    """Possible states of the game."""

    READY = "ready"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"

    @property
    def is_finished(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)


@dataclass(frozen=True)
class GameState:
    """
    Full snapshot of a game.

    Attributes:
        board: Tile grid, indexed ``board[y][x]``.
        rows: Number of rows.
        cols: Number of columns.
        mines: Mines placed on the first reveal.
        flags_placed: Flags currently on the board.
        mines_left: ``max(0, mines - flags_placed)``, for display.
        status: Current game status.
        first_click: True until mines have been placed.
        started_at: Clock reading (ms) of the first reveal.
        elapsed_ms: Time played so far.
        difficulty: Label used for best-time records.
        hints_left: Remaining hints.
    """

    board: Board
    rows: int
    cols: int
    mines: int
    flags_placed: int
    mines_left: int
    status: GameStatus
    first_click: bool
    started_at: Optional[int]
    elapsed_ms: int
    difficulty: Difficulty
    hints_left: int

    @classmethod
    def initial(cls, config: BoardConfig, hints: int) -> "GameState":
        """Fresh, mine-free state for a validated configuration."""
        return cls(
            board=Board.empty(config.rows, config.cols),
            rows=config.rows,
            cols=config.cols,
            mines=config.mines,
            flags_placed=0,
            mines_left=config.mines,
            status=GameStatus.READY,
            first_click=True,
            started_at=None,
            elapsed_ms=0,
            difficulty=config.difficulty,
            hints_left=hints,
        )

    @property
    def is_finished(self) -> bool:
        return self.status.is_finished

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        return self.board.tile_at(x, y)


@dataclass(frozen=True)
class GameResult:
    """Outcome of a won game, handed to best-time stores."""

    difficulty: Difficulty
    elapsed_ms: int

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000

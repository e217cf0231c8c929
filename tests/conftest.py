"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    Board,
    BoardConfig,
    Difficulty,
    EngineConfig,
    GameEngine,
    ManualTicker,
    RandomSource,
    Tile,
)


# ============================================================================
# Deterministic Collaborators
# ============================================================================

class PlannedRandomSource(RandomSource):
    """Puts planned positions first so they become the mines."""

    def __init__(self, mines: Iterable[Tuple[int, int]] = ()) -> None:
        self.mines = list(mines)

    def randbelow(self, n: int) -> int:
        return n - 1

    def shuffle(self, items: List[Tuple[int, int]]) -> None:
        planned = [p for p in self.mines if p in items]
        rest = [p for p in items if p not in planned]
        items[:] = planned + rest


class ScriptedRandomSource(RandomSource):
    """Returns scripted values from ``randbelow`` and records each bound."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values = list(values)
        self.bounds: List[int] = []

    def randbelow(self, n: int) -> int:
        self.bounds.append(n)
        return self.values.pop(0)


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: int = 1000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_engine(clock: FakeClock) -> Callable[..., GameEngine]:
    """Factory for engines with planned mines, a fake clock and manual ticks."""
    def factory(mines: Iterable[Tuple[int, int]] = (), **config) -> GameEngine:
        return GameEngine(
            config=EngineConfig(**config),
            random_source=PlannedRandomSource(mines),
            clock=clock,
            ticker_factory=ManualTicker,
        )
    return factory


@pytest.fixture
def engine(make_engine) -> GameEngine:
    """Beginner engine; mines fill the first free tiles in row-major order."""
    return make_engine()


@pytest.fixture
def strip_engine(make_engine) -> GameEngine:
    """
    3x5 custom game with one mine at (3, 1), opened at (0, 1).

    Columns 0-1 are empty, column 2 shows 1s, columns 3-4 are hidden:

        0 0 1 . .
        0 0 1 * .
        0 0 1 . .
    """
    engine = make_engine(mines=[(3, 1)])
    engine.new_game(3, 5, 1)
    engine.reveal(0, 1)
    return engine


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory for boards with mines at exact (x, y) positions."""
    def factory(rows: int, cols: int, mines: Iterable[Tuple[int, int]] = ()) -> Board:
        board = Board.empty(rows, cols)
        for x, y in mines:
            board = board.with_tile(board[y][x].with_mine())
        return board.with_adjacency()
    return factory


@pytest.fixture
def empty_board() -> Board:
    """5x5 board with no mines for cascade testing."""
    return Board.empty(5, 5)


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def hidden_tile() -> Tile:
    return Tile(0, 0)


@pytest.fixture
def mine_tile() -> Tile:
    return Tile(0, 0, is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    return BoardConfig(9, 9, 10, Difficulty.BEGINNER)

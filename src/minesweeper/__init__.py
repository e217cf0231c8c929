"""
Minesweeper game engine.

Provides the rules engine with immutable board snapshots, plus the
collaborators that drive it: best-time records, text rendering, a terminal
front end and a gymnasium environment.
"""
from .tile import Tile, TileState
from .board import Board
from .config import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    PRESETS,
    BoardConfig,
    ConfigurationError,
    Difficulty,
    EngineConfig,
    preset,
)
from .state import GameResult, GameState, GameStatus
from .random_source import (
    NumpyRandomSource,
    RandomSource,
    SeededRandomSource,
    SystemRandomSource,
)
from .timer import ManualTicker, ThreadingTicker, Ticker
from .engine import GameEngine, Subscription
from .records import BestTimes
from .display import render_text, status_line
from .environment import ActionType, MinesweeperEnv, make_vec_env

__all__ = [
    "Tile",
    "TileState",
    "Board",
    "BoardConfig",
    "ConfigurationError",
    "Difficulty",
    "EngineConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "preset",
    "GameResult",
    "GameState",
    "GameStatus",
    "RandomSource",
    "SystemRandomSource",
    "SeededRandomSource",
    "NumpyRandomSource",
    "Ticker",
    "ThreadingTicker",
    "ManualTicker",
    "GameEngine",
    "Subscription",
    "BestTimes",
    "render_text",
    "status_line",
    "ActionType",
    "MinesweeperEnv",
    "make_vec_env",
]

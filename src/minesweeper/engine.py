"""
Game engine for Minesweeper.

``GameEngine`` owns the current ``GameState`` snapshot and turns player
commands into new snapshots. Player mistakes (out-of-range coordinates,
acting on a finished game, chording with the wrong flag count) are silent
no-ops; only invalid configurations raise.

Commands are expected to be serialized by the caller. The elapsed-time
tick runs on its own driver and shares the snapshot through an ``RLock``.
"""
import functools
import itertools
import logging
import threading
import time
from dataclasses import replace
from typing import Callable, Dict, Optional, Union

from .board import Board
from .config import (
    PRESETS,
    BoardConfig,
    Difficulty,
    EngineConfig,
    preset,
)
from .random_source import RandomSource, SystemRandomSource
from .state import GameResult, GameState, GameStatus
from .timer import ThreadingTicker, TickCallback, Ticker

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]
WinListener = Callable[[GameResult], None]
Clock = Callable[[], int]
TickerFactory = Callable[[TickCallback], Ticker]


def monotonic_ms() -> int:
    """Default engine clock, in milliseconds."""
    return int(time.monotonic() * 1000)


# ============================================================================
# Subscriptions
# ============================================================================

class Subscription:
    """Handle returned by ``subscribe``; call ``unsubscribe`` to detach."""

    def __init__(self, listeners: Dict[int, Callable], key: int) -> None:
        self._listeners = listeners
        self._key = key

    @property
    def active(self) -> bool:
        return self._key in self._listeners

    def unsubscribe(self) -> None:
        self._listeners.pop(self._key, None)


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Stateful Minesweeper rules engine.

    Every command returns the snapshot that is current afterwards. A no-op
    returns the previous snapshot object unchanged and notifies nobody, so
    callers can detect change with ``is``.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        random_source: Optional[RandomSource] = None,
        clock: Optional[Clock] = None,
        ticker_factory: Optional[TickerFactory] = None,
    ) -> None:
        """
        Initialize the engine with the initial preset loaded.

        Args:
            config: Engine settings (tick interval, hints per game).
            random_source: Source for mine placement. Defaults to the
                system entropy pool.
            clock: Millisecond clock used for ``started_at`` and elapsed
                time. Defaults to a monotonic clock.
            ticker_factory: Builds the tick driver for each game. Defaults
                to a ``ThreadingTicker`` at ``config.tick_interval_ms``.
        """
        self.config = config or EngineConfig()
        self.random_source = random_source or SystemRandomSource()
        self._clock = clock or monotonic_ms
        self._ticker_factory = ticker_factory or functools.partial(
            ThreadingTicker, self.config.tick_interval_ms / 1000
        )

        self._lock = threading.RLock()
        self._ticker: Optional[Ticker] = None
        self._generation = 0
        self._keys = itertools.count()
        self._listeners: Dict[int, StateListener] = {}
        self._win_listeners: Dict[int, WinListener] = {}
        self._last_result: Optional[GameResult] = None

        self._state = GameState.initial(
            PRESETS[self.config.initial_difficulty],
            self.config.hints_per_game,
        )

    # ========================================================================
    # Snapshot Access
    # ========================================================================

    @property
    def state(self) -> GameState:
        """Current snapshot."""
        return self._state

    @property
    def ticker(self) -> Optional[Ticker]:
        """Tick driver of the running game, if the clock is running."""
        return self._ticker

    @property
    def last_result(self) -> Optional[GameResult]:
        """Result of the current game once it has been won."""
        return self._last_result

    def subscribe(self, listener: StateListener) -> Subscription:
        """
        Register a snapshot listener.

        The listener is called at once with the current snapshot, then
        synchronously after every committed change, timer ticks included.
        """
        with self._lock:
            key = next(self._keys)
            self._listeners[key] = listener
            listener(self._state)
        return Subscription(self._listeners, key)

    def on_win(self, listener: WinListener) -> Subscription:
        """Register a listener for won games (difficulty and time)."""
        with self._lock:
            key = next(self._keys)
            self._win_listeners[key] = listener
        return Subscription(self._win_listeners, key)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def new_game(
        self,
        rows: int,
        cols: int,
        mines: int,
        difficulty: Union[Difficulty, str] = Difficulty.CUSTOM,
    ) -> GameState:
        """
        Start a fresh game.

        Raises:
            ConfigurationError: If the dimensions or mine count are invalid.
        """
        config = BoardConfig(rows, cols, mines, Difficulty.parse(difficulty))
        return self.new_game_from(config)

    def new_game_from(self, config: BoardConfig) -> GameState:
        """Start a fresh game from a validated configuration."""
        with self._lock:
            self._stop_timer()
            self._generation += 1
            self._last_result = None
            state = GameState.initial(config, self.config.hints_per_game)
            logger.info(
                f"New {config.difficulty.value} game: "
                f"{config.rows}x{config.cols}, {config.mines} mines"
            )
            return self._commit(state)

    def new_preset(self, name: Union[Difficulty, str]) -> GameState:
        """Start a Beginner, Intermediate or Expert game."""
        return self.new_game_from(preset(name))

    def restart(self) -> GameState:
        """Start over with the current dimensions; mines are re-drawn."""
        with self._lock:
            state = self._state
            return self.new_game(
                state.rows, state.cols, state.mines, state.difficulty
            )

    def close(self) -> None:
        """Stop the clock. The snapshot stays readable."""
        with self._lock:
            self._stop_timer()

    def __enter__(self) -> "GameEngine":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ========================================================================
    # Player Commands
    # ========================================================================

    def reveal(self, x: int, y: int) -> GameState:
        """
        Reveal the tile at (x, y).

        The first reveal places the mines around it, so it is always safe.
        """
        with self._lock:
            return self._commit(self._reveal(self._state, x, y))

    def toggle_flag(self, x: int, y: int) -> GameState:
        """Flag or unflag a covered tile."""
        with self._lock:
            return self._commit(self._toggle_flag(self._state, x, y))

    def chord(self, x: int, y: int) -> GameState:
        """Reveal the unflagged neighbors of a satisfied number."""
        with self._lock:
            return self._commit(self._chord(self._state, x, y))

    def use_hint(self) -> GameState:
        """Reveal the first safe covered tile in row-major order."""
        with self._lock:
            return self._commit(self._use_hint(self._state))

    # ========================================================================
    # Transitions
    # ========================================================================

    def _reveal(self, state: GameState, x: int, y: int) -> GameState:
        if state.is_finished:
            return state
        tile = state.tile_at(x, y)
        if tile is None or tile.is_revealed or tile.is_flagged:
            return state

        if state.first_click:
            board = state.board.with_mines(x, y, state.mines, self.random_source)
            state = replace(
                state,
                board=board,
                status=GameStatus.PLAYING,
                first_click=False,
                started_at=self._clock(),
            )
            tile = board[y][x]

        if tile.is_mine:
            return self._finish(state, state.board.reveal_all_mines(), GameStatus.LOST)

        return self._settle(state, state.board.flood_reveal(x, y))

    def _toggle_flag(self, state: GameState, x: int, y: int) -> GameState:
        if state.is_finished:
            return state
        tile = state.tile_at(x, y)
        if tile is None or tile.is_revealed:
            return state

        flagged = not tile.is_flagged
        flags_placed = state.flags_placed + (1 if flagged else -1)
        return replace(
            state,
            board=state.board.with_tile(tile.flagged(flagged)),
            flags_placed=flags_placed,
            mines_left=max(0, state.mines - flags_placed),
        )

    def _chord(self, state: GameState, x: int, y: int) -> GameState:
        if state.status is not GameStatus.PLAYING:
            return state
        tile = state.tile_at(x, y)
        if tile is None or not tile.is_revealed or tile.is_mine:
            return state
        if tile.adjacent_mines == 0:
            return state
        if state.board.count_adjacent_flags(x, y) != tile.adjacent_mines:
            return state

        board = state.board
        hit_mine = False
        for neighbor in state.board.neighbors(x, y):
            if neighbor.is_flagged or neighbor.is_revealed:
                continue
            if neighbor.is_mine:
                # Flags matched the count but sat on the wrong tiles
                hit_mine = True
                board = board.with_tile(neighbor.revealed())
            else:
                board = board.flood_reveal(neighbor.x, neighbor.y)

        if hit_mine:
            return self._finish(state, board.reveal_all_mines(), GameStatus.LOST)
        if board is state.board:
            return state
        return self._settle(state, board)

    def _use_hint(self, state: GameState) -> GameState:
        if state.hints_left <= 0 or state.is_finished:
            return state
        for tile in state.board.iter_tiles():
            if tile.is_mine or tile.is_revealed or tile.is_flagged:
                continue
            revealed = self._reveal(state, tile.x, tile.y)
            return replace(revealed, hints_left=state.hints_left - 1)
        return state

    def _settle(self, state: GameState, board: Board) -> GameState:
        """Apply a revealed board, finishing the game if nothing is left."""
        if board.hidden_safe_count() == 0:
            return self._finish(state, board, GameStatus.WON)
        return replace(state, board=board)

    def _finish(
        self, state: GameState, board: Board, status: GameStatus
    ) -> GameState:
        return replace(
            state, board=board, status=status, elapsed_ms=self._elapsed(state)
        )

    def _elapsed(self, state: GameState) -> int:
        if state.started_at is None:
            return state.elapsed_ms
        return max(0, self._clock() - state.started_at)

    # ========================================================================
    # Commit & Notification
    # ========================================================================

    def _commit(self, state: GameState) -> GameState:
        """Replace the snapshot, drive the clock and notify listeners."""
        previous = self._state
        if state is previous:
            logger.debug("Command left the game unchanged")
            return previous
        self._state = state

        result = None
        if state.status is GameStatus.PLAYING and previous.status is not GameStatus.PLAYING:
            self._start_timer()
        elif state.is_finished and not previous.is_finished:
            self._stop_timer()
            logger.info(
                f"Game {state.status.value} after {state.elapsed_ms} ms "
                f"({state.difficulty.value})"
            )
            if state.status is GameStatus.WON:
                result = GameResult(state.difficulty, state.elapsed_ms)
                self._last_result = result

        for listener in list(self._listeners.values()):
            listener(state)
        if result is not None:
            for win_listener in list(self._win_listeners.values()):
                win_listener(result)
        return state

    # ========================================================================
    # Timer
    # ========================================================================

    def _start_timer(self) -> None:
        self._stop_timer()
        generation = self._generation
        self._ticker = self._ticker_factory(lambda: self._on_tick(generation))
        self._ticker.start()

    def _stop_timer(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
            self._ticker = None

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            state = self._state
            if generation != self._generation:
                return
            if state.status is not GameStatus.PLAYING or state.started_at is None:
                return
            self._commit(replace(state, elapsed_ms=self._elapsed(state)))

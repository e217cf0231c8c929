"""
Gymnasium environment wrapper for Minesweeper.

Drives a ``GameEngine`` headlessly: actions become engine commands and the
snapshot board becomes the observation.
"""
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import BEGINNER, BoardConfig
from .display import render_text
from .engine import GameEngine
from .random_source import NumpyRandomSource
from .state import GameState, GameStatus
from .timer import ManualTicker


class ActionType(IntEnum):
    """Command selected by each block of the action space."""

    REVEAL = 0
    FLAG = 1
    CHORD = 2


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden tile
        - -2 = flagged tile
        - 0-8 = revealed tile with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 3 * rows * cols, split in blocks of
        rows * cols: reveal, flag, chord. Index i inside a block targets
        the tile at (x=i % cols, y=i // cols).

    Rewards:
        - +1 for revealing safe tiles
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: Beginner, 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BEGINNER
        self.render_mode = render_mode
        self.engine = GameEngine(
            random_source=NumpyRandomSource(),
            ticker_factory=ManualTicker,
        )
        self.engine.new_game_from(self.config)

        self._cells = self.config.rows * self.config.cols

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(ActionType) * self._cells)

        self._steps = 0
        self._total_safe_tiles = self._cells - self.config.mines

    @property
    def state(self) -> GameState:
        return self.engine.state

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed; the same seed reproduces the mine layout
                for the same first move.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.engine.random_source = NumpyRandomSource(self.np_random)
        self.engine.new_game_from(self.config)
        self._steps = 0

        return self.state.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index (see class docstring).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action_type, x, y = self.decode_action(action)
        self._steps += 1

        reward = self._apply(action_type, x, y)

        observation = self.state.board.get_observation()
        terminated = self.state.is_finished
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def decode_action(self, action: int) -> Tuple[ActionType, int, int]:
        """Convert flat action index to (action type, x, y)."""
        action_type = ActionType(int(action) // self._cells)
        index = int(action) % self._cells
        return action_type, index % self.config.cols, index // self.config.cols

    def encode_action(self, action_type: ActionType, x: int, y: int) -> int:
        """Convert (action type, x, y) to a flat action index."""
        return int(action_type) * self._cells + y * self.config.cols + x

    def _apply(self, action_type: ActionType, x: int, y: int) -> float:
        """
        Send the command to the engine and score the result.

        Returns:
            Reward value.
        """
        before = self.state
        if action_type == ActionType.REVEAL:
            after = self.engine.reveal(x, y)
        elif action_type == ActionType.FLAG:
            after = self.engine.toggle_flag(x, y)
        else:
            after = self.engine.chord(x, y)

        if after is before:
            return -0.1
        if after.status is GameStatus.WON:
            return 10.0
        if after.status is GameStatus.LOST:
            return -10.0
        if action_type == ActionType.FLAG:
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        state = self.state
        revealed = sum(
            1 for tile in state.board.iter_tiles()
            if tile.is_revealed and not tile.is_mine
        )

        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self._total_safe_tiles,
            "game_state": state.status.name,
            "mines_left": state.mines_left,
            "hints_left": state.hints_left,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_text(self.state)
        if self.render_mode == "human":
            print(render_text(self.state))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the game.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        state = self.state
        if state.is_finished:
            return mask

        board = state.board
        chord_allowed = state.status is GameStatus.PLAYING
        for tile in board.iter_tiles():
            index = tile.y * self.config.cols + tile.x
            if tile.is_hidden:
                mask[index] = True
            if not tile.is_revealed:
                mask[self._cells + index] = True
            elif chord_allowed and self._can_chord(tile.x, tile.y):
                mask[2 * self._cells + index] = True
        return mask

    def _can_chord(self, x: int, y: int) -> bool:
        board = self.state.board
        tile = board[y][x]
        if tile.is_mine or tile.adjacent_mines == 0:
            return False
        if board.count_adjacent_flags(x, y) != tile.adjacent_mines:
            return False
        return any(n.is_hidden for n in board.neighbors(x, y))

    def close(self) -> None:
        self.engine.close()
        super().close()


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
    asynchronous: bool = True,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel rollouts.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.
        asynchronous: Step each environment in its own process; False keeps
            them in this process.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    env_fns = [make_env for _ in range(n_envs)]
    if asynchronous:
        return gym.vector.AsyncVectorEnv(env_fns)
    return gym.vector.SyncVectorEnv(env_fns)

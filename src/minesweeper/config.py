"""
Configuration for Minesweeper games and the engine.

Board dimensions are validated up front so that a safe first click is
always possible; invalid setups raise ``ConfigurationError`` instead of
failing mid-game.
"""
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


# ============================================================================
# Errors
# ============================================================================

class ConfigurationError(ValueError):
    """Raised when a game or engine configuration is invalid."""


# ============================================================================
# Difficulty
# ============================================================================

class Difficulty(Enum):
    """Difficulty label attached to every game."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    EXPERT = "Expert"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        """
        Resolve a difficulty from an enum member or a name.

        Args:
            value: Difficulty member, or a case-insensitive name such as
                "beginner" or "Expert".

        Returns:
            The matching difficulty.

        Raises:
            ConfigurationError: If the name is unknown.
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if str(value).strip().lower() == member.value.lower():
                return member
        raise ConfigurationError(f"Unknown difficulty: {value!r}")


# ============================================================================
# Board Configuration
# ============================================================================

def max_exclusion_size(rows: int, cols: int) -> int:
    """Largest first-click exclusion zone (the clicked tile plus neighbors)."""
    return min(3, rows) * min(3, cols)


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mines: Total mines to place on the first reveal.
        difficulty: Label used for best-time records.
    """

    rows: int = 9
    cols: int = 9
    mines: int = 10
    difficulty: Difficulty = Difficulty.CUSTOM

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure a safe first click is possible wherever it lands."""
        for name in ("rows", "cols", "mines"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(
                    f"{name.capitalize()} must be a whole number (got {value!r})"
                )
        if self.rows < 1 or self.cols < 1:
            raise ConfigurationError(
                f"Board dimensions must be positive (got {self.rows}x{self.cols})"
            )
        if self.mines < 0:
            raise ConfigurationError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - max_exclusion_size(self.rows, self.cols)
        if self.mines > max_mines:
            raise ConfigurationError(
                f"Too many mines for a {self.rows}x{self.cols} board "
                f"(max {max_mines} with a safe first click)"
            )

    @property
    def total_tiles(self) -> int:
        return self.rows * self.cols


# Preset difficulty levels (rows x cols / mines)
BEGINNER = BoardConfig(9, 9, 10, Difficulty.BEGINNER)
INTERMEDIATE = BoardConfig(16, 16, 40, Difficulty.INTERMEDIATE)
EXPERT = BoardConfig(16, 30, 99, Difficulty.EXPERT)

PRESETS: Dict[Difficulty, BoardConfig] = {
    Difficulty.BEGINNER: BEGINNER,
    Difficulty.INTERMEDIATE: INTERMEDIATE,
    Difficulty.EXPERT: EXPERT,
}


def preset(name: Union[Difficulty, str]) -> BoardConfig:
    """
    Look up a preset board configuration.

    Raises:
        ConfigurationError: For unknown names and for ``Custom``, which has
            no fixed dimensions.
    """
    difficulty = Difficulty.parse(name)
    if difficulty not in PRESETS:
        raise ConfigurationError(f"{difficulty.value} is not a preset")
    return PRESETS[difficulty]


# ============================================================================
# Engine Configuration
# ============================================================================

@dataclass(frozen=True)
class EngineConfig:
    """
    Runtime settings for ``GameEngine``.

    Attributes:
        tick_interval_ms: Period of the elapsed-time tick while playing.
        hints_per_game: Hints granted by every new game.
        initial_difficulty: Preset loaded before the first ``new_game``.
    """

    tick_interval_ms: int = 200
    hints_per_game: int = 3
    initial_difficulty: Difficulty = Difficulty.BEGINNER

    def __post_init__(self) -> None:
        if self.tick_interval_ms <= 0:
            raise ConfigurationError("Tick interval must be positive")
        if self.hints_per_game < 0:
            raise ConfigurationError("Hints per game cannot be negative")
        if self.initial_difficulty not in PRESETS:
            raise ConfigurationError("Initial difficulty must be a preset")

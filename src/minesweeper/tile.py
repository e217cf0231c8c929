"""
Tile module for Minesweeper game.

Represents individual tiles on the game board with their visibility
(hidden/revealed/flagged) and content (mine/number). Tiles are immutable;
every change produces a new tile.
"""
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Tuple


# ============================================================================
# Constants
# ============================================================================

class TileState(Enum):
    """Possible visual states of a tile."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass(frozen=True)
class Tile:
    """
    Represents a single tile in the Minesweeper grid.

    Attributes:
        x: Column index (0-based).
        y: Row index (0-based).
        is_mine: Whether this tile contains a mine.
        is_revealed: Whether the tile has been uncovered.
        is_flagged: Whether the player marked the tile with a flag.
        adjacent_mines: Count of mines in neighboring tiles (0-8).
            Always 0 on mine tiles.
    """

    x: int
    y: int
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0

    def revealed(self) -> "Tile":
        """Return a revealed copy of this tile."""
        if self.is_revealed:
            return self
        return replace(self, is_revealed=True)

    def flagged(self, value: bool) -> "Tile":
        """Return a copy with the flag set to ``value``."""
        if self.is_flagged == value:
            return self
        return replace(self, is_flagged=value)

    def with_mine(self) -> "Tile":
        """Return a copy of this tile holding a mine."""
        return replace(self, is_mine=True, adjacent_mines=0)

    @property
    def state(self) -> TileState:
        """Visual state derived from the reveal and flag markers."""
        if self.is_revealed:
            return TileState.REVEALED
        if self.is_flagged:
            return TileState.FLAGGED
        return TileState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if tile is hidden and unflagged."""
        return self.state == TileState.HIDDEN

    @property
    def position(self) -> Tuple[int, int]:
        """(x, y) coordinates of the tile."""
        return self.x, self.y

    def to_observation(self) -> int:
        """
        Convert tile to an integer observation value.

        Returns:
            -1: Hidden tile
            -2: Flagged tile
            0-8: Revealed tile with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.is_revealed:
            return 9 if self.is_mine else self.adjacent_mines
        if self.is_flagged:
            return -2
        return -1

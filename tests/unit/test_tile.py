"""
Unit tests for Tile class.

Tests tile state derivation, copy-on-write updates and observation values.
"""
import dataclasses

import pytest
from minesweeper import Tile, TileState


# ============================================================================
# Tile Initialization Tests
# ============================================================================

class TestTileInitialization:
    """Test tile creation and default values."""

    def test_default_tile_is_hidden_and_safe(self) -> None:
        """New tile should be a hidden non-mine with no count."""
        tile = Tile(3, 4)
        assert tile.is_mine is False
        assert tile.is_revealed is False
        assert tile.is_flagged is False
        assert tile.adjacent_mines == 0
        assert tile.state == TileState.HIDDEN

    def test_position_is_x_then_y(self) -> None:
        """Position should be (column, row)."""
        assert Tile(3, 4).position == (3, 4)

    def test_tile_is_frozen(self, hidden_tile: Tile) -> None:
        """Tiles cannot be mutated in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            hidden_tile.is_revealed = True


# ============================================================================
# Copy-on-write Tests
# ============================================================================

class TestTileUpdates:
    """Test that updates return new tiles."""

    def test_revealed_returns_new_tile(self, hidden_tile: Tile) -> None:
        """Revealing should leave the original untouched."""
        revealed = hidden_tile.revealed()
        assert revealed.is_revealed is True
        assert hidden_tile.is_revealed is False
        assert revealed.state == TileState.REVEALED

    def test_revealed_is_identity_when_already_revealed(
        self, hidden_tile: Tile
    ) -> None:
        """Revealing twice should return the same object."""
        revealed = hidden_tile.revealed()
        assert revealed.revealed() is revealed

    def test_flagged_sets_and_clears(self, hidden_tile: Tile) -> None:
        """Flag can be placed and removed."""
        flagged = hidden_tile.flagged(True)
        assert flagged.state == TileState.FLAGGED
        assert flagged.is_hidden is False
        assert flagged.flagged(False).state == TileState.HIDDEN

    def test_with_mine_clears_adjacency(self) -> None:
        """Mine tiles always report zero adjacent mines."""
        tile = Tile(0, 0, adjacent_mines=3).with_mine()
        assert tile.is_mine is True
        assert tile.adjacent_mines == 0


# ============================================================================
# Tile Observation Tests
# ============================================================================

class TestTileObservation:
    """Test tile observation values."""

    def test_hidden_tile_observation_is_negative_one(
        self, hidden_tile: Tile
    ) -> None:
        assert hidden_tile.to_observation() == -1

    def test_flagged_tile_observation_is_negative_two(
        self, hidden_tile: Tile
    ) -> None:
        assert hidden_tile.flagged(True).to_observation() == -2

    def test_hidden_mine_observation_is_hidden(self, mine_tile: Tile) -> None:
        """Covered mines must not leak through the observation."""
        assert mine_tile.to_observation() == -1

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_tile_observation_matches_adjacent_count(
        self, count: int
    ) -> None:
        """Revealed tile returns its adjacent mine count."""
        tile = Tile(1, 1, adjacent_mines=count).revealed()
        assert tile.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_tile: Tile) -> None:
        assert mine_tile.revealed().to_observation() == 9

"""
Board module for Minesweeper game.

Implements the immutable tile grid together with the grid algorithms:
deferred mine placement, adjacency counting and breadth-first flood fill.
Every operation returns a new ``Board``; unchanged rows are shared.
"""
from collections import deque
from dataclasses import dataclass, replace
from typing import Deque, Iterator, List, Optional, Set, Tuple

import numpy as np

from .random_source import RandomSource
from .tile import Tile

Position = Tuple[int, int]
Grid = Tuple[Tuple[Tile, ...], ...]


# ============================================================================
# Board Class
# ============================================================================

@dataclass(frozen=True)
class Board:
    """
    Minesweeper game board.

    Tiles are stored row-major and indexed as ``board[y][x]``.
    """

    tiles: Grid

    @classmethod
    def empty(cls, rows: int, cols: int) -> "Board":
        """Create an all-hidden, mine-free board."""
        return cls(tuple(
            tuple(Tile(x, y) for x in range(cols))
            for y in range(rows)
        ))

    def __getitem__(self, y: int) -> Tuple[Tile, ...]:
        return self.tiles[y]

    def __iter__(self) -> Iterator[Tuple[Tile, ...]]:
        return iter(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    @property
    def rows(self) -> int:
        return len(self.tiles)

    @property
    def cols(self) -> int:
        return len(self.tiles[0]) if self.tiles else 0

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= y < self.rows and 0 <= x < self.cols

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        """Get tile at position, or None if out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self.tiles[y][x]

    def neighbor_positions(self, x: int, y: int) -> List[Position]:
        """
        Get valid neighboring positions.

        Args:
            x: Column of the center tile.
            y: Row of the center tile.

        Returns:
            Up to 8 (x, y) tuples, row by row.
        """
        positions = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.in_bounds(new_x, new_y):
                    positions.append((new_x, new_y))
        return positions

    def neighbors(self, x: int, y: int) -> List[Tile]:
        """Get the tiles surrounding a position."""
        return [self.tiles[ny][nx] for nx, ny in self.neighbor_positions(x, y)]

    def iter_tiles(self) -> Iterator[Tile]:
        """Iterate over all tiles in row-major order."""
        for row in self.tiles:
            yield from row

    def count_adjacent_flags(self, x: int, y: int) -> int:
        """Count flagged tiles adjacent to position."""
        return sum(1 for tile in self.neighbors(x, y) if tile.is_flagged)

    def hidden_safe_count(self) -> int:
        """Count non-mine tiles that are still covered."""
        return sum(
            1 for tile in self.iter_tiles()
            if not tile.is_mine and not tile.is_revealed
        )

    def mine_count(self) -> int:
        return sum(1 for tile in self.iter_tiles() if tile.is_mine)

    # ========================================================================
    # Mine Placement (Mid-level)
    # ========================================================================

    def exclusion_zone(self, x: int, y: int) -> Set[Position]:
        """The tile at (x, y) plus its in-bounds neighbors."""
        zone = set(self.neighbor_positions(x, y))
        zone.add((x, y))
        return zone

    def with_mines(
        self, safe_x: int, safe_y: int, count: int, rng: RandomSource
    ) -> "Board":
        """
        Place mines randomly, keeping the safe tile and its neighbors clear.

        Candidates are shuffled by ``rng`` and the first ``count`` become
        mines, a uniform sample without replacement. Adjacency counts are
        recomputed for the whole board.

        Args:
            safe_x: Column of the first revealed tile.
            safe_y: Row of the first revealed tile.
            count: Number of mines to place.
            rng: Source driving the shuffle.

        Returns:
            New board with mines and adjacency counts.

        Raises:
            ValueError: If there are fewer candidates than mines. Validated
                configurations never reach this.
        """
        excluded = self.exclusion_zone(safe_x, safe_y)
        candidates = [
            tile.position for tile in self.iter_tiles()
            if tile.position not in excluded
        ]
        if count > len(candidates):
            raise ValueError(
                f"Cannot place {count} mines in {len(candidates)} free tiles"
            )
        rng.shuffle(candidates)
        mine_positions = set(candidates[:count])

        grid = [list(row) for row in self.tiles]
        for mx, my in mine_positions:
            grid[my][mx] = grid[my][mx].with_mine()
        return Board(_freeze(grid)).with_adjacency()

    def with_adjacency(self) -> "Board":
        """Recalculate adjacent mine counts for all tiles."""
        grid = []
        for row in self.tiles:
            new_row = []
            for tile in row:
                if tile.is_mine:
                    count = 0
                else:
                    count = sum(
                        1 for n in self.neighbors(tile.x, tile.y) if n.is_mine
                    )
                if count != tile.adjacent_mines:
                    tile = replace(tile, adjacent_mines=count)
                new_row.append(tile)
            grid.append(tuple(new_row))
        return Board(tuple(grid))

    # ========================================================================
    # Revealing (Mid-level)
    # ========================================================================

    def with_tile(self, tile: Tile) -> "Board":
        """Return a board with ``tile`` replacing the one at its position."""
        row = list(self.tiles[tile.y])
        row[tile.x] = tile
        grid = list(self.tiles)
        grid[tile.y] = tuple(row)
        return Board(tuple(grid))

    def flood_reveal(self, start_x: int, start_y: int) -> "Board":
        """
        Reveal from a tile using breadth-first expansion.

        Zero-count tiles enqueue their neighbors; numbered tiles are
        revealed but stop the expansion. Revealed or flagged tiles are
        skipped, so running it over an open region changes nothing.

        Args:
            start_x: Column to start from.
            start_y: Row to start from.

        Returns:
            New board, or this board if nothing was revealed.
        """
        if not self.in_bounds(start_x, start_y):
            return self

        grid: Optional[List[List[Tile]]] = None
        queue: Deque[Position] = deque([(start_x, start_y)])
        visited: Set[Position] = {(start_x, start_y)}

        while queue:
            x, y = queue.popleft()
            tile = self.tiles[y][x]
            if tile.is_revealed or tile.is_flagged:
                continue
            if grid is None:
                grid = [list(row) for row in self.tiles]
            grid[y][x] = tile.revealed()
            if tile.is_mine or tile.adjacent_mines > 0:
                continue
            for position in self.neighbor_positions(x, y):
                if position not in visited:
                    visited.add(position)
                    queue.append(position)

        if grid is None:
            return self
        return Board(_freeze(grid))

    def reveal_all_mines(self) -> "Board":
        """Reveal every mine, leaving other tiles untouched."""
        return Board(tuple(
            tuple(tile.revealed() if tile.is_mine else tile for tile in row)
            for row in self.tiles
        ))

    # ========================================================================
    # Views (High-level)
    # ========================================================================

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array of shape (rows, cols) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for tile in self.iter_tiles():
            obs[tile.y, tile.x] = tile.to_observation()
        return obs

    def get_valid_reveals(self) -> List[Position]:
        """
        Get positions that can be revealed.

        Returns:
            List of (x, y) positions that are hidden and unflagged.
        """
        return [tile.position for tile in self.iter_tiles() if tile.is_hidden]


def _freeze(grid: List[List[Tile]]) -> Grid:
    return tuple(tuple(row) for row in grid)

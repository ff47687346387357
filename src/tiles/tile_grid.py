"""
Terrain grid - the authoritative tile map of a level.

Cells are stored in a flat list indexed ``y * cols + x``. Every accessor is
bounds-checked: writes outside the grid are ignored and reads return None,
so generation code can probe neighbor offsets past the edges freely.
"""

import math
from typing import Dict, Iterator, List, Optional, Tuple

from config import TILE_SIZE, GRID_COLS, GRID_ROWS
from .tile_types import TerrainType


class TerrainGrid:
    """Rectangular grid of terrain types, Floor by default."""

    def __init__(self, cols: int = GRID_COLS, rows: int = GRID_ROWS,
                 tile_size: int = TILE_SIZE, fill: TerrainType = TerrainType.FLOOR):
        if cols <= 0 or rows <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {cols}x{rows}")
        if tile_size <= 0:
            raise ValueError(f"Tile size must be positive, got {tile_size}")
        self.cols = cols
        self.rows = rows
        self.tile_size = tile_size
        self._cells: List[TerrainType] = [fill] * (cols * rows)

    @classmethod
    def for_world(cls, world_width: float, world_height: float,
                  tile_size: int = TILE_SIZE) -> "TerrainGrid":
        """Size a grid to cover a world of the given pixel dimensions."""
        return cls(math.ceil(world_width / tile_size), math.ceil(world_height / tile_size), tile_size)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.cols, self.rows)

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def set_tile(self, x: int, y: int, terrain_type: TerrainType) -> None:
        """Set a cell. Out-of-bounds writes are ignored."""
        if self.in_bounds(x, y):
            self._cells[y * self.cols + x] = terrain_type

    def tile_at(self, x: int, y: int) -> Optional[TerrainType]:
        """Get a cell, or None outside the grid."""
        if self.in_bounds(x, y):
            return self._cells[y * self.cols + x]
        return None

    def world_to_tile(self, wx: float, wy: float) -> Tuple[int, int]:
        """Convert a world (pixel) coordinate to tile indices."""
        return (math.floor(wx / self.tile_size), math.floor(wy / self.tile_size))

    def tile_at_world_position(self, wx: float, wy: float) -> Optional[TerrainType]:
        tx, ty = self.world_to_tile(wx, wy)
        return self.tile_at(tx, ty)

    def fill(self, terrain_type: TerrainType) -> None:
        self._cells = [terrain_type] * (self.cols * self.rows)

    def cells(self) -> Iterator[Tuple[int, int, TerrainType]]:
        """Iterate (x, y, terrain_type) in row-major order."""
        for i, terrain_type in enumerate(self._cells):
            yield i % self.cols, i // self.cols, terrain_type

    def positions_of(self, terrain_type: TerrainType) -> List[Tuple[int, int]]:
        return [(x, y) for x, y, t in self.cells() if t == terrain_type]

    def count(self, terrain_type: TerrainType) -> int:
        return self._cells.count(terrain_type)

    def counts(self) -> Dict[TerrainType, int]:
        return {t: self._cells.count(t) for t in TerrainType}

    def coverage(self, terrain_type: TerrainType) -> float:
        """Fraction of cells holding the given terrain type."""
        return self.count(terrain_type) / self.cell_count

    def to_rows(self) -> List[List[int]]:
        """Row-major 2D list of tile ids, the shape renderers consume."""
        return [
            [int(t) for t in self._cells[y * self.cols:(y + 1) * self.cols]]
            for y in range(self.rows)
        ]

    def __eq__(self, other) -> bool:
        if not isinstance(other, TerrainGrid):
            return NotImplemented
        return (self.cols, self.rows, self.tile_size) == (other.cols, other.rows, other.tile_size) \
            and self._cells == other._cells

    def __repr__(self) -> str:
        return f"TerrainGrid({self.cols}x{self.rows}, tile_size={self.tile_size})"

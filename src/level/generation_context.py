"""Per-pass generation state.

A GenerationContext bundles everything one generation pass mutates or draws
from: the grid being painted, the processed bitmap that keeps clusters from
overlapping, the RNG, and the noise field. Nothing here is global; once the
pass finishes the context is released and only the grid survives.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from src.level.noise import NoiseField
from src.tiles.tile_grid import TerrainGrid
from src.tiles.tile_registry import TerrainRegistry, terrain_registry


class ProcessedMask:
    """Boolean bitmap matching a grid's dimensions, flat with a row stride."""

    def __init__(self, cols: int, rows: int):
        self.cols = cols
        self.rows = rows
        self._bits: List[bool] = [False] * (cols * rows)

    def is_set(self, x: int, y: int) -> bool:
        """Out-of-bounds cells read as processed so they are never claimed."""
        if 0 <= x < self.cols and 0 <= y < self.rows:
            return self._bits[y * self.cols + x]
        return True

    def mark(self, x: int, y: int) -> None:
        if 0 <= x < self.cols and 0 <= y < self.rows:
            self._bits[y * self.cols + x] = True

    def count(self) -> int:
        return sum(self._bits)


@dataclass
class GenerationContext:
    grid: TerrainGrid
    rng: random.Random
    noise: NoiseField
    registry: TerrainRegistry = field(default_factory=lambda: terrain_registry)
    processed: Optional[ProcessedMask] = None

    def __post_init__(self):
        if self.processed is None:
            self.processed = ProcessedMask(self.grid.cols, self.grid.rows)

    @classmethod
    def create(cls, grid: TerrainGrid, seed: Optional[int] = None,
               noise_rng: Optional[random.Random] = None,
               registry: Optional[TerrainRegistry] = None) -> "GenerationContext":
        """Build a context with an RNG seeded from ``seed``.

        The noise table is drawn from ``noise_rng`` when given, otherwise from
        the context RNG itself.
        """
        rng = random.Random(seed)
        noise = NoiseField.seed(noise_rng if noise_rng is not None else rng)
        return cls(grid=grid, rng=rng, noise=noise, registry=registry or terrain_registry)

    def release(self) -> TerrainGrid:
        """Drop the processed bitmap and hand back the finished grid."""
        self.processed = None
        return self.grid

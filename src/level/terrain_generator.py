"""
Terrain Generator - builds the terrain grid for one level

Pipeline (run synchronously, all at once, at level start):
  1. fill the grid with Floor
  2. run each configured cluster pass in order (spacing, density veto,
     connecting paths/streams, coverage top-up)
  3. bush undergrowth next to forest
  4. meadow clearings on bare floor
  5. border band, last, so it always wins at the edges

The generation context (processed bitmap, RNG, noise) is released when the
pipeline finishes; only the grid outlives it.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from config import GRID_COLS, GRID_ROWS, TILE_SIZE, BORDER_WIDTH, LEVELS_PER_STAGE
from src.level.border_painter import paint_border
from src.level.cluster_generator import (
    add_clearings,
    add_undergrowth,
    create_terrain_clusters,
    generate_region_clusters,
)
from src.level.config_loader import load_terrain_config
from src.level.generation_context import GenerationContext
from src.level.noise import NoiseField
from src.level.seed_manager import SeedManager
from src.level.terrain_config import TerrainGenConfig
from src.tiles.tile_grid import TerrainGrid
from src.tiles.tile_registry import TerrainRegistry, terrain_registry
from src.tiles.tile_types import TerrainType

logger = logging.getLogger(__name__)

# Flat pass used by the basic generator: (terrain, clusters, min size, max size)
BASIC_CLUSTER_PASSES = (
    (TerrainType.FOREST, 3, 8, 15),
    (TerrainType.BUSH, 4, 6, 12),
    (TerrainType.SWAMP, 2, 5, 10),
    (TerrainType.MEADOW, 3, 7, 12),
)


def stage_for_level(level: int) -> int:
    """Levels 1-8 are stage 1, 9-16 stage 2, and so on."""
    return max(0, level - 1) // LEVELS_PER_STAGE + 1


@dataclass
class TerrainLevel:
    """A generated level: the frozen grid plus how it was made."""
    grid: TerrainGrid
    stage: int
    seed: Optional[int] = None
    level_index: Optional[int] = None
    centers: Dict[TerrainType, List[Tuple[int, int]]] = field(default_factory=dict)


def run_pipeline(ctx: GenerationContext, config: TerrainGenConfig, stage: int) -> Dict[TerrainType, List[Tuple[int, int]]]:
    """Paint every stage-scaled pass onto ``ctx.grid``. Returns centers per type."""
    grid = ctx.grid
    grid.fill(TerrainType.FLOOR)

    centers: Dict[TerrainType, List[Tuple[int, int]]] = {}
    for plan in config.plan_for_stage(stage):
        centers.setdefault(plan.terrain, []).extend(generate_region_clusters(ctx, plan))

    add_undergrowth(ctx, config.undergrowth_chance, background=config.undergrowth_background)
    add_clearings(ctx, config.clearing_cell_ratio)
    paint_border(grid, config.border_width)
    return centers


def generate_terrain(stage: int = 1, seed: Optional[int] = None,
                     cols: int = GRID_COLS, rows: int = GRID_ROWS, tile_size: int = TILE_SIZE,
                     config: Optional[TerrainGenConfig] = None,
                     registry: Optional[TerrainRegistry] = None) -> TerrainLevel:
    """Generate a stage-scaled level from a single seed."""
    config = config or load_terrain_config()
    grid = TerrainGrid(cols, rows, tile_size)
    ctx = GenerationContext.create(grid, seed=seed, registry=registry)
    centers = run_pipeline(ctx, config, stage)
    ctx.release()
    _log_summary(grid, stage, seed)
    return TerrainLevel(grid=grid, stage=stage, seed=seed, centers=centers)


def generate_basic_terrain(seed: Optional[int] = None,
                           cols: int = GRID_COLS, rows: int = GRID_ROWS, tile_size: int = TILE_SIZE,
                           border_width: int = BORDER_WIDTH,
                           registry: Optional[TerrainRegistry] = None) -> TerrainGrid:
    """Floor fill, four fixed-size flood-fill passes, then the border."""
    grid = TerrainGrid(cols, rows, tile_size)
    ctx = GenerationContext.create(grid, seed=seed, registry=registry)
    for terrain_type, num_clusters, min_size, max_size in BASIC_CLUSTER_PASSES:
        create_terrain_clusters(ctx, terrain_type, num_clusters, min_size, max_size)
    paint_border(grid, border_width)
    ctx.release()
    _log_summary(grid, 0, seed)
    return grid


def _log_summary(grid: TerrainGrid, stage: int, seed: Optional[int]) -> None:
    coverage = ", ".join(
        f"{t.display_name}={grid.coverage(t):.1%}" for t in TerrainType
    )
    logger.info("Terrain generated: %dx%d stage=%d seed=%s (%s)",
                grid.cols, grid.rows, stage, seed, coverage)


class TerrainLevelGenerator:
    """Generates one terrain grid per level from a world seed.

    Each level gets its own seed (derived from the world seed and level
    index), and within a level the noise table and cluster placement draw
    from separate seeded streams.
    """

    def __init__(self, world_seed: Optional[int] = None,
                 config: Optional[TerrainGenConfig] = None,
                 cols: int = GRID_COLS, rows: int = GRID_ROWS, tile_size: int = TILE_SIZE,
                 registry: Optional[TerrainRegistry] = None):
        self.seed_manager = SeedManager(world_seed)
        self.config = config or load_terrain_config()
        self.cols = cols
        self.rows = rows
        self.tile_size = tile_size
        self.registry = registry or terrain_registry

    def generate(self, level_index: int, stage: Optional[int] = None) -> TerrainLevel:
        """Build the grid for ``level_index``; stage defaults from the level."""
        if stage is None:
            stage = stage_for_level(level_index)

        level_seed = self.seed_manager.generate_level_seed(level_index)
        self.seed_manager.generate_sub_seeds(level_seed)

        grid = TerrainGrid(self.cols, self.rows, self.tile_size)
        ctx = GenerationContext(
            grid=grid,
            rng=self.seed_manager.get_random('clusters'),
            noise=NoiseField.seed(self.seed_manager.get_random('noise')),
            registry=self.registry,
        )
        centers = run_pipeline(ctx, self.config, stage)
        ctx.release()

        _log_summary(grid, stage, level_seed)
        return TerrainLevel(grid=grid, stage=stage, seed=level_seed,
                            level_index=level_index, centers=centers)

"""
Cluster Generator - organic terrain regions via randomized flood fill

Each cluster grows from a center cell. Instead of a FIFO queue the fill pops
a uniformly random cell from its work list and tries that cell's eight
neighbors in shuffled order, accepting each with a noise-biased probability.
The result is a rounded, ragged blob rather than a diamond or a snake.

All state lives in the GenerationContext passed in: the grid, the shared
processed bitmap (so clusters never overlap), the RNG and the noise field.
"""

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

from config import CLUSTER_MARGIN, DENSITY_LIMIT, FILL_MARGIN, MAX_PLACEMENT_ATTEMPTS, NOISE_SCALE
from src.level.generation_context import GenerationContext
from src.level.path_connector import connect_clusters
from src.level.terrain_config import ClusterPlan
from src.tiles.tile_grid import TerrainGrid
from src.tiles.tile_types import TerrainType

logger = logging.getLogger(__name__)

Point = Tuple[int, int]

NEIGHBOR_OFFSETS = (
    (0, -1), (1, -1), (1, 0), (1, 1),
    (0, 1), (-1, 1), (-1, 0), (-1, -1),
)


def find_cluster_start(ctx: GenerationContext, margin: int = CLUSTER_MARGIN,
                       max_attempts: int = MAX_PLACEMENT_ATTEMPTS) -> Optional[Point]:
    """Pick a random unprocessed cell at least ``margin`` tiles from every edge.

    Returns None when the interior is empty or ``max_attempts`` draws all
    landed on processed cells.
    """
    grid = ctx.grid
    hi_x = grid.cols - 1 - margin
    hi_y = grid.rows - 1 - margin
    if hi_x < margin or hi_y < margin:
        return None

    for _ in range(max_attempts):
        x = ctx.rng.randint(margin, hi_x)
        y = ctx.rng.randint(margin, hi_y)
        if not ctx.processed.is_set(x, y):
            return (x, y)
    return None


def _fillable(grid: TerrainGrid, x: int, y: int, margin: int) -> bool:
    return margin < x < grid.cols - margin and margin < y < grid.rows - margin


def create_cluster(ctx: GenerationContext, start_x: int, start_y: int,
                   terrain_type: TerrainType, size: int,
                   margin: int = FILL_MARGIN) -> List[Point]:
    """Grow one cluster of up to ``size`` cells from (start_x, start_y).

    The fill may stop short when every frontier neighbor is rejected or
    already processed. Returns the placed cells, center first.
    """
    grid = ctx.grid
    processed = ctx.processed
    rng = ctx.rng

    grid.set_tile(start_x, start_y, terrain_type)
    processed.mark(start_x, start_y)
    placed = [(start_x, start_y)]
    work = [(start_x, start_y)]

    offsets = list(NEIGHBOR_OFFSETS)
    while work and len(placed) < size:
        # Random pick, swap-remove
        index = rng.randrange(len(work))
        cx, cy = work[index]
        work[index] = work[-1]
        work.pop()

        rng.shuffle(offsets)
        for dx, dy in offsets:
            nx, ny = cx + dx, cy + dy
            if not _fillable(grid, nx, ny, margin) or processed.is_set(nx, ny):
                continue

            probability = 0.7 + 0.3 * ctx.noise.noise(nx * NOISE_SCALE, ny * NOISE_SCALE)
            if rng.random() < probability:
                grid.set_tile(nx, ny, terrain_type)
                processed.mark(nx, ny)
                placed.append((nx, ny))
                work.append((nx, ny))
                if len(placed) >= size:
                    break

    return placed


def create_terrain_clusters(ctx: GenerationContext, terrain_type: TerrainType,
                            num_clusters: int, min_size: int, max_size: int) -> List[Point]:
    """Place ``num_clusters`` flood-fill clusters of one terrain type.

    Clusters whose start search runs out of attempts are skipped. Returns the
    centers of the clusters actually placed.
    """
    name = ctx.registry.effect_of(terrain_type).name
    centers: List[Point] = []

    for _ in range(num_clusters):
        start = find_cluster_start(ctx)
        if start is None:
            logger.warning("No free start cell for %s cluster, skipping", name)
            continue

        size = ctx.rng.randint(min_size, max_size)
        cells = create_cluster(ctx, start[0], start[1], terrain_type, size)
        centers.append(start)
        logger.debug("%s cluster at %s: %d/%d cells", name, start, len(cells), size)

    logger.info("Created %d/%d clusters of %s", len(centers), num_clusters, name)
    return centers


def check_terrain_density(grid: TerrainGrid, center_x: int, center_y: int, radius: int,
                          terrain_type: TerrainType, limit: float = DENSITY_LIMIT) -> bool:
    """True if more than ``limit`` of the in-bounds cells within ``radius``
    of the center already hold ``terrain_type``."""
    matching = 0
    total = 0
    r2 = radius * radius
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            if dx * dx + dy * dy > r2:
                continue
            tile = grid.tile_at(center_x + dx, center_y + dy)
            if tile is None:
                continue
            total += 1
            if tile == terrain_type:
                matching += 1

    return total > 0 and matching / total > limit


def _too_close(center: Point, others: Sequence[Point], min_distance: float) -> bool:
    min_d2 = min_distance * min_distance
    return any((center[0] - ox) ** 2 + (center[1] - oy) ** 2 < min_d2 for ox, oy in others)


def generate_region_clusters(ctx: GenerationContext, plan: ClusterPlan,
                             connector: Callable = connect_clusters) -> List[Point]:
    """Place the clusters of one stage-scaled pass.

    On top of the plain flood fill this enforces minimum spacing between the
    pass's own centers and vetoes centers in areas already dense with the
    terrain. The pass gets ``3 * num_clusters`` candidate draws in total.
    Optionally links new clusters to earlier ones with corridors and tops up
    coverage afterwards.
    """
    grid = ctx.grid
    rng = ctx.rng
    name = ctx.registry.effect_of(plan.terrain).name
    min_distance = min(grid.cols, grid.rows) * plan.min_spacing

    centers: List[Point] = []
    attempts = 0
    max_attempts = plan.num_clusters * 3

    while len(centers) < plan.num_clusters and attempts < max_attempts:
        attempts += 1

        # Random center, avoiding the outer 10% on each side
        cx = int(grid.cols * 0.1) + int(rng.random() * (grid.cols * 0.8))
        cy = int(grid.rows * 0.1) + int(rng.random() * (grid.rows * 0.8))

        if ctx.processed.is_set(cx, cy):
            continue
        if _too_close((cx, cy), centers, min_distance):
            continue
        if check_terrain_density(grid, cx, cy, plan.max_size, plan.terrain, plan.density_limit):
            logger.debug("%s center %s vetoed: area already dense", name, (cx, cy))
            continue

        size = rng.randint(plan.min_size, plan.max_size)
        cells = create_cluster(ctx, cx, cy, plan.terrain, size)
        centers.append((cx, cy))
        logger.debug("%s cluster at %s: %d/%d cells", name, (cx, cy), len(cells), size)

        style = plan.path
        if style is not None and len(centers) > 1 and rng.random() < style.connect_probability:
            if style.connect_to == "previous":
                target = centers[-2]
            else:
                target = centers[rng.randrange(len(centers) - 1)]
            connector(ctx, target, (cx, cy), plan.terrain, style)

    if len(centers) < plan.num_clusters:
        logger.warning("Placed only %d/%d %s clusters after %d attempts",
                       len(centers), plan.num_clusters, name, attempts)
    else:
        logger.info("Created %d clusters of %s", len(centers), name)

    if plan.target_coverage is not None:
        ensure_minimum_coverage(ctx, plan.terrain, plan.target_coverage, plan.background)

    return centers


def _stamp_patch(ctx: GenerationContext, cx: int, cy: int, radius: float,
                 terrain_type: TerrainType, background: Sequence[TerrainType],
                 fill_chance: float = 1.0) -> int:
    placed = 0
    reach = int(math.ceil(radius))
    for dy in range(-reach, reach + 1):
        for dx in range(-reach, reach + 1):
            if dx * dx + dy * dy > radius * radius:
                continue
            x, y = cx + dx, cy + dy
            if ctx.grid.tile_at(x, y) not in background:
                continue
            if fill_chance >= 1.0 or ctx.rng.random() < fill_chance:
                ctx.grid.set_tile(x, y, terrain_type)
                ctx.processed.mark(x, y)
                placed += 1
    return placed


def ensure_minimum_coverage(ctx: GenerationContext, terrain_type: TerrainType, target: float,
                            background: Sequence[TerrainType] = (TerrainType.FLOOR,),
                            tolerance: float = 0.05) -> int:
    """Stamp small round patches when coverage falls well below ``target``.

    Returns the number of patches stamped.
    """
    grid = ctx.grid
    coverage = grid.coverage(terrain_type)
    if coverage >= target - tolerance:
        return 0

    patches = math.ceil((target - coverage) * grid.cell_count / 100)
    for _ in range(patches):
        px = ctx.rng.randrange(grid.cols)
        py = ctx.rng.randrange(grid.rows)
        patch_size = ctx.rng.randint(3, 7)
        _stamp_patch(ctx, px, py, patch_size / 2, terrain_type, background, fill_chance=0.7)

    logger.debug("Coverage top-up for %s: %.3f < %.3f, %d patches",
                 terrain_type.display_name, coverage, target, patches)
    return patches


def add_undergrowth(ctx: GenerationContext, chance: float,
                    near: TerrainType = TerrainType.FOREST,
                    terrain_type: TerrainType = TerrainType.BUSH,
                    background: Sequence[TerrainType] = (TerrainType.FLOOR, TerrainType.MEADOW)) -> int:
    """Turn background cells bordering ``near`` into ``terrain_type`` with
    probability ``chance``. Independent of the cluster passes."""
    grid = ctx.grid
    candidates = []
    for x, y, tile in grid.cells():
        if tile not in background:
            continue
        if any(grid.tile_at(x + dx, y + dy) == near for dx, dy in NEIGHBOR_OFFSETS):
            candidates.append((x, y))

    placed = 0
    for x, y in candidates:
        if ctx.rng.random() < chance:
            grid.set_tile(x, y, terrain_type)
            ctx.processed.mark(x, y)
            placed += 1

    logger.debug("Undergrowth: %d/%d candidate cells became %s",
                 placed, len(candidates), terrain_type.display_name)
    return placed


def add_clearings(ctx: GenerationContext, cell_ratio: int,
                  terrain_type: TerrainType = TerrainType.MEADOW,
                  background: Sequence[TerrainType] = (TerrainType.FLOOR,)) -> int:
    """Stamp one round clearing per ``cell_ratio`` cells. Returns the count."""
    if cell_ratio <= 0:
        return 0

    grid = ctx.grid
    count = grid.cell_count // cell_ratio
    for _ in range(count):
        cx = ctx.rng.randrange(grid.cols)
        cy = ctx.rng.randrange(grid.rows)
        radius = ctx.rng.randint(3, 7)
        _stamp_patch(ctx, cx, cy, radius, terrain_type, background)
    return count

"""Winding corridors between two cluster centers."""

import logging
import math
from typing import Sequence, Tuple

from pygame.math import Vector2

from src.level.generation_context import GenerationContext
from src.level.terrain_config import PathStyle
from src.tiles.tile_types import TerrainType

logger = logging.getLogger(__name__)


def stamp_path_disk(ctx: GenerationContext, cx: int, cy: int, width: int,
                    terrain_type: TerrainType, center_probability: float,
                    background: Sequence[TerrainType]) -> int:
    """Paint a disk of radius ``width`` whose fill chance falls linearly from
    ``center_probability`` at the center to zero at the rim. A width of zero
    or less stamps only the center cell. Only background cells are
    overwritten; Border never is."""
    width = max(width, 0)
    painted = 0
    for dy in range(-width, width + 1):
        for dx in range(-width, width + 1):
            dist = math.hypot(dx, dy)
            if dist > width:
                continue
            x, y = cx + dx, cy + dy
            tile = ctx.grid.tile_at(x, y)
            if tile is None or tile == TerrainType.BORDER or tile not in background:
                continue
            chance = center_probability if dist == 0 else center_probability * (1.0 - dist / width)
            if ctx.rng.random() < chance:
                ctx.grid.set_tile(x, y, terrain_type)
                ctx.processed.mark(x, y)
                painted += 1
    return painted


def connect_clusters(ctx: GenerationContext, start: Tuple[int, int], end: Tuple[int, int],
                     terrain_type: TerrainType, style: PathStyle) -> int:
    """Draw a jittered corridor of ``terrain_type`` from ``start`` to ``end``.

    Samples ``round(distance / step_length)`` evenly spaced points (at least
    one step, so coincident centers still get a stamp), offsets each by
    independent x/y jitter, and stamps a disk at every sample. Returns the
    number of cells painted.
    """
    p1 = Vector2(start)
    p2 = Vector2(end)
    steps = max(1, round(p1.distance_to(p2) / style.step_length))
    width = ctx.rng.randint(style.min_width, style.max_width)

    painted = 0
    for i in range(steps + 1):
        point = p1.lerp(p2, i / steps)
        px = math.floor(point.x + ctx.rng.uniform(-style.jitter, style.jitter))
        py = math.floor(point.y + ctx.rng.uniform(-style.jitter, style.jitter))
        painted += stamp_path_disk(ctx, px, py, width, terrain_type,
                                   style.center_probability, style.background)

    logger.debug("%s path %s -> %s: %d steps, width %d, %d cells",
                 terrain_type.display_name, start, end, steps, width, painted)
    return painted

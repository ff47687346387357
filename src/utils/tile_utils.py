"""
Terrain Grid Utilities
Helper functions for inspecting generated terrain.
"""

from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from config import TERRAIN_COLORS, TERRAIN_GLYPHS
from src.tiles.tile_grid import TerrainGrid
from src.tiles.tile_types import TerrainType

EIGHT_NEIGHBORS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


def get_terrain_color(terrain_type: TerrainType) -> Optional[Tuple[int, int, int]]:
    """Get the preview color for a terrain type."""
    return TERRAIN_COLORS.get(int(terrain_type))


def grid_to_ascii(grid: TerrainGrid) -> str:
    """Render the grid as one glyph per tile (see TERRAIN_GLYPHS)."""
    return "\n".join(
        "".join(TERRAIN_GLYPHS.get(tile, '?') for tile in row)
        for row in grid.to_rows()
    )


def coverage_report(grid: TerrainGrid) -> Dict[str, float]:
    """Fraction of the grid covered by each terrain type, keyed by name."""
    return {t.display_name: grid.coverage(t) for t in TerrainType}


def find_components(grid: TerrainGrid, terrain_type: TerrainType) -> List[Set[Tuple[int, int]]]:
    """8-connected regions of ``terrain_type``, largest first."""
    seen: Set[Tuple[int, int]] = set()
    components: List[Set[Tuple[int, int]]] = []

    for start in grid.positions_of(terrain_type):
        if start in seen:
            continue
        region = {start}
        seen.add(start)
        queue = deque([start])
        while queue:
            x, y = queue.popleft()
            for dx, dy in EIGHT_NEIGHBORS:
                n = (x + dx, y + dy)
                if n not in seen and grid.tile_at(*n) == terrain_type:
                    seen.add(n)
                    region.add(n)
                    queue.append(n)
        components.append(region)

    components.sort(key=len, reverse=True)
    return components

from typing import List, Optional, Tuple

import pygame

from .tile_grid import TerrainGrid
from .tile_registry import TerrainRegistry, terrain_registry
from .tile_types import TerrainType


class TerrainCollision:
    """Collision queries the physics layer runs against a terrain grid.

    Only the registry's collidable types (Swamp, Border) produce contacts.
    """

    def __init__(self, grid: TerrainGrid, registry: Optional[TerrainRegistry] = None):
        self.grid = grid
        self.registry = registry or terrain_registry
        self.collidable = frozenset(self.registry.collidable_types())

    def is_collidable(self, terrain_type: Optional[TerrainType]) -> bool:
        return terrain_type in self.collidable

    def tile_rect(self, tile_x: int, tile_y: int) -> pygame.Rect:
        """Convert grid coordinates to pixel rectangle."""
        size = self.grid.tile_size
        return pygame.Rect(tile_x * size, tile_y * size, size, size)

    def colliding_tiles(self, rect: pygame.Rect) -> List[Tuple[int, int]]:
        """Collidable tile coordinates whose rectangles overlap ``rect``."""
        size = self.grid.tile_size
        left = rect.left // size
        top = rect.top // size
        # right/bottom are exclusive edges
        right = (rect.right - 1) // size
        bottom = (rect.bottom - 1) // size

        hits = []
        for ty in range(top, bottom + 1):
            for tx in range(left, right + 1):
                if self.is_collidable(self.grid.tile_at(tx, ty)):
                    hits.append((tx, ty))
        return hits

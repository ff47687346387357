from typing import Optional

from config import BASE_MOVE_DELAY_MS

from src.tiles.tile_data import EffectRecord
from src.tiles.tile_grid import TerrainGrid
from src.tiles.tile_registry import TerrainRegistry, terrain_registry
from src.tiles.tile_types import TerrainType


class TerrainQuery:
    """Read-only lookups from world or tile coordinates to terrain effects.

    Safe to share between the renderer, the effect runtime and the collision
    handler: the grid is never written once generation has finished.
    """

    def __init__(self, grid: TerrainGrid, registry: Optional[TerrainRegistry] = None):
        self.grid = grid
        self.registry = registry or terrain_registry

    def terrain_at(self, wx: float, wy: float) -> Optional[TerrainType]:
        return self.grid.tile_at_world_position(wx, wy)

    def effect_at(self, wx: float, wy: float) -> Optional[EffectRecord]:
        """Effect at a world position, or None outside the generated area."""
        terrain_type = self.terrain_at(wx, wy)
        if terrain_type is None:
            return None
        return self.registry.effect_of(terrain_type)

    def effect_at_tile(self, tx: int, ty: int) -> Optional[EffectRecord]:
        terrain_type = self.grid.tile_at(tx, ty)
        if terrain_type is None:
            return None
        return self.registry.effect_of(terrain_type)

    def move_delay_at(self, wx: float, wy: float, base_delay: float = BASE_MOVE_DELAY_MS) -> float:
        """Scale a grid-step move delay by the slow factor under (wx, wy)."""
        effect = self.effect_at(wx, wy)
        if effect is None or not effect.slows:
            return base_delay
        return base_delay / effect.slow_factor

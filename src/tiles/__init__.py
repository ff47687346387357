from .tile_types import TerrainType
from .tile_data import EffectRecord, TerrainError, RegistryError, ConfigError
from .tile_registry import TerrainRegistry, terrain_registry
from .tile_grid import TerrainGrid
from .tile_collision import TerrainCollision

__all__ = [
    'TerrainType',
    'EffectRecord',
    'TerrainError',
    'RegistryError',
    'ConfigError',
    'TerrainRegistry',
    'terrain_registry',
    'TerrainGrid',
    'TerrainCollision',
]

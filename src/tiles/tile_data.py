from dataclasses import dataclass

from .tile_types import TerrainType


class TerrainError(Exception):
    """Base class for terrain subsystem errors."""


class RegistryError(TerrainError, LookupError):
    """A terrain type has no effect record. Always a code defect."""


class ConfigError(TerrainError, ValueError):
    """Terrain generation configuration could not be loaded or resolved."""


@dataclass(frozen=True)
class EffectRecord:
    """Gameplay parameters applied to entities standing on a terrain type."""
    terrain_type: TerrainType
    name: str
    slow_factor: float = 1.0
    damage: int = 0

    def __post_init__(self):
        if not 0.0 < self.slow_factor <= 1.0:
            raise ValueError(
                f"{self.name}: slow_factor must be in (0, 1], got {self.slow_factor}"
            )
        if self.damage < 0:
            raise ValueError(f"{self.name}: damage must be >= 0, got {self.damage}")

    @property
    def slows(self) -> bool:
        return self.slow_factor < 1.0

    @property
    def is_damaging(self) -> bool:
        return self.damage > 0

    @property
    def is_cosmetic(self) -> bool:
        """True when standing on this terrain has no gameplay effect."""
        return not self.slows and not self.is_damaging

from typing import Dict, List

from .tile_types import TerrainType
from .tile_data import EffectRecord, RegistryError


class TerrainRegistry:
    """Registry mapping every terrain type to its effect record."""

    def __init__(self):
        self._effects: Dict[TerrainType, EffectRecord] = {}
        self._initialize_default_effects()
        self.verify_exhaustive()

    def _initialize_default_effects(self):
        """Initialize the effect table for the built-in terrain types."""

        # Cosmetic
        self.register_effect(EffectRecord(TerrainType.MEADOW, "Meadow"))
        self.register_effect(EffectRecord(TerrainType.FLOOR, "Floor"))

        # Slowing
        self.register_effect(EffectRecord(TerrainType.BUSH, "Bush", slow_factor=0.75))
        self.register_effect(EffectRecord(TerrainType.FOREST, "Forest", slow_factor=0.5))

        # Damaging
        self.register_effect(EffectRecord(TerrainType.SWAMP, "Swamp", slow_factor=0.9, damage=1))
        self.register_effect(EffectRecord(TerrainType.BORDER, "Border", slow_factor=0.5, damage=2))

    def register_effect(self, effect: EffectRecord):
        """Register (or replace) the effect for a terrain type."""
        self._effects[effect.terrain_type] = effect

    def verify_exhaustive(self):
        """Raise RegistryError unless every TerrainType has an effect."""
        missing = [t.name for t in TerrainType if t not in self._effects]
        if missing:
            raise RegistryError(f"No effect registered for terrain types: {', '.join(missing)}")

    def effect_of(self, terrain_type: TerrainType) -> EffectRecord:
        """Get the effect for a terrain type. A miss is a programming error."""
        try:
            return self._effects[TerrainType(terrain_type)]
        except (KeyError, ValueError):
            raise RegistryError(f"Unregistered terrain type: {terrain_type!r}") from None

    def get_all_effects(self) -> Dict[TerrainType, EffectRecord]:
        """Get all registered effects."""
        return self._effects.copy()

    def collidable_types(self) -> List[TerrainType]:
        """Terrain types the physics layer should register colliders for."""
        return [t for t in self._effects if t.is_solid]

    def damaging_types(self) -> List[TerrainType]:
        return [t for t, effect in self._effects.items() if effect.is_damaging]


# Global terrain registry instance
terrain_registry = TerrainRegistry()

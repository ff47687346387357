from enum import IntEnum

from config import (
    MEADOW_TILE,
    BUSH_TILE,
    FOREST_TILE,
    SWAMP_TILE,
    FLOOR_TILE,
    BORDER_TILE,
)


class TerrainType(IntEnum):
    """Enumeration of all terrain types a level can be built from."""

    MEADOW = MEADOW_TILE
    BUSH = BUSH_TILE
    FOREST = FOREST_TILE
    SWAMP = SWAMP_TILE
    FLOOR = FLOOR_TILE
    BORDER = BORDER_TILE

    @property
    def is_solid(self) -> bool:
        """Return True if the physics layer should collide with this tile."""
        return self in (TerrainType.SWAMP, TerrainType.BORDER)

    @property
    def is_clustered(self) -> bool:
        """Return True if the generator places this type as organic clusters."""
        return self in (
            TerrainType.MEADOW,
            TerrainType.BUSH,
            TerrainType.FOREST,
            TerrainType.SWAMP,
        )

    @property
    def display_name(self) -> str:
        """Return human-readable name."""
        return {
            TerrainType.MEADOW: "Meadow",
            TerrainType.BUSH: "Bush",
            TerrainType.FOREST: "Forest",
            TerrainType.SWAMP: "Swamp",
            TerrainType.FLOOR: "Floor",
            TerrainType.BORDER: "Border",
        }[self]

    @classmethod
    def from_name(cls, name: str) -> "TerrainType":
        """Look up a terrain type by enum name or display name (case-insensitive)."""
        key = name.strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown terrain type: {name!r}") from None

"""Terrain generation configuration.

Per-type tuning is linear in the level's ``stage``: each pass declares a base
value and a per-stage increment for its cluster count and size range, and
``TerrainGenConfig.plan_for_stage`` resolves them into concrete ClusterPlans.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from config import BORDER_WIDTH, DENSITY_LIMIT
from src.tiles.tile_data import ConfigError
from src.tiles.tile_types import TerrainType


@dataclass
class PathStyle:
    """How corridors between two clusters of one pass are drawn."""
    step_length: float = 4.0
    jitter: float = 5.0  # max offset per axis, tiles
    min_width: int = 3
    max_width: int = 6
    center_probability: float = 0.9
    connect_probability: float = 0.7
    # 'random' links to any earlier center, 'previous' to the last one
    connect_to: str = "random"
    background: Tuple[TerrainType, ...] = (TerrainType.FLOOR,)

    def __post_init__(self):
        self.background = tuple(TerrainType(t) for t in self.background)
        if self.step_length <= 0:
            raise ConfigError(f"step_length must be positive, got {self.step_length}")
        if not 0 < self.min_width <= self.max_width:
            raise ConfigError(f"invalid path width range {self.min_width}..{self.max_width}")
        if self.connect_to not in ("random", "previous"):
            raise ConfigError(f"connect_to must be 'random' or 'previous', got {self.connect_to!r}")


@dataclass
class ClusterPassConfig:
    """Stage-scaled tuning for one clustered terrain type."""
    terrain: TerrainType
    base_count: int
    base_min_size: int
    base_max_size: int
    count_per_stage: int = 1
    min_size_per_stage: int = 0
    max_size_per_stage: int = 0
    min_spacing: float = 0.2  # fraction of min(cols, rows)
    density_limit: float = DENSITY_LIMIT
    path: Optional[PathStyle] = None
    target_coverage: Optional[float] = None
    background: Tuple[TerrainType, ...] = (TerrainType.FLOOR,)

    def __post_init__(self):
        self.terrain = TerrainType(self.terrain)
        self.background = tuple(TerrainType(t) for t in self.background)
        if not self.terrain.is_clustered:
            raise ConfigError(f"{self.terrain.name} cannot be placed as clusters")
        if self.base_count < 0 or self.base_min_size < 1 or self.base_max_size < self.base_min_size:
            raise ConfigError(f"invalid cluster tuning for {self.terrain.name}")

    def resolve(self, stage: int) -> "ClusterPlan":
        min_size = self.base_min_size + self.min_size_per_stage * stage
        max_size = max(min_size, self.base_max_size + self.max_size_per_stage * stage)
        return ClusterPlan(
            terrain=self.terrain,
            num_clusters=self.base_count + self.count_per_stage * stage,
            min_size=min_size,
            max_size=max_size,
            min_spacing=self.min_spacing,
            density_limit=self.density_limit,
            path=self.path,
            target_coverage=self.target_coverage,
            background=self.background,
        )


@dataclass(frozen=True)
class ClusterPlan:
    terrain: TerrainType
    num_clusters: int
    min_size: int
    max_size: int
    min_spacing: float = 0.0
    density_limit: float = DENSITY_LIMIT
    path: Optional[PathStyle] = None
    target_coverage: Optional[float] = None
    background: Tuple[TerrainType, ...] = (TerrainType.FLOOR,)


def default_passes() -> List[ClusterPassConfig]:
    return [
        ClusterPassConfig(
            terrain=TerrainType.FOREST, base_count=3,
            base_min_size=10, min_size_per_stage=5,
            base_max_size=20, max_size_per_stage=10,
            min_spacing=0.2,
        ),
        ClusterPassConfig(
            terrain=TerrainType.BUSH, base_count=4,
            base_min_size=4, min_size_per_stage=2,
            base_max_size=8, max_size_per_stage=3,
            min_spacing=0.15,
        ),
        ClusterPassConfig(
            terrain=TerrainType.MEADOW, base_count=3,
            base_min_size=15, min_size_per_stage=3,
            base_max_size=25, max_size_per_stage=5,
            min_spacing=0.2,
            path=PathStyle(),
            target_coverage=0.2,
        ),
        # Streams run through meadow, so swamp goes after it
        ClusterPassConfig(
            terrain=TerrainType.SWAMP, base_count=2,
            base_min_size=7, min_size_per_stage=2,
            base_max_size=12, max_size_per_stage=3,
            min_spacing=0.2,
            path=PathStyle(
                step_length=5, jitter=4, min_width=2, max_width=4,
                center_probability=1.0, connect_probability=0.6,
                connect_to="previous", background=(TerrainType.MEADOW,),
            ),
        ),
    ]


@dataclass
class TerrainGenConfig:
    passes: List[ClusterPassConfig] = field(default_factory=default_passes)
    border_width: int = BORDER_WIDTH
    # Bush undergrowth next to forest
    undergrowth_chance: float = 0.4
    undergrowth_background: Tuple[TerrainType, ...] = (TerrainType.FLOOR, TerrainType.MEADOW)
    # One clearing per this many cells; 0 disables clearings
    clearing_cell_ratio: int = 1000

    def __post_init__(self):
        self.undergrowth_background = tuple(TerrainType(t) for t in self.undergrowth_background)
        if self.border_width < 0:
            raise ConfigError(f"border_width must be >= 0, got {self.border_width}")
        if not 0.0 <= self.undergrowth_chance <= 1.0:
            raise ConfigError(f"undergrowth_chance must be in [0, 1], got {self.undergrowth_chance}")

    def plan_for_stage(self, stage: int) -> List[ClusterPlan]:
        if stage < 0:
            raise ConfigError(f"stage must be >= 0, got {stage}")
        return [p.resolve(stage) for p in self.passes]

"""
Seed Manager - Deterministic seeds for terrain generation
"""

import hashlib
import random
from typing import Dict, Optional

TERRAIN_COMPONENTS = ('noise', 'clusters')


def _hash_seed(*parts: object) -> int:
    """First 32 bits of the md5 of ``parts`` joined with underscores."""
    digest = hashlib.md5("_".join(str(p) for p in parts).encode()).hexdigest()
    return int(digest[:8], 16)


class SeedManager:
    """Manages deterministic seeds for per-level terrain generation"""

    def __init__(self, world_seed: Optional[int] = None):
        """
        Initialize seed manager with optional world seed

        Args:
            world_seed: Master seed for entire playthrough. If None, generates random seed.
        """
        self.world_seed = world_seed if world_seed is not None else random.randint(0, 2**31 - 1)
        self.current_level_seed: Optional[int] = None
        self.sub_seeds: Dict[str, int] = {}
        self._rng_instances: Dict[str, random.Random] = {}

    def generate_level_seed(self, level_index: int) -> int:
        """
        Generate deterministic seed for specific level

        Args:
            level_index: Index of the level

        Returns:
            Deterministic seed for this level
        """
        self.current_level_seed = _hash_seed(self.world_seed, "level", level_index)
        # A new level invalidates every component stream
        self.sub_seeds = {}
        self._rng_instances = {}
        return self.current_level_seed

    def generate_sub_seeds(self, level_seed: int) -> Dict[str, int]:
        """Derive one sub-seed per generation component from a level seed."""
        self.sub_seeds = {c: _hash_seed(level_seed, c) for c in TERRAIN_COMPONENTS}
        self._rng_instances = {}
        return dict(self.sub_seeds)

    def _sub_seed(self, component: str) -> int:
        if component not in self.sub_seeds:
            if self.current_level_seed is None:
                raise RuntimeError("generate_level_seed must be called before get_random")
            self.sub_seeds[component] = _hash_seed(self.current_level_seed, component)
        return self.sub_seeds[component]

    def get_random(self, component: str) -> random.Random:
        """Seeded stream for ``component`` ('noise' or 'clusters'), created on first use."""
        rng = self._rng_instances.get(component)
        if rng is None:
            rng = self._rng_instances[component] = random.Random(self._sub_seed(component))
        return rng

    def get_seed_info(self) -> Dict[str, object]:
        info: Dict[str, object] = {'world_seed': self.world_seed, 'sub_seeds': dict(self.sub_seeds)}
        if self.current_level_seed is not None:
            info['level_seed'] = self.current_level_seed
        return info

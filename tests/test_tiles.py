"""
Tests for terrain types, the effect registry, the grid and collision queries.
"""

import pygame
import pytest

from src.tiles import (
    EffectRecord,
    RegistryError,
    TerrainCollision,
    TerrainGrid,
    TerrainRegistry,
    TerrainType,
    terrain_registry,
)


class TestTerrainRegistry:

    def test_every_type_has_an_effect(self):
        effects = terrain_registry.get_all_effects()
        assert set(effects) == set(TerrainType)

    def test_cosmetic_types_have_no_effect(self):
        for terrain_type in (TerrainType.MEADOW, TerrainType.FLOOR):
            effect = terrain_registry.effect_of(terrain_type)
            assert effect.slow_factor == 1.0
            assert effect.damage == 0
            assert effect.is_cosmetic

    def test_effect_values(self):
        assert terrain_registry.effect_of(TerrainType.FOREST).slow_factor == 0.5
        assert terrain_registry.effect_of(TerrainType.BUSH).slow_factor == 0.75
        swamp = terrain_registry.effect_of(TerrainType.SWAMP)
        assert (swamp.name, swamp.slow_factor, swamp.damage) == ("Swamp", 0.9, 1)
        border = terrain_registry.effect_of(TerrainType.BORDER)
        assert (border.slow_factor, border.damage) == (0.5, 2)

    def test_unknown_type_is_fatal(self):
        with pytest.raises(RegistryError):
            terrain_registry.effect_of(99)
        with pytest.raises(LookupError):
            terrain_registry.effect_of(-1)

    def test_incomplete_registry_fails_at_construction(self):
        class PartialRegistry(TerrainRegistry):
            def _initialize_default_effects(self):
                self.register_effect(EffectRecord(TerrainType.FLOOR, "Floor"))

        with pytest.raises(RegistryError, match="MEADOW"):
            PartialRegistry()

    def test_collidable_types(self):
        assert set(terrain_registry.collidable_types()) == {TerrainType.SWAMP, TerrainType.BORDER}
        assert set(terrain_registry.damaging_types()) == {TerrainType.SWAMP, TerrainType.BORDER}


class TestEffectRecord:

    @pytest.mark.parametrize("slow_factor", [0.0, -0.5, 1.01])
    def test_rejects_bad_slow_factor(self, slow_factor):
        with pytest.raises(ValueError):
            EffectRecord(TerrainType.BUSH, "Bush", slow_factor=slow_factor)

    def test_rejects_negative_damage(self):
        with pytest.raises(ValueError):
            EffectRecord(TerrainType.SWAMP, "Swamp", damage=-1)


class TestTerrainType:

    def test_from_name(self):
        assert TerrainType.from_name("swamp") is TerrainType.SWAMP
        assert TerrainType.from_name(" Border ") is TerrainType.BORDER
        with pytest.raises(ValueError):
            TerrainType.from_name("lava")

    def test_ids_are_stable(self):
        assert [int(t) for t in TerrainType] == [0, 1, 2, 3, 4, 5]
        assert TerrainType.FOREST.display_name == "Forest"


class TestTerrainGrid:

    def test_defaults_to_floor(self):
        grid = TerrainGrid(6, 4, tile_size=10)
        assert grid.size == (6, 4)
        assert grid.count(TerrainType.FLOOR) == 24
        assert all(t == TerrainType.FLOOR for _, _, t in grid.cells())

    def test_out_of_bounds_is_silent(self):
        grid = TerrainGrid(5, 5, tile_size=10)
        grid.set_tile(-1, 0, TerrainType.SWAMP)
        grid.set_tile(5, 2, TerrainType.SWAMP)
        grid.set_tile(2, 99, TerrainType.SWAMP)
        assert grid.count(TerrainType.SWAMP) == 0
        assert grid.tile_at(-1, 0) is None
        assert grid.tile_at(5, 0) is None
        assert grid.tile_at(0, 5) is None

    def test_set_and_get(self):
        grid = TerrainGrid(5, 3, tile_size=10)
        grid.set_tile(4, 2, TerrainType.FOREST)
        assert grid.tile_at(4, 2) == TerrainType.FOREST
        assert grid.positions_of(TerrainType.FOREST) == [(4, 2)]
        assert grid.to_rows()[2][4] == int(TerrainType.FOREST)
        assert len(grid.to_rows()) == 3 and len(grid.to_rows()[0]) == 5

    def test_world_position_lookup(self):
        grid = TerrainGrid(4, 4, tile_size=48)
        grid.set_tile(1, 0, TerrainType.BUSH)
        assert grid.tile_at_world_position(47.9, 0) == TerrainType.FLOOR
        assert grid.tile_at_world_position(48.0, 10.5) == TerrainType.BUSH
        assert grid.tile_at_world_position(-0.1, 10) is None
        assert grid.tile_at_world_position(4 * 48, 0) is None

    def test_for_world(self):
        grid = TerrainGrid.for_world(2800, 2800, 48)
        assert grid.size == (59, 59)

    def test_coverage(self):
        grid = TerrainGrid(10, 10, tile_size=10)
        for x in range(10):
            grid.set_tile(x, 0, TerrainType.MEADOW)
        assert grid.coverage(TerrainType.MEADOW) == pytest.approx(0.1)
        assert grid.counts()[TerrainType.FLOOR] == 90

    @pytest.mark.parametrize("cols,rows,tile", [(0, 5, 10), (5, -1, 10), (5, 5, 0)])
    def test_rejects_bad_dimensions(self, cols, rows, tile):
        with pytest.raises(ValueError):
            TerrainGrid(cols, rows, tile_size=tile)

    def test_equality(self):
        a = TerrainGrid(3, 3, tile_size=10)
        b = TerrainGrid(3, 3, tile_size=10)
        assert a == b
        b.set_tile(1, 1, TerrainType.SWAMP)
        assert a != b


class TestTerrainCollision:

    @pytest.fixture
    def grid(self):
        grid = TerrainGrid(10, 10, tile_size=48)
        grid.set_tile(2, 2, TerrainType.SWAMP)
        grid.set_tile(3, 2, TerrainType.FOREST)
        grid.set_tile(0, 0, TerrainType.BORDER)
        return grid

    def test_tile_rect(self, grid):
        collision = TerrainCollision(grid)
        assert collision.tile_rect(2, 3) == pygame.Rect(96, 144, 48, 48)

    def test_only_collidable_tiles_hit(self, grid):
        collision = TerrainCollision(grid)
        hits = collision.colliding_tiles(pygame.Rect(96, 96, 100, 10))
        assert hits == [(2, 2)]

    def test_rect_edges_are_exclusive(self, grid):
        collision = TerrainCollision(grid)
        assert collision.colliding_tiles(pygame.Rect(0, 0, 48, 48)) == [(0, 0)]
        assert collision.colliding_tiles(pygame.Rect(48, 48, 48, 48)) == []

    def test_rect_outside_grid(self, grid):
        collision = TerrainCollision(grid)
        assert collision.colliding_tiles(pygame.Rect(-100, -100, 20, 20)) == []

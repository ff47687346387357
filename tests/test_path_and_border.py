import pytest

from src.level.border_painter import is_border_cell, paint_border
from src.level.generation_context import GenerationContext
from src.level.path_connector import connect_clusters, stamp_path_disk
from src.level.terrain_config import PathStyle
from src.tiles.tile_grid import TerrainGrid
from src.tiles.tile_types import TerrainType


@pytest.fixture
def ctx():
    return GenerationContext.create(TerrainGrid(30, 30, tile_size=10), seed=1)


STRAIGHT = PathStyle(step_length=4, jitter=0, min_width=2, max_width=2, center_probability=1.0)


class TestConnectClusters:

    def test_every_sample_center_is_painted(self, ctx):
        painted = connect_clusters(ctx, (5, 15), (21, 15), TerrainType.MEADOW, STRAIGHT)

        for x in (5, 9, 13, 17, 21):
            assert ctx.grid.tile_at(x, 15) == TerrainType.MEADOW
        assert painted == ctx.grid.count(TerrainType.MEADOW)

    def test_path_stays_within_width(self, ctx):
        connect_clusters(ctx, (5, 15), (21, 15), TerrainType.MEADOW, STRAIGHT)
        for x, y in ctx.grid.positions_of(TerrainType.MEADOW):
            assert 14 <= y <= 16
            assert 4 <= x <= 22

    def test_never_overwrites_border(self, ctx):
        ctx.grid.set_tile(9, 15, TerrainType.BORDER)
        connect_clusters(ctx, (5, 15), (21, 15), TerrainType.MEADOW, STRAIGHT)
        assert ctx.grid.tile_at(9, 15) == TerrainType.BORDER

    def test_only_background_is_painted(self, ctx):
        ctx.grid.set_tile(13, 15, TerrainType.FOREST)
        connect_clusters(ctx, (5, 15), (21, 15), TerrainType.MEADOW, STRAIGHT)
        assert ctx.grid.tile_at(13, 15) == TerrainType.FOREST

    def test_coincident_points(self, ctx):
        painted = connect_clusters(ctx, (10, 10), (10, 10), TerrainType.SWAMP, STRAIGHT)
        assert painted >= 1
        assert ctx.grid.tile_at(10, 10) == TerrainType.SWAMP

    def test_stream_over_meadow(self, ctx):
        ctx.grid.fill(TerrainType.MEADOW)
        stream = PathStyle(step_length=5, jitter=0, min_width=2, max_width=2,
                           center_probability=1.0, background=(TerrainType.MEADOW,))
        connect_clusters(ctx, (5, 5), (25, 5), TerrainType.SWAMP, stream)
        assert ctx.grid.tile_at(15, 5) == TerrainType.SWAMP

    def test_painted_cells_are_processed(self, ctx):
        connect_clusters(ctx, (5, 15), (21, 15), TerrainType.MEADOW, STRAIGHT)
        for x, y in ctx.grid.positions_of(TerrainType.MEADOW):
            assert ctx.processed.is_set(x, y)

    def test_zero_width_stamps_center_only(self, ctx):
        painted = stamp_path_disk(ctx, 5, 5, 0, TerrainType.MEADOW, 1.0, (TerrainType.FLOOR,))
        assert painted == 1
        assert ctx.grid.positions_of(TerrainType.MEADOW) == [(5, 5)]

    def test_disk_off_grid_is_clipped(self, ctx):
        painted = stamp_path_disk(ctx, 0, 0, 3, TerrainType.MEADOW, 1.0, (TerrainType.FLOOR,))
        assert painted == ctx.grid.count(TerrainType.MEADOW)
        assert ctx.grid.tile_at(0, 0) == TerrainType.MEADOW


class TestBorder:

    def test_band_covers_all_edges(self):
        grid = TerrainGrid(10, 10, tile_size=10)
        paint_border(grid, 2)

        for x, y, tile in grid.cells():
            if is_border_cell(grid, x, y, 2):
                assert tile == TerrainType.BORDER
            else:
                assert tile == TerrainType.FLOOR
        assert grid.count(TerrainType.BORDER) == 100 - 36

    def test_border_overwrites_everything(self):
        grid = TerrainGrid(8, 6, tile_size=10)
        grid.fill(TerrainType.SWAMP)
        paint_border(grid, 1)
        assert grid.count(TerrainType.BORDER) == 2 * 8 + 2 * 4
        assert grid.tile_at(3, 3) == TerrainType.SWAMP

    def test_band_wider_than_grid(self):
        grid = TerrainGrid(3, 3, tile_size=10)
        paint_border(grid, 2)
        assert grid.count(TerrainType.BORDER) == 9

    def test_zero_width(self):
        grid = TerrainGrid(5, 5, tile_size=10)
        paint_border(grid, 0)
        assert grid.count(TerrainType.BORDER) == 0

from src.level.terrain_generator import TerrainLevel
from src.tiles.tile_grid import TerrainGrid
from src.tiles.tile_types import TerrainType
from tools.terrain_validate import main, validate


def test_generated_level_validates(capsys):
    assert main(['--seed', '3', '--level', '2', '--ascii']) == 0
    out = capsys.readouterr().out
    assert 'Validation OK: level 2, stage 1' in out
    assert '#' in out
    assert 'Forest' in out


def test_missing_border_is_reported():
    level = TerrainLevel(grid=TerrainGrid(6, 6, tile_size=10), stage=1)
    errors = validate(level, 1)
    assert len(errors) == 20
    assert 'expected Border' in errors[0]


def test_interior_is_free():
    grid = TerrainGrid(6, 6, tile_size=10, fill=TerrainType.BORDER)
    grid.set_tile(2, 2, TerrainType.SWAMP)
    assert validate(TerrainLevel(grid=grid, stage=1), 1) == []

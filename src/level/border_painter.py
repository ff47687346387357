from config import BORDER_WIDTH
from src.tiles.tile_grid import TerrainGrid
from src.tiles.tile_types import TerrainType


def is_border_cell(grid: TerrainGrid, x: int, y: int, width: int = BORDER_WIDTH) -> bool:
    """True if (x, y) lies within ``width`` tiles of any grid edge."""
    return (x < width or y < width
            or x >= grid.cols - width or y >= grid.rows - width)


def paint_border(grid: TerrainGrid, width: int = BORDER_WIDTH,
                 terrain_type: TerrainType = TerrainType.BORDER) -> None:
    """
    Force a band of ``width`` tiles along all four edges to ``terrain_type``.

    Run after every other pass so the band always wins at the boundary.
    """
    # Top and bottom rows
    for y in range(min(width, grid.rows)):
        for x in range(grid.cols):
            grid.set_tile(x, y, terrain_type)
            grid.set_tile(x, grid.rows - 1 - y, terrain_type)

    # Left and right columns
    for y in range(grid.rows):
        for x in range(min(width, grid.cols)):
            grid.set_tile(x, y, terrain_type)
            grid.set_tile(grid.cols - 1 - x, y, terrain_type)

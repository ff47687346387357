#!/usr/bin/env python3
"""Generate a terrain level and validate it.

Checks:
- every terrain type has an effect record
- the border band covers every edge cell
- every tile holds a known terrain type

Usage: python tools/terrain_validate.py [--seed N] [--level L] [--stage S] [--ascii]
"""
import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.level.border_painter import is_border_cell
from src.level.terrain_generator import TerrainLevelGenerator
from src.tiles.tile_data import RegistryError
from src.tiles.tile_registry import terrain_registry
from src.tiles.tile_types import TerrainType
from src.utils.tile_utils import coverage_report, grid_to_ascii

logger = logging.getLogger(__name__)


def validate(level, border_width):
    errors = []
    grid = level.grid

    try:
        terrain_registry.verify_exhaustive()
    except RegistryError as exc:
        errors.append(str(exc))

    for x, y, tile in grid.cells():
        if not isinstance(tile, TerrainType):
            errors.append(f"({x}, {y}): unknown tile {tile!r}")
        elif is_border_cell(grid, x, y, border_width) and tile != TerrainType.BORDER:
            errors.append(f"({x}, {y}): edge cell is {tile.display_name}, expected Border")
    return errors


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--seed', type=int, default=None, help='world seed')
    parser.add_argument('--level', type=int, default=1, help='level index')
    parser.add_argument('--stage', type=int, default=None, help='override stage')
    parser.add_argument('--ascii', action='store_true', help='print the map')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s %(name)s: %(message)s')

    generator = TerrainLevelGenerator(world_seed=args.seed)
    level = generator.generate(args.level, stage=args.stage)

    if args.ascii:
        print(grid_to_ascii(level.grid))

    for name, fraction in coverage_report(level.grid).items():
        print(f"{name:>8}: {fraction:6.1%}")

    errors = validate(level, generator.config.border_width)
    if errors:
        logger.error('Validation FAILED:')
        for e in errors:
            logger.error(' - %s', e)
        return 2

    print(f"Validation OK: level {args.level}, stage {level.stage}, seed {level.seed}")
    return 0


if __name__ == '__main__':
    sys.exit(main())

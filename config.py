import math

# World / grid
TILE_SIZE = 48  # Size of each tile in the game grid
WORLD_WIDTH = 2800
WORLD_HEIGHT = 2800
GRID_COLS = math.ceil(WORLD_WIDTH / TILE_SIZE)
GRID_ROWS = math.ceil(WORLD_HEIGHT / TILE_SIZE)

# Terrain ids (see src/tiles/tile_types.py)
MEADOW_TILE = 0
BUSH_TILE = 1
FOREST_TILE = 2
SWAMP_TILE = 3
FLOOR_TILE = 4
BORDER_TILE = 5

# Generation
BORDER_WIDTH = 2  # tiles
CLUSTER_MARGIN = 5  # cluster centers stay this far from the edge
FILL_MARGIN = 3  # flood fill never grows within this many tiles of the edge
MAX_PLACEMENT_ATTEMPTS = 50
LEVELS_PER_STAGE = 8
NOISE_SCALE = 0.2
DENSITY_LIMIT = 0.25

# Terrain effects
TERRAIN_DAMAGE_COOLDOWN_MS = 1000  # per-tick position sample
COLLISION_DAMAGE_COOLDOWN_MS = 500  # physics contact callback

# Movement
BASE_MOVE_DELAY_MS = 150

TERRAIN_COLORS = {
    MEADOW_TILE: (124, 176, 84),
    BUSH_TILE: (76, 128, 52),
    FOREST_TILE: (34, 84, 38),
    SWAMP_TILE: (47, 79, 79),
    FLOOR_TILE: (150, 128, 96),
    BORDER_TILE: (90, 40, 40),
}

TERRAIN_GLYPHS = {
    MEADOW_TILE: ',',
    BUSH_TILE: '*',
    FOREST_TILE: 'T',
    SWAMP_TILE: '~',
    FLOOR_TILE: '.',
    BORDER_TILE: '#',
}

"""Load TerrainGenConfig from JSON (config/terrain_generation.json)."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from src.level.terrain_config import ClusterPassConfig, PathStyle, TerrainGenConfig
from src.tiles.tile_data import ConfigError
from src.tiles.tile_types import TerrainType

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "terrain_generation.json"


def _terrain(value: Any) -> TerrainType:
    if isinstance(value, str):
        return TerrainType.from_name(value)
    return TerrainType(value)


def _terrain_tuple(values) -> tuple:
    return tuple(_terrain(v) for v in values)


def _path_style(data: Optional[Dict[str, Any]]) -> Optional[PathStyle]:
    if data is None:
        return None
    data = dict(data)
    if "background" in data:
        data["background"] = _terrain_tuple(data["background"])
    return PathStyle(**data)


def _cluster_pass(data: Dict[str, Any]) -> ClusterPassConfig:
    data = dict(data)
    data["terrain"] = _terrain(data["terrain"])
    data["path"] = _path_style(data.get("path"))
    if "background" in data:
        data["background"] = _terrain_tuple(data["background"])
    return ClusterPassConfig(**data)


def config_from_dict(data: Dict[str, Any]) -> TerrainGenConfig:
    """Build a TerrainGenConfig; any shape or value problem raises ConfigError."""
    try:
        data = dict(data)
        if "passes" in data:
            data["passes"] = [_cluster_pass(p) for p in data["passes"]]
        if "undergrowth_background" in data:
            data["undergrowth_background"] = _terrain_tuple(data["undergrowth_background"])
        return TerrainGenConfig(**data)
    except ConfigError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid terrain config: {exc}") from exc


def load_terrain_config(path: Optional[Union[str, Path]] = None) -> TerrainGenConfig:
    """Load generation tuning from JSON, falling back to built-in defaults
    when the file does not exist."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.info("No terrain config at %s, using defaults", config_path)
        return TerrainGenConfig()

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{config_path}: {exc}") from exc

    config = config_from_dict(data)
    logger.info("Loaded terrain config from %s (%d passes)", config_path, len(config.passes))
    return config

import json
from pathlib import Path

from gpx_track3d.models import METERS_PER_MILE, GeometryOptions

CONFIG_DIR = Path.home() / ".config" / "gpx-track3d"
CONFIG_PATH = CONFIG_DIR / "gpx-track3d.json"
LOCAL_CONFIG_PATH = Path("gpx-track3d.json")

# Built-in values for settings that can be overridden in the config file
DEFAULTS = {
    "scale": 100_000.0,
    "flip_x": 1,
    "flip_z": 1,
    "color_mode": "elevation",
    "segment_length": METERS_PER_MILE,
}


def load_config() -> dict:
    """Load configuration from config files.

    Merges config from global and local files:
    1. ~/.config/gpx-track3d/gpx-track3d.json (global, loaded first)
    2. ./gpx-track3d.json (local, overrides global)

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    config = {}
    for config_path in [CONFIG_PATH, LOCAL_CONFIG_PATH]:
        if config_path.exists():
            try:
                with config_path.open() as f:
                    config.update(json.load(f))
            except (json.JSONDecodeError, OSError):
                continue
    return config


def options_from_config(config: dict | None = None) -> GeometryOptions:
    """Build GeometryOptions from config values, falling back to DEFAULTS."""
    if config is None:
        config = {}

    def get(key: str):
        return config.get(key, DEFAULTS[key])

    return GeometryOptions(
        flip_x=int(get("flip_x")),
        flip_z=int(get("flip_z")),
        scale=float(get("scale")),
        color_mode=get("color_mode"),
        segment_length_meters=float(get("segment_length")),
    )

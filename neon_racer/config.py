"""Configuration loader for the Neon Racer simulation engine."""

import math
from dataclasses import fields
from pathlib import Path

import yaml

from neon_racer.core.game_config import GameConfig

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
CONFIG_PATH: Path = DATA_DIR / "game_config.yaml"

_INT_FIELDS: tuple[str, ...] = ("fps", "lane_count", "reward_score_threshold")
_KNOWN_FIELDS: frozenset[str] = frozenset(f.name for f in fields(GameConfig))


def load_game_config(path: Path | None = None) -> GameConfig:
    """Load simulation tuning constants from a YAML file.

    The file must contain a top-level ``game`` mapping.  Keys absent from
    the file keep their :class:`GameConfig` defaults.

    Args:
        path: Optional override for the configuration file path.

    Returns:
        A validated :class:`GameConfig`.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        ValueError: If the file is malformed, names an unknown key, holds a
            non-numeric or non-finite value, or violates a configuration invariant.
    """
    config_path = path or CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict) or not isinstance(data.get("game"), dict):
        raise ValueError(f"{config_path}: expected a top-level 'game' mapping")

    entry: dict = data["game"]
    values: dict[str, float | int] = {}

    for key, val in entry.items():
        # --- Validate key ---
        if key not in _KNOWN_FIELDS:
            raise ValueError(f"{config_path}: unknown config key '{key}'")

        # --- Validate numeric type (bool is an int subclass) ---
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise ValueError(
                f"{config_path}: '{key}' must be numeric, got {type(val).__name__}"
            )
        if not math.isfinite(val):
            raise ValueError(f"{config_path}: '{key}' must be finite")

        if key in _INT_FIELDS:
            if float(val) != int(val):
                raise ValueError(f"{config_path}: '{key}' must be an integer")
            values[key] = int(val)
        else:
            values[key] = float(val)

    return GameConfig(**values)

"""Configuration loading for fragstats.

Configuration lives in a TOML file under ``~/.config/fragstats``. The
``FRAGSTATS_HOME`` environment variable relocates that directory, which
also holds the SQLite database by default.
"""

import logging
import math
import os
from pathlib import Path
from typing import Optional

import toml

from fragstats.models import MetricType, RatingSettings
from fragstats.models.settings import DEFAULT_GLOBAL_AVERAGES

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "FRAGSTATS_HOME"


def get_config_dir() -> Path:
    """Directory holding the config file and the default database."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "fragstats"


def get_config_path() -> Path:
    """Path of the TOML config file."""
    return get_config_dir() / "config.toml"


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from disk.

    Args:
        config_path: Optional explicit path. Defaults to get_config_path().

    Returns:
        Config dict. Empty when the file is missing or unreadable, in
        which case built-in defaults apply.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        return {}

    try:
        return toml.load(config_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return {}


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Create a template configuration file.

    Returns:
        Path of the written file.
    """
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    defaults = RatingSettings()
    template = {
        "rating": {
            "base_rating": defaults.base_rating,
            "conversion_factor": defaults.conversion_factor,
            "risk_window": defaults.risk_window,
            "default_multiplier": defaults.default_multiplier,
            "minutes_per_game": defaults.minutes_per_game,
            "global_averages": {
                metric.value: average for metric, average in DEFAULT_GLOBAL_AVERAGES.items()
            },
        },
        "storage": {
            "db_path": "",  # Leave empty to use fragstats.db next to this file
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path


def get_rating_settings(config: dict) -> RatingSettings:
    """Build RatingSettings from the [rating] config section.

    Unknown metric names and non-numeric values under
    [rating.global_averages] are ignored.
    """
    rating = dict(config.get("rating", {}))
    averages = rating.pop("global_averages", {}) or {}

    known = {metric.value for metric in MetricType}
    global_averages = dict(DEFAULT_GLOBAL_AVERAGES)
    for name, value in averages.items():
        if name not in known:
            logger.warning("Unknown metric '%s' in rating.global_averages", name)
            continue
        try:
            average = float(value)
        except (TypeError, ValueError):
            average = math.nan
        if not math.isfinite(average):
            logger.warning("Ignoring non-numeric rating.global_averages.%s = %r", name, value)
            continue
        global_averages[MetricType(name)] = average

    fields = set(RatingSettings.model_fields) - {"global_averages"}
    values = {key: value for key, value in rating.items() if key in fields}
    return RatingSettings(global_averages=global_averages, **values)


def get_db_path(config: dict) -> Path:
    """Database path from [storage].db_path, or the default location."""
    configured = config.get("storage", {}).get("db_path")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "fragstats.db"

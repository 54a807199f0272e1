"""Configuration Loader - Imperative Shell.

This module handles loading display configuration from YAML files.
All I/O is contained here.

Models (Config, ViewportConfig) are defined in quakemap/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from quakemap.core.classifier import DEFAULT_STYLES, TierStyle, TierStyles
from quakemap.core.config import DEFAULT_TILE_URL, Config, ViewportConfig
from quakemap.core.earthquake import MAX_AGE_MINUTES
from quakemap.core.projection import DEFAULT_HIT_RADIUS


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"


def _parse_tier_style(data: dict[str, Any], default: TierStyle) -> TierStyle:
    """Parse a tier style, falling back to the default per field."""
    return TierStyle(
        color=str(data.get("color", default.color)),
        radius=int(data.get("radius", default.radius)),
    )


def _parse_tier_styles(data: dict[str, Any]) -> TierStyles:
    """Parse the styles for all three tiers."""
    return TierStyles(
        moderate=_parse_tier_style(data.get("moderate") or {}, DEFAULT_STYLES.moderate),
        light=_parse_tier_style(data.get("light") or {}, DEFAULT_STYLES.light),
        minor=_parse_tier_style(data.get("minor") or {}, DEFAULT_STYLES.minor),
    )


def _parse_viewport(data: dict[str, Any]) -> ViewportConfig:
    """Parse the initial map view."""
    defaults = ViewportConfig()
    return ViewportConfig(
        center_latitude=float(data.get("center_latitude", defaults.center_latitude)),
        center_longitude=float(data.get("center_longitude", defaults.center_longitude)),
        zoom=int(data.get("zoom", defaults.zoom)),
        width=int(data.get("width", defaults.width)),
        height=int(data.get("height", defaults.height)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    Pure function; missing keys take their defaults.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        TypeError, ValueError: If a value has the wrong type
    """
    timeout = data.get("feed_timeout_seconds")

    return Config(
        tier_styles=_parse_tier_styles(data.get("tier_styles") or {}),
        hit_radius=float(data.get("hit_radius", DEFAULT_HIT_RADIUS)),
        max_age_minutes=int(data.get("max_age_minutes", MAX_AGE_MINUTES)),
        feed_timeout_seconds=float(timeout) if timeout is not None else None,
        tile_url=data.get("tile_url", DEFAULT_TILE_URL),
        viewport=_parse_viewport(data.get("viewport") or {}),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: zoom %d, max age %d minutes, hit radius %.1f",
        config.viewport.zoom,
        config.max_age_minutes,
        config.hit_radius,
    )

    return config

"""Marker projection and hit testing - Pure functions.

This module converts earthquakes into screen-space markers for a map
viewport and picks the marker under a pointer. Geographic-to-pixel
conversion uses spherical Web Mercator, matching OpenStreetMap tiles.
"""

import math
from dataclasses import dataclass
from datetime import tzinfo
from typing import Iterable

from quakemap.core.classifier import (
    DEFAULT_STYLES,
    TierStyle,
    TierStyles,
    VisualTier,
    classify,
    get_tier_style,
)
from quakemap.core.earthquake import Earthquake
from quakemap.core.formatter import format_tooltip


# Web Mercator is undefined at the poles
MAX_MERCATOR_LATITUDE = 85.05112878

DEFAULT_TILE_SIZE = 256

# Pointer must be strictly closer than this to select a marker
DEFAULT_HIT_RADIUS = 15.0


@dataclass(frozen=True)
class Viewport:
    """Visible map area.

    Attributes:
        center_latitude: Latitude at the center of the view
        center_longitude: Longitude at the center of the view
        zoom: Tile zoom level
        width: View width in pixels
        height: View height in pixels
        tile_size: Tile edge in pixels
    """
    center_latitude: float
    center_longitude: float
    zoom: int
    width: int
    height: int
    tile_size: int = DEFAULT_TILE_SIZE

    @property
    def origin(self) -> tuple[float, float]:
        """World pixel of the view's top-left corner."""
        cx, cy = geo_to_world_pixel(
            self.center_latitude,
            self.center_longitude,
            self.zoom,
            self.tile_size,
        )
        return (cx - self.width / 2, cy - self.height / 2)


@dataclass(frozen=True)
class Marker:
    """Screen-space marker for one earthquake.

    Attributes:
        x: Horizontal position in view pixels
        y: Vertical position in view pixels
        tier: Magnitude tier
        style: Fill color and radius for the tier
        tooltip_text: Hover text
        earthquake: Source event
    """
    x: float
    y: float
    tier: VisualTier
    style: TierStyle
    tooltip_text: str
    earthquake: Earthquake


def geo_to_world_pixel(
    latitude: float,
    longitude: float,
    zoom: int,
    tile_size: int = DEFAULT_TILE_SIZE,
) -> tuple[float, float]:
    """Project a coordinate to world pixel space at a zoom level.

    Pure function. Latitude is clamped to the Mercator limit.

    Returns:
        (x, y) with the origin at the north-west corner of the world
    """
    world_size = tile_size * (2 ** zoom)
    lat = max(-MAX_MERCATOR_LATITUDE, min(MAX_MERCATOR_LATITUDE, latitude))
    lat_rad = math.radians(lat)

    x = (longitude + 180.0) / 360.0 * world_size
    y = (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0 * world_size
    return (x, y)


def project(
    earthquake: Earthquake,
    viewport: Viewport,
    styles: TierStyles = DEFAULT_STYLES,
    tz: tzinfo | None = None,
) -> Marker:
    """Convert an earthquake into a marker positioned in the viewport.

    Pure function (given an explicit zone).

    Args:
        earthquake: Event to project
        viewport: Current view
        styles: Tier styles
        tz: Tooltip time zone, or None for the local zone

    Returns:
        Marker with view-relative position
    """
    world_x, world_y = geo_to_world_pixel(
        earthquake.latitude,
        earthquake.longitude,
        viewport.zoom,
        viewport.tile_size,
    )
    origin_x, origin_y = viewport.origin
    tier = classify(earthquake.magnitude)

    return Marker(
        x=world_x - origin_x,
        y=world_y - origin_y,
        tier=tier,
        style=get_tier_style(tier, styles),
        tooltip_text=format_tooltip(earthquake, tz),
        earthquake=earthquake,
    )


def project_all(
    earthquakes: Iterable[Earthquake],
    viewport: Viewport,
    styles: TierStyles = DEFAULT_STYLES,
    tz: tzinfo | None = None,
) -> list[Marker]:
    """Project every earthquake into the viewport.

    Pure function.
    """
    return [project(e, viewport, styles, tz) for e in earthquakes]


def find_nearest_marker(
    markers: Iterable[Marker],
    x: float,
    y: float,
    hit_radius: float = DEFAULT_HIT_RADIUS,
) -> Marker | None:
    """Find the marker closest to a pointer position.

    Pure function. Linear scan on squared distance; a marker qualifies only
    when strictly within hit_radius. The first of exactly tied markers wins.

    Args:
        markers: Candidate markers
        x: Pointer x in view pixels
        y: Pointer y in view pixels
        hit_radius: Selection radius in pixels

    Returns:
        Nearest qualifying marker, or None
    """
    best_distance = hit_radius * hit_radius
    nearest = None

    for marker in markers:
        dx = marker.x - x
        dy = marker.y - y
        distance_sq = dx * dx + dy * dy
        if distance_sq < best_distance:
            best_distance = distance_sq
            nearest = marker

    return nearest

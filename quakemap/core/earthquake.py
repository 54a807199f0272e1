"""Earthquake data models and parsing - Pure functions.

This module handles parsing USGS GeoJSON feed text into typed Earthquake
objects, and deriving age-filtered views of a parsed collection.
All functions are pure with no side effects.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable


logger = logging.getLogger(__name__)


# Title used when a feature has no place description
PLACEHOLDER_TITLE = "N/A"

# Age filter bounds in minutes (5 minutes to 7 days)
MIN_AGE_MINUTES = 5
MAX_AGE_MINUTES = 7 * 24 * 60

MILLIS_PER_MINUTE = 60_000


@dataclass(frozen=True)
class Earthquake:
    """Immutable earthquake data model.

    Equality and hashing use the location, magnitude, title and time, so a
    set of earthquakes drops structural duplicates.

    Attributes:
        latitude: Epicenter latitude (WGS84)
        longitude: Epicenter longitude (WGS84)
        magnitude: Earthquake magnitude, may be negative
        title: Human-readable location description
        occurred_at_ms: Event time in milliseconds since the Unix epoch
        url: USGS event detail URL (not part of identity)
    """
    latitude: float
    longitude: float
    magnitude: float
    title: str
    occurred_at_ms: int
    url: str | None = field(default=None, compare=False)

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coerce_float(value: Any) -> float | None:
    """Coerce a JSON number or numeric string to a finite float.

    Returns None for anything else, including NaN and infinity.
    """
    if _is_number(value):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value)
        except ValueError:
            return None
    else:
        return None
    return result if math.isfinite(result) else None


def _coerce_int(value: Any) -> int | None:
    """Coerce a JSON number or integer string to int, None if impossible.

    Floats are truncated toward zero. NaN and infinity are rejected.
    """
    if _is_number(value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _coerce_coordinate(value: Any) -> float | None:
    # Coordinates must be JSON numbers; numeric strings are not accepted
    if not _is_number(value):
        return None
    result = float(value)
    return result if math.isfinite(result) else None


def parse_earthquake(feature: Any) -> Earthquake | None:
    """Parse a single GeoJSON feature into an Earthquake.

    Pure function: takes the raw decoded feature, returns a typed Earthquake
    or None if any required field is missing, ill-typed or not finite.

    Args:
        feature: GeoJSON feature from the USGS feed

    Returns:
        Earthquake object or None if the feature is malformed
    """
    try:
        if not isinstance(feature, dict):
            return None

        props = feature.get("properties")
        geometry = feature.get("geometry")
        if not isinstance(props, dict) or not isinstance(geometry, dict):
            return None

        if geometry.get("type") != "Point":
            return None

        magnitude = _coerce_float(props.get("mag"))
        time_ms = _coerce_int(props.get("time"))
        if magnitude is None or time_ms is None:
            return None

        coords = geometry.get("coordinates")
        if not isinstance(coords, list) or len(coords) < 2:
            return None

        # GeoJSON order is [longitude, latitude, (depth)]
        longitude = _coerce_coordinate(coords[0])
        latitude = _coerce_coordinate(coords[1])
        if longitude is None or latitude is None:
            return None

        place = props.get("place")
        url = props.get("url")

        return Earthquake(
            latitude=latitude,
            longitude=longitude,
            magnitude=magnitude,
            title=str(place) if place is not None else PLACEHOLDER_TITLE,
            occurred_at_ms=time_ms,
            url=url if isinstance(url, str) else None,
        )
    except (KeyError, TypeError, ValueError, OverflowError):
        return None


def parse_earthquakes(raw_text: str) -> frozenset[Earthquake]:
    """Parse USGS GeoJSON feed text into a set of Earthquakes.

    Pure function: never raises. Undecodable text or a document without a
    ``features`` list yields an empty set; malformed features are skipped.

    Args:
        raw_text: Response body of the USGS feed

    Returns:
        Set of valid Earthquake objects
    """
    try:
        geojson = json.loads(raw_text)
    except (TypeError, ValueError, RecursionError):
        logger.debug("Feed text is not valid JSON")
        return frozenset()

    if not isinstance(geojson, dict):
        return frozenset()

    features = geojson.get("features")
    if not isinstance(features, list):
        return frozenset()

    earthquakes = set()
    for feature in features:
        earthquake = parse_earthquake(feature)
        if earthquake is not None:
            earthquakes.add(earthquake)

    logger.debug(
        "Parsed %d earthquakes from %d features",
        len(earthquakes),
        len(features),
    )

    return frozenset(earthquakes)


def filter_by_age(
    earthquakes: Iterable[Earthquake],
    max_age_minutes: int,
    now_ms: int,
) -> frozenset[Earthquake]:
    """Filter earthquakes to those no older than max_age_minutes.

    Pure function. The cutoff is inclusive: an event exactly
    max_age_minutes old is kept. The source collection is not modified.

    Args:
        earthquakes: Earthquakes to filter
        max_age_minutes: Maximum age, expected in MIN_AGE_MINUTES..MAX_AGE_MINUTES
        now_ms: Current time in milliseconds since the Unix epoch

    Returns:
        Earthquakes that occurred at or after the cutoff
    """
    cutoff = now_ms - max_age_minutes * MILLIS_PER_MINUTE
    return frozenset(e for e in earthquakes if e.occurred_at_ms >= cutoff)


def sort_newest_first(earthquakes: Iterable[Earthquake]) -> list[Earthquake]:
    """Return earthquakes as a list sorted by time, newest first."""
    return sorted(earthquakes, key=lambda e: e.occurred_at_ms, reverse=True)

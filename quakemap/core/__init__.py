"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Earthquake feed parsing
- Age filtering
- Magnitude classification
- Marker projection and hit testing
- Label formatting

All functions here are deterministic and have no I/O.
"""

from quakemap.core.earthquake import Earthquake, parse_earthquakes, filter_by_age
from quakemap.core.classifier import VisualTier, TierStyle, TierStyles, classify
from quakemap.core.projection import Marker, Viewport, project, find_nearest_marker
from quakemap.core.formatter import format_tooltip, format_popup_html

__all__ = [
    # Earthquake
    "Earthquake",
    "parse_earthquakes",
    "filter_by_age",
    # Classifier
    "VisualTier",
    "TierStyle",
    "TierStyles",
    "classify",
    # Projection
    "Marker",
    "Viewport",
    "project",
    "find_nearest_marker",
    # Formatter
    "format_tooltip",
    "format_popup_html",
]

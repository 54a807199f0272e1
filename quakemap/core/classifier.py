"""Magnitude classification - Pure functions.

This module maps an earthquake magnitude to one of three visual tiers.
Each tier has a marker color and radius, both set from configuration.
"""

from dataclasses import dataclass
from enum import Enum


# Lower bounds (inclusive) of the upper two tiers
MODERATE_THRESHOLD = 5.0
LIGHT_THRESHOLD = 4.0

# Marker outline drawn around every tier
BORDER_COLOR = "#404040"


class VisualTier(str, Enum):
    """Magnitude bucket driving marker appearance."""
    MINOR = "minor"
    LIGHT = "light"
    MODERATE = "moderate"


@dataclass(frozen=True)
class TierStyle:
    """Immutable marker style for a tier.

    Attributes:
        color: Hex fill color (e.g., "#d73027")
        radius: Marker circle radius in pixels
    """
    color: str
    radius: int


@dataclass(frozen=True)
class TierStyles:
    """Marker styles for all three tiers."""
    moderate: TierStyle = TierStyle(color="#d73027", radius=10)
    light: TierStyle = TierStyle(color="#fee08b", radius=7)
    minor: TierStyle = TierStyle(color="#4575b4", radius=5)


DEFAULT_STYLES = TierStyles()

LEGEND_LABELS = {
    VisualTier.MODERATE: "5.0+ Magnitude",
    VisualTier.LIGHT: "4.0-4.9 Magnitude",
    VisualTier.MINOR: "< 4.0 Magnitude",
}


def classify(magnitude: float) -> VisualTier:
    """Classify a magnitude into a visual tier.

    Pure function, defined for every float. NaN falls through to MINOR.

    Args:
        magnitude: Earthquake magnitude

    Returns:
        MODERATE for >= 5.0, LIGHT for >= 4.0, MINOR otherwise
    """
    if magnitude >= MODERATE_THRESHOLD:
        return VisualTier.MODERATE
    elif magnitude >= LIGHT_THRESHOLD:
        return VisualTier.LIGHT
    return VisualTier.MINOR


def get_tier_style(tier: VisualTier, styles: TierStyles = DEFAULT_STYLES) -> TierStyle:
    """Look up the marker style for a tier."""
    return getattr(styles, tier.value)


def get_magnitude_style(
    magnitude: float,
    styles: TierStyles = DEFAULT_STYLES,
) -> TierStyle:
    """Get the marker style for a magnitude.

    Pure function.
    """
    return get_tier_style(classify(magnitude), styles)


def legend_entries(
    styles: TierStyles = DEFAULT_STYLES,
) -> list[tuple[VisualTier, str, TierStyle]]:
    """Build legend rows, strongest tier first.

    Pure function.

    Returns:
        List of (tier, label, style) tuples
    """
    return [
        (tier, LEGEND_LABELS[tier], get_tier_style(tier, styles))
        for tier in (VisualTier.MODERATE, VisualTier.LIGHT, VisualTier.MINOR)
    ]

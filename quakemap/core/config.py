"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

import re
from dataclasses import dataclass, field

from quakemap.core.classifier import DEFAULT_STYLES, TierStyle, TierStyles
from quakemap.core.earthquake import MAX_AGE_MINUTES, MIN_AGE_MINUTES
from quakemap.core.projection import DEFAULT_HIT_RADIUS


# Fixed USGS weekly summary feed (M2.5+, past 7 days)
FEED_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/2.5_week.geojson"

DEFAULT_TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"

MAX_ZOOM = 19

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass
class ViewportConfig:
    """Initial map view.

    Attributes:
        center_latitude: Latitude at the center of the view
        center_longitude: Longitude at the center of the view
        zoom: Tile zoom level (0-19)
        width: Rendered image width in pixels
        height: Rendered image height in pixels
    """
    center_latitude: float = 20.0
    center_longitude: float = 0.0
    zoom: int = 3
    width: int = 1000
    height: int = 750


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        tier_styles: Marker color and radius per magnitude tier
        hit_radius: Pointer selection radius in pixels
        max_age_minutes: Default age filter (MIN_AGE_MINUTES..MAX_AGE_MINUTES)
        feed_timeout_seconds: HTTP timeout for the feed, None for no timeout
        tile_url: Map tile URL template
        viewport: Initial map view
    """
    tier_styles: TierStyles = DEFAULT_STYLES
    hit_radius: float = DEFAULT_HIT_RADIUS
    max_age_minutes: int = MAX_AGE_MINUTES
    feed_timeout_seconds: float | None = None
    tile_url: str = DEFAULT_TILE_URL
    viewport: ViewportConfig = field(default_factory=ViewportConfig)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_tier_style(style: TierStyle, field_name: str) -> list[ValidationError]:
    """Validate a marker style.

    Pure function.

    Args:
        style: Style to validate
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not _HEX_COLOR.match(style.color):
        errors.append(ValidationError(
            field=f"{field_name}.color",
            message=f"Color {style.color!r} is not a #rrggbb hex value",
        ))

    if style.radius <= 0:
        errors.append(ValidationError(
            field=f"{field_name}.radius",
            message=f"Radius must be positive, got {style.radius}",
        ))

    return errors


def validate_max_age(minutes: int, field_name: str) -> list[ValidationError]:
    """Validate an age filter value.

    Pure function.
    """
    if not MIN_AGE_MINUTES <= minutes <= MAX_AGE_MINUTES:
        return [ValidationError(
            field=field_name,
            message=(
                f"Max age {minutes} out of range "
                f"[{MIN_AGE_MINUTES}, {MAX_AGE_MINUTES}] minutes"
            ),
        )]
    return []


def validate_viewport(viewport: ViewportConfig) -> list[ValidationError]:
    """Validate the initial map view.

    Pure function. Out-of-range centers are warnings since projection clamps.
    """
    errors = []

    if not 0 <= viewport.zoom <= MAX_ZOOM:
        errors.append(ValidationError(
            field="viewport.zoom",
            message=f"Zoom {viewport.zoom} out of range [0, {MAX_ZOOM}]",
        ))

    if viewport.width <= 0 or viewport.height <= 0:
        errors.append(ValidationError(
            field="viewport",
            message=f"Image size must be positive, got {viewport.width}x{viewport.height}",
        ))

    if not -90 <= viewport.center_latitude <= 90:
        errors.append(ValidationError(
            field="viewport.center_latitude",
            message=f"Latitude {viewport.center_latitude} out of range [-90, 90]",
            severity="warning",
        ))

    if not -180 <= viewport.center_longitude <= 180:
        errors.append(ValidationError(
            field="viewport.center_longitude",
            message=f"Longitude {viewport.center_longitude} out of range [-180, 180]",
            severity="warning",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    for tier_name in ("moderate", "light", "minor"):
        errors.extend(validate_tier_style(
            getattr(config.tier_styles, tier_name),
            f"tier_styles.{tier_name}",
        ))

    if config.hit_radius <= 0:
        errors.append(ValidationError(
            field="hit_radius",
            message=f"Hit radius must be positive, got {config.hit_radius}",
        ))

    errors.extend(validate_max_age(config.max_age_minutes, "max_age_minutes"))

    if config.feed_timeout_seconds is not None and config.feed_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="feed_timeout_seconds",
            message=f"Timeout must be positive, got {config.feed_timeout_seconds}",
        ))

    errors.extend(validate_viewport(config.viewport))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )

"""Tests for configuration validation - Pure functions."""

from quakemap.core.classifier import TierStyle, TierStyles
from quakemap.core.config import (
    Config,
    ViewportConfig,
    validate_config,
    validate_max_age,
    validate_tier_style,
)


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_defaults_are_valid(self):
        """The default configuration has no errors or warnings."""
        result = validate_config(Config())

        assert result.valid is True
        assert result.errors == []

    def test_bad_color_is_error(self):
        """Tier colors must be #rrggbb."""
        config = Config(tier_styles=TierStyles(light=TierStyle(color="yellow", radius=7)))
        result = validate_config(config)

        assert result.valid is False
        assert result.critical_errors[0].field == "tier_styles.light.color"

    def test_non_positive_hit_radius_is_error(self):
        """Hit radius must be positive."""
        result = validate_config(Config(hit_radius=0))

        assert result.valid is False
        assert result.critical_errors[0].field == "hit_radius"

    def test_age_out_of_range_is_error(self):
        """Default age must be in 5..10080 minutes."""
        assert validate_config(Config(max_age_minutes=4)).valid is False
        assert validate_config(Config(max_age_minutes=10081)).valid is False
        assert validate_config(Config(max_age_minutes=5)).valid is True

    def test_bad_zoom_is_error(self):
        """Zoom must be a tile zoom level."""
        result = validate_config(Config(viewport=ViewportConfig(zoom=25)))
        assert result.valid is False

    def test_off_map_center_is_warning(self):
        """An out-of-range center is only a warning."""
        result = validate_config(Config(viewport=ViewportConfig(center_latitude=120.0)))

        assert result.valid is True
        assert len(result.warnings) == 1
        assert result.warnings[0].field == "viewport.center_latitude"

    def test_non_positive_timeout_is_error(self):
        """A configured timeout must be positive."""
        assert validate_config(Config(feed_timeout_seconds=0)).valid is False
        assert validate_config(Config(feed_timeout_seconds=None)).valid is True


class TestValidateHelpers:
    """Tests for the individual validators."""

    def test_tier_style_radius(self):
        """Radius must be positive."""
        errors = validate_tier_style(TierStyle(color="#000000", radius=0), "tier")

        assert [e.field for e in errors] == ["tier.radius"]

    def test_max_age_bounds(self):
        """Bounds are inclusive."""
        assert validate_max_age(5, "age") == []
        assert validate_max_age(10080, "age") == []
        assert len(validate_max_age(0, "age")) == 1

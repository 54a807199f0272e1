"""Static Map Client - Imperative Shell.

This module renders earthquake markers onto a static map image using
OpenStreetMap tiles. All I/O is contained here; tier styling is in the
core module.
"""

import io
import logging
from dataclasses import dataclass
from typing import Iterable

from staticmap import StaticMap, CircleMarker

from quakemap.core.classifier import BORDER_COLOR, DEFAULT_STYLES, TierStyles, get_magnitude_style
from quakemap.core.config import DEFAULT_TILE_URL
from quakemap.core.earthquake import Earthquake
from quakemap.core.projection import Viewport


logger = logging.getLogger(__name__)


# Border ring width around each marker in pixels
BORDER_WIDTH = 1

# staticmap draws circles on a canvas twice the output size and takes
# CircleMarker width as the radius on that canvas
SUPERSAMPLE = 2


@dataclass
class MapImageResult:
    """Result of map image generation.

    Attributes:
        success: Whether the image was generated successfully
        image_bytes: PNG image data if successful
        error: Error message if failed
    """
    success: bool
    image_bytes: bytes | None = None
    error: str | None = None


class StaticMapClient:
    """Client for rendering earthquake maps to PNG.

    This is part of the imperative shell - it handles I/O (fetching map tiles
    and rendering images).
    """

    def __init__(self, tile_url: str | None = None) -> None:
        """Initialize static map client.

        Args:
            tile_url: Custom tile URL template. Defaults to OpenStreetMap.
        """
        self.tile_url = tile_url or DEFAULT_TILE_URL

    def render_markers(
        self,
        earthquakes: Iterable[Earthquake],
        viewport: Viewport,
        styles: TierStyles = DEFAULT_STYLES,
    ) -> MapImageResult:
        """Render earthquakes as tier-colored circles on a map image.

        This method performs I/O (fetches map tiles from tile server).

        Args:
            earthquakes: Earthquakes to draw
            viewport: Map center, zoom and image size
            styles: Tier styles

        Returns:
            MapImageResult with image bytes or error
        """
        earthquakes = list(earthquakes)

        logger.info(
            "Rendering %d markers centered on (%.4f, %.4f) at zoom %d",
            len(earthquakes),
            viewport.center_latitude,
            viewport.center_longitude,
            viewport.zoom,
        )

        try:
            static_map = StaticMap(
                viewport.width,
                viewport.height,
                url_template=self.tile_url,
            )

            # Smallest markers last so they stay visible on top
            ordered = sorted(earthquakes, key=lambda e: e.magnitude, reverse=True)
            for earthquake in ordered:
                style = get_magnitude_style(earthquake.magnitude, styles)
                position = (earthquake.longitude, earthquake.latitude)  # (lon, lat) order for staticmap

                # Border ring first so the fill renders on top of it
                static_map.add_marker(CircleMarker(
                    position, BORDER_COLOR, (style.radius + BORDER_WIDTH) * SUPERSAMPLE
                ))
                static_map.add_marker(CircleMarker(position, style.color, style.radius * SUPERSAMPLE))

            image = static_map.render(
                zoom=viewport.zoom,
                center=[viewport.center_longitude, viewport.center_latitude],
            )

            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            image_bytes = buffer.getvalue()

            logger.info(
                "Generated map image: %d bytes",
                len(image_bytes),
            )

            return MapImageResult(
                success=True,
                image_bytes=image_bytes,
            )

        except Exception as e:
            logger.error("Failed to generate map: %s", str(e))
            return MapImageResult(
                success=False,
                error=str(e),
            )

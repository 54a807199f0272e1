"""HTML Map Client - Imperative Shell.

This module builds an interactive Leaflet page with folium: one circle
marker per earthquake with a click popup and hover tooltip, plus a legend.
"""

import logging
from datetime import tzinfo
from html import escape
from pathlib import Path
from typing import Iterable

import folium

from quakemap.core.classifier import DEFAULT_STYLES, TierStyles, get_magnitude_style, legend_entries
from quakemap.core.config import DEFAULT_TILE_URL
from quakemap.core.earthquake import Earthquake
from quakemap.core.formatter import format_popup_html, format_tooltip
from quakemap.core.projection import Viewport


logger = logging.getLogger(__name__)


TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)

POPUP_MAX_WIDTH = 300


def build_legend_html(styles: TierStyles = DEFAULT_STYLES) -> str:
    """Build the fixed-position legend box."""
    rows = "".join(
        '<div class="legend-item">'
        f'<span style="display:inline-block;width:{style.radius * 2}px;'
        f'height:{style.radius * 2}px;border-radius:50%;background:{style.color};'
        'border:1px solid #404040;margin-right:6px;"></span>'
        f"{label}</div>"
        for _, label, style in legend_entries(styles)
    )
    return (
        '<div id="legend" style="position: fixed; bottom: 40px; left: 20px; '
        "z-index: 9999; background-color: rgba(230, 230, 230, 0.85); "
        'border: 1px solid grey; padding: 8px 10px; font-size: 13px;">'
        f"<b>Legend</b><br>{rows}</div>"
    )


class HtmlMapClient:
    """Client for writing earthquake maps as standalone HTML pages.

    This is part of the imperative shell - it handles file I/O.
    """

    def __init__(self, tile_url: str | None = None) -> None:
        self.tile_url = tile_url or DEFAULT_TILE_URL

    def build_map(
        self,
        earthquakes: Iterable[Earthquake],
        viewport: Viewport,
        styles: TierStyles = DEFAULT_STYLES,
        tz: tzinfo | None = None,
    ) -> folium.Map:
        """Build a folium map with one marker per earthquake.

        Args:
            earthquakes: Earthquakes to draw
            viewport: Initial center and zoom
            styles: Tier styles
            tz: Time zone for labels, None for the local zone

        Returns:
            folium.Map ready to save
        """
        fmap = folium.Map(
            location=[viewport.center_latitude, viewport.center_longitude],
            zoom_start=viewport.zoom,
            tiles=self.tile_url,
            attr=TILE_ATTRIBUTION,
        )

        count = 0
        for earthquake in earthquakes:
            style = get_magnitude_style(earthquake.magnitude, styles)
            folium.CircleMarker(
                location=[earthquake.latitude, earthquake.longitude],
                radius=style.radius,
                color="#000",
                weight=0.5,
                opacity=1,
                fill=True,
                fill_color=style.color,
                fill_opacity=0.8,
                popup=folium.Popup(format_popup_html(earthquake, tz), max_width=POPUP_MAX_WIDTH),
                tooltip=escape(format_tooltip(earthquake, tz)).replace("\n", "<br>"),
            ).add_to(fmap)
            count += 1

        fmap.get_root().html.add_child(folium.Element(build_legend_html(styles)))

        logger.info("Built HTML map with %d markers", count)

        return fmap

    def save_map(
        self,
        earthquakes: Iterable[Earthquake],
        viewport: Viewport,
        output_path: str | Path,
        styles: TierStyles = DEFAULT_STYLES,
        tz: tzinfo | None = None,
    ) -> Path:
        """Build the map and write it to an HTML file.

        This method performs file I/O.

        Returns:
            Path of the written file

        Raises:
            OSError: If the file cannot be written
        """
        path = Path(output_path)
        fmap = self.build_map(earthquakes, viewport, styles, tz)
        fmap.save(str(path))

        logger.info("Wrote HTML map to %s", path)

        return path

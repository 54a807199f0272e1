"""Label formatting - Pure functions.

This module formats earthquake data into tooltip, popup and summary text.
All functions are pure with no side effects; the only environmental input
is the viewer's local time zone when no explicit zone is supplied.
"""

from datetime import datetime, timezone, tzinfo
from html import escape

from quakemap.core.earthquake import PLACEHOLDER_TITLE, Earthquake


TIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


def to_datetime(occurred_at_ms: int, tz: tzinfo | None = None) -> datetime:
    """Convert epoch milliseconds to an aware datetime.

    Args:
        occurred_at_ms: Milliseconds since the Unix epoch
        tz: Target zone, or None for the local zone

    Returns:
        Timezone-aware datetime
    """
    utc_time = datetime.fromtimestamp(occurred_at_ms / 1000, tz=timezone.utc)
    return utc_time.astimezone(tz)


def format_event_time(occurred_at_ms: int, tz: tzinfo | None = None) -> str:
    """Format event time as 'YYYY-MM-DD HH:MM:SS ZONE'.

    Pure function (given an explicit zone). Times outside the platform's
    datetime range are shown as the placeholder title.
    """
    try:
        return to_datetime(occurred_at_ms, tz).strftime(TIME_FORMAT)
    except (OverflowError, OSError, ValueError):
        return PLACEHOLDER_TITLE


def format_tooltip(earthquake: Earthquake, tz: tzinfo | None = None) -> str:
    """Format the hover tooltip for an earthquake.

    Args:
        earthquake: Earthquake to describe
        tz: Display zone, or None for the local zone

    Returns:
        Three lines: title, magnitude to one decimal, local time
    """
    return (
        f"{earthquake.title}\n"
        f"Magnitude: {earthquake.magnitude:.1f}\n"
        f"Time: {format_event_time(earthquake.occurred_at_ms, tz)}"
    )


def format_popup_html(earthquake: Earthquake, tz: tzinfo | None = None) -> str:
    """Format the click popup body for the HTML map.

    Args:
        earthquake: Earthquake to describe
        tz: Display zone, or None for the local zone

    Returns:
        HTML fragment with escaped text
    """
    parts = [
        f"<h3>{escape(earthquake.title)}</h3><hr>",
        f"<p>Magnitude: {earthquake.magnitude:.1f}</p>",
        f"<p>Time: {escape(format_event_time(earthquake.occurred_at_ms, tz))}</p>",
    ]
    if earthquake.url:
        parts.append(
            f'<p><a href="{escape(earthquake.url)}" target="_blank">'
            "More details (USGS)</a></p>"
        )
    return "".join(parts)


def format_earthquake_summary(earthquake: Earthquake, tz: tzinfo | None = None) -> str:
    """Format a one-line summary of an earthquake.

    Pure function (given an explicit zone).
    """
    return (
        f"M{earthquake.magnitude:.1f} - {earthquake.title} "
        f"at {format_event_time(earthquake.occurred_at_ms, tz)} "
        f"({earthquake.latitude:.3f}, {earthquake.longitude:.3f})"
    )

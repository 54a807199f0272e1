"""Map Session - Wires Functional Core and Imperative Shell.

This module owns the most recently fetched earthquake collection and
coordinates the flow of data between the pure functional core and the
I/O-performing shell components for one interactive map.

The feed is fetched on a single background worker. Its result is handed
back through a Future and applied on the caller's (foreground) thread, so
the collection is only ever replaced by one assignment on that thread.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable

from quakemap.core.config import Config
from quakemap.core.earthquake import Earthquake, filter_by_age, parse_earthquakes
from quakemap.core.projection import Marker, Viewport, find_nearest_marker, project_all
from quakemap.shell.feed_client import FeedClient, FeedError, NetworkError


logger = logging.getLogger(__name__)


MarkerSink = Callable[[list[Marker]], None]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class FetchResult:
    """Result of one fetch-and-parse cycle.

    Attributes:
        success: Whether the feed was fetched
        earthquakes: Parsed events (empty on failure)
        error: Error message if failed
        status_code: HTTP status for non-200 responses
    """
    success: bool
    earthquakes: frozenset[Earthquake] = frozenset()
    error: str | None = None
    status_code: int | None = None

    @property
    def summary(self) -> str:
        """Human-readable summary of the fetch."""
        if self.success:
            return f"Loaded {len(self.earthquakes)} earthquakes"
        return f"Could not load earthquake data: {self.error}"


class MapSession:
    """Holds the current earthquake set and answers view queries.

    This class wires together:
    - Feed client (fetches the raw feed, off the foreground thread)
    - Core functions (parsing, age filtering, projection, hit testing)
    - A marker sink supplied by the presentation layer
    """

    def __init__(
        self,
        config: Config,
        feed_client: FeedClient | None = None,
        sink: MarkerSink | None = None,
        clock: Callable[[], int] = _now_ms,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize session with configuration.

        Args:
            config: Application configuration
            feed_client: Feed client (created if not provided)
            sink: Receives the marker list on every render
            clock: Returns the current time in epoch milliseconds
            tz: Time zone for labels, None for the local zone
        """
        self.config = config
        self.feed_client = feed_client or FeedClient(timeout=config.feed_timeout_seconds)
        self.sink = sink
        self.clock = clock
        self.tz = tz

        self._earthquakes: frozenset[Earthquake] = frozenset()
        self._max_age_minutes: int | None = None
        self._executor: ThreadPoolExecutor | None = None
        self._pending: Future | None = None

    @property
    def earthquakes(self) -> frozenset[Earthquake]:
        """Full collection from the last successful fetch."""
        return self._earthquakes

    @property
    def max_age_minutes(self) -> int | None:
        """Current age filter, None when unfiltered."""
        return self._max_age_minutes

    def _fetch_and_parse(self) -> frozenset[Earthquake]:
        """Background job: fetch the feed and parse it.

        Runs on the worker thread and must not touch session state.
        """
        raw_text = self.feed_client.fetch()
        return parse_earthquakes(raw_text)

    def start_fetch(self) -> Future:
        """Start fetching the feed in the background.

        Only one fetch runs at a time; while one is pending its Future is
        returned again.

        Returns:
            Future resolving to the parsed earthquake set
        """
        if self._pending is not None and not self._pending.done():
            return self._pending

        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1,
                thread_name_prefix="quakemap-fetch",
            )

        logger.info("Starting background feed fetch")
        self._pending = self._executor.submit(self._fetch_and_parse)
        return self._pending

    def complete_fetch(self, future: Future) -> FetchResult:
        """Apply a finished (or finishing) fetch on the calling thread.

        Blocks until the future is done. On success the collection is
        replaced wholesale; on failure it is left untouched and the error
        is reported once in the returned result.

        Args:
            future: Future returned by start_fetch()

        Returns:
            FetchResult describing the outcome
        """
        try:
            earthquakes = future.result()
        except NetworkError as e:
            logger.error("Failed to fetch earthquakes: %s", e)
            return FetchResult(success=False, error=str(e), status_code=e.status_code)
        except FeedError as e:
            logger.error("Failed to fetch earthquakes: %s", e)
            return FetchResult(success=False, error=str(e))
        finally:
            if self._pending is future:
                self._pending = None

        self._earthquakes = earthquakes

        logger.info("Loaded %d earthquakes", len(earthquakes))

        return FetchResult(success=True, earthquakes=earthquakes)

    def fetch_now(self) -> FetchResult:
        """Fetch the feed and apply it, waiting for completion."""
        return self.complete_fetch(self.start_fetch())

    def set_max_age(self, minutes: int | None) -> None:
        """Set the age filter; None shows every event."""
        self._max_age_minutes = minutes

    def active_events(self) -> frozenset[Earthquake]:
        """Events passing the current age filter.

        Recomputed on each call from the full collection, which is never
        modified.
        """
        if self._max_age_minutes is None:
            return self._earthquakes
        return filter_by_age(self._earthquakes, self._max_age_minutes, self.clock())

    def markers(self, viewport: Viewport) -> list[Marker]:
        """Project the active events into a viewport."""
        return project_all(
            self.active_events(),
            viewport,
            self.config.tier_styles,
            self.tz,
        )

    def render(self, viewport: Viewport) -> list[Marker]:
        """Project the active events and push them to the sink.

        Returns:
            The markers passed to the sink
        """
        markers = self.markers(viewport)
        if self.sink is not None:
            self.sink(markers)
        return markers

    def tooltip_for(self, x: float, y: float, viewport: Viewport) -> str | None:
        """Tooltip text for the marker under a pointer, if any.

        Args:
            x: Pointer x in view pixels
            y: Pointer y in view pixels
            viewport: Current view

        Returns:
            Tooltip text, or None when no marker is within the hit radius
        """
        nearest = find_nearest_marker(
            self.markers(viewport),
            x,
            y,
            self.config.hit_radius,
        )
        return nearest.tooltip_text if nearest is not None else None

    def close(self) -> None:
        """Release the background worker without waiting for a pending fetch."""
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def __enter__(self) -> "MapSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

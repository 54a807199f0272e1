"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS GeoJSON summary feed.
All I/O is contained here; parsing is in the core module.
"""

import logging

import requests

from quakemap.core.config import FEED_URL


logger = logging.getLogger(__name__)


class FeedError(Exception):
    """Base class for feed fetch failures."""


class NetworkError(FeedError):
    """The feed answered with a status other than 200.

    Attributes:
        status_code: HTTP status code of the response
    """

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Feed returned HTTP {status_code}")
        self.status_code = status_code


class TransportError(FeedError):
    """The request failed before a response was received."""


class FeedClient:
    """Client for fetching the earthquake feed.

    This is part of the imperative shell - it handles HTTP I/O.
    A single attempt is made per call; there is no retry.
    """

    def __init__(
        self,
        url: str = FEED_URL,
        timeout: float | None = None,
    ) -> None:
        """Initialize feed client.

        Args:
            url: Feed URL
            timeout: Request timeout in seconds, None for the requests default
        """
        self.url = url
        self.timeout = timeout

    def fetch(self) -> str:
        """Fetch the raw feed text.

        This method performs HTTP I/O. The full body is buffered.

        Returns:
            Response body text

        Raises:
            NetworkError: If the response status is not 200
            TransportError: If the connection fails or times out
        """
        logger.info("Fetching earthquake feed from %s", self.url)

        try:
            response = requests.get(
                self.url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                allow_redirects=False,
            )
        except requests.Timeout as e:
            logger.error("Earthquake feed request timed out")
            raise TransportError("Request timed out") from e
        except requests.RequestException as e:
            logger.error("Earthquake feed request failed: %s", str(e))
            raise TransportError(str(e)) from e

        if response.status_code != 200:
            logger.warning(
                "Earthquake feed returned non-200: %d",
                response.status_code,
            )
            raise NetworkError(response.status_code)

        logger.info("Fetched %d bytes from earthquake feed", len(response.content))

        return response.text

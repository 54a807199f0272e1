"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS feed client (HTTP)
- Static map renderer (tile fetching, PNG output)
- HTML map writer (file output)
- Configuration loading (files/environment)

Keep this layer thin and simple. All business logic should be in core.
"""

from quakemap.shell.feed_client import FeedClient, FeedError, NetworkError, TransportError
from quakemap.shell.static_map_client import StaticMapClient
from quakemap.shell.html_map_client import HtmlMapClient
from quakemap.shell.config_loader import load_config

__all__ = [
    "FeedClient",
    "FeedError",
    "NetworkError",
    "TransportError",
    "StaticMapClient",
    "HtmlMapClient",
    "load_config",
]

"""
Core domain models and pure functions for HazardWatch.

This module contains the domain models and pure business logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import HazardEvent, HazardFeedResult, Position, SafeZone, DeviceLocation, MarkerOptions, MarkerHandle, TileLayerConfig
from .errors import HazardWatchError, FetchError, ParseError, GeolocationUnavailable, GeolocationFailed
from .feed import parse_feed, select_most_significant

__all__ = [
    "HazardEvent", "HazardFeedResult", "Position", "SafeZone", "DeviceLocation",
    "MarkerOptions", "MarkerHandle", "TileLayerConfig",
    "HazardWatchError", "FetchError", "ParseError", "GeolocationUnavailable", "GeolocationFailed",
    "parse_feed", "select_most_significant",
]

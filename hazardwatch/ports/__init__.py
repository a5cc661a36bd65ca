"""
Port interfaces for HazardWatch hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .feed import HazardFeedPort, FeedObserver
from .map_surface import MapSurfacePort
from .geolocation import GeolocationPort
from .ui import AlertBannerPort, NoticePort, NoticeLevel

__all__ = ["HazardFeedPort", "FeedObserver", "MapSurfacePort", "GeolocationPort", "AlertBannerPort", "NoticePort", "NoticeLevel"]

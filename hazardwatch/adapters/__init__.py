"""
Adapters for HazardWatch hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .usgs.client import UsgsFeedClient
from .homeassistant.client import HAClient
from .folium_map.surface import FoliumMapSurface, FoliumAlertBanner
from .geolocation.providers import StaticGeolocation, HomeAssistantGeolocation, UnavailableGeolocation, build_geolocation
from .ui.controls import TriggerButton, TriggerEvent
from .ui.notices import NoticeBoard, HomeAssistantNotice

__all__ = [
    "UsgsFeedClient", "HAClient", "FoliumMapSurface", "FoliumAlertBanner",
    "StaticGeolocation", "HomeAssistantGeolocation", "UnavailableGeolocation", "build_geolocation",
    "TriggerButton", "TriggerEvent", "NoticeBoard", "HomeAssistantNotice",
]

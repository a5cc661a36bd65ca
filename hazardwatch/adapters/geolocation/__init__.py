"""
Geolocation adapters for HazardWatch.
"""

from .providers import StaticGeolocation, HomeAssistantGeolocation, UnavailableGeolocation, build_geolocation

__all__ = ["StaticGeolocation", "HomeAssistantGeolocation", "UnavailableGeolocation", "build_geolocation"]

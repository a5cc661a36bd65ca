"""
Folium map adapters for HazardWatch.
"""

from .surface import FoliumMapSurface, FoliumAlertBanner

__all__ = ["FoliumMapSurface", "FoliumAlertBanner"]

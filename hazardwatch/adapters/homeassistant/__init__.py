"""
Home Assistant adapters for HazardWatch.
"""

from .client import HAClient

__all__ = ["HAClient"]

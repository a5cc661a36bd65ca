"""
USGS feed adapters for HazardWatch.
"""

from .client import UsgsFeedClient, FEEDS, resolve_feed_url

__all__ = ["UsgsFeedClient", "FEEDS", "resolve_feed_url"]

"""
Metrics definitions for HazardWatch.

This module defines Prometheus metrics for monitoring
the hazard feed pipeline and the location-gated actions.
"""

from prometheus_client import Counter, Histogram, Gauge

# 카운터 메트릭
feed_fetches = Counter(
    "feed_fetches_total",
    "Number of hazard feed fetch cycles",
    ["outcome"]
)

hazard_events_parsed = Counter(
    "hazard_events_parsed_total",
    "Number of hazard events parsed from the feed"
)

hazard_features_skipped = Counter(
    "hazard_features_skipped_total",
    "Number of feed features skipped for missing coordinates or magnitude"
)

markers_drawn = Counter(
    "markers_drawn_total",
    "Number of markers added to the map",
    ["kind"]
)

banner_updates = Counter(
    "banner_updates_total",
    "Number of alert banner updates"
)

hazard_render_errors = Counter(
    "hazard_render_errors_total",
    "Number of pipeline runs that failed while drawing on the map"
)

geolocation_requests = Counter(
    "geolocation_requests_total",
    "Device location requests",
    ["outcome"]
)

sos_requests = Counter(
    "sos_requests_total",
    "Simulated SOS requests",
    ["outcome"]
)

# 히스토그램 메트릭
feed_fetch_seconds = Histogram(
    "feed_fetch_duration_seconds",
    "Time spent fetching the hazard feed",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# 게이지 메트릭
last_feed_event_count = Gauge(
    "last_feed_event_count",
    "Number of events in the most recent feed"
)

last_feed_max_magnitude = Gauge(
    "last_feed_max_magnitude",
    "Largest magnitude in the most recent feed"
)

uptime_seconds = Gauge(
    "uptime_seconds",
    "Service uptime in seconds"
)

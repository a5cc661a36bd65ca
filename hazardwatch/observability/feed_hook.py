"""
Feed observer hooks for HazardWatch.

Structured replacements for dumping the parsed feed to the console:
one observer logs a summary, one updates gauges.
"""

from typing import Iterable, List
from hazardwatch.core.feed import select_most_significant
from hazardwatch.core.models import HazardFeedResult
from hazardwatch.observability import metrics
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.feed")

class LoggingFeedObserver:
    """파싱된 피드 요약을 구조화 로그로 남깁니다."""

    def on_feed_parsed(self, url: str, events: HazardFeedResult) -> None:
        top = select_most_significant(events)
        log.bind(
            url=url,
            count=len(events),
            max_magnitude=top.magnitude if top else None,
            top_event=top.id if top else None,
        ).debug(f"피드 파싱 완료 count:{len(events)}")

class MetricsFeedObserver:
    """파싱된 피드로 게이지를 갱신합니다."""

    def on_feed_parsed(self, url: str, events: HazardFeedResult) -> None:
        metrics.last_feed_event_count.set(len(events))
        top = select_most_significant(events)
        if top is not None:
            metrics.last_feed_max_magnitude.set(top.magnitude)

class CompositeFeedObserver:
    """여러 관찰자에게 순서대로 전달합니다."""

    def __init__(self, observers: Iterable):
        self.observers: List = list(observers)

    def on_feed_parsed(self, url: str, events: HazardFeedResult) -> None:
        for observer in self.observers:
            observer.on_feed_parsed(url, events)

def default_feed_observer() -> CompositeFeedObserver:
    return CompositeFeedObserver([LoggingFeedObserver(), MetricsFeedObserver()])

"""
Hazard feed pipeline for HazardWatch.

This module fetches the hazard feed once, parses it into events,
raises the alert banner for the most significant event and drops
one marker per event on the map.
"""

import time
from typing import Optional, Tuple
from hazardwatch.core.errors import FetchError, ParseError
from hazardwatch.core.feed import decode_body, parse_document, select_most_significant
from hazardwatch.core.models import HazardEvent, HazardFeedResult, MarkerOptions, PipelineOutcome
from hazardwatch.core.templates import banner_text, hazard_popup_html
from hazardwatch.ports.feed import FeedObserver, HazardFeedPort
from hazardwatch.ports.map_surface import MapSurfacePort
from hazardwatch.ports.ui import AlertBannerPort
from hazardwatch.observability import metrics
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.pipeline")

async def load_hazards(feed: HazardFeedPort, feed_url: str) -> Tuple[HazardFeedResult, int]:
    """
    피드를 한 번 요청하고 파싱합니다.

    Returns:
        (이벤트 목록, 건너뛴 feature 수)

    Raises:
        FetchError: 요청 실패
        ParseError: 본문 파싱 실패
    """
    started = time.perf_counter()
    try:
        body = await feed.fetch(feed_url)
    finally:
        metrics.feed_fetch_seconds.observe(time.perf_counter() - started)

    return parse_document(decode_body(body))

def render_hazards(events: HazardFeedResult,
                   *,
                   map_surface: MapSurfacePort,
                   banner: AlertBannerPort,
                   tz: Optional[str] = None) -> Optional[HazardEvent]:
    """
    이벤트 목록을 지도와 배너에 그립니다.

    비어 있지 않으면 배너를 정확히 한 번 갱신하고, 모든 이벤트에 마커를 하나씩 추가합니다.

    Returns:
        배너에 표시된 이벤트 (빈 목록이면 None)
    """
    top = select_most_significant(events)
    if top is not None:
        banner.set_text(banner_text(top))
        banner.set_visible(True)
        metrics.banner_updates.inc()

    for event in events:
        handle = map_surface.add_marker(event.position, MarkerOptions(kind="hazard", label=event.place))
        map_surface.bind_popup(handle, hazard_popup_html(event, tz))
    metrics.markers_drawn.labels(kind="hazard").inc(len(events))

    return top

async def fetch_and_render_hazards(feed_url: str,
                                   *,
                                   feed: HazardFeedPort,
                                   map_surface: MapSurfacePort,
                                   banner: AlertBannerPort,
                                   observer: Optional[FeedObserver] = None,
                                   tz: Optional[str] = None) -> PipelineOutcome:
    """
    피드 조회 → 파싱 → 배너 → 마커 파이프라인을 1회 실행합니다.

    요청/파싱 오류는 여기서 잡아 기록하고 결과로 반환합니다.
    오류 시 지도와 배너는 호출 전 상태 그대로 유지됩니다. 재시도하지 않습니다.
    그리는 도중 지도 표면이 실패하면 render_error 결과를 반환하며,
    그 전에 그려진 배너와 마커는 되돌리지 않습니다.
    """
    try:
        events, skipped = await load_hazards(feed, feed_url)
    except (FetchError, ParseError) as e:
        metrics.feed_fetches.labels(outcome=e.kind).inc()
        log.error(f"피드 처리 실패 url:{feed_url} kind:{e.kind} error:{e}")
        return PipelineOutcome(ok=False, url=feed_url, error=e.kind, message=str(e))

    metrics.feed_fetches.labels(outcome="ok").inc()
    metrics.hazard_events_parsed.inc(len(events))
    if skipped:
        metrics.hazard_features_skipped.inc(skipped)
        log.warning(f"일부 feature 건너뜀 skipped:{skipped}")

    if observer is not None:
        try:
            observer.on_feed_parsed(feed_url, events)
        except Exception as e:
            log.warning(f"피드 관찰 훅 오류 무시 error:{e}")

    try:
        top = render_hazards(events, map_surface=map_surface, banner=banner, tz=tz)
    except Exception as e:
        metrics.hazard_render_errors.inc()
        log.error(f"피드 렌더링 실패 url:{feed_url} events:{len(events)} error:{e}")
        return PipelineOutcome(ok=False, url=feed_url, error="render_error", message=str(e),
                               event_count=len(events), skipped_count=skipped)

    if top is None:
        log.info("피드에 이벤트 없음, 배너 생략")
    else:
        log.info(f"피드 렌더링 완료 events:{len(events)} top:{top.id} mag:{top.magnitude}")

    return PipelineOutcome(
        ok=True,
        url=feed_url,
        event_count=len(events),
        skipped_count=skipped,
        markers_drawn=len(events),
        alerted_event_id=top.id if top else None,
    )

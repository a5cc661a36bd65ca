"""
Feed parsing functions for HazardWatch.

This module contains pure functions for converting a raw GeoJSON
hazard feed (USGS summary format) into internal domain models,
and for picking the most significant event of a feed.
"""

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from pydantic import ValidationError
from .errors import ParseError
from .models import HazardEvent, HazardFeedResult, Position
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.feed")

def decode_body(body: Union[str, bytes]) -> Dict[str, Any]:
    """
    응답 본문을 JSON 문서로 디코딩합니다.

    Raises:
        ParseError: JSON이 아니거나 features 배열이 없는 경우
    """
    try:
        doc = json.loads(body)
    except (ValueError, TypeError) as e:
        raise ParseError(f"피드 본문이 올바른 JSON이 아닙니다: {e}") from e

    if not isinstance(doc, dict):
        raise ParseError(f"피드 최상위가 객체가 아닙니다: {type(doc).__name__}")

    features = doc.get("features")
    if not isinstance(features, list):
        raise ParseError("피드에 features 배열이 없습니다")

    return doc

def to_hazard_event(feature: Dict[str, Any]) -> Optional[HazardEvent]:
    """
    feature 하나를 HazardEvent로 변환합니다.

    좌표는 피드의 [경도, 위도] 순서를 (위도, 경도)로 바꿉니다.
    좌표나 규모가 없어 지도에 올릴 수 없는 feature는 None을 반환합니다.
    """
    if not isinstance(feature, dict):
        log.warning(f"feature가 객체가 아님 건너뜀: {feature!r}")
        return None

    props = feature.get("properties") or {}
    geom = feature.get("geometry") or {}
    coords = geom.get("coordinates") or []

    if len(coords) < 2:
        log.warning(f"좌표 없음 건너뜀 id:{feature.get('id')}")
        return None

    mag = props.get("mag")
    if mag is None:
        log.warning(f"규모 없음 건너뜀 id:{feature.get('id')}")
        return None

    time_ms = props.get("time")
    try:
        return HazardEvent(
            id=str(feature.get("id") or ""),
            position=Position(latitude=float(coords[1]), longitude=float(coords[0])),
            magnitude=float(mag),
            place=str(props.get("place") or ""),
            occurred_at=int(time_ms) if time_ms is not None else None,
            info_url=str(props.get("url") or ""),
        )
    except (ValueError, TypeError, ValidationError) as e:
        log.warning(f"feature 변환 실패 건너뜀 id:{feature.get('id')} error:{e}")
        return None

def parse_document(doc: Dict[str, Any]) -> Tuple[HazardFeedResult, int]:
    """
    디코딩된 피드 문서를 (이벤트 목록, 건너뛴 feature 수)로 변환합니다.

    개별 feature 오류는 해당 feature만 건너뜁니다. 순서는 피드 순서를 유지합니다.
    """
    events: List[HazardEvent] = []
    skipped = 0
    for feature in doc["features"]:
        event = to_hazard_event(feature)
        if event is None:
            skipped += 1
            continue
        events.append(event)
    return events, skipped

def parse_feed(body: Union[str, bytes]) -> HazardFeedResult:
    """
    피드 본문 전체를 HazardEvent 목록으로 변환합니다.

    본문 자체가 잘못된 경우 ParseError를 던지며 아무것도 반환하지 않습니다.
    """
    events, _ = parse_document(decode_body(body))
    return events

def select_most_significant(events: Sequence[HazardEvent]) -> Optional[HazardEvent]:
    """
    규모가 가장 큰 이벤트를 선택합니다.

    왼쪽부터 엄격한 비교(>)로 훑기 때문에 동률이면 먼저 나온 이벤트가 선택됩니다.
    빈 시퀀스는 None을 반환합니다.
    """
    best: Optional[HazardEvent] = None
    for event in events:
        if best is None or event.magnitude > best.magnitude:
            best = event
    return best

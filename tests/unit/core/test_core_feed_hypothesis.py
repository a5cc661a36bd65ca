"""
hypothesis를 활용한 피드 파싱 테스트

이 모듈은 hypothesis 패키지를 사용하여 피드 파싱과
가장 중요한 이벤트 선택 규칙을 속성 기반으로 검증합니다.
"""

import json
import pytest
from hypothesis import given, strategies as st, settings, example
from typing import List

from hazardwatch.core.errors import ParseError
from hazardwatch.core.feed import decode_body, parse_document, parse_feed, select_most_significant, to_hazard_event
from hazardwatch.core.models import HazardEvent, Position
from conftest import make_feature, make_feed_body


def _event(idx: int, mag: float) -> HazardEvent:
    return HazardEvent(
        id=f"ev{idx}",
        position=Position(latitude=0.0, longitude=0.0),
        magnitude=mag,
        place=f"place {idx}",
        occurred_at=1700000000000,
        info_url="",
    )


class TestSelectMostSignificant:
    """가장 중요한 이벤트 선택 테스트"""

    def test_empty_sequence_returns_none(self):
        """빈 목록이면 None"""
        assert select_most_significant([]) is None

    def test_tie_goes_to_first_occurrence(self):
        """동률이면 먼저 나온 이벤트 선택"""
        events = [_event(0, 4.1), _event(1, 6.7), _event(2, 6.7)]
        assert select_most_significant(events).id == "ev1"

    def test_single_event(self):
        """이벤트가 하나면 그 이벤트"""
        events = [_event(0, 2.5)]
        assert select_most_significant(events).id == "ev0"

    @given(mags=st.lists(st.floats(min_value=-1.0, max_value=10.0, allow_nan=False), min_size=1, max_size=50))
    @example(mags=[5.0, 5.0, 5.0])
    @example(mags=[1.0, 3.0, 2.0, 3.0])
    @settings(max_examples=200)
    def test_returns_first_maximum(self, mags: List[float]):
        """최대 규모 중 첫 번째 이벤트를 반환"""
        events = [_event(i, m) for i, m in enumerate(mags)]
        chosen = select_most_significant(events)

        top = max(mags)
        assert chosen.magnitude == top
        assert chosen.id == f"ev{mags.index(top)}"
        assert all(e.magnitude <= chosen.magnitude for e in events)


class TestToHazardEvent:
    """feature 변환 테스트"""

    def test_axis_swap(self):
        """피드의 [경도, 위도] 순서를 (위도, 경도)로 변환"""
        event = to_hazard_event(make_feature("us1", 4.5, 80.27, 13.08))

        assert event.position == Position(latitude=13.08, longitude=80.27)

    def test_fields_mapped(self):
        """속성 필드 매핑"""
        event = to_hazard_event(make_feature(
            "us7", 5.678, 10.0, 20.0, place="10 km N of Town", time_ms=1700000123456, url="https://e.org/us7"
        ))

        assert event.id == "us7"
        assert event.magnitude == 5.678
        assert event.place == "10 km N of Town"
        assert event.occurred_at == 1700000123456
        assert event.info_url == "https://e.org/us7"

    def test_missing_time_kept_without_timestamp(self):
        """발생 시각이 없는 feature는 시각 없이 변환"""
        feature = make_feature("us1", 3.0, 1.0, 2.0)
        del feature["properties"]["time"]

        event = to_hazard_event(feature)

        assert event is not None
        assert event.occurred_at is None

    def test_missing_magnitude_skipped(self):
        """규모가 없는 feature는 None"""
        assert to_hazard_event(make_feature("us1", None, 1.0, 2.0)) is None

    def test_missing_coordinates_skipped(self):
        """좌표가 없는 feature는 None"""
        feature = make_feature("us1", 3.0, 1.0, 2.0)
        feature["geometry"]["coordinates"] = []
        assert to_hazard_event(feature) is None

    def test_out_of_range_latitude_skipped(self):
        """위도 범위를 벗어난 feature는 None"""
        assert to_hazard_event(make_feature("us1", 3.0, 10.0, 95.0)) is None

    def test_non_dict_feature_skipped(self):
        """객체가 아닌 feature는 None"""
        assert to_hazard_event("not a feature") is None

    @given(
        lon=st.floats(min_value=-180, max_value=180, allow_nan=False),
        lat=st.floats(min_value=-90, max_value=90, allow_nan=False),
        mag=st.floats(min_value=-2, max_value=10, allow_nan=False),
    )
    def test_valid_feature_always_converts(self, lon: float, lat: float, mag: float):
        """유효 범위 좌표는 항상 변환됨"""
        event = to_hazard_event(make_feature("x", mag, lon, lat))

        assert event is not None
        assert event.position.latitude == lat
        assert event.position.longitude == lon


class TestParseFeed:
    """피드 본문 파싱 테스트"""

    def test_parse_preserves_order(self, sample_feed_body):
        """피드 순서 유지"""
        events = parse_feed(sample_feed_body)

        assert [e.id for e in events] == ["us1", "us2", "us3"]

    def test_parse_bytes_body(self, sample_feed_body):
        """bytes 본문도 파싱"""
        events = parse_feed(sample_feed_body.encode("utf-8"))
        assert len(events) == 3

    def test_empty_features(self):
        """features가 비어 있으면 빈 목록"""
        assert parse_feed(make_feed_body([])) == []

    def test_malformed_json_raises(self):
        """JSON이 아니면 ParseError"""
        with pytest.raises(ParseError):
            parse_feed("{not json")

    def test_missing_features_raises(self):
        """features 배열이 없으면 ParseError"""
        with pytest.raises(ParseError, match="features"):
            parse_feed(json.dumps({"type": "FeatureCollection"}))

    def test_non_object_document_raises(self):
        """최상위가 객체가 아니면 ParseError"""
        with pytest.raises(ParseError):
            decode_body("[1, 2, 3]")

    def test_skipped_features_counted(self):
        """잘못된 feature는 건너뛰고 개수를 센다"""
        doc = decode_body(make_feed_body([
            make_feature("ok1", 3.0, 1.0, 2.0),
            make_feature("bad", None, 1.0, 2.0),
            make_feature("ok2", 4.0, 3.0, 4.0),
        ]))

        events, skipped = parse_document(doc)

        assert [e.id for e in events] == ["ok1", "ok2"]
        assert skipped == 1

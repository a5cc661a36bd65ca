"""
관찰 가능성 모듈 테스트

HTTP 엔드포인트, 피드 관찰 훅, 로깅 설정을 검증합니다.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock, patch

from hazardwatch.adapters.folium_map.surface import FoliumMapSurface
from hazardwatch.adapters.ui.notices import NoticeBoard
from hazardwatch.core.feed import parse_feed
from hazardwatch.observability import metrics
from hazardwatch.observability.feed_hook import (
    CompositeFeedObserver, LoggingFeedObserver, MetricsFeedObserver, default_feed_observer
)
from hazardwatch.observability.health import create_app
from hazardwatch.observability.logging_setup import get_logger, setup_logger, with_context
from hazardwatch.observability.server import build_server
from hazardwatch.orchestrators.orchestrator import Orchestrator
from conftest import FakeFeed, FakeGeolocation


@pytest.fixture
def orchestrator(sample_settings, sample_feed_body, banner, sample_safe_zones, device_location):
    return Orchestrator(
        sample_settings,
        feed=FakeFeed(body=sample_feed_body),
        map_surface=FoliumMapSurface(sample_settings.map),
        banner=banner,
        geolocation=FakeGeolocation(location=device_location),
        notices=NoticeBoard(),
        safe_zones=sample_safe_zones,
    )


@pytest.fixture
def client(sample_settings, orchestrator):
    return TestClient(create_app(sample_settings, orchestrator))


class TestHealthEndpoints:
    """HTTP 엔드포인트 테스트"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["service"] == "test-service"

    def test_ready_before_first_cycle(self, client):
        """첫 사이클 전에는 503"""
        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "starting"

    def test_ready_after_refresh(self, client):
        """피드 갱신 후에는 200"""
        assert client.post("/hazards/refresh").status_code == 200

        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["cycles"] == 1

    def test_refresh_failure_is_502(self, sample_settings, orchestrator):
        orchestrator.feed = FakeFeed(body="not json")
        client = TestClient(create_app(sample_settings, orchestrator))

        response = client.post("/hazards/refresh")

        assert response.status_code == 502
        assert response.json()["error"] == "parse_error"

    def test_metrics(self, client):
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "feed_fetches_total" in response.text

    def test_metrics_disabled(self, sample_settings, orchestrator):
        sample_settings.observability.metrics_enabled = False
        client = TestClient(create_app(sample_settings, orchestrator))

        assert client.get("/metrics").status_code == 503

    def test_info(self, client):
        client.post("/hazards/refresh")

        data = client.get("/info").json()

        assert data["version"] == "1.0.0"
        assert data["feed_url"].endswith("2.5_day.geojson")
        assert data["last_feed"]["alerted_event_id"] == "us2"

    def test_map_page(self, client):
        """지도 페이지 HTML"""
        client.post("/hazards/refresh")

        response = client.get("/map")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "leaflet" in response.text.lower()

    def test_sos_returns_outcome_and_notices(self, client):
        """SOS 결과와 알림 반환"""
        response = client.post("/sos")

        assert response.status_code == 200
        body = response.json()
        assert body["outcome"]["ok"] is True
        assert body["outcome"]["safe_zone_markers"] == 2
        assert len(body["notices"]) == 1
        assert body["notices"] == body["outcome"]["notices"]

    def test_sos_disabled(self, sample_settings, orchestrator):
        sample_settings.sos.enabled = False
        client = TestClient(create_app(sample_settings, orchestrator))

        assert client.post("/sos").status_code == 400

    def test_root(self, client):
        endpoints = client.get("/").json()["endpoints"]
        assert endpoints["sos"] == "/sos"
        assert endpoints["map"] == "/map"


class TestFeedObservers:
    """피드 관찰 훅 테스트"""

    def test_metrics_observer_sets_gauges(self, sample_feed_body):
        events = parse_feed(sample_feed_body)

        MetricsFeedObserver().on_feed_parsed("u", events)

        assert metrics.last_feed_event_count._value.get() == 3
        assert metrics.last_feed_max_magnitude._value.get() == 6.7

    def test_logging_observer_handles_empty(self):
        LoggingFeedObserver().on_feed_parsed("u", [])

    def test_composite_calls_in_order(self):
        calls = []
        first, second = Mock(), Mock()
        first.on_feed_parsed.side_effect = lambda u, e: calls.append("first")
        second.on_feed_parsed.side_effect = lambda u, e: calls.append("second")

        CompositeFeedObserver([first, second]).on_feed_parsed("u", [])

        assert calls == ["first", "second"]

    def test_default_observer(self):
        assert len(default_feed_observer().observers) == 2


class TestLogging:
    """로깅 설정 테스트"""

    def test_setup_logger_dev_and_json(self):
        with patch("hazardwatch.observability.logging_setup.setup_logging_dev") as dev, \
             patch("hazardwatch.observability.logging_setup.setup_logging_json") as js:
            setup_logger("DEBUG", json_format=False)
            setup_logger("INFO", json_format=True)

        dev.assert_called_once_with("DEBUG")
        js.assert_called_once_with("INFO")

    def test_get_logger_binds_name(self):
        log = get_logger("hazardwatch.test", request_id="r1")
        with with_context(cycle=1):
            log.info("바인딩 확인")


def test_build_server(sample_settings, orchestrator):
    server = build_server(sample_settings, orchestrator, port=9999)

    assert server.config.port == 9999
    assert server.config.host == "0.0.0.0"

"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import json
import asyncio
import pytest
from typing import List, Optional, Tuple
from hazardwatch.core.errors import FetchError, GeolocationFailed
from hazardwatch.core.models import DeviceLocation, MarkerHandle, MarkerOptions, Position, SafeZone, TileLayerConfig
from hazardwatch.settings import Settings


class FakeFeed:
    """테스트용 피드 포트"""

    def __init__(self, body=None, error: Optional[Exception] = None):
        self.body = body
        self.error = error
        self.calls: List[str] = []

    async def fetch(self, url: str):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.body


class RecordingMapSurface:
    """호출을 기록하는 테스트용 지도 표면"""

    def __init__(self):
        self.view: Optional[Tuple[Position, int]] = None
        self.markers: List[Tuple[MarkerHandle, MarkerOptions]] = []
        self.popups: List[Tuple[int, str, bool]] = []
        self.tile_layers: List[TileLayerConfig] = []

    def set_view(self, position: Position, zoom: int) -> None:
        self.view = (position, zoom)

    def add_marker(self, position: Position, options: MarkerOptions) -> MarkerHandle:
        handle = MarkerHandle(marker_id=len(self.markers) + 1, position=position, kind=options.kind)
        self.markers.append((handle, options))
        return handle

    def bind_popup(self, handle: MarkerHandle, html: str, open: bool = False) -> None:
        self.popups.append((handle.marker_id, html, open))

    def add_tile_layer(self, config: TileLayerConfig) -> None:
        self.tile_layers.append(config)

    def kinds(self) -> List[str]:
        return [h.kind for h, _ in self.markers]


class RecordingBanner:
    """호출을 기록하는 테스트용 배너"""

    def __init__(self, text: str = "", visible: bool = False):
        self.text = text
        self.visible = visible
        self.calls: List[Tuple[str, object]] = []

    def set_text(self, text: str) -> None:
        self.calls.append(("set_text", text))
        self.text = text

    def set_visible(self, visible: bool) -> None:
        self.calls.append(("set_visible", visible))
        self.visible = visible


class FakeGeolocation:
    """테스트용 위치 포트"""

    def __init__(self, location: Optional[DeviceLocation] = None, available: bool = True,
                 error: Optional[Exception] = None):
        self.location = location
        self.available = available
        self.error = error
        self.requests = 0

    def is_available(self) -> bool:
        return self.available

    async def get_current_position(self) -> DeviceLocation:
        self.requests += 1
        if self.error is not None:
            raise self.error
        return self.location


def make_feature(fid: str, mag, lon: float, lat: float, place: str = "somewhere",
                 time_ms: int = 1700000000000, url: str = "https://example.org/q"):
    """USGS 형식 feature 생성"""
    return {
        "type": "Feature",
        "id": fid,
        "geometry": {"type": "Point", "coordinates": [lon, lat, 10.0]},
        "properties": {"mag": mag, "place": place, "time": time_ms, "url": url},
    }


def make_feed_body(features) -> str:
    return json.dumps({"type": "FeatureCollection", "features": features})


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.observability.http_port = 8080
    settings.map.display_timezone = "UTC"
    settings.map.output_path = "map.html"
    return settings


@pytest.fixture
def sample_features():
    """테스트용 feature 3개 (규모 4.1, 6.7, 6.7)"""
    return [
        make_feature("us1", 4.1, 80.27, 13.08, place="near Chennai"),
        make_feature("us2", 6.7, 142.37, 38.32, place="off the coast of Honshu"),
        make_feature("us3", 6.7, -70.1, -20.5, place="Tarapaca, Chile"),
    ]


@pytest.fixture
def sample_feed_body(sample_features):
    return make_feed_body(sample_features)


@pytest.fixture
def map_surface():
    return RecordingMapSurface()


@pytest.fixture
def banner():
    return RecordingBanner()


@pytest.fixture
def device_location():
    return DeviceLocation(latitude=13.06, longitude=80.26, source="test")


@pytest.fixture
def sample_safe_zones():
    """테스트용 안전 지대"""
    return [
        SafeZone(name="Community Hall A", position=Position(latitude=13.0827, longitude=80.2707)),
        SafeZone(name="School Building B", position=Position(latitude=13.0500, longitude=80.2500)),
    ]


@pytest.fixture
def failing_feed():
    return FakeFeed(error=FetchError("connection refused", url="https://example.org/feed"))


@pytest.fixture
def denied_geolocation():
    return FakeGeolocation(error=GeolocationFailed("permission denied"))


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "asyncio: 비동기 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 비동기 테스트에 asyncio 마커 추가
        if asyncio.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)

        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)

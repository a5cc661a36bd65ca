"""
Port 모듈 단위 테스트

실제 어댑터들이 포트 인터페이스의 메서드를 모두 갖추었는지 확인합니다.
"""

import inspect
import pytest

from hazardwatch.adapters.folium_map.surface import FoliumAlertBanner, FoliumMapSurface
from hazardwatch.adapters.geolocation.providers import StaticGeolocation, UnavailableGeolocation
from hazardwatch.adapters.ui.notices import NoticeBoard
from hazardwatch.adapters.usgs.client import UsgsFeedClient
from hazardwatch.observability.feed_hook import CompositeFeedObserver
from hazardwatch.ports import AlertBannerPort, FeedObserver, GeolocationPort, HazardFeedPort, MapSurfacePort, NoticePort


def _port_methods(port):
    return [name for name, _ in inspect.getmembers(port, inspect.isfunction) if not name.startswith("_")]


@pytest.mark.parametrize("port, adapter", [
    (MapSurfacePort, FoliumMapSurface),
    (AlertBannerPort, FoliumAlertBanner),
    (GeolocationPort, StaticGeolocation),
    (GeolocationPort, UnavailableGeolocation),
    (HazardFeedPort, UsgsFeedClient),
    (NoticePort, NoticeBoard),
    (FeedObserver, CompositeFeedObserver),
])
def test_adapter_implements_port(port, adapter):
    """어댑터는 포트의 모든 메서드를 구현"""
    for name in _port_methods(port):
        assert callable(getattr(adapter, name, None)), f"{adapter.__name__}.{name} 없음"
        assert inspect.iscoroutinefunction(getattr(adapter, name)) == inspect.iscoroutinefunction(getattr(port, name))

"""
Geolocation-gated actions for HazardWatch.

This module runs a continuation with a single device location
sample, or a fallback when location is unavailable or fails.
Used by initial map centering and by the SOS trigger.
"""

import inspect
from typing import Any, Awaitable, Callable, Optional, Union
from hazardwatch.core.errors import GeolocationFailed, GeolocationUnavailable, HazardWatchError
from hazardwatch.core.models import DeviceLocation, LocationOutcome, MarkerOptions
from hazardwatch.core.templates import YOUR_LOCATION_POPUP
from hazardwatch.ports.geolocation import GeolocationPort
from hazardwatch.ports.map_surface import MapSurfacePort
from hazardwatch.observability import metrics
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.geolocation")

OnSuccess = Callable[[DeviceLocation], Union[None, Awaitable[None]]]
OnFailure = Callable[[HazardWatchError], Union[None, Awaitable[None]]]

async def _call(callback: Callable[[Any], Any], arg: Any) -> None:
    result = callback(arg)
    if inspect.isawaitable(result):
        await result

async def with_device_location(geolocation: GeolocationPort,
                               on_success: OnSuccess,
                               on_failure: Optional[OnFailure] = None) -> LocationOutcome:
    """
    위치를 한 번 요청하고 결과에 따라 콜백을 실행합니다.

    위치 기능이 없으면 요청하지 않고 바로 실패 경로로 갑니다.
    on_failure가 없으면 실패는 조용히 무시됩니다 (디버그 로그만 남김).

    Args:
        geolocation: 위치 포트
        on_success: 성공 시 위치를 받는 콜백 (동기/비동기)
        on_failure: 실패 시 오류를 받는 콜백 (동기/비동기)

    Returns:
        실행 결과
    """
    error: HazardWatchError
    if not geolocation.is_available():
        error = GeolocationUnavailable("위치 기능을 사용할 수 없습니다")
    else:
        try:
            location = await geolocation.get_current_position()
        except GeolocationFailed as e:
            error = e
        else:
            metrics.geolocation_requests.labels(outcome="ok").inc()
            log.info(f"디바이스 위치 획득 lat:{location.latitude} lon:{location.longitude} source:{location.source}")
            await _call(on_success, location)
            return LocationOutcome(ok=True, location=location)

    metrics.geolocation_requests.labels(outcome=error.kind).inc()
    if on_failure is None:
        log.debug(f"위치 요청 실패 무시 kind:{error.kind} error:{error}")
    else:
        log.warning(f"위치 요청 실패 kind:{error.kind} error:{error}")
        await _call(on_failure, error)
    return LocationOutcome(ok=False, error=error.kind, message=str(error))

async def center_on_device(geolocation: GeolocationPort,
                           map_surface: MapSurfacePort,
                           *,
                           zoom: int = 6) -> LocationOutcome:
    """
    디바이스 위치로 지도를 옮기고 "Your Location" 마커를 놓습니다.
    실패하면 아무것도 하지 않습니다.
    """
    def _recenter(location: DeviceLocation) -> None:
        position = location.position
        map_surface.set_view(position, zoom)
        handle = map_surface.add_marker(position, MarkerOptions(kind="device", label="Your Location"))
        map_surface.bind_popup(handle, YOUR_LOCATION_POPUP, open=True)
        metrics.markers_drawn.labels(kind="device").inc()

    return await with_device_location(geolocation, _recenter)

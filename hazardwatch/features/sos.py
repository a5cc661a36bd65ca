"""
Simulated SOS action for HazardWatch.

This module implements the SOS trigger: it acquires the device
location once, logs a simulated dispatch, confirms to the user and
overlays the static safe zone list. Nothing is actually sent.
"""

from typing import List
from hazardwatch.adapters.ui.controls import TriggerEvent
from hazardwatch.core.errors import GeolocationUnavailable, HazardWatchError
from hazardwatch.core.models import DeviceLocation, MarkerOptions, SafeZone, SosOutcome
from hazardwatch.core.templates import safe_zone_label_html, safe_zone_popup_html
from hazardwatch.features.geolocation_gate import with_device_location
from hazardwatch.features.safe_zones import find_nearest
from hazardwatch.ports.geolocation import GeolocationPort
from hazardwatch.ports.map_surface import MapSurfacePort
from hazardwatch.ports.ui import NoticeLevel, NoticePort
from hazardwatch.settings import SosConfig
from hazardwatch.observability import metrics
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.sos")

class SosAction:
    """SOS 트리거 액션 (시뮬레이션)"""

    def __init__(self,
                 geolocation: GeolocationPort,
                 map_surface: MapSurfacePort,
                 notices: NoticePort,
                 safe_zones: List[SafeZone],
                 config: SosConfig | None = None):
        """
        초기화합니다.

        Args:
            geolocation: 위치 포트
            map_surface: 지도 표면
            notices: 사용자 알림 포트
            safe_zones: 고정 안전 지대 목록
            config: SOS 문구/옵션
        """
        self.geolocation = geolocation
        self.map_surface = map_surface
        self.notices = notices
        self.safe_zones = list(safe_zones)
        self.config = config or SosConfig()

    async def handle_click(self, event: TriggerEvent) -> SosOutcome:
        """
        버튼 클릭을 처리합니다.

        기본 동작을 막고 클릭 한 번에 정확히 한 번만 실행합니다.
        이미 기본 동작이 막힌 이벤트는 다른 핸들러가 처리한 것으로 보고 무시합니다.
        """
        if event.default_prevented:
            log.debug(f"이미 처리된 클릭 무시 source:{event.source}")
            return SosOutcome(fired=False)
        event.prevent_default()
        return await self.trigger()

    async def trigger(self) -> SosOutcome:
        """위치를 요청하고 성공/실패 경로를 실행합니다."""
        outcome = SosOutcome(fired=True)

        async def _on_success(location: DeviceLocation) -> None:
            self._dispatch(location)
            await self._notify(outcome, self.config.sent_message, "info")
            outcome.safe_zone_markers = self._overlay_safe_zones()
            nearest = find_nearest(location.position, self.safe_zones)
            if nearest is not None:
                zone, dist = nearest
                outcome.nearest_safe_zone = zone.name
                outcome.nearest_distance_km = round(dist, 2)
                log.info(f"가장 가까운 안전 지대 zone:{zone.name} distance:{dist:.2f}km")

        async def _on_failure(error: HazardWatchError) -> None:
            if isinstance(error, GeolocationUnavailable):
                await self._notify(outcome, self.config.unavailable_message, "warning")
            else:
                log.error(f"SOS 위치 획득 실패 error:{error}")
                await self._notify(outcome, self.config.failed_message, "error")

        result = await with_device_location(self.geolocation, _on_success, _on_failure)

        outcome.ok = result.ok
        outcome.location = result.location
        outcome.error = result.error
        metrics.sos_requests.labels(outcome="ok" if result.ok else result.error).inc()
        return outcome

    async def _notify(self, outcome: SosOutcome, message: str, level: NoticeLevel) -> None:
        # 이 클릭에서 보여 준 알림만 결과에 담음
        outcome.notices.append({"message": message, "level": level})
        await self.notices.show(message, level)

    def _dispatch(self, location: DeviceLocation) -> None:
        # 실제 발송 없음
        log.bind(latitude=location.latitude, longitude=location.longitude, source=location.source).warning(
            f"SOS 요청 전송 (시뮬레이션) lat:{location.latitude} lon:{location.longitude}"
        )

    def _overlay_safe_zones(self) -> int:
        for zone in self.safe_zones:
            handle = self.map_surface.add_marker(
                zone.position,
                MarkerOptions(kind="safe_zone", label=zone.name, css_class="safe-zone-marker",
                              html=safe_zone_label_html(zone)),
            )
            self.map_surface.bind_popup(handle, safe_zone_popup_html(zone))
        metrics.markers_drawn.labels(kind="safe_zone").inc(len(self.safe_zones))
        return len(self.safe_zones)

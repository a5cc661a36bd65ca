"""
Main orchestrator for HazardWatch.

This module wires the map surface, banner, feed client, geolocation
provider and SOS trigger together, and runs the first cycle:
initial centering and the hazard feed pipeline started together.
"""

import asyncio
import time
from typing import List, Optional
from hazardwatch.adapters.folium_map.surface import FoliumAlertBanner, FoliumMapSurface
from hazardwatch.adapters.geolocation.providers import build_geolocation
from hazardwatch.adapters.homeassistant.client import HAClient
from hazardwatch.adapters.ui.controls import TriggerButton, TriggerEvent
from hazardwatch.adapters.ui.notices import HomeAssistantNotice, NoticeBoard
from hazardwatch.adapters.usgs.client import UsgsFeedClient
from hazardwatch.core.models import LocationOutcome, PipelineOutcome, Position, SafeZone, SosOutcome, TileLayerConfig
from hazardwatch.features.geolocation_gate import center_on_device
from hazardwatch.features.hazard_feed import fetch_and_render_hazards
from hazardwatch.features.safe_zones import build_safe_zones
from hazardwatch.features.sos import SosAction
from hazardwatch.ports.feed import FeedObserver, HazardFeedPort
from hazardwatch.ports.geolocation import GeolocationPort
from hazardwatch.ports.map_surface import MapSurfacePort
from hazardwatch.ports.ui import AlertBannerPort
from hazardwatch.settings import Settings
from hazardwatch.observability import metrics
from hazardwatch.observability.feed_hook import default_feed_observer
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.orchestrator")

class Orchestrator:
    """HazardWatch 오케스트레이터"""

    def __init__(self,
                 settings: Settings,
                 *,
                 feed: HazardFeedPort,
                 map_surface: MapSurfacePort,
                 banner: AlertBannerPort,
                 geolocation: GeolocationPort,
                 notices: NoticeBoard,
                 safe_zones: List[SafeZone],
                 observer: Optional[FeedObserver] = None,
                 sos_notices=None,
                 ha: Optional[HAClient] = None):
        """
        초기화합니다.

        Args:
            settings: 애플리케이션 설정
            feed: 재해 피드 포트
            map_surface: 지도 표면
            banner: 알림 배너
            geolocation: 위치 포트
            notices: HTTP 응답으로 돌려줄 사용자 알림 게시판
            safe_zones: 고정 안전 지대 목록
            observer: 피드 관찰 훅
            sos_notices: SOS 알림 포트 (기본값: notices)
            ha: 종료 시 닫을 Home Assistant 클라이언트
        """
        self.settings = settings
        self.feed = feed
        self.map_surface = map_surface
        self.banner = banner
        self.geolocation = geolocation
        self.notices = notices
        self.safe_zones = safe_zones
        self.observer = observer
        self.ha = ha

        self.sos_button = TriggerButton("sos-button")
        self.sos = SosAction(geolocation, map_surface, sos_notices or notices, safe_zones, settings.sos)
        if settings.sos.enabled:
            self.sos_button.on_click(self.sos.handle_click)

        self.start_time = time.time()
        self.cycles = 0
        self.last_outcome: Optional[PipelineOutcome] = None

        log.info("오케스트레이터 초기화됨")

    def setup_map(self) -> None:
        """타일 레이어와 기본 시점을 설정합니다."""
        m = self.settings.map
        self.map_surface.add_tile_layer(TileLayerConfig(
            url=m.tile_url,
            attribution=m.tile_attribution,
            subdomains=m.tile_subdomains,
            max_zoom=m.tile_max_zoom,
            name="CARTO dark",
        ))
        self.map_surface.set_view(
            Position(latitude=m.default_center[0], longitude=m.default_center[1]),
            m.default_zoom,
        )

    async def refresh_hazards(self) -> PipelineOutcome:
        """피드 파이프라인을 1회 실행합니다. 마커는 누적됩니다."""
        outcome = await fetch_and_render_hazards(
            self.settings.feed.url,
            feed=self.feed,
            map_surface=self.map_surface,
            banner=self.banner,
            observer=self.observer,
            tz=self.settings.map.display_timezone,
        )
        self.cycles += 1
        self.last_outcome = outcome
        return outcome

    async def center_map(self) -> LocationOutcome:
        return await center_on_device(self.geolocation, self.map_surface, zoom=self.settings.map.located_zoom)

    async def run_first_cycle(self) -> PipelineOutcome:
        """
        초기 중심 맞추기와 피드 파이프라인을 함께 시작합니다.

        두 작업의 완료 순서는 정해져 있지 않으며 둘 다 같은 지도를 갱신합니다.
        """
        location, outcome = await asyncio.gather(self.center_map(), self.refresh_hazards())
        log.info(f"첫 사이클 완료 located:{location.ok} feed_ok:{outcome.ok} events:{outcome.event_count}")
        return outcome

    async def press_sos(self) -> SosOutcome:
        """SOS 버튼 클릭을 발생시키고 결과를 반환합니다."""
        event: TriggerEvent = await self.sos_button.click()
        for result in event.results:
            if isinstance(result, SosOutcome):
                return result
        return SosOutcome(fired=False)

    def update_uptime(self) -> None:
        metrics.uptime_seconds.set(time.time() - self.start_time)

    async def close(self) -> None:
        close = getattr(self.feed, "close", None)
        if close is not None:
            await close()
        if self.ha is not None:
            await self.ha.close()

def build_orchestrator(settings: Settings) -> Orchestrator:
    """설정으로부터 실제 어댑터를 조립합니다."""
    ha = HAClient(settings.ha.base_url, settings.ha.token, settings.ha.timeout_sec)
    feed = UsgsFeedClient(timeout=settings.feed.timeout_sec)

    surface = FoliumMapSurface(settings.map)
    banner = surface.attach_banner(FoliumAlertBanner())

    notices = NoticeBoard()
    sos_notices = HomeAssistantNotice(ha, fallback=notices) if settings.sos.notify_home_assistant else notices

    orch = Orchestrator(
        settings,
        feed=feed,
        map_surface=surface,
        banner=banner,
        geolocation=build_geolocation(settings.geolocation, ha),
        notices=notices,
        safe_zones=build_safe_zones(settings.safe_zones),
        observer=default_feed_observer(),
        sos_notices=sos_notices,
        ha=ha,
    )
    orch.setup_map()
    return orch

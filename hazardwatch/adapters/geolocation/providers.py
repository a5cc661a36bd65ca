"""
Geolocation providers for HazardWatch.

This module provides the concrete device location sources: a fixed
configured position, a Home Assistant entity (device_tracker or
zone.home), and a provider that reports the capability as absent.
"""

from typing import Optional
from hazardwatch.adapters.homeassistant.client import HAClient
from hazardwatch.common.geo import validate_coordinates
from hazardwatch.core.errors import GeolocationFailed
from hazardwatch.core.models import DeviceLocation
from hazardwatch.settings import GeolocationConfig
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.geolocation")

class StaticGeolocation:
    """설정에 고정된 좌표를 반환하는 위치 제공자"""

    def __init__(self, latitude: Optional[float], longitude: Optional[float]):
        self.latitude = latitude
        self.longitude = longitude

    def is_available(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    async def get_current_position(self) -> DeviceLocation:
        if not self.is_available() or not validate_coordinates(self.latitude, self.longitude):
            raise GeolocationFailed(f"고정 좌표가 유효하지 않습니다 lat:{self.latitude} lon:{self.longitude}")
        return DeviceLocation(latitude=self.latitude, longitude=self.longitude, source="static")

class HomeAssistantGeolocation:
    """Home Assistant 엔티티 좌표를 사용하는 위치 제공자"""

    def __init__(self, ha: HAClient, entity_id: str = ""):
        """
        초기화합니다.

        Args:
            ha: Home Assistant 클라이언트
            entity_id: device_tracker 엔티티 ID (비어 있으면 zone.home)
        """
        self.ha = ha
        self.entity_id = entity_id or "zone.home"

    def is_available(self) -> bool:
        return self.ha.configured

    async def get_current_position(self) -> DeviceLocation:
        if self.entity_id == "zone.home":
            coords = await self.ha.get_zone_home()
        else:
            coords = await self.ha.get_entity_coordinates(self.entity_id)
        if coords is None:
            raise GeolocationFailed(f"{self.entity_id} 위치를 가져올 수 없습니다")
        lat, lon = coords
        if not validate_coordinates(lat, lon):
            raise GeolocationFailed(f"{self.entity_id} 좌표 범위 오류 lat:{lat} lon:{lon}")
        return DeviceLocation(latitude=lat, longitude=lon, source=self.entity_id)

class UnavailableGeolocation:
    """위치 기능이 없는 환경"""

    def is_available(self) -> bool:
        return False

    async def get_current_position(self) -> DeviceLocation:
        raise GeolocationFailed("위치 기능이 없습니다")

def build_geolocation(config: GeolocationConfig, ha: Optional[HAClient] = None):
    """설정에 맞는 위치 제공자를 생성합니다."""
    provider = config.provider.lower()
    if provider == "static":
        return StaticGeolocation(config.latitude, config.longitude)
    if provider == "home_assistant":
        if ha is None:
            log.warning("HA 클라이언트 없음, 위치 기능 비활성화")
            return UnavailableGeolocation()
        return HomeAssistantGeolocation(ha, config.entity_id)
    if provider != "none":
        log.warning(f"알 수 없는 위치 제공자 provider:{config.provider}, 위치 기능 비활성화")
    return UnavailableGeolocation()

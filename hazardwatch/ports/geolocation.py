"""
Geolocation port interface.

This module defines the protocol for single-shot device location
requests.
"""

from typing import Protocol
from hazardwatch.core.models import DeviceLocation

class GeolocationPort(Protocol):
    """디바이스 위치 포트 인터페이스"""

    def is_available(self) -> bool:
        """위치 기능 사용 가능 여부를 반환합니다."""
        ...

    async def get_current_position(self) -> DeviceLocation:
        """
        현재 위치를 한 번 요청합니다. 지속 추적은 하지 않습니다.

        Returns:
            디바이스 위치

        Raises:
            GeolocationFailed: 권한 거부, 타임아웃 등으로 요청이 실패한 경우
        """
        ...

"""
Home Assistant API client for HazardWatch.

This module provides a client for interacting with Home Assistant API
to read device and zone coordinates and to raise persistent
notifications.
"""

import asyncio
import aiohttp
from typing import Any, Dict, Optional, Tuple
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.ha")

class HAClient:
    """Home Assistant API 클라이언트"""

    def __init__(self,
                 base_url: str,
                 token: str,
                 timeout: int = 30):
        """
        초기화합니다.

        Args:
            base_url: Home Assistant API 기본 URL
            token: Home Assistant 장기 토큰
            timeout: 요청 타임아웃 (초)
        """
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

        log.info("Home Assistant 클라이언트 초기화됨")

    @property
    def configured(self) -> bool:
        """토큰이 설정되어 있는지 여부"""
        return bool(self.token)

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json"
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self.session

    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    async def _make_request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        API 요청을 1회 수행합니다.

        Args:
            method: HTTP 메서드
            endpoint: API 엔드포인트
            **kwargs: 추가 요청 매개변수

        Returns:
            응답 데이터
        """
        session = self._ensure_session()
        url = f"{self.base_url}{endpoint}"

        async with session.request(method, url, **kwargs) as response:
            response.raise_for_status()
            return await response.json()

    async def get_entity_coordinates(self, entity_id: str) -> Optional[Tuple[float, float]]:
        """
        엔티티(device_tracker, zone 등)의 좌표를 가져옵니다.

        Returns:
            (위도, 경도) 또는 None
        """
        try:
            data = await self._make_request("GET", f"/api/states/{entity_id}")

            attrs = (data or {}).get("attributes", {})
            if "latitude" in attrs and "longitude" in attrs:
                lat = float(attrs["latitude"])
                lon = float(attrs["longitude"])
                log.info(f"{entity_id} 좌표 가져옴 lat:{lat} lon:{lon}")
                return (lat, lon)

            log.warning(f"{entity_id} 좌표를 찾을 수 없습니다")
            return None

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError, TypeError, AttributeError) as e:
            log.error(f"{entity_id} 좌표 가져오기 실패 error:{str(e)}")
            return None

    async def get_zone_home(self) -> Optional[Tuple[float, float]]:
        """zone.home의 좌표를 가져옵니다."""
        return await self.get_entity_coordinates("zone.home")

    async def call_service(self, domain: str, service: str, **kwargs) -> bool:
        """
        Home Assistant 서비스를 호출합니다.

        Args:
            domain: 서비스 도메인 (예: "persistent_notification")
            service: 서비스 이름 (예: "create")
            **kwargs: 서비스 매개변수

        Returns:
            호출 성공 여부
        """
        try:
            await self._make_request(
                "POST",
                f"/api/services/{domain}/{service}",
                json=kwargs
            )

            log.info(f"서비스 호출 성공 domain:{domain} service:{service}")
            return True

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.error(f"서비스 호출 실패 domain:{domain} service:{service} error:{str(e)}")
            return False

    async def create_persistent_notification(self, title: str, message: str,
                                             notification_id: Optional[str] = None) -> bool:
        """HA 대시보드에 영구 알림을 생성합니다."""
        payload: Dict[str, Any] = {"title": title, "message": message}
        if notification_id:
            payload["notification_id"] = notification_id
        return await self.call_service("persistent_notification", "create", **payload)

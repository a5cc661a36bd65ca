"""
USGS feed client for HazardWatch.

This module provides an aiohttp client that fetches the GeoJSON
earthquake summary feed. One request per call, no retries.
"""

import asyncio
import aiohttp
from typing import Optional
from hazardwatch.core.errors import FetchError
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.usgs")

FEEDS = {
    "all_hour": "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_hour.geojson",
    "all_day": "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_day.geojson",
    "2.5_day": "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/2.5_day.geojson",
    "4.5_day": "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/4.5_day.geojson",
    "significant_week": "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/significant_week.geojson",
}

def resolve_feed_url(feed: str) -> str:
    """피드 별칭(예: "2.5_day")이면 URL로 바꾸고, 아니면 그대로 반환합니다."""
    return FEEDS.get(feed, feed)

class UsgsFeedClient:
    """USGS GeoJSON 피드 클라이언트"""

    def __init__(self, timeout: Optional[float] = None):
        """
        초기화합니다.

        Args:
            timeout: 요청 타임아웃 (초, None이면 제한 없음)
        """
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

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
                headers={"Accept": "application/geo+json, application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self.session

    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    async def fetch(self, url: str) -> str:
        """
        피드 본문을 가져옵니다.

        Args:
            url: 피드 URL 또는 별칭

        Returns:
            응답 본문 문자열

        Raises:
            FetchError: 네트워크 오류 또는 2xx 이외의 응답
        """
        session = self._ensure_session()
        url = resolve_feed_url(url)
        try:
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(f"피드 응답 오류 status:{response.status}", url=url, status=response.status)
                body = await response.text()
        except aiohttp.ClientError as e:
            raise FetchError(f"피드 요청 실패: {e}", url=url) from e
        except asyncio.TimeoutError as e:
            raise FetchError("피드 요청 타임아웃", url=url) from e

        log.info(f"피드 수신 url:{url} bytes:{len(body)}")
        return body

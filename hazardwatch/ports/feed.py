"""
Hazard feed port interfaces.

This module defines the protocol for fetching the raw hazard feed
and the observer hook notified after each successful parse.
"""

from typing import Protocol, Union
from hazardwatch.core.models import HazardFeedResult

class HazardFeedPort(Protocol):
    """재해 피드 수집 포트 인터페이스"""

    async def fetch(self, url: str) -> Union[str, bytes]:
        """
        피드 본문을 한 번 요청합니다. 재시도하지 않습니다.

        Raises:
            FetchError: 네트워크 오류 또는 2xx 이외의 응답
        """
        ...

class FeedObserver(Protocol):
    """피드 파싱 결과 관찰 훅"""

    def on_feed_parsed(self, url: str, events: HazardFeedResult) -> None:
        ...

"""
User notice adapters for HazardWatch.

NoticeBoard keeps the most recent notices in memory until a caller
drains them. The SOS endpoint returns the notices of its own click
from the outcome instead. HomeAssistantNotice forwards them to Home Assistant persistent notifications.
"""

from collections import deque
from datetime import datetime, timezone
from typing import Deque, Dict, List, Optional
from hazardwatch.adapters.homeassistant.client import HAClient
from hazardwatch.ports.ui import NoticeLevel
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.notice")

class NoticeBoard:
    """메모리 알림 게시판"""

    def __init__(self, max_items: int = 100):
        self._pending: Deque[Dict[str, str]] = deque(maxlen=max_items)

    async def show(self, message: str, level: NoticeLevel = "info") -> None:
        self._pending.append({
            "message": message,
            "level": level,
            "shown_at": datetime.now(timezone.utc).isoformat(),
        })
        log.info(f"사용자 알림 level:{level} message:{message}")

    @property
    def pending(self) -> List[Dict[str, str]]:
        return list(self._pending)

    def drain(self) -> List[Dict[str, str]]:
        """쌓인 알림을 꺼내고 비웁니다."""
        items = list(self._pending)
        self._pending.clear()
        return items

class HomeAssistantNotice:
    """Home Assistant 영구 알림으로 전달"""

    def __init__(self, ha: HAClient, title: str = "HazardWatch", fallback: Optional[NoticeBoard] = None):
        self.ha = ha
        self.title = title
        self.fallback = fallback

    async def show(self, message: str, level: NoticeLevel = "info") -> None:
        if self.fallback is not None:
            await self.fallback.show(message, level)
        ok = await self.ha.create_persistent_notification(f"{self.title} [{level}]", message)
        if not ok:
            log.warning(f"HA 알림 전달 실패 message:{message}")

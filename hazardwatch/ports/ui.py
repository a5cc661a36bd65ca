"""
UI surface port interfaces.

This module defines the protocols for the alert banner and for
user-visible notices.
"""

from typing import Literal, Protocol

NoticeLevel = Literal["info", "warning", "error"]

class AlertBannerPort(Protocol):
    """알림 배너 포트 인터페이스"""

    def set_text(self, text: str) -> None:
        """배너 문구를 덮어씁니다."""
        ...

    def set_visible(self, visible: bool) -> None:
        """배너 표시 여부를 설정합니다."""
        ...

class NoticePort(Protocol):
    """사용자 알림 포트 인터페이스"""

    async def show(self, message: str, level: NoticeLevel = "info") -> None:
        """
        사용자에게 보이는 알림을 표시합니다.

        Args:
            message: 알림 문구
            level: 알림 수준
        """
        ...

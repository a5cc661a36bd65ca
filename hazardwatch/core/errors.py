"""
Error taxonomy for HazardWatch.

Every error is terminal for the action that raised it only.
"""

from typing import Optional


class HazardWatchError(Exception):
    """HazardWatch 기본 예외"""

    kind = "error"


class FetchError(HazardWatchError):
    """피드 요청 실패 (네트워크 오류 또는 2xx 이외의 응답)"""

    kind = "fetch_error"

    def __init__(self, message: str, *, url: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ParseError(HazardWatchError):
    """피드 본문 파싱 실패"""

    kind = "parse_error"


class GeolocationUnavailable(HazardWatchError):
    """위치 기능 자체가 없음"""

    kind = "geolocation_unavailable"


class GeolocationFailed(HazardWatchError):
    """위치 기능은 있으나 요청이 실패함 (권한 거부, 타임아웃 등)"""

    kind = "geolocation_failed"

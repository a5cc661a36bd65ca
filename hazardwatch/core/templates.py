"""
Display templates for HazardWatch.

This module turns domain models into the text and HTML snippets
shown on the map: event popups, the alert banner line, and the
safe-zone labels used during the SOS flow.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from html import escape
from typing import Optional
from zoneinfo import ZoneInfo
from .models import HazardEvent, SafeZone

BANNER_PREFIX = "🚨 Significant Earthquake Alert"
YOUR_LOCATION_POPUP = "<strong>Your Location</strong>"
SAFE_ZONE_STYLE = (
    "padding: 5px; background-color: rgba(0, 255, 0, 0.7); "
    "color: black; border-radius: 3px;"
)

def format_local_time(occurred_at_ms: int, tz: Optional[str] = None) -> str:
    """
    epoch 밀리초를 사람이 읽을 수 있는 현지 시각 문자열로 변환합니다.

    Args:
        occurred_at_ms: epoch 밀리초
        tz: IANA 시간대 이름 (None이면 호스트 현지 시간대)
    """
    utc = datetime.fromtimestamp(occurred_at_ms / 1000, tz=timezone.utc)
    local = utc.astimezone(ZoneInfo(tz)) if tz else utc.astimezone()
    return local.strftime("%Y-%m-%d %H:%M:%S %Z").strip()

def format_magnitude(value: float, digits: int) -> str:
    """
    규모를 지정된 소수 자릿수로 표시합니다.

    정확히 중간값인 경우 0에서 먼 쪽으로 올립니다 (4.25 -> "4.3").
    """
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))

def banner_text(event: HazardEvent) -> str:
    """알림 배너 문구 (규모 소수 1자리)"""
    return f"{BANNER_PREFIX}: Magnitude {format_magnitude(event.magnitude, 1)} near {event.place}"

def hazard_popup_html(event: HazardEvent, tz: Optional[str] = None) -> str:
    """이벤트 마커 팝업 HTML (규모 소수 2자리)"""
    time_text = format_local_time(event.occurred_at, tz) if event.occurred_at is not None else ""
    return (
        "<h3>Earthquake Alert</h3>"
        f"<p><strong>Location:</strong> {escape(event.place)}</p>"
        f"<p><strong>Magnitude:</strong> {format_magnitude(event.magnitude, 2)}</p>"
        f"<p><strong>Time:</strong> {escape(time_text)}</p>"
        f'<a href="{escape(event.info_url, quote=True)}" target="_blank">More Info (USGS)</a>'
    )

def safe_zone_label_html(zone: SafeZone) -> str:
    """안전 지대 DivIcon 라벨 HTML"""
    return f'<div style="{SAFE_ZONE_STYLE}">{escape(zone.name)}</div>'

def safe_zone_popup_html(zone: SafeZone) -> str:
    """안전 지대 팝업 HTML"""
    return f"<strong>Safe Zone:</strong> {escape(zone.name)}"

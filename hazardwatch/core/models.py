"""
Core domain models for HazardWatch.

This module defines the core domain models using Pydantic v2
for type safety and validation.
"""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

# 마커 종류
MarkerKind = Literal["hazard", "device", "safe_zone"]

class Position(BaseModel):
    """지도상의 위치 모델 (위도, 경도 순서)"""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    def as_list(self) -> List[float]:
        """지도 위젯이 사용하는 [lat, lon] 형식으로 반환합니다."""
        return [self.latitude, self.longitude]

class HazardEvent(BaseModel):
    """피드 레코드 하나에서 생성된 재해 이벤트 모델"""
    model_config = ConfigDict(frozen=True)

    id: str
    position: Position
    magnitude: float
    place: str = ""
    occurred_at: Optional[int] = None  # epoch milliseconds, 피드에 없으면 None
    info_url: str = ""

class SafeZone(BaseModel):
    """정적 안전 지대 모델"""
    model_config = ConfigDict(frozen=True)

    name: str
    position: Position
    address: str = ""

class DeviceLocation(BaseModel):
    """단일 요청으로 얻은 디바이스 위치"""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy_m: Optional[float] = None
    source: str = "unknown"

    @property
    def position(self) -> Position:
        return Position(latitude=self.latitude, longitude=self.longitude)

class MarkerOptions(BaseModel):
    """마커 생성 옵션"""
    kind: MarkerKind = "hazard"
    label: Optional[str] = None
    css_class: Optional[str] = None
    html: Optional[str] = None

class MarkerHandle(BaseModel):
    """지도 표면이 반환하는 마커 핸들"""
    marker_id: int
    position: Position
    kind: MarkerKind = "hazard"

class TileLayerConfig(BaseModel):
    """타일 레이어 설정"""
    url: str
    attribution: str = ""
    subdomains: str = "abc"
    max_zoom: int = 19
    name: Optional[str] = None

# 한 번의 피드 조회 결과 (순서 유지, 비어 있을 수 있음)
HazardFeedResult = List[HazardEvent]

class PipelineOutcome(BaseModel):
    """피드 파이프라인 1회 실행 결과"""
    ok: bool
    url: str
    error: Optional[str] = None
    message: Optional[str] = None
    event_count: int = 0
    skipped_count: int = 0
    markers_drawn: int = 0
    alerted_event_id: Optional[str] = None

class LocationOutcome(BaseModel):
    """위치 게이트 액션 1회 실행 결과"""
    ok: bool
    location: Optional[DeviceLocation] = None
    error: Optional[str] = None
    message: Optional[str] = None

class SosOutcome(BaseModel):
    """SOS 트리거 1회 실행 결과"""
    fired: bool
    ok: bool = False
    location: Optional[DeviceLocation] = None
    error: Optional[str] = None
    safe_zone_markers: int = 0
    nearest_safe_zone: Optional[str] = None
    nearest_distance_km: Optional[float] = None
    notices: List[Dict[str, str]] = Field(default_factory=list)

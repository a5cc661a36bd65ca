# hazardwatch/settings.py
from __future__ import annotations
import json
import os
from typing import List
from pydantic import BaseModel, Field

DEFAULT_OPTIONS_PATH = "/data/options.json"

class FeedConfig(BaseModel):
    url: str = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/2.5_day.geojson"
    timeout_sec: float | None = None          # None = 타임아웃 없음

class MapConfig(BaseModel):
    default_center: List[float] = Field(default_factory=lambda: [20.0, 0.0])
    default_zoom: int = 2
    located_zoom: int = 6
    tile_url: str = "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png"
    tile_attribution: str = (
        '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors '
        '&copy; <a href="https://carto.com/attributions">CARTO</a>'
    )
    tile_subdomains: str = "abcd"
    tile_max_zoom: int = 19
    hazard_icon_url: str = "https://cdn.rawgit.com/pointhi/leaflet-color-markers/master/img/marker-icon-red.png"
    hazard_shadow_url: str = "https://cdnjs.cloudflare.com/ajax/libs/leaflet/0.7.7/images/marker-shadow.png"
    icon_size: List[int] = Field(default_factory=lambda: [25, 41])
    icon_anchor: List[int] = Field(default_factory=lambda: [12, 41])
    popup_anchor: List[int] = Field(default_factory=lambda: [1, -34])
    shadow_size: List[int] = Field(default_factory=lambda: [41, 41])
    output_path: str = "/share/hazardwatch/map.html"
    display_timezone: str | None = None       # None = 호스트 현지 시간대

class GeolocationConfig(BaseModel):
    provider: str = "home_assistant"          # static | home_assistant | none
    latitude: float | None = None
    longitude: float | None = None
    entity_id: str = ""                       # 비어 있으면 zone.home 사용

class SafeZoneEntry(BaseModel):
    name: str
    lat: float
    lon: float
    address: str = ""

class SafeZones(BaseModel):
    zones: List[SafeZoneEntry] = Field(default_factory=lambda: [
        SafeZoneEntry(name="Community Hall A", lat=13.0827, lon=80.2707),
        SafeZoneEntry(name="School Building B", lat=13.0500, lon=80.2500),
    ])
    file_path: str = ""                       # 선택: name,lat,lon[,address] CSV

class SosConfig(BaseModel):
    enabled: bool = True
    notify_home_assistant: bool = False
    sent_message: str = "SOS request sent with your location. Help is on the way (this is a simulation)."
    failed_message: str = "Could not get your location for the SOS request."
    unavailable_message: str = "Geolocation is not available on this device."

class HAConfig(BaseModel):
    base_url: str = "http://supervisor/core"   # 엔드포인트가 /api/... 를 붙임
    token: str = ""
    timeout_sec: int = 5

class Observability(BaseModel):
    http_enabled: bool = True
    http_port: int = 8099
    metrics_enabled: bool = True
    service_name: str = "HazardWatch"
    build_version: str = "0.1.0"
    build_date: str = "2026-10-01"
    log_level: str = "INFO"
    log_json: bool = False

class Settings(BaseModel):
    # 하위 섹션 (기본값/팩토리로 누락 방지)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    map: MapConfig = Field(default_factory=MapConfig)
    geolocation: GeolocationConfig = Field(default_factory=GeolocationConfig)
    safe_zones: SafeZones = Field(default_factory=SafeZones)
    sos: SosConfig = Field(default_factory=SosConfig)
    ha: HAConfig = Field(default_factory=HAConfig)
    observability: Observability = Field(default_factory=Observability)

    @classmethod
    def load(cls, path: str | None = None) -> "Settings":
        """
        애드온 옵션 JSON 파일에서 설정을 읽습니다.
        파일이 없으면 기본값을 사용합니다.
        """
        path = path or os.getenv("HW_OPTIONS_PATH", DEFAULT_OPTIONS_PATH)
        if not os.path.exists(path):
            return cls()
        with open(path, encoding="utf-8") as f:
            return cls.model_validate(json.load(f))

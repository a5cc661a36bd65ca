"""
Safe zone list for HazardWatch.

This module provides the static safe zone list shown during the
simulated SOS flow, loaded from settings and an optional CSV file,
together with the nearest-zone lookup.
"""

import csv
from typing import List, Optional, Tuple
from hazardwatch.common.geo import haversine_distance, validate_coordinates
from hazardwatch.core.models import Position, SafeZone
from hazardwatch.settings import SafeZones
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.safe_zones")

def load_safe_zone_csv(path: str) -> List[SafeZone]:
    """안전 지대 데이터를 CSV 파일(name,lat,lon[,address])에서 로드합니다."""
    zones: List[SafeZone] = []
    with open(path, newline="", encoding="utf-8") as f:
        for row_num, r in enumerate(csv.DictReader(f), start=2):
            try:
                lat = float(r["lat"])
                lon = float(r["lon"])
            except (KeyError, ValueError, TypeError) as e:
                log.warning(f"행 {row_num} 위도/경도 변환 실패 건너뜀: {r} error:{e}")
                continue

            if not validate_coordinates(lat, lon):
                log.warning(f"행 {row_num} 좌표 범위 벗어남 건너뜀: lat={lat}, lon={lon}")
                continue

            zones.append(SafeZone(
                name=(r.get("name") or "").strip(),
                address=(r.get("address") or "").strip(),
                position=Position(latitude=lat, longitude=lon),
            ))

    log.info(f"안전 지대 데이터 로드됨 path:{path} count:{len(zones)}")
    return zones

def build_safe_zones(config: SafeZones) -> List[SafeZone]:
    """설정의 고정 목록과 (있다면) CSV 파일을 합쳐 안전 지대 목록을 만듭니다."""
    zones = [
        SafeZone(name=z.name, address=z.address, position=Position(latitude=z.lat, longitude=z.lon))
        for z in config.zones
    ]
    if config.file_path:
        zones.extend(load_safe_zone_csv(config.file_path))
    return zones

def find_nearest(position: Position, zones: List[SafeZone]) -> Optional[Tuple[SafeZone, float]]:
    """가장 가까운 안전 지대와 거리(km)를 찾습니다. 목록이 비어 있으면 None."""
    best: Optional[Tuple[SafeZone, float]] = None

    for z in zones:
        d = haversine_distance(position.latitude, position.longitude,
                               z.position.latitude, z.position.longitude)
        if best is None or d < best[1]:
            best = (z, d)

    return best

"""
Geographic utilities for HazardWatch.

This module provides geographic calculations including
distance calculation and coordinate validation.
"""

import math

def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    두 지점 간의 Haversine 거리를 계산합니다 (킬로미터).

    Args:
        lat1: 첫 번째 지점의 위도
        lon1: 첫 번째 지점의 경도
        lat2: 두 번째 지점의 위도
        lon2: 두 번째 지점의 경도

    Returns:
        두 지점 간의 거리 (킬로미터)
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = lat2_rad - lat1_rad
    dlon = math.radians(lon2) - math.radians(lon1)

    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2)
    c = 2 * math.asin(min(1.0, math.sqrt(a)))

    # 지구 반지름 (킬로미터)
    r = 6371

    return c * r

def validate_coordinates(lat: float, lon: float) -> bool:
    """
    좌표가 유효한지 확인합니다.

    Args:
        lat: 위도
        lon: 경도

    Returns:
        좌표가 유효하면 True
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180

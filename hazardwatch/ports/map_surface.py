"""
Map surface port interface.

This module defines the protocol for the interactive map the
hazard pipeline and the location actions draw on.
"""

from typing import Protocol
from hazardwatch.core.models import MarkerHandle, MarkerOptions, Position, TileLayerConfig

class MapSurfacePort(Protocol):
    """지도 표면 포트 인터페이스"""

    def set_view(self, position: Position, zoom: int) -> None:
        """지도 중심과 줌 레벨을 설정합니다."""
        ...

    def add_marker(self, position: Position, options: MarkerOptions) -> MarkerHandle:
        """
        마커를 추가합니다. 마커는 누적되며 중복 제거하지 않습니다.

        Returns:
            추가된 마커의 핸들
        """
        ...

    def bind_popup(self, handle: MarkerHandle, html: str, open: bool = False) -> None:
        """마커에 팝업을 연결합니다."""
        ...

    def add_tile_layer(self, config: TileLayerConfig) -> None:
        """타일 레이어를 추가합니다."""
        ...

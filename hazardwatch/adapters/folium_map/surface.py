"""
Folium map surface for HazardWatch.

This module implements the map surface and alert banner ports on
top of folium (Leaflet). The page is rendered to standalone HTML.
"""

import os
from typing import Dict, List, Optional, Tuple
import folium
from branca.element import MacroElement
from jinja2 import Template
from hazardwatch.core.models import MarkerHandle, MarkerOptions, Position, TileLayerConfig
from hazardwatch.settings import MapConfig
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.map")

class FoliumAlertBanner(MacroElement):
    """페이지 상단 알림 배너 (렌더링 시점의 문구/표시 상태 사용)"""

    _template = Template("""
        {% macro header(this, kwargs) %}
        <style>
            #{{ this.element_id }} {
                display: none; position: fixed; top: 0; left: 0; right: 0; z-index: 1000;
                padding: 10px 16px; background: #b71c1c; color: #fff;
                font: bold 15px sans-serif; text-align: center;
            }
            #{{ this.element_id }}.visible { display: block; }
        </style>
        {% endmacro %}

        {% macro html(this, kwargs) %}
        <div id="{{ this.element_id }}" class="alert-banner{% if this.visible %} visible{% endif %}">{{ this.text|e }}</div>
        {% endmacro %}
    """)

    def __init__(self, element_id: str = "alert-banner"):
        super().__init__()
        self._name = "AlertBanner"
        self.element_id = element_id
        self.text = ""
        self.visible = False

    def set_text(self, text: str) -> None:
        self.text = text

    def set_visible(self, visible: bool) -> None:
        self.visible = bool(visible)

class FoliumMapSurface:
    """folium 기반 지도 표면"""

    def __init__(self, config: Optional[MapConfig] = None):
        """
        초기화합니다.

        Args:
            config: 지도 설정 (기본 중심/줌, 아이콘, 출력 경로)
        """
        self.config = config or MapConfig()
        center = Position(latitude=self.config.default_center[0], longitude=self.config.default_center[1])
        self.map = folium.Map(location=center.as_list(), zoom_start=self.config.default_zoom, tiles=None)
        self.view: Tuple[Position, int] = (center, self.config.default_zoom)
        self._markers: Dict[int, folium.Marker] = {}
        self._handles: List[MarkerHandle] = []
        self._next_id = 1
        self.banner: Optional[FoliumAlertBanner] = None

    @property
    def markers(self) -> List[MarkerHandle]:
        return list(self._handles)

    def set_view(self, position: Position, zoom: int) -> None:
        self.view = (position, zoom)
        self.map.location = position.as_list()
        self.map.options["zoom"] = zoom
        log.debug(f"지도 시점 변경 lat:{position.latitude} lon:{position.longitude} zoom:{zoom}")

    def add_tile_layer(self, config: TileLayerConfig) -> None:
        folium.TileLayer(
            tiles=config.url,
            attr=config.attribution,
            name=config.name,
            max_zoom=config.max_zoom,
            subdomains=config.subdomains,
        ).add_to(self.map)

    def _icon(self, options: MarkerOptions):
        c = self.config
        if options.kind == "hazard":
            return folium.CustomIcon(
                icon_image=c.hazard_icon_url,
                icon_size=tuple(c.icon_size),
                icon_anchor=tuple(c.icon_anchor),
                popup_anchor=tuple(c.popup_anchor),
                shadow_image=c.hazard_shadow_url,
                shadow_size=tuple(c.shadow_size),
            )
        if options.kind == "safe_zone":
            return folium.DivIcon(html=options.html or "", class_name=options.css_class or "safe-zone-marker")
        return None  # Leaflet 기본 마커

    def add_marker(self, position: Position, options: MarkerOptions) -> MarkerHandle:
        marker = folium.Marker(
            location=position.as_list(),
            icon=self._icon(options),
            tooltip=options.label,
        ).add_to(self.map)

        handle = MarkerHandle(marker_id=self._next_id, position=position, kind=options.kind)
        self._next_id += 1
        self._markers[handle.marker_id] = marker
        self._handles.append(handle)
        return handle

    def bind_popup(self, handle: MarkerHandle, html: str, open: bool = False) -> None:
        marker = self._markers.get(handle.marker_id)
        if marker is None:
            raise KeyError(f"알 수 없는 마커 marker_id:{handle.marker_id}")
        folium.Popup(html, max_width=300, show=open).add_to(marker)

    def attach_banner(self, banner: FoliumAlertBanner) -> FoliumAlertBanner:
        """배너를 페이지에 붙입니다. 문구는 렌더링 시점 값으로 출력됩니다."""
        self.map.get_root().add_child(banner)
        self.banner = banner
        return banner

    def render_html(self) -> str:
        """지도 페이지 전체 HTML을 렌더링합니다."""
        return self.map.get_root().render()

    def save(self, path: Optional[str] = None) -> str:
        """지도 페이지를 HTML 파일로 저장합니다."""
        path = path or self.config.output_path
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.map.save(path)
        log.info(f"지도 저장됨 path:{path} markers:{len(self._handles)}")
        return path

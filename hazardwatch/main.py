# hazardwatch/main.py
import os, asyncio
from hazardwatch.settings import Settings
from hazardwatch.orchestrators.orchestrator import build_orchestrator
from hazardwatch.observability.logging_setup import setup_logger, get_logger
from hazardwatch.observability.server import build_server

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def _f(name, default):
    v = os.getenv(name)
    return float(v) if v not in (None, "") else default

def build_settings() -> Settings:
    s = Settings.load()

    # 피드
    s.feed.url = os.getenv("FEED_URL", s.feed.url)
    s.feed.timeout_sec = _f("FEED_TIMEOUT_SEC", s.feed.timeout_sec)

    # 지도
    s.map.output_path = os.getenv("MAP_OUTPUT_PATH", s.map.output_path)
    s.map.tile_url = os.getenv("MAP_TILE_URL", s.map.tile_url)
    s.map.display_timezone = os.getenv("DISPLAY_TIMEZONE", s.map.display_timezone)

    # 위치
    s.geolocation.provider = os.getenv("GEO_PROVIDER", s.geolocation.provider)
    s.geolocation.latitude = _f("GEO_LATITUDE", s.geolocation.latitude)
    s.geolocation.longitude = _f("GEO_LONGITUDE", s.geolocation.longitude)
    s.geolocation.entity_id = os.getenv("GEO_ENTITY_ID", s.geolocation.entity_id)

    # 안전 지대 / SOS
    s.safe_zones.file_path = os.getenv("SAFE_ZONES_FILE", s.safe_zones.file_path)
    s.sos.enabled = _b("SOS_ENABLED", s.sos.enabled)
    s.sos.notify_home_assistant = _b("SOS_NOTIFY_HA", s.sos.notify_home_assistant)

    # HA (애드온 환경이면 SUPERVISOR_TOKEN 사용)
    s.ha.base_url = os.getenv("HA_BASE_URL", s.ha.base_url)
    s.ha.token = os.getenv("HA_TOKEN", os.getenv("SUPERVISOR_TOKEN", s.ha.token))

    # 관측성
    s.observability.http_enabled = _b("HTTP_ENABLED", s.observability.http_enabled)
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.http_port = int(os.getenv("HTTP_PORT", s.observability.http_port))
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)

    return s

async def main():
    s = build_settings()
    setup_logger(level=s.observability.log_level, json_format=s.observability.log_json)
    log = get_logger("hazardwatch.main")
    log.info("설정 로드 완료")

    orch = build_orchestrator(s)
    log.info("오케스트레이터 생성 완료")

    try:
        outcome = await orch.run_first_cycle()
        if not outcome.ok:
            log.warning(f"첫 피드 사이클 실패 error:{outcome.error}, 기존 지도 유지")
        orch.map_surface.save()

        if s.observability.http_enabled:
            await build_server(s, orch).serve()
    finally:
        await orch.close()
        log.info("종료")

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()

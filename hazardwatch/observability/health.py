"""
HTTP endpoints for HazardWatch.

This module implements health, readiness, metrics and info endpoints,
plus the map page, the SOS trigger and a manual feed refresh.
"""

from typing import Optional
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
import time
from hazardwatch.settings import Settings
from hazardwatch.orchestrators.orchestrator import Orchestrator, build_orchestrator
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.http")

def create_app(settings: Settings, orchestrator: Optional[Orchestrator] = None) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="HazardWatch hazard map service"
    )

    orch = orchestrator or build_orchestrator(settings)
    app.state.orchestrator = orch
    start_time = time.time()

    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/ready")
    async def ready():
        """레디니스 체크 엔드포인트 (첫 피드 사이클 완료 여부)"""
        is_ready = orch.cycles > 0
        return JSONResponse({
            "status": "ready" if is_ready else "starting",
            "service": settings.observability.service_name,
            "cycles": orch.cycles,
            "timestamp": time.time()
        }, status_code=200 if is_ready else 503)

    @app.get("/metrics")
    async def metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")

        orch.update_uptime()
        return Response(
            generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        uptime = time.time() - start_time
        last = orch.last_outcome
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(uptime),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level,
            "feed_url": settings.feed.url,
            "last_feed": last.model_dump() if last else None
        })

    @app.get("/map", response_class=HTMLResponse)
    async def map_page():
        """렌더링된 지도 페이지"""
        render = getattr(orch.map_surface, "render_html", None)
        if render is None:
            raise HTTPException(status_code=501, detail="Map surface cannot render HTML")
        return HTMLResponse(render())

    @app.post("/sos")
    async def sos():
        """SOS 버튼 클릭 (시뮬레이션)

        응답의 notices는 이 요청에서 발생한 알림만 담습니다.
        """
        if not settings.sos.enabled:
            raise HTTPException(status_code=400, detail="sos disabled")

        outcome = await orch.press_sos()
        log.info(f"SOS 요청 처리 완료 ok:{outcome.ok} error:{outcome.error}")
        return {"outcome": outcome.model_dump(), "notices": outcome.notices}

    @app.post("/hazards/refresh")
    async def refresh():
        """피드 파이프라인을 다시 실행합니다 (마커 누적)"""
        outcome = await orch.refresh_hazards()
        return JSONResponse(outcome.model_dump(), status_code=200 if outcome.ok else 502)

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": {
                "health": "/health",
                "ready": "/ready",
                "metrics": "/metrics",
                "info": "/info",
                "map": "/map",
                "sos": "/sos",
                "refresh": "/hazards/refresh"
            }
        })

    return app

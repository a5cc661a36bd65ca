"""
HTTP server runner for HazardWatch.

This module provides a simple way to run the FastAPI server
for the map page, the SOS trigger, health checks and metrics.
"""

import uvicorn
from typing import Optional
from hazardwatch.observability.health import create_app
from hazardwatch.orchestrators.orchestrator import Orchestrator
from hazardwatch.settings import Settings
from hazardwatch.observability.logging_setup import get_logger

log = get_logger("hazardwatch.observability")

def build_server(settings: Settings,
                 orchestrator: Optional[Orchestrator] = None,
                 host: str = "0.0.0.0",
                 port: Optional[int] = None) -> uvicorn.Server:
    """
    uvicorn 서버 객체를 생성합니다.

    Args:
        settings: 애플리케이션 설정
        orchestrator: 이미 조립된 오케스트레이터 (없으면 새로 조립)
        host: 바인딩할 호스트
        port: 바인딩할 포트 (None이면 설정에서 가져옴)
    """
    if port is None:
        port = settings.observability.http_port

    app = create_app(settings, orchestrator)

    log.info(f"HTTP 서버 준비 host:{host} port:{port}")

    return uvicorn.Server(uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=settings.observability.log_level.lower(),
        access_log=True
    ))

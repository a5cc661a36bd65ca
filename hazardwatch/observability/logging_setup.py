from __future__ import annotations
import logging
import sys
from loguru import logger

# ---- stdlib logging → loguru 인터셉트 ----
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())

def _hook_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # 시끄러운 로거는 필요 시 레벨만 조정 가능
    for noisy in ("uvicorn", "uvicorn.access", "aiohttp", "asyncio"):
        l = logging.getLogger(noisy)
        l.handlers = [InterceptHandler()]
        l.propagate = False

# ---- 개발 콘솔 포맷(사람 친화, extra 미노출) ----
DEV_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level:<7}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<cyan>{file}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

def setup_logging_dev(log_level: str = "INFO") -> None:
    """
    개발 콘솔 전용 loguru 초기화.
    - 콘솔 컬러 출력
    - stdlib logging 흡수
    """
    logger.remove()  # 기본 sink 제거
    logger.configure(extra={"name": "hazardwatch"})
    logger.add(
        sink=sys.stdout,
        format=DEV_FORMAT,
        colorize=True,
        backtrace=True,   # dev에서만 편의상 True
        diagnose=False,   # 과도한 진단은 끔
        level=log_level.upper(),
        enqueue=False,    # 콘솔은 큐 불필요
    )
    _hook_stdlib_logging()

def setup_logging_json(log_level: str = "INFO") -> None:
    """
    운영용 구조화(JSON) 로그 초기화.
    - 한 줄당 하나의 JSON 레코드 (bind 된 컨텍스트 포함)
    """
    logger.remove()
    logger.configure(extra={"name": "hazardwatch"})
    logger.add(
        sink=sys.stdout,
        serialize=True,
        backtrace=False,
        diagnose=False,
        level=log_level.upper(),
        enqueue=False,
    )
    _hook_stdlib_logging()

def setup_logger(level: str = "INFO", json_format: bool = False) -> None:
    """설정에 따라 콘솔 또는 JSON 로깅을 초기화합니다."""
    if json_format:
        setup_logging_json(level)
    else:
        setup_logging_dev(level)

def get_logger(name: str = "hazardwatch", **ctx):
    """선택적으로 컨텍스트를 바인딩한 logger 반환."""
    return logger.bind(name=name, **ctx)

def with_context(**ctx):
    """컨텍스트 매니저로 일시 컨텍스트 부여."""
    return logger.contextualize(**ctx)

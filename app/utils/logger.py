"""JSON 애플리케이션 로거.

Structured JSON logger for application events (authorization rejections,
identity provisioning, integrity gate results). HTTP request logging is
handled separately by the Axiom middleware.

Usage:
    from app.utils.logger import get_logger
    logger = get_logger(__name__)
    logger.warning("analytics request rejected", extra={"reason": "owner_mismatch"})
"""

import logging

from pythonjsonlogger import jsonlogger

from app.config import settings

_ROOT_LOGGER_NAME: str = "shiftflow"
_configured: bool = False


def _configure() -> None:
    """루트 로거에 JSON 핸들러를 한 번만 부착합니다."""
    global _configured
    if _configured:
        return

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"asctime": "@timestamp", "levelname": "log_level"},
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root.addHandler(handler)
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """모듈 이름 기반 하위 로거를 반환합니다.

    Return a child of the ``shiftflow`` logger, e.g. ``shiftflow.app.services.analytics_service``.
    """
    _configure()
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")

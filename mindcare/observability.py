"""
Logging setup for MindCare. Configures the root logger once from LOG_LEVEL in config
and provides the request-logging middleware used by main.py.
"""
import logging
import time

from fastapi import Request

from mindcare.config import settings

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def setup_logging() -> None:
    """Configure the root logger. Safe to call more than once (startup runs per worker)."""
    global _configured
    if _configured:
        return
    level = getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO)
    if settings.debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    # SQL echo is noisy; keep it at WARNING unless debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.debug else logging.WARNING)
    _configured = True
    logger.info("Logging configured; level=%s app=%s", logging.getLevelName(level), settings.app_name)


async def log_requests(request: Request, call_next):
    """Log method, path, status and duration for every request."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response

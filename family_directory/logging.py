import logging
import sys
import time
import uuid

from fastapi import Request
from loguru import logger

from family_directory.config import Settings


REQUEST_ID_HEADER = "X-Request-ID"


# ============================================================
# STDLIB -> LOGURU
# ============================================================

class InterceptHandler(logging.Handler):
    """Route uvicorn / sqlalchemy records through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(settings: Settings) -> None:
    logger.remove()

    if settings.LOG_JSON:
        logger.add(sys.stderr, level=settings.LOG_LEVEL, serialize=True)
    else:
        logger.add(
            sys.stderr,
            level=settings.LOG_LEVEL,
            format=(
                "<green>{time:HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
                "{extra} <level>{message}</level>"
            ),
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = [InterceptHandler()]
        logging.getLogger(name).propagate = False


# ============================================================
# REQUEST LOGGING MIDDLEWARE
# ============================================================

async def log_requests(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    started = time.perf_counter()

    with logger.contextualize(request_id=request_id):
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "{} {} {} {:.1f}ms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )

    response.headers[REQUEST_ID_HEADER] = request_id
    return response

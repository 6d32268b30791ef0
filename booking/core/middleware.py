# booking/core/middleware.py
"""HTTP middleware: correlation ids and access logging"""
import uuid
import time
import logging
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Slot lookups are polled while customers click through dates
QUIET_PATH_SUFFIXES = ("/slots",)


async def correlation_id_middleware(request: Request, call_next):
    """Attach a correlation id to the request and echo it on the response"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """Log method, path, status and duration of every request"""
    start_time = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    path = request.url.path

    try:
        response = await call_next(request)
    except Exception:
        logger.error(
            f"{request.method} {path} failed [{correlation_id}]",
            exc_info=True
        )
        raise

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    level = logging.DEBUG if path.endswith(QUIET_PATH_SUFFIXES) and response.status_code < 400 else logging.INFO

    logger.log(
        level,
        f"{request.method} {path} -> {response.status_code} in {duration_ms}ms",
        extra={
            "correlation_id": correlation_id,
            "client": request.client.host if request.client else "unknown",
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }
    )

    return response

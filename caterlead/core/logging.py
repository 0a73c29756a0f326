"""
Structured logging helpers on top of Loguru
"""

from loguru import logger
from contextvars import ContextVar
from typing import Optional
from functools import wraps
import inspect
import time

# Context variable for request tracking
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class StructuredLogger:
    """Wrapper for structured logging with context"""

    @staticmethod
    def bind(**kwargs):
        """Bind context to logger"""
        context = {"request_id": request_id_var.get(), **kwargs}
        context = {k: v for k, v in context.items() if v is not None}
        return logger.bind(**context)

    @staticmethod
    def info(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).info(message)

    @staticmethod
    def error(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).error(message)

    @staticmethod
    def warning(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).warning(message)

    @staticmethod
    def debug(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).debug(message)


def log_execution_time(func):
    """Decorator to log how long a (sync or async) function took"""

    @wraps(func)
    async def async_wrapper(*args, **kwargs):
        start = time.monotonic()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            StructuredLogger.error(
                f"{func.__qualname__} failed",
                function=func.__qualname__,
                duration=round(time.monotonic() - start, 3),
                status="error",
                error=str(e),
            )
            raise
        StructuredLogger.info(
            f"{func.__qualname__} finished",
            function=func.__qualname__,
            duration=round(time.monotonic() - start, 3),
            status="success",
        )
        return result

    @wraps(func)
    def sync_wrapper(*args, **kwargs):
        start = time.monotonic()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            StructuredLogger.error(
                f"{func.__qualname__} failed",
                function=func.__qualname__,
                duration=round(time.monotonic() - start, 3),
                status="error",
                error=str(e),
            )
            raise
        StructuredLogger.info(
            f"{func.__qualname__} finished",
            function=func.__qualname__,
            duration=round(time.monotonic() - start, 3),
            status="success",
        )
        return result

    if inspect.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper


def log_http_request(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    **kwargs,
):
    """Log an outbound provider call. API keys must not be passed in ``url``."""
    log_data = {"method": method, "url": url, "type": "http_request"}

    if status_code:
        log_data["status_code"] = status_code

    if duration is not None:
        log_data["duration"] = round(duration, 3)

    log_data.update(kwargs)

    if status_code and status_code >= 400:
        StructuredLogger.warning("HTTP request failed", **log_data)
    else:
        StructuredLogger.debug("HTTP request completed", **log_data)


structured_logger = StructuredLogger()
__all__ = [
    "logger",
    "structured_logger",
    "log_execution_time",
    "log_http_request",
    "request_id_var",
]

# apps/impressions/performance.py
from functools import wraps
from django.conf import settings
import time
import logging

logger = logging.getLogger(__name__)


def monitor_store_latency(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.monotonic()
        try:
            return func(*args, **kwargs)
        finally:
            execution_time = time.monotonic() - start_time
            threshold = getattr(settings, 'IMPRESSION_SLOW_CALL_SECONDS', 1.0)
            if execution_time > threshold:
                logger.warning(f"Slow store call: {func.__qualname__} took {execution_time:.2f}s")
    return wrapper

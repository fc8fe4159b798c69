import time
import logging
from functools import wraps

# Configure a specific logger for timing, or use a general one
timing_logger = logging.getLogger("timing")


def _qualified_name(func) -> str:
    class_name = ""
    if hasattr(func, '__qualname__'):
        qualname_parts = func.__qualname__.split('.')
        if len(qualname_parts) > 1:
            class_name = qualname_parts[-2] + "."
    return f"{class_name}{func.__name__}"


def timed(func):
    """
    Logs the execution time of the decorated function to the 'timing' logger.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            total_time = time.perf_counter() - start_time
            timing_logger.debug(f"Sync function {_qualified_name(func)} took {total_time:.4f} seconds to execute.")
    return wrapper


def async_timed(func):
    """
    Logs the execution time of the decorated coroutine to the 'timing' logger.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            total_time = time.perf_counter() - start_time
            timing_logger.debug(f"Async function {_qualified_name(func)} took {total_time:.4f} seconds to execute.")
    return wrapper

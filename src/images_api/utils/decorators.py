"""Decorator utilities for cross-cutting concerns."""
import functools
import inspect
import logging
import time
from typing import Any, Callable, Optional, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_execution_time(func: Optional[F] = None, *, label: Optional[str] = None):
    """Log how long a call took, and whether it failed.

    Works on plain functions and coroutine functions alike, with or without
    arguments: `@log_execution_time` or `@log_execution_time(label="upload")`.
    """
    def decorator(func: F) -> F:
        name = label or func.__qualname__

        def _log(start: float, error: Optional[BaseException] = None) -> None:
            duration = time.perf_counter() - start
            if error is None:
                logger.info(f"{name} completed in {duration:.3f}s")
            else:
                logger.warning(f"{name} failed after {duration:.3f}s: {error}")

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                start = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as err:
                    _log(start, err)
                    raise
                _log(start)
                return result
            return cast(F, async_wrapper)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as err:
                _log(start, err)
                raise
            _log(start)
            return result
        return cast(F, wrapper)

    if func is not None:
        return decorator(func)
    return decorator

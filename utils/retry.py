"""Retry decorator with exponential backoff for remote calls.

Usage:
    from utils.retry import retry

    @retry(max_attempts=3, delay=2.0, exceptions=(requests.RequestException,))
    def fetch_remote_config():
        response = requests.get('https://example.com/remote-config.json')
        response.raise_for_status()
        return response.json()
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import Any

logger = logging.getLogger(__name__)


def retry(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    logger_name: str | None = None,
) -> Callable:
    """Decorator to retry a function with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts (default: 3)
        delay: Initial delay between retries in seconds (default: 1.0)
        backoff: Multiplier for delay on each retry (default: 2.0)
        exceptions: Tuple of exception types to catch (default: all exceptions)
        logger_name: Optional logger name for custom logging

    Returns:
        Decorated function that retries on failure and re-raises the last
        error once attempts are exhausted.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            log = logging.getLogger(logger_name) if logger_name else logger

            attempt = 0
            current_delay = delay

            while True:
                try:
                    return func(*args, **kwargs)

                except exceptions as e:
                    attempt += 1

                    if attempt >= max_attempts:
                        log.error(
                            f"Function {func.__name__} failed after {max_attempts} attempts. Last error: {e}",
                        )
                        raise

                    log.warning(
                        f"Attempt {attempt}/{max_attempts} failed for {func.__name__}: {e}. "
                        f"Retrying in {current_delay:.1f}s...",
                    )

                    time.sleep(current_delay)
                    current_delay *= backoff

        return wrapper

    return decorator

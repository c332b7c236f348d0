"""Retry logic with exponential backoff for content-polish calls."""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    ``max_attempts=1`` means a single call with no retry.
    """

    max_attempts: int = 1
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter_factor: float = 0.2  # ±20% random variation

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RetryConfig":
        return cls(
            max_attempts=max(1, int(data.get("max_attempts", 1))),
            base_delay=float(data.get("base_delay", 1.0)),
            max_delay=float(data.get("max_delay", 30.0)),
        )


class TransientError(Exception):
    """Exception for transient errors that should be retried."""


class PermanentError(Exception):
    """Exception for permanent errors that should not be retried."""


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    config: RetryConfig,
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Await ``func(*args, **kwargs)`` with exponential backoff between attempts.

    Args:
        func: Async function to execute
        config: Retry configuration
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Result from the first successful attempt

    Raises:
        PermanentError: If a non-transient error is raised
        Exception: The last transient error once attempts are exhausted
    """
    for attempt in range(config.max_attempts):
        try:
            result = await func(*args, **kwargs)
            if attempt > 0:
                logger.info("Retry succeeded on attempt %d", attempt + 1)
            return result

        except asyncio.CancelledError:
            raise
        except PermanentError:
            logger.error("Permanent error encountered, not retrying")
            raise

        except Exception as e:
            if not is_transient_error(e):
                logger.error("Permanent error encountered, not retrying")
                raise PermanentError(str(e)) from e

            if attempt == config.max_attempts - 1:
                if config.max_attempts > 1:
                    logger.error("All %d retry attempts failed", config.max_attempts)
                raise

            base_delay = min(config.base_delay * (config.exponential_base**attempt), config.max_delay)
            # Jitter keeps concurrent runs from retrying in lockstep
            jitter = base_delay * config.jitter_factor * (2 * random.random() - 1)
            delay = base_delay + jitter

            logger.warning(
                "Attempt %d/%d failed: %s. Retrying in %.2fs...",
                attempt + 1,
                config.max_attempts,
                e,
                delay,
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_with_backoff called with max_attempts < 1")


def is_transient_error(error: Exception) -> bool:
    """
    Determine if an error is transient and should be retried.

    Args:
        error: Exception to check

    Returns:
        True if error is transient, False otherwise
    """
    if isinstance(error, TransientError):
        return True

    if isinstance(error, (ConnectionError, TimeoutError, asyncio.TimeoutError)):
        return True

    error_msg = str(error).lower()
    transient_patterns = [
        "timeout",
        "timed out",
        "connection",
        "rate limit",
        "429",
        "500",
        "502",
        "503",
        "504",
        "ssl",
        "eof",
        "broken pipe",
        "temporary",
        "unavailable",
        "overloaded",
    ]

    return any(pattern in error_msg for pattern in transient_patterns)

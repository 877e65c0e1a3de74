"""
Backoff policy for provider calls.

Transient provider failures (rate limits, timeouts, outages) are retried
with exponential backoff. Rejections such as bad credentials or a
malformed request are surfaced on the first attempt.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, TypeVar

from ...core.models.errors import ProviderInvocationError


logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryHandler:
    """Retry retryable ProviderInvocationErrors with capped exponential backoff."""

    def __init__(
        self,
        max_retries: int = 2,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        backoff_multiplier: float = 2.0,
        jitter: bool = True
    ):
        """
        Args:
            max_retries: Retries after the first attempt; 0 disables retrying
            base_delay: Delay before the first retry, in seconds
            max_delay: Upper bound for any single delay
            backoff_multiplier: Growth factor between consecutive delays
            jitter: Spread delays by up to 10% so parallel platforms do not retry in lockstep
        """
        self.max_retries = max(0, max_retries)
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.backoff_multiplier = backoff_multiplier
        self.jitter = jitter

    def delay_for(self, retry_number: int) -> float:
        """Seconds to wait before retry ``retry_number`` (0-based)."""
        delay = min(self.base_delay * (self.backoff_multiplier ** retry_number), self.max_delay)
        if self.jitter:
            delay += random.uniform(-0.1 * delay, 0.1 * delay)
        return max(0.0, delay)

    async def run(self, label: str, operation: Callable[..., Awaitable[T]], *args, **kwargs) -> T:
        """
        Await ``operation(*args, **kwargs)``, retrying transient failures.

        Args:
            label: Name used in log lines, normally the platform
            operation: Coroutine function issuing one provider call

        Raises:
            ProviderInvocationError: Non-retryable, or the last error once retries run out
        """
        for retry_number in range(self.max_retries + 1):
            try:
                result = await operation(*args, **kwargs)
            except ProviderInvocationError as e:
                if not e.retryable or retry_number == self.max_retries:
                    logger.error(
                        f"[{label}] provider call failed after {retry_number + 1} attempt(s): {e.message}"
                    )
                    raise

                delay = self.delay_for(retry_number)
                logger.warning(f"[{label}] transient provider error, retrying in {delay:.2f}s: {e.message}")
                await asyncio.sleep(delay)
                continue

            if retry_number:
                logger.info(f"[{label}] provider call recovered on retry {retry_number}")
            return result

"""Retry handler with exponential backoff for blob storage calls."""

import asyncio
import random
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from loguru import logger

T = TypeVar("T")


class RetryHandler:
    """
    Retries an async call on transient errors with exponential backoff.

    Network errors, timeouts, rate limits and 5xx responses are retried;
    other HTTP errors are raised immediately.
    """

    # Status codes that should trigger a retry
    RETRYABLE_STATUS_CODES = {
        408,  # Request Timeout
        429,  # Too Many Requests
        500,  # Internal Server Error
        502,  # Bad Gateway
        503,  # Service Unavailable
        504,  # Gateway Timeout
    }

    # Exceptions that should trigger a retry
    RETRYABLE_EXCEPTIONS = (
        httpx.TimeoutException,
        httpx.NetworkError,
        ConnectionError,
        asyncio.TimeoutError,
    )

    def __init__(
        self,
        max_retries: int = 2,
        base_delay: float = 1.0,
        max_delay: float = 10.0,
        exponential_base: float = 2.0,
    ):
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    async def execute(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Execute a function with retry logic.

        Args:
            func: The async function to execute
            *args: Positional arguments for the function
            **kwargs: Keyword arguments for the function

        Returns:
            The result of the function

        Raises:
            The last exception if all retries are exhausted
        """
        for attempt in range(self.max_retries + 1):
            try:
                result = await func(*args, **kwargs)

                if isinstance(result, httpx.Response) and result.status_code in self.RETRYABLE_STATUS_CODES:
                    raise httpx.HTTPStatusError(
                        f"Retryable status code: {result.status_code}",
                        request=result.request,
                        response=result,
                    )

                return result

            except self.RETRYABLE_EXCEPTIONS as e:
                await self._handle_retry(attempt, e)

            except httpx.HTTPStatusError as e:
                if e.response.status_code not in self.RETRYABLE_STATUS_CODES:
                    raise
                await self._handle_retry(attempt, e)

        raise RuntimeError("Retry loop exited without a result")

    async def _handle_retry(self, attempt: int, exception: Exception) -> None:
        """Sleep before the next attempt, or re-raise after the last one."""
        if attempt >= self.max_retries:
            logger.error(f"All {self.max_retries + 1} attempts failed: {exception}")
            raise exception

        delay = self._calculate_delay(attempt)
        logger.warning(
            f"Attempt {attempt + 1}/{self.max_retries + 1} failed: {exception}. "
            f"Retrying in {delay:.2f}s..."
        )
        await asyncio.sleep(delay)

    def _calculate_delay(self, attempt: int) -> float:
        """Calculate the delay for a retry attempt using exponential backoff."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        # Add jitter (+/-25%)
        jitter = delay * 0.25 * (2 * random.random() - 1)
        delay = min(delay + jitter, self.max_delay)
        return max(0.0, delay)

"""Resilient request executor for the TMDB API.

Sends one logical request with bounded retries and deserializes the response
into a pydantic model. The caller passes a request factory rather than a built
request so every attempt gets a fresh ``httpx.Request``.

Failure classification:

- 429 / 5xx responses, timeouts and transport errors are retried up to
  ``max_retries`` times, then raised as ``UpstreamTransientError``.
- Any other non-2xx status raises ``UpstreamStatusError`` immediately.
- A body that does not match the response model raises ``UpstreamParseError``
  immediately.
- Task cancellation is never caught: ``asyncio.CancelledError`` propagates from
  the send or the backoff sleep and no further attempt is made.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from watchcompass.constants import HTTP_STATUS_REQUEST_TIMEOUT, HTTP_STATUS_SERVICE_UNAVAILABLE
from watchcompass.services.catalog.errors import (
    UpstreamParseError,
    UpstreamStatusError,
    UpstreamTransientError,
)
from watchcompass.utils.logging import get_logger
from watchcompass.utils.metrics import metrics
from watchcompass.utils.retry import RetryConfig, backoff_delay, is_transient_status

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

RequestFactory = Callable[[], httpx.Request]


class TmdbRequestExecutor:
    """Executes TMDB requests with retry, backoff and jitter."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        retry_config: RetryConfig,
        *,
        rng: random.Random | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._client = client
        self._config = retry_config
        self._rng = rng
        self._sleep = sleep

    async def send(
        self,
        build_request: RequestFactory,
        response_type: type[T],
        operation_name: str = "tmdb",
    ) -> T:
        """Send a request and parse the response.

        Args:
            build_request: Factory returning a fresh request for each attempt
            response_type: Pydantic model the JSON body is validated against
            operation_name: Name of the operation for logging

        Returns:
            The parsed response model

        Raises:
            UpstreamTransientError: Transient failures outlasted all attempts
            UpstreamStatusError: Non-transient error status
            UpstreamParseError: Malformed response body
        """
        max_attempts = self._config.max_attempts
        attempt = 0

        while True:
            attempt += 1
            try:
                response = await self._client.send(build_request())
            except httpx.TimeoutException as e:
                if attempt < max_attempts:
                    await self._backoff(attempt, max_attempts, "timeout", operation_name)
                    continue
                raise UpstreamTransientError(
                    "TMDB request timed out.", HTTP_STATUS_REQUEST_TIMEOUT
                ) from e
            except httpx.TransportError as e:
                if attempt < max_attempts:
                    await self._backoff(attempt, max_attempts, type(e).__name__, operation_name)
                    continue
                raise UpstreamTransientError(
                    "TMDB request failed to reach the server.", HTTP_STATUS_SERVICE_UNAVAILABLE
                ) from e

            status = response.status_code
            if is_transient_status(status) and attempt < max_attempts:
                await self._backoff(attempt, max_attempts, f"status {status}", operation_name)
                continue

            if not response.is_success:
                logger.warning(
                    f"{operation_name}: TMDB responded with status {status} "
                    f"after {attempt} attempt(s)"
                )
                error_type = UpstreamTransientError if is_transient_status(status) else UpstreamStatusError
                raise error_type(
                    f"TMDB request failed with status code {status}.",
                    status,
                    body=response.text,
                )

            return self._parse(response, response_type)

    def _parse(self, response: httpx.Response, response_type: type[T]) -> T:
        try:
            return response_type.model_validate_json(response.content)
        except ValidationError as e:
            raise UpstreamParseError(
                "TMDB response could not be parsed.",
                response.status_code,
                body=response.text,
            ) from e

    async def _backoff(
        self,
        attempt: int,
        max_attempts: int,
        reason: str,
        operation_name: str,
    ) -> None:
        delay = backoff_delay(attempt, self._config, self._rng)
        metrics.upstream_retries_total.inc(reason=reason.split(" ")[0])
        logger.warning(
            f"{operation_name}: {reason}, retrying in {delay:.2f}s "
            f"(attempt {attempt}/{max_attempts})"
        )
        await self._sleep(delay)

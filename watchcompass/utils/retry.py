"""Retry policy for upstream API calls: attempt bounds and backoff with jitter."""

import random
from dataclasses import dataclass

from watchcompass.config import TmdbOptions


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    The delay before retrying after attempt N is ``base_delay_ms * N`` plus a
    random jitter in ``[0, jitter_ms)``.
    """

    max_retries: int = 2
    base_delay_ms: int = 200
    jitter_ms: int = 100

    @classmethod
    def from_options(cls, options: TmdbOptions) -> "RetryConfig":
        return cls(
            max_retries=options.max_retries,
            base_delay_ms=options.backoff_base_ms,
            jitter_ms=options.backoff_jitter_ms,
        )

    @property
    def max_attempts(self) -> int:
        return max(1, self.max_retries + 1)


def is_transient_status(status_code: int) -> bool:
    """Rate limiting and server-side errors are worth retrying."""
    return status_code == 429 or status_code >= 500


def backoff_delay(
    attempt: int,
    config: RetryConfig,
    rng: random.Random | None = None,
) -> float:
    """Return the delay in seconds to wait after a failed attempt.

    Args:
        attempt: 1-based number of the attempt that just failed
        config: Retry configuration
        rng: Random source for the jitter (defaults to the module RNG)

    Returns:
        Delay in seconds, growing with the attempt number
    """
    source = rng or random
    jitter = source.randrange(0, max(1, config.jitter_ms))
    return (config.base_delay_ms * attempt + jitter) / 1000

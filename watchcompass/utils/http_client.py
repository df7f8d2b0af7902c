"""Shared persistent httpx client for TMDB calls.

Using a persistent client avoids creating a new TCP connection + TLS handshake
for every API call, improving performance through connection reuse and pooling.
"""

import httpx

from watchcompass.constants import (
    HTTP_KEEPALIVE_EXPIRY,
    HTTP_MAX_CONNECTIONS,
    HTTP_MAX_KEEPALIVE_CONNECTIONS,
)

# Connection pool limits
_POOL_LIMITS = httpx.Limits(
    max_connections=HTTP_MAX_CONNECTIONS,
    max_keepalive_connections=HTTP_MAX_KEEPALIVE_CONNECTIONS,
    keepalive_expiry=HTTP_KEEPALIVE_EXPIRY,
)

_tmdb_client: httpx.AsyncClient | None = None


def get_tmdb_client(timeout: float) -> httpx.AsyncClient:
    """Get persistent httpx client for TMDB API calls.

    Args:
        timeout: Per-request timeout in seconds, enforced by the transport
    """
    global _tmdb_client
    if _tmdb_client is None:
        _tmdb_client = httpx.AsyncClient(
            timeout=timeout,
            limits=_POOL_LIMITS,
            http2=False,
        )
    return _tmdb_client


async def close_all_clients() -> None:
    """Close all persistent httpx clients. Call during app shutdown."""
    global _tmdb_client
    if _tmdb_client is not None:
        await _tmdb_client.aclose()
        _tmdb_client = None

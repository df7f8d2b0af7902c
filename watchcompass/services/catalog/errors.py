"""Errors raised by the movie catalog.

Not-found is never an error: catalog operations return ``None`` or an empty
list for absent movies. Cancellation surfaces as ``asyncio.CancelledError``.
"""


class CatalogError(Exception):
    """Base exception for catalog errors."""

    pass


class CatalogConfigurationError(CatalogError):
    """The catalog is missing required configuration (e.g. the API key)."""

    pass


class UpstreamError(CatalogError):
    """The upstream API call failed.

    Attributes:
        status_code: HTTP status of the failed call (408/503 for transport failures)
        body: Response body when one was received, for diagnostics
    """

    def __init__(self, message: str, status_code: int, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstreamTransientError(UpstreamError):
    """Rate limiting, server or network failure that persisted across all retries."""

    pass


class UpstreamStatusError(UpstreamError):
    """Non-transient, non-success status. Never retried."""

    pass


class UpstreamParseError(UpstreamError):
    """The response body could not be deserialized. Never retried."""

    pass

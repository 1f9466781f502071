"""Exception hierarchy for ghkit.

Every failure surfaced by a dispatch (``fetch``, ``fetch_into``, ``send``,
or pulling a page from a paged iterable) is a ``GitHubClientError``:

- NotFoundError: the server answered 404
- HttpError: any other non-2xx status
- TransportError: network-level failure reported by httpx
- DeserializationError: the body was not JSON, or not the expected shape
- RateLimitExceeded: rate-limit waits exhausted the retry budget
- GraphQLError: a GraphQL response carried an ``errors`` array

ConfigurationError is raised at construction time for programmer misuse and
is also a ``ValueError``.
"""

from datetime import datetime
from typing import Any


class GitHubClientError(Exception):
    """Raised when a GitHub API request fails.

    Wraps httpx errors and HTTP errors for consistent error handling.
    """

    pass


class ResponseError(GitHubClientError):
    """A response arrived but carried an error status.

    Attributes:
        status_code: HTTP status code
        body: Raw response body text (for diagnostics)
        method: HTTP method of the failed request
        url: Absolute URL of the failed request
    """

    def __init__(
        self,
        status_code: int,
        body: str = "",
        method: str = "",
        url: str = "",
        message: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
        super().__init__(
            message or f"GitHub API error {status_code} for {method} {url}: {body[:500]}"
        )


class NotFoundError(ResponseError):
    """The requested resource does not exist (HTTP 404)."""

    def __init__(self, body: str = "", method: str = "", url: str = "") -> None:
        super().__init__(404, body=body, method=method, url=url)


class HttpError(ResponseError):
    """Any non-2xx response other than 404."""

    pass


class TransportError(GitHubClientError):
    """Network-level failure (timeout, refused connection, DNS).

    The originating httpx exception is available as ``__cause__``.
    """

    pass


class DeserializationError(GitHubClientError):
    """Response body did not match the expected shape."""

    def __init__(self, message: str, body: Any = None) -> None:
        self.body = body
        super().__init__(message)


class ConfigurationError(GitHubClientError, ValueError):
    """Programmer misuse detected at construction time."""

    pass


class RateLimitExceeded(GitHubClientError):
    """Raised when GitHub rate limit is exhausted."""

    def __init__(self, reset_at: datetime, message: str = "Rate limit exceeded"):
        self.reset_at = reset_at
        super().__init__(f"{message}. Resets at {reset_at.isoformat()}")


class GraphQLError(GitHubClientError):
    """A GraphQL response reported errors."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        messages = "; ".join(str(e.get("message", e)) for e in errors)
        super().__init__(f"GraphQL request failed: {messages}")


__all__ = [
    "ConfigurationError",
    "DeserializationError",
    "GitHubClientError",
    "GraphQLError",
    "HttpError",
    "NotFoundError",
    "RateLimitExceeded",
    "ResponseError",
    "TransportError",
]

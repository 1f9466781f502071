"""GitHub HTTP transport.

Provides the httpx-based client that performs exactly one logical round trip
per ``GitHubRequest``: it attaches authorization and default headers, paces
requests through the rate-limit handler, and owns the retry policy. Server
errors and timeouts are retried for reads only; rate-limit responses are
retried for every method. Status codes are mapped to the ghkit exception
taxonomy here, so callers above this layer only ever see
a successful response or a ``GitHubClientError``.

Reference: https://docs.github.com/en/rest
"""

import logging
import random
import time
from datetime import datetime, timezone
from typing import Any, Callable

import httpx

from .auth import ANONYMOUS, AuthorizationProvider
from .config import GitHubConfig
from .errors import (
    GitHubClientError,
    HttpError,
    NotFoundError,
    RateLimitExceeded,
    TransportError,
)
from .rate_limit import REMAINING_HEADER, RESET_HEADER, RateLimitHandler
from .request import GitHubRequest

logger = logging.getLogger("ghkit.client")

API_VERSION = "2022-11-28"
DEFAULT_ACCEPT = "application/vnd.github+json"


class GitHubClient:
    """GitHub REST API transport using httpx.

    Uses a long-lived httpx.Client with connection pooling.

    Attributes:
        api_url: GitHub API root URL (default: https://api.github.com)
        authorization: Provider of the Authorization header
        rate_limit_handler: Pacing collaborator consulted around each request

    Example:
        >>> with GitHubClient(GitHubConfig.from_properties({})) as client:
        ...     response = client.send(request)
    """

    # Retry configuration
    BASE_BACKOFF = 2  # seconds, exponential: min(60, 2^attempt)
    MAX_BACKOFF = 60  # seconds
    # Only these are re-sent after a 5xx or timeout; a mutating call may
    # already have been applied server-side
    RETRYABLE_METHODS = frozenset({"GET", "HEAD"})

    def __init__(
        self,
        config: GitHubConfig,
        authorization: AuthorizationProvider = ANONYMOUS,
        transport: httpx.BaseTransport | None = None,
        rate_limit_handler: RateLimitHandler | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Connection settings (endpoint, timeouts, retries)
            authorization: Authorization header provider
            transport: Optional httpx transport (tests pass httpx.MockTransport)
            rate_limit_handler: Optional pacing handler
            sleep: Sleep function used for backoff waits
        """
        self.config = config
        self.api_url = config.endpoint
        self.authorization = authorization
        self.max_retries = config.max_retries
        self.rate_limit_handler = rate_limit_handler or RateLimitHandler(
            min_delay_ms=config.min_delay_ms, sleep=sleep
        )
        self._sleep = sleep

        self._client = httpx.Client(
            headers={
                "Accept": DEFAULT_ACCEPT,
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": config.user_agent,
            },
            timeout=httpx.Timeout(
                connect=config.connect_timeout,
                read=config.read_timeout,
                write=config.write_timeout,
                pool=config.pool_timeout,
            ),
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the httpx client and release connections."""
        self._client.close()

    def _headers_for(self, request: GitHubRequest) -> dict[str, str]:
        headers = request.header_dict()
        encoded = self.authorization.encoded_authorization()
        if encoded and "Authorization" not in headers:
            headers["Authorization"] = encoded
        if request.raw_body is not None and request.content_type:
            headers.setdefault("Content-Type", request.content_type)
        return headers

    def _backoff(self, attempt: int) -> float:
        return min(self.MAX_BACKOFF, self.BASE_BACKOFF ** (attempt + 1)) + random.uniform(0, 1)

    def _reset_epoch(self, response: httpx.Response) -> float:
        """Epoch seconds from X-RateLimit-Reset, or one minute from now if unusable."""
        raw = response.headers.get(RESET_HEADER, "")
        try:
            return float(raw)
        except ValueError:
            logger.warning("Non-numeric %s header: %r", RESET_HEADER, raw)
            return time.time() + 60

    def send(self, request: GitHubRequest, point_cost: int = 1) -> httpx.Response:
        """Perform one request with rate limiting, retries, and error mapping.

        Args:
            request: Fully-formed request
            point_cost: Request point cost for the secondary rate limit

        Returns:
            The successful (2xx) httpx.Response

        Raises:
            NotFoundError: On 404
            HttpError: On any other non-retryable non-2xx status
            RateLimitExceeded: When rate limit waits exhaust the retries
            TransportError: On network failures
        """
        method = request.method
        url = request.url
        headers = self._headers_for(request)
        kwargs: dict[str, Any] = {"headers": headers}
        if request.raw_body is not None:
            kwargs["content"] = request.raw_body
        elif request.has_body:
            kwargs["json"] = request.body_json()

        retryable = method.upper() in self.RETRYABLE_METHODS

        for attempt in range(self.max_retries + 1):
            self.rate_limit_handler.before_request(point_cost)
            try:
                response = self._client.request(method, url, **kwargs)
            except httpx.TimeoutException as e:
                if retryable and attempt < self.max_retries:
                    backoff = min(self.MAX_BACKOFF, self.BASE_BACKOFF ** (attempt + 1))
                    logger.warning(
                        "Request timeout. Retrying in %.1fs (attempt %d/%d)",
                        backoff,
                        attempt + 1,
                        self.max_retries,
                    )
                    self._sleep(backoff)
                    continue
                raise TransportError(
                    f"Request timeout for {method} {url} after {attempt} retries: {e}"
                ) from e
            except httpx.HTTPError as e:
                raise TransportError(f"HTTP error for {method} {url}: {e}") from e

            self.rate_limit_handler.update_from_response(response)
            status = response.status_code
            logger.debug("GitHub request %s %s -> %d", method, url, status)

            if 200 <= status < 300:
                return response

            # Primary rate limit exhausted -- wait and retry
            if status == 403 and response.headers.get(REMAINING_HEADER, "") == "0":
                reset = self._reset_epoch(response)
                reset_dt = datetime.fromtimestamp(reset, tz=timezone.utc)
                if attempt < self.max_retries:
                    wait = max(1.0, reset - time.time())
                    logger.warning(
                        "Rate limit hit. Waiting %.0fs (attempt %d/%d)",
                        wait,
                        attempt + 1,
                        self.max_retries,
                    )
                    self.rate_limit_handler.refund(point_cost)
                    self._sleep(min(wait, self.MAX_BACKOFF))
                    continue
                raise RateLimitExceeded(reset_dt)

            # Secondary rate limit (Retry-After header)
            if status == 429:
                try:
                    retry_after = int(response.headers.get("Retry-After", "60"))
                except ValueError:
                    retry_after = 60
                if attempt < self.max_retries:
                    logger.warning(
                        "Secondary rate limit. Retry-After: %ds (attempt %d/%d)",
                        retry_after,
                        attempt + 1,
                        self.max_retries,
                    )
                    self.rate_limit_handler.refund(point_cost)
                    self._sleep(retry_after)
                    continue
                raise RateLimitExceeded(
                    datetime.fromtimestamp(time.time() + retry_after, tz=timezone.utc),
                    "Secondary rate limit exceeded",
                )

            # Server errors (retryable for reads)
            if status >= 500 and retryable and attempt < self.max_retries:
                backoff = self._backoff(attempt)
                logger.warning(
                    "Server error %d. Retrying in %.1fs (attempt %d/%d)",
                    status,
                    backoff,
                    attempt + 1,
                    self.max_retries,
                )
                self.rate_limit_handler.refund(point_cost)
                self._sleep(backoff)
                continue

            if status == 404:
                raise NotFoundError(body=response.text, method=method, url=url)
            raise HttpError(status, body=response.text, method=method, url=url)

        # Every branch above returns, raises or continues with attempts left
        raise GitHubClientError(f"Request failed after all retries: {method} {url}")

    def rate_limit_status(self) -> dict[str, Any]:
        """Current rate limit snapshot, for logging and diagnostics."""
        return self.rate_limit_handler.status()

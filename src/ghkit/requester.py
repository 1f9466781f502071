"""Incremental request builder and dispatcher.

A ``Requester`` accumulates one request (verb, path, parameters, headers) and
dispatches it exactly once through the root's transport. It is created per
logical operation and discarded afterwards.

Null policy: ``with_param(name, None)`` omits the parameter entirely. Use
``with_nullable`` when the API needs an explicit JSON ``null``.

Parameter placement is decided at ``build()`` time: query string for GET,
JSON body for every other verb (or always the body after ``in_body()``).
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .errors import ConfigurationError, DeserializationError, GraphQLError
from .request import GitHubRequest, is_absolute_url, query_value, to_wire

if TYPE_CHECKING:
    from .github import GitHub
    from .models.base import GitHubInteractiveObject
    from .paginator import PagedIterable

logger = logging.getLogger("ghkit.requester")

M = TypeVar("M", bound="GitHubInteractiveObject")

_EXPLICIT_NULL = object()


def parse_json(response: httpx.Response) -> Any:
    """Decode a response body, mapping failures to DeserializationError."""
    if not response.content:
        return None
    try:
        return response.json()
    except (ValueError, UnicodeDecodeError) as e:
        raise DeserializationError(
            f"Response from {response.request.method} {response.request.url} is not valid JSON: {e}",
            body=response.text[:500],
        ) from e


def deserialize(model_type: type[M], data: Any) -> M:
    """Validate a decoded JSON object into ``model_type``."""
    if not isinstance(data, dict):
        raise DeserializationError(
            f"Expected a JSON object for {model_type.__name__}, got {type(data).__name__}",
            body=data,
        )
    try:
        return model_type.model_validate(data)
    except ValidationError as e:
        raise DeserializationError(
            f"Response does not match {model_type.__name__}: {e}", body=data
        ) from e


class Requester:
    """Mutable accumulator for a single GitHub request.

    Example:
        >>> pr = (
        ...     gh.create_request()
        ...     .method("PATCH")
        ...     .with_param("base", "main")
        ...     .with_url_path("/repos/octo/hello/pulls/1")
        ...     .fetch(PullRequest)
        ... )
    """

    def __init__(self, root: "GitHub") -> None:
        self._root = root
        self._method = "GET"
        self._url_path: str | None = None
        self._params: list[tuple[str, Any]] = []
        self._query: list[tuple[str, str]] = []
        self._headers: dict[str, str] = {}
        self._raw_body: bytes | None = None
        self._content_type: str | None = None
        self._force_body = False

    # --- Accumulation ---

    def with_param(self, name: str, value: Any) -> "Requester":
        """Add a named parameter; ``None`` values are omitted."""
        if value is not None:
            self._params.append((name, value))
        return self

    def with_nullable(self, name: str, value: Any) -> "Requester":
        """Add a parameter that is sent as JSON ``null`` when ``value`` is None."""
        self._params.append((name, _EXPLICIT_NULL if value is None else value))
        return self

    def with_params(self, params: dict[str, Any]) -> "Requester":
        for name, value in params.items():
            self.with_param(name, value)
        return self

    def with_query_param(self, name: str, value: Any) -> "Requester":
        """Add a query parameter regardless of verb; repeated names are kept."""
        if value is not None:
            self._query.append((name, query_value(value)))
        return self

    def method(self, verb: str) -> "Requester":
        self._method = verb.upper()
        return self

    def with_url_path(self, path: str, *parts: Any) -> "Requester":
        """Set the path relative to the API root.

        Args:
            path: Leading path, e.g. ``/repos/octo/hello``
            *parts: Additional segments, each URL-encoded
        """
        if is_absolute_url(path):
            raise ConfigurationError(
                f"with_url_path expects an API-relative path, got {path!r}; use set_raw_url_path"
            )
        segments = [path.rstrip("/") if parts else path]
        segments.extend(quote(str(part), safe="") for part in parts)
        self._url_path = "/".join(segments)
        return self

    def set_raw_url_path(self, url: str) -> "Requester":
        """Use ``url`` as-is: an absolute URL supplied by the server, or a resolved path."""
        self._url_path = url
        return self

    def with_header(self, name: str, value: str | None) -> "Requester":
        if value is not None:
            self._headers[name] = value
        return self

    def with_accept(self, media_type: str) -> "Requester":
        return self.with_header("Accept", media_type)

    def with_body(self, data: bytes, content_type: str = "application/octet-stream") -> "Requester":
        """Send ``data`` as the raw request body instead of JSON parameters."""
        self._raw_body = data
        self._content_type = content_type
        return self

    def in_body(self) -> "Requester":
        """Place parameters in the JSON body even for GET."""
        self._force_body = True
        return self

    # --- Build ---

    def build(self) -> GitHubRequest:
        """Freeze the accumulated state into an immutable request.

        Raises:
            ConfigurationError: If no URL path was set
        """
        if not self._url_path:
            raise ConfigurationError(f"No URL path set for {self._method} request")

        query = list(self._query)
        body: list[tuple[str, Any]] = []
        params_in_body = self._force_body or self._method != "GET"
        for name, value in self._params:
            if params_in_body:
                body.append((name, None if value is _EXPLICIT_NULL else to_wire(value)))
            elif value is not _EXPLICIT_NULL:
                query.append((name, query_value(value)))

        return GitHubRequest(
            api_url=self._root.api_url,
            url_path=self._url_path,
            method=self._method,
            query=tuple(query),
            body=tuple(body),
            headers=tuple(self._headers.items()),
            raw_body=self._raw_body,
            content_type=self._content_type,
            force_body=self._force_body,
        )

    # --- Dispatch ---

    def _dispatch(self) -> httpx.Response:
        return self._root.client.send(self.build())

    def fetch(self, model_type: type[M]) -> M:
        """Dispatch and deserialize the response into a new ``model_type``.

        Raises:
            NotFoundError: On 404
            HttpError: On other non-2xx statuses
            DeserializationError: If the body is not the expected object
        """
        data = parse_json(self._dispatch())
        return deserialize(model_type, data).wrap_up(self._root)

    def fetch_into(self, instance: M) -> M:
        """Dispatch and overwrite ``instance`` with the response, in place.

        Returns:
            The same ``instance`` reference
        """
        data = parse_json(self._dispatch())
        fresh = deserialize(type(instance), data)
        instance.update_from(fresh)
        return instance.wrap_up(self._root)

    def fetch_json(self) -> Any:
        """Dispatch and return the decoded JSON body (None when empty)."""
        return parse_json(self._dispatch())

    def send(self) -> None:
        """Dispatch, expecting no meaningful response body."""
        self._dispatch()

    def send_graphql(self) -> Any:
        """Dispatch a GraphQL request and return its ``data`` member.

        Raises:
            GraphQLError: If the response carries an ``errors`` array
        """
        result = self.fetch_json()
        if not isinstance(result, dict):
            raise DeserializationError("GraphQL response is not a JSON object", body=result)
        errors = result.get("errors")
        if errors:
            raise GraphQLError(errors)
        return result.get("data")

    def to_iterable(
        self,
        item_type: type[M],
        transform: Callable[[M], Any] | None = None,
        items_key: str | None = None,
    ) -> "PagedIterable[M]":
        """Bind the current configuration to a lazy paged iterable.

        Nothing is sent until the first page is pulled.

        Args:
            item_type: Model type of each item
            transform: Per-item function attaching back-references
            items_key: Member holding the items when pages are JSON objects
        """
        from .paginator import PagedIterable, PageSource

        request = self.build()
        source = PageSource(
            request=request,
            item_type=item_type,
            transform=transform,
            items_key=items_key,
        )
        page_size = self._root.page_size
        iterable = PagedIterable(self._root, source)
        logger.debug("Paged iterable bound to %s %s", request.method, request.url)
        if page_size and request.query_param("per_page") is None:
            iterable = iterable.with_page_size(page_size)
        return iterable


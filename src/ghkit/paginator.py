"""Lazy, restartable iteration over paginated GitHub listings.

Pages are linked through the ``Link`` response header (``rel="next"``). A
``PageSource`` knows how to turn one request into one ``Page``; a
``PagedIterable`` re-runs that from the first page on every iteration, and a
``PagedIterator`` pulls pages on demand, buffering at most one.

Follows GitHub's Link header pagination pattern:
https://docs.github.com/en/rest/using-the-rest-api/using-pagination-in-the-rest-api
"""

import logging
import re
from collections import deque
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, TypeVar

from .errors import ConfigurationError, DeserializationError, GitHubClientError
from .request import GitHubRequest
from .requester import deserialize, parse_json

if TYPE_CHECKING:
    from .github import GitHub

logger = logging.getLogger("ghkit.paginator")

T = TypeVar("T")

DEFAULT_ITEMS_KEY = "items"
MAX_PAGE_SIZE = 100

_NEXT_LINK = re.compile(r'\s*<([^>]+)>;\s*rel="next"')


def validate_page_size(page_size: int) -> int:
    """Return ``page_size`` if GitHub accepts it as ``per_page``.

    Raises:
        ConfigurationError: If page_size is outside 1..100
    """
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ConfigurationError(
            f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}"
        )
    return page_size


def parse_next_link(link_header: str) -> str | None:
    """Parse a GitHub Link header to extract the 'next' URL.

    Format: <https://api.github.com/...?page=2>; rel="next", <...>; rel="last"

    Args:
        link_header: Raw Link header value

    Returns:
        Next page URL or None if no next page
    """
    if not link_header:
        return None
    for part in link_header.split(","):
        match = _NEXT_LINK.match(part.strip())
        if match:
            return match.group(1)
    return None


@dataclass(frozen=True)
class Page(Generic[T]):
    """One fetched page: its items and the request for the following page."""

    items: list[T]
    next_request: GitHubRequest | None


@dataclass(frozen=True)
class PageSource(Generic[T]):
    """Stateless page producer bound to a base request.

    Attributes:
        request: Request for the first page
        item_type: Model type each item is validated into
        transform: Applied to every item before it is exposed
        items_key: Object member holding the items, for object-shaped pages
    """

    request: GitHubRequest
    item_type: type[T]
    transform: Callable[[T], Any] | None = None
    items_key: str | None = None

    def with_page_size(self, page_size: int) -> "PageSource[T]":
        return replace(self, request=self.request.with_page_size(page_size))

    def fetch_page(self, root: "GitHub", request: GitHubRequest) -> Page[T]:
        """Fetch ``request`` and return its items plus the next-page request.

        Raises:
            GitHubClientError: If the next link points outside the API root
            DeserializationError: If the page is not a list of objects
        """
        response = root.client.send(request)
        raw_items = self._extract_items(parse_json(response))

        items: list[T] = []
        for raw in raw_items:
            item = deserialize(self.item_type, raw).wrap_up(root)
            if self.transform is not None:
                item = self.transform(item)
            items.append(item)

        next_url = parse_next_link(response.headers.get("Link", ""))
        next_request = None
        if next_url:
            api_root = request.api_url.rstrip("/") + "/"
            if not next_url.startswith(api_root):
                raise GitHubClientError(
                    f"Refusing pagination link outside {request.api_url}: {next_url[:100]}"
                )
            next_request = request.with_url(next_url)
        return Page(items, next_request)

    def _extract_items(self, data: Any) -> list[Any]:
        if data is None:
            return []
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            key = self.items_key or DEFAULT_ITEMS_KEY
            items = data.get(key)
            if isinstance(items, list):
                return items
            raise DeserializationError(
                f"Paged response has no '{key}' array", body=list(data)
            )
        raise DeserializationError(
            f"Paged response is a {type(data).__name__}, expected an array or object"
        )


class PagedIterator(Iterator[T]):
    """Pull-based cursor over a page source.

    Holds at most one page of items. Once the last page has been consumed
    every further pull raises StopIteration.
    """

    def __init__(self, root: "GitHub", source: PageSource[T]) -> None:
        self._root = root
        self._source = source
        self._next_request: GitHubRequest | None = source.request
        self._buffer: deque[T] = deque()
        self._pages_fetched = 0

    def _fill(self) -> None:
        # Empty intermediate pages are skipped while a next link exists
        while not self._buffer and self._next_request is not None:
            page = self._source.fetch_page(self._root, self._next_request)
            self._pages_fetched += 1
            self._next_request = page.next_request
            self._buffer.extend(page.items)
            logger.debug(
                "Fetched page %d: %d items, more=%s",
                self._pages_fetched,
                len(page.items),
                page.next_request is not None,
            )

    def has_next(self) -> bool:
        self._fill()
        return bool(self._buffer)

    def __next__(self) -> T:
        self._fill()
        if not self._buffer:
            raise StopIteration
        return self._buffer.popleft()

    def next_page(self) -> list[T]:
        """Return the not-yet-consumed remainder of the current page.

        Fetches the next page first if the current one is exhausted. Returns an
        empty list once iteration is complete.
        """
        self._fill()
        rest = list(self._buffer)
        self._buffer.clear()
        return rest

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched


class PagedIterable(Generic[T]):
    """Restartable, lazily-fetched listing.

    Nothing is requested at construction; each ``iter()`` starts again from
    the first page.

    Example:
        >>> for issue in repo.list_issues(state=IssueState.OPEN).with_page_size(50):
        ...     print(issue.number, issue.title)
    """

    def __init__(self, root: "GitHub", source: PageSource[T]) -> None:
        self._root = root
        self._source = source

    @property
    def request(self) -> GitHubRequest:
        return self._source.request

    def __iter__(self) -> PagedIterator[T]:
        return self.iterator()

    def iterator(self) -> PagedIterator[T]:
        return PagedIterator(self._root, self._source)

    def with_page_size(self, page_size: int) -> "PagedIterable[T]":
        """Return a copy requesting ``page_size`` items per page.

        Raises:
            ConfigurationError: If page_size is outside 1..100
        """
        validate_page_size(page_size)
        return PagedIterable(self._root, self._source.with_page_size(page_size))

    def iter_pages(self) -> Iterator[list[T]]:
        iterator = self.iterator()
        while iterator.has_next():
            yield iterator.next_page()

    def first(self) -> T | None:
        """First item, fetching only the first non-empty page."""
        return next(self.iterator(), None)

    def to_list(self) -> list[T]:
        return list(self.iterator())

    def to_array(self) -> tuple[T, ...]:
        return tuple(self.iterator())

    def to_set(self) -> set[T]:
        return set(self.iterator())

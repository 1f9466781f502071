"""Immutable description of one GitHub API call.

A ``GitHubRequest`` is produced by ``Requester.build()`` and is never
mutated afterwards; pagination derives new requests from it with
``dataclasses.replace`` so a stored request can be re-issued any number of
times.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

import httpx

__all__ = [
    "GitHubRequest",
    "format_datetime",
    "is_absolute_url",
    "query_value",
    "to_wire",
    "transform_enum",
]


def transform_enum(value: Enum) -> str:
    """Wire representation of an enum member.

    String-valued enums carry their wire value already; any other enum is
    sent as its lowercased name with underscores replaced by dashes.
    """
    if isinstance(value.value, str):
        return value.value
    return value.name.lower().replace("_", "-")


def format_datetime(value: datetime | date) -> str:
    """ISO 8601 in UTC with a ``Z`` suffix; naive datetimes are taken as UTC."""
    if not isinstance(value, datetime):
        return value.isoformat()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def to_wire(value: Any) -> Any:
    """Convert a parameter value to its JSON wire form.

    Collections stay nested (lists and dicts are never flattened).
    """
    # str-valued enums are also str, so they must be converted first
    if isinstance(value, Enum):
        return transform_enum(value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date)):
        return format_datetime(value)
    if isinstance(value, dict):
        return {str(k): to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_wire(v) for v in value]
    return value


def query_value(value: Any) -> str:
    """Convert a parameter value to a query-string value."""
    wire = to_wire(value)
    if isinstance(wire, bool):
        return "true" if wire else "false"
    if isinstance(wire, list):
        return ",".join(query_value(v) for v in wire)
    return str(wire)


def is_absolute_url(path: str) -> bool:
    return path.startswith(("http://", "https://"))


@dataclass(frozen=True)
class GitHubRequest:
    """One HTTP call: method, URL, headers, query and body.

    Attributes:
        api_url: API root, e.g. https://api.github.com
        url_path: Path relative to ``api_url``, or an absolute URL
        method: HTTP verb
        query: Ordered query multimap as (name, value) pairs
        body: Ordered body parameters as (name, wire value) pairs
        headers: Extra request headers as (name, value) pairs
        raw_body: Raw request body; takes precedence over ``body``
        content_type: Content type of ``raw_body``
    """

    api_url: str
    url_path: str
    method: str = "GET"
    query: tuple[tuple[str, str], ...] = ()
    body: tuple[tuple[str, Any], ...] = ()
    headers: tuple[tuple[str, str], ...] = ()
    raw_body: bytes | None = field(default=None, repr=False)
    content_type: str | None = None
    force_body: bool = False

    @property
    def url(self) -> str:
        """Absolute URL including the query string."""
        if is_absolute_url(self.url_path):
            base = self.url_path
        else:
            path = self.url_path if self.url_path.startswith("/") else "/" + self.url_path
            base = self.api_url.rstrip("/") + path
        url = httpx.URL(base)
        if self.query:
            url = url.copy_merge_params(list(self.query))
        return str(url)

    @property
    def has_body(self) -> bool:
        return self.raw_body is not None or bool(self.body) or self.force_body

    def body_json(self) -> dict[str, Any]:
        """Body parameters as a JSON object; a repeated name keeps its last value."""
        return dict(self.body)

    def header_dict(self) -> dict[str, str]:
        return dict(self.headers)

    def query_param(self, name: str) -> str | None:
        """Last value of a query parameter, or None."""
        value = None
        for key, v in self.query:
            if key == name:
                value = v
        return value

    def with_query_param(self, name: str, value: Any) -> "GitHubRequest":
        """Copy with ``name`` set to ``value``, replacing earlier values."""
        query = tuple((k, v) for k, v in self.query if k != name)
        return replace(self, query=query + ((name, query_value(value)),))

    def with_page_size(self, page_size: int) -> "GitHubRequest":
        return self.with_query_param("per_page", page_size)

    def with_url(self, url: str) -> "GitHubRequest":
        """Copy pointed at an absolute URL whose query string is already complete."""
        return replace(self, url_path=url, query=())

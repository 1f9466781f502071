"""Shared pytest fixtures for ghkit tests.

HTTP is faked with ``httpx.MockTransport`` driven by a ``RecordingTransport``
route table, so every test can assert on exactly which requests were sent.
No test touches the network.

Fixture Organization:
    - transport: Route table + request recorder
    - gh: GitHub root wired to the transport (token auth, no retries)
    - repo / pull_request: Attached sample objects
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

# Add tests directory to sys.path so test modules can import the payloads helpers
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from payloads import API, pr_json, repo_json  # noqa: E402

from ghkit import GitHubBuilder, reset_config  # noqa: E402
from ghkit.models import PullRequest, Repository  # noqa: E402

Responder = Callable[[httpx.Request], httpx.Response]


class RecordingTransport:
    """Route table for ``httpx.MockTransport`` that records every request.

    Routes are keyed by method and path. A route registered with a query
    string (``/x?page=2``) takes precedence over the bare path. Several
    responses registered for one route are served in order, the last one
    repeating. Unrouted requests fail the test.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Responder]] = {}

    def add(
        self,
        method: str,
        path: str,
        json_data: Any = None,
        status: int = 200,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> "RecordingTransport":
        if content is None and json_data is not None:
            content = json.dumps(json_data).encode()
        response_headers = {"Content-Type": "application/json"}
        response_headers.update(headers or {})

        def respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                status, headers=response_headers, content=content or b"", request=request
            )

        self._routes.setdefault((method.upper(), path), []).append(respond)
        return self

    def add_page(
        self, path: str, items: list[Any], next_url: str | None = None
    ) -> "RecordingTransport":
        headers = {"Link": f'<{next_url}>; rel="next"'} if next_url else {}
        return self.add("GET", path, items, headers=headers)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        full = request.url.raw_path.decode()
        for key in ((request.method, full), (request.method, request.url.path)):
            responders = self._routes.get(key)
            if responders:
                responder = responders.pop(0) if len(responders) > 1 else responders[0]
                return responder(request)
        raise AssertionError(f"Unexpected request: {request.method} {request.url}")

    # --- Assertions helpers ---

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def calls(self, method: str | None = None) -> list[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


@pytest.fixture
def transport():
    """Recording route table; register responses with ``transport.add``."""
    return RecordingTransport()


@pytest.fixture
def gh(transport):
    """GitHub root using the recording transport, a token and no retries."""
    root = (
        GitHubBuilder.from_properties({"endpoint": API, "max_retries": "0"})
        .with_oauth_token("ghp_test_token_123", "octocat")
        .with_transport(httpx.MockTransport(transport))
        .build()
    )
    yield root
    root.close()


@pytest.fixture
def repo(gh):
    """Repository ``octo/hello`` attached to ``gh`` (no request sent)."""
    return Repository.model_validate(repo_json()).wrap_up(gh)


@pytest.fixture
def pull_request(gh, repo):
    """Listing-shaped pull request #7 of ``octo/hello``."""
    return PullRequest.model_validate(pr_json(7)).wrap(repo)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep GITHUB_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.upper().startswith("GITHUB_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()

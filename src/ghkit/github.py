"""GitHub API root and connection builder.

``GitHub`` owns the transport and is the factory for every request; data
objects reach the API only through the root they were attached to.

Example:
    >>> with GitHubBuilder.from_environment().build() as gh:
    ...     repo = gh.get_repository("octocat/Hello-World")
    ...     for issue in repo.list_issues():
    ...         print(issue.number, issue.title)
"""

import copy
import logging
from pathlib import Path
from typing import Any

import httpx

from .auth import ANONYMOUS, AuthorizationProvider, ImmutableAuthorizationProvider
from .builders.app_token import AppCreateTokenBuilder
from .builders.repository import CreateRepositoryBuilder
from .client import GitHubClient
from .config import GitHubConfig, get_config
from .errors import ConfigurationError
from .models.gist import Gist
from .models.issue import Issue
from .models.pull_request import PullRequest
from .models.repository import Repository
from .models.user import Organization, User
from .paginator import PagedIterable
from .rate_limit import RateLimitHandler
from .requester import Requester

logger = logging.getLogger("ghkit.github")

__all__ = ["GitHub", "GitHubBuilder"]


class GitHub:
    """Root object for one GitHub (or GitHub Enterprise) API endpoint.

    Args:
        config: Connection settings
        authorization: Authorization header provider
        transport: Optional httpx transport (tests pass httpx.MockTransport)
        rate_limit_handler: Optional pacing handler
    """

    def __init__(
        self,
        config: GitHubConfig,
        authorization: AuthorizationProvider = ANONYMOUS,
        transport: httpx.BaseTransport | None = None,
        rate_limit_handler: RateLimitHandler | None = None,
    ) -> None:
        self.config = config
        self.authorization = authorization
        self.client = GitHubClient(
            config,
            authorization=authorization,
            transport=transport,
            rate_limit_handler=rate_limit_handler,
        )

    @classmethod
    def connect(cls) -> "GitHub":
        """Connect with credentials from the environment or ``~/.github``."""
        return GitHubBuilder.from_credentials().build()

    @classmethod
    def connect_anonymously(cls) -> "GitHub":
        return GitHubBuilder().build()

    def __enter__(self) -> "GitHub":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    @property
    def api_url(self) -> str:
        return self.config.endpoint

    @property
    def graphql_url(self) -> str:
        # GitHub Enterprise serves GraphQL at /api/graphql next to /api/v3
        if self.api_url.endswith("/api/v3"):
            return self.api_url[: -len("v3")] + "graphql"
        return self.api_url + "/graphql"

    @property
    def page_size(self) -> int | None:
        return self.config.page_size

    def is_anonymous(self) -> bool:
        return self.authorization.encoded_authorization() is None

    # --- Request factories ---

    def create_request(self) -> Requester:
        return Requester(self)

    def create_graphql_request(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> Requester:
        """POST to the GraphQL endpoint; dispatch with ``send_graphql()``."""
        return (
            self.create_request()
            .method("POST")
            .set_raw_url_path(self.graphql_url)
            .with_param("query", query)
            .with_param("variables", variables)
        )

    # --- Resources ---

    def get_myself(self) -> User:
        """The authenticated user."""
        return self.create_request().with_url_path("/user").fetch(User)

    def get_user(self, login: str) -> User:
        return self.create_request().with_url_path("/users", login).fetch(User)

    def get_organization(self, name: str) -> Organization:
        return self.create_request().with_url_path("/orgs", name).fetch(Organization)

    def get_repository(self, full_name: str) -> Repository:
        """Fetch a repository by ``owner/name``.

        Raises:
            ConfigurationError: If ``full_name`` is not ``owner/name``
            NotFoundError: If the repository does not exist or is not visible
        """
        owner, sep, name = full_name.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ConfigurationError(f"Repository name must be owner/name, got {full_name!r}")
        return self.create_request().with_url_path("/repos", owner, name).fetch(Repository)

    def create_repository(self, name: str) -> CreateRepositoryBuilder:
        """Start building a repository owned by the authenticated user."""
        return CreateRepositoryBuilder(self, name, "/user/repos")

    def get_gist(self, gist_id: str) -> Gist:
        return self.create_request().with_url_path("/gists", gist_id).fetch(Gist)

    def search_issues(self, query: str) -> PagedIterable[Issue]:
        """Issues and pull requests matching a search query.

        Results are not attached to a repository; their routes derive from
        their urls.
        """
        return (
            self.create_request()
            .with_url_path("/search/issues")
            .with_param("q", query)
            .to_iterable(Issue, items_key="items")
        )

    def search_pull_requests(self, query: str) -> PagedIterable[PullRequest]:
        """Pull requests matching a search query (``is:pr`` is added)."""
        if "is:pr" not in query.split():
            query = f"{query} is:pr".strip()
        return (
            self.create_request()
            .with_url_path("/search/issues")
            .with_param("q", query)
            .to_iterable(PullRequest, items_key="items")
        )

    def create_app_installation_token(self, installation_id: int) -> AppCreateTokenBuilder:
        """Start building an installation access token; requires a JWT root."""
        return AppCreateTokenBuilder(self, f"/app/installations/{installation_id}/access_tokens")

    def rate_limit_status(self) -> dict[str, Any]:
        return self.client.rate_limit_status()


class GitHubBuilder:
    """Configures and builds a ``GitHub`` root.

    Credentials loaded from configuration are applied in order oauth,
    app installation token, jwt; a later one replaces an earlier one.
    Explicit ``with_*`` calls replace whatever was loaded.
    """

    def __init__(self, config: GitHubConfig | None = None) -> None:
        self._config = config if config is not None else GitHubConfig.from_properties({})
        self._overrides: dict[str, Any] = {}
        self.authorization_provider: AuthorizationProvider = ANONYMOUS
        self._transport: httpx.BaseTransport | None = None
        self._rate_limit_handler: RateLimitHandler | None = None

    # --- Factories ---

    @classmethod
    def from_config(cls, config: GitHubConfig) -> "GitHubBuilder":
        builder = cls(config)
        if config.oauth is not None:
            builder.with_oauth_token(config.oauth.get_secret_value(), config.login)
        if config.app_installation_token is not None:
            builder.with_app_installation_token(config.app_installation_token.get_secret_value())
        if config.jwt is not None:
            builder.with_jwt_token(config.jwt.get_secret_value())
        return builder

    @classmethod
    def from_environment(cls) -> "GitHubBuilder":
        """Settings from ``GITHUB_*`` environment variables and ``.env``."""
        return cls.from_config(get_config())

    @classmethod
    def from_properties(cls, props: dict[str, str]) -> "GitHubBuilder":
        return cls.from_config(GitHubConfig.from_properties(props))

    @classmethod
    def from_property_file(cls, path: str | Path | None = None) -> "GitHubBuilder":
        """Settings from a property file, ``~/.github`` by default."""
        return cls.from_config(GitHubConfig.from_property_file(path))

    @classmethod
    def from_credentials(cls) -> "GitHubBuilder":
        """First of environment and ``~/.github`` that carries credentials.

        Raises:
            ConfigurationError: If neither source provides credentials
        """
        builder = cls.from_environment()
        if builder.authorization_provider is not ANONYMOUS:
            return builder
        try:
            builder = cls.from_property_file()
        except FileNotFoundError as e:
            raise ConfigurationError(
                "Failed to resolve credentials from ~/.github or the environment"
            ) from e
        if builder.authorization_provider is ANONYMOUS:
            raise ConfigurationError(
                "Failed to resolve credentials from ~/.github or the environment"
            )
        return builder

    # --- Settings ---

    def with_endpoint(self, endpoint: str) -> "GitHubBuilder":
        self._overrides["endpoint"] = endpoint
        return self

    def with_page_size(self, page_size: int) -> "GitHubBuilder":
        """Default ``per_page`` for every paged iterable built from the root."""
        self._overrides["page_size"] = page_size
        return self

    def with_oauth_token(self, oauth_token: str, login: str | None = None) -> "GitHubBuilder":
        return self.with_authorization_provider(
            ImmutableAuthorizationProvider.from_oauth_token(oauth_token, login)
        )

    def with_jwt_token(self, jwt_token: str) -> "GitHubBuilder":
        return self.with_authorization_provider(
            ImmutableAuthorizationProvider.from_jwt_token(jwt_token)
        )

    def with_app_installation_token(self, token: str) -> "GitHubBuilder":
        return self.with_authorization_provider(
            ImmutableAuthorizationProvider.from_app_installation_token(token)
        )

    def with_authorization_provider(self, provider: AuthorizationProvider) -> "GitHubBuilder":
        self.authorization_provider = provider
        return self

    def with_transport(self, transport: httpx.BaseTransport) -> "GitHubBuilder":
        self._transport = transport
        return self

    def with_rate_limit_handler(self, handler: RateLimitHandler) -> "GitHubBuilder":
        self._rate_limit_handler = handler
        return self

    def clone(self) -> "GitHubBuilder":
        """Independent copy; later changes to either do not affect the other."""
        other = copy.copy(self)
        other._overrides = dict(self._overrides)
        return other

    def build(self) -> GitHub:
        """Validate the settings and create the root.

        Raises:
            ConfigurationError: If an overridden setting is invalid
        """
        try:
            config = self._config.with_overrides(**self._overrides)
        except ValueError as e:
            raise ConfigurationError(f"Invalid GitHub settings: {e}") from e
        logger.debug(
            "Building GitHub root for %s (anonymous=%s)",
            config.endpoint,
            self.authorization_provider.encoded_authorization() is None,
        )
        return GitHub(
            config,
            authorization=self.authorization_provider,
            transport=self._transport,
            rate_limit_handler=self._rate_limit_handler,
        )

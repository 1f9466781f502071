"""ghkit - typed client for the GitHub REST and GraphQL APIs.

Provides:
- A ``GitHub`` root that owns the HTTP transport and builds requests
- Typed data objects for users, repositories, issues, pull requests and more
- Builders for creating and updating resources, in batch or immediate mode
- Lazy, restartable iteration over paginated listings

Python Version: 3.10+ required
"""

# Logging configuration - configure before other imports
from .logging_config import StructuredFormatter, configure_logging, get_logger

# Initialize structured logging on module import
configure_logging()

from .__version__ import __version__
from .auth import ANONYMOUS, AuthorizationProvider, ImmutableAuthorizationProvider
from .builder import AbstractBuilder, BuilderMode
from .client import GitHubClient
from .config import GitHubConfig, get_config, reset_config
from .errors import (
    ConfigurationError,
    DeserializationError,
    GitHubClientError,
    GraphQLError,
    HttpError,
    NotFoundError,
    RateLimitExceeded,
    ResponseError,
    TransportError,
)
from .github import GitHub, GitHubBuilder
from .paginator import Page, PagedIterable, PagedIterator, PageSource
from .rate_limit import RateLimitHandler
from .request import GitHubRequest
from .requester import Requester

__all__ = [
    "ANONYMOUS",
    "AbstractBuilder",
    "AuthorizationProvider",
    "BuilderMode",
    "ConfigurationError",
    "DeserializationError",
    "GitHub",
    "GitHubBuilder",
    "GitHubClient",
    "GitHubClientError",
    "GitHubConfig",
    "GitHubRequest",
    "GraphQLError",
    "HttpError",
    "ImmutableAuthorizationProvider",
    "NotFoundError",
    "Page",
    "PageSource",
    "PagedIterable",
    "PagedIterator",
    "RateLimitExceeded",
    "RateLimitHandler",
    "Requester",
    "ResponseError",
    "StructuredFormatter",
    "TransportError",
    "__version__",
    "configure_logging",
    "get_config",
    "get_logger",
    "reset_config",
]

"""Configuration management with pydantic-settings for ghkit.

Settings load from (in order of precedence):
1. Environment variables with the ``GITHUB_`` prefix (highest priority)
2. .env file in the working directory
3. Default values (lowest priority)

A ``~/.github`` property file (``key=value`` lines, same keys without the
prefix) can be loaded explicitly with ``GitHubConfig.from_property_file``.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("ghkit.config")

__all__ = [
    "DEFAULT_ENDPOINT",
    "GitHubConfig",
    "get_config",
    "reset_config",
]

DEFAULT_ENDPOINT = "https://api.github.com"
PROPERTY_FILE_NAME = ".github"


class GitHubConfig(BaseSettings):
    """Connection settings for a GitHub API root.

    Attributes:
        endpoint: API root URL (GitHub Enterprise: https://host/api/v3)
        oauth: OAuth / personal access token
        login: Login the OAuth token belongs to (informational)
        jwt: GitHub App JWT
        app_installation_token: GitHub App installation token
        page_size: Default ``per_page`` for paged iterables (None = server default)
        connect_timeout: Connection timeout in seconds
        read_timeout: Read timeout in seconds
        write_timeout: Write timeout in seconds
        pool_timeout: Pool acquisition timeout in seconds
        max_retries: Retries for 5xx, timeouts and rate-limit responses
        min_delay_ms: Minimum delay between two requests in milliseconds
        user_agent: User-Agent header value
    """

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        validate_default=True,
        frozen=True,
        extra="ignore",
    )

    endpoint: str = Field(default=DEFAULT_ENDPOINT, description="GitHub API root URL")

    oauth: SecretStr | None = Field(default=None, description="OAuth or personal access token")
    login: str | None = Field(default=None, description="Login owning the OAuth token")
    jwt: SecretStr | None = Field(default=None, description="GitHub App JWT")
    app_installation_token: SecretStr | None = Field(
        default=None, description="GitHub App installation access token"
    )

    page_size: int | None = Field(
        default=None,
        ge=1,
        le=100,
        description="Default page size for list endpoints. None leaves it to the server.",
    )

    connect_timeout: float = Field(default=5.0, gt=0, le=120)
    read_timeout: float = Field(default=30.0, gt=0, le=600)
    write_timeout: float = Field(default=5.0, gt=0, le=120)
    pool_timeout: float = Field(default=5.0, gt=0, le=120)

    max_retries: int = Field(default=3, ge=0, le=10)
    min_delay_ms: int = Field(default=0, ge=0, le=5000)

    user_agent: str = Field(default="ghkit", min_length=1)

    @field_validator("endpoint", mode="before")
    @classmethod
    def normalize_endpoint(cls, v):
        """Strip whitespace and trailing slashes; require http(s)."""
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            if not v.startswith(("http://", "https://")):
                raise ValueError(f"endpoint must be an http(s) URL, got {v!r}")
        return v

    @model_validator(mode="after")
    def warn_on_multiple_credentials(self) -> "GitHubConfig":
        """JWT wins over OAuth when both are configured."""
        if self.oauth is not None and self.jwt is not None:
            logger.warning("Both GITHUB_OAUTH and GITHUB_JWT are set; using the JWT")
        return self

    @property
    def has_credentials(self) -> bool:
        return any(
            value is not None and value.get_secret_value()
            for value in (self.oauth, self.jwt, self.app_installation_token)
        )

    def with_overrides(self, **values: Any) -> "GitHubConfig":
        """Copy with ``values`` replacing the current settings, re-validated."""
        if not values:
            return self
        return _PropertiesConfig(**{**self.model_dump(), **values})

    @classmethod
    def from_properties(cls, props: dict[str, str]) -> "GitHubConfig":
        """Build a config from a plain mapping, ignoring the environment.

        Keys may carry the ``github_`` prefix or not, in any case.
        """
        values: dict[str, str] = {}
        for key, value in props.items():
            name = key.strip().lower()
            if name.startswith("github_"):
                name = name[len("github_"):]
            if name in cls.model_fields:
                values[name] = value
        return _PropertiesConfig(**values)

    @classmethod
    def from_property_file(cls, path: str | Path | None = None) -> "GitHubConfig":
        """Load a ``key=value`` property file (default ``~/.github``).

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file_path = Path(path) if path is not None else Path.home() / PROPERTY_FILE_NAME
        props: dict[str, str] = {}
        for raw_line in file_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith(("#", "!")):
                continue
            sep = min(
                (i for i in (line.find("="), line.find(":")) if i != -1),
                default=-1,
            )
            if sep == -1:
                continue
            props[line[:sep].strip()] = line[sep + 1:].strip()
        return cls.from_properties(props)


class _PropertiesConfig(GitHubConfig):
    """GitHubConfig fed only by init kwargs (no environment, no .env)."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (init_settings,)


@lru_cache(maxsize=1)
def get_config() -> GitHubConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return
    the cached instance.

    Returns:
        GitHubConfig singleton instance.

    Raises:
        ValidationError: If configuration values are invalid.
    """
    return GitHubConfig()


def reset_config() -> None:
    """Reset configuration singleton for testing.

    Warning:
        Only use in test code. Production code should not reset config.
    """
    get_config.cache_clear()

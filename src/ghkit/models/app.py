"""GitHub App installation tokens."""

from datetime import datetime

from .base import GitHubEnum, GitHubInteractiveObject
from .repository import Repository

__all__ = ["AppInstallationToken", "PermissionType"]


class PermissionType(GitHubEnum):
    ADMIN = "admin"
    WRITE = "write"
    READ = "read"
    NONE = "none"
    UNKNOWN = "unknown"


class AppInstallationToken(GitHubInteractiveObject):
    """Short-lived token scoped to one app installation.

    Pass ``token`` to ``GitHubBuilder.with_app_installation_token`` to act as
    the installation.
    """

    token: str | None = None
    expires_at: datetime | None = None
    permissions: dict[str, PermissionType] = {}
    repository_selection: str | None = None
    repositories: list[Repository] | None = None

    def __repr__(self) -> str:
        return f"AppInstallationToken(expires_at={self.expires_at!r}, token=***)"

"""Installation access token creation for GitHub Apps."""

from typing import TYPE_CHECKING

from ..models.app import AppInstallationToken, PermissionType
from ..request import transform_enum

if TYPE_CHECKING:
    from ..github import GitHub

__all__ = ["AppCreateTokenBuilder"]


class AppCreateTokenBuilder:
    """Narrows a new installation token to repositories and permissions.

    Requires the root to be authenticated with the app's JWT.
    """

    def __init__(self, root: "GitHub", api_tail: str) -> None:
        self.root = root
        self.api_tail = api_tail
        self.requester = root.create_request()

    def permissions(self, permissions: dict[str, PermissionType]) -> "AppCreateTokenBuilder":
        self.requester.with_param(
            "permissions", {name: transform_enum(p) for name, p in permissions.items()}
        )
        return self

    def repositories(self, repositories: list[str]) -> "AppCreateTokenBuilder":
        self.requester.with_param("repositories", repositories)
        return self

    def repository_ids(self, repository_ids: list[int]) -> "AppCreateTokenBuilder":
        self.requester.with_param("repository_ids", repository_ids)
        return self

    def create(self) -> AppInstallationToken:
        return self.requester.method("POST").with_url_path(self.api_tail).fetch(AppInstallationToken)

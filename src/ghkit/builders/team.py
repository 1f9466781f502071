"""Team creation."""

from typing import TYPE_CHECKING

from ..models.team import Permission, Privacy, Team

if TYPE_CHECKING:
    from ..github import GitHub

__all__ = ["TeamBuilder"]


class TeamBuilder:
    """Builds a new team for an organization; ``create()`` sends one POST."""

    def __init__(self, root: "GitHub", org_name: str, name: str) -> None:
        self.root = root
        self.org_name = org_name
        self.requester = root.create_request().with_param("name", name)

    def description(self, description: str) -> "TeamBuilder":
        self.requester.with_param("description", description)
        return self

    def maintainers(self, *logins: str) -> "TeamBuilder":
        self.requester.with_param("maintainers", list(logins))
        return self

    def parent_team_id(self, parent_team_id: int) -> "TeamBuilder":
        self.requester.with_param("parent_team_id", parent_team_id)
        return self

    def permission(self, permission: Permission) -> "TeamBuilder":
        """Default repository permission (deprecated by GitHub but still accepted)."""
        self.requester.with_param("permission", permission)
        return self

    def privacy(self, privacy: Privacy) -> "TeamBuilder":
        self.requester.with_param("privacy", privacy)
        return self

    def repositories(self, *repo_names: str) -> "TeamBuilder":
        """Repositories to add, as ``owner/name``."""
        self.requester.with_param("repo_names", list(repo_names))
        return self

    def create(self) -> Team:
        return (
            self.requester.method("POST")
            .with_url_path("/orgs", self.org_name, "teams")
            .fetch(Team)
        )

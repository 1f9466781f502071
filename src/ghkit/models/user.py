"""Users and organizations."""

from typing import TYPE_CHECKING

from .base import GitHubObject

if TYPE_CHECKING:
    from ..builders.repository import CreateRepositoryBuilder
    from ..builders.team import TeamBuilder
    from ..paginator import PagedIterable
    from .repository import Repository
    from .team import Team

__all__ = ["Organization", "User"]


class User(GitHubObject):
    """A GitHub user account.

    Payloads embedded in other objects (issue authors, reviewers) carry only
    the login and a few URLs; ``GitHub.get_user`` returns the full record.
    """

    login: str | None = None
    name: str | None = None
    email: str | None = None
    company: str | None = None
    location: str | None = None
    blog: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    type: str | None = None
    site_admin: bool = False
    public_repos: int | None = None
    followers: int | None = None
    following: int | None = None

    def list_repositories(self) -> "PagedIterable[Repository]":
        """Public repositories owned by this user."""
        from .repository import Repository

        return (
            self.root.create_request()
            .with_url_path("/users", self.login, "repos")
            .to_iterable(Repository)
        )


class Organization(GitHubObject):
    """A GitHub organization."""

    login: str | None = None
    name: str | None = None
    description: str | None = None
    email: str | None = None
    blog: str | None = None
    location: str | None = None
    avatar_url: str | None = None
    public_repos: int | None = None

    def create_team(self, name: str) -> "TeamBuilder":
        """Start building a new team in this organization."""
        from ..builders.team import TeamBuilder

        return TeamBuilder(self.root, self.login, name)

    def get_team_by_slug(self, slug: str) -> "Team":
        """Fetch a team by its slug.

        Raises:
            NotFoundError: If the organization has no such team
        """
        from .team import Team

        return (
            self.root.create_request()
            .with_url_path("/orgs", self.login, "teams", slug)
            .fetch(Team)
            .wrap(self)
        )

    def list_teams(self) -> "PagedIterable[Team]":
        from .team import Team

        return (
            self.root.create_request()
            .with_url_path("/orgs", self.login, "teams")
            .to_iterable(Team, transform=lambda team: team.wrap(self))
        )

    def create_repository(self, name: str) -> "CreateRepositoryBuilder":
        """Start building a repository owned by this organization."""
        from ..builders.repository import CreateRepositoryBuilder

        return CreateRepositoryBuilder(self.root, name, f"/orgs/{self.login}/repos")

    def list_repositories(self, type: str | None = None) -> "PagedIterable[Repository]":
        """Repositories of this organization.

        Args:
            type: Optional filter: all, public, private, forks, sources, member
        """
        from .repository import Repository

        return (
            self.root.create_request()
            .with_url_path("/orgs", self.login, "repos")
            .with_param("type", type)
            .to_iterable(Repository)
        )

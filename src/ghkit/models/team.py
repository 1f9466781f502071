"""Organization teams."""

from typing import TYPE_CHECKING, Any

from pydantic import PrivateAttr

from .base import GitHubEnum, GitHubObject
from .user import Organization

if TYPE_CHECKING:
    from ..builders.discussion import DiscussionCreator
    from ..paginator import PagedIterable
    from .discussion import Discussion

__all__ = ["Permission", "Privacy", "Team"]


class Privacy(GitHubEnum):
    SECRET = "secret"
    CLOSED = "closed"
    UNKNOWN = "unknown"


class Permission(GitHubEnum):
    """Repository permission granted to a team."""

    ADMIN = "admin"
    MAINTAIN = "maintain"
    PUSH = "push"
    TRIAGE = "triage"
    PULL = "pull"
    UNKNOWN = "unknown"


class Team(GitHubObject):
    """A team within an organization."""

    name: str | None = None
    slug: str | None = None
    description: str | None = None
    privacy: Privacy | None = None
    permission: str | None = None
    members_count: int | None = None
    repos_count: int | None = None
    organization: Organization | None = None

    _organization: Any = PrivateAttr(default=None)

    def wrap(self, organization: Organization) -> "Team":
        self._organization = organization
        return self.wrap_up(organization.root)

    def get_organization(self) -> Organization | None:
        return self._organization or self.organization

    @property
    def discussions_url(self) -> str:
        return f"{self.url}/discussions"

    def create_discussion(self, title: str) -> "DiscussionCreator":
        """Start building a new discussion on this team."""
        from ..builders.discussion import DiscussionCreator

        return DiscussionCreator(self).title(title)

    def get_discussion(self, number: int) -> "Discussion":
        from .discussion import Discussion

        return (
            self.root.create_request()
            .set_raw_url_path(f"{self.discussions_url}/{number}")
            .fetch(Discussion)
            .wrap(self)
        )

    def list_discussions(self) -> "PagedIterable[Discussion]":
        from .discussion import Discussion

        return (
            self.root.create_request()
            .set_raw_url_path(self.discussions_url)
            .to_iterable(Discussion, transform=lambda d: d.wrap(self))
        )

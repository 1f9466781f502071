"""Team discussions.

Discussion URLs are built from the owning team's ``url`` rather than from
organization and team slugs, so requests go through ``set_raw_url_path``.
"""

from typing import TYPE_CHECKING, Any

from pydantic import PrivateAttr

from .base import GitHubObject
from .user import User

if TYPE_CHECKING:
    from ..builders.discussion import DiscussionSetter, DiscussionUpdater
    from .team import Team

__all__ = ["Discussion"]


class Discussion(GitHubObject):
    """A discussion on a team page.

    Two discussions are equal when they belong to the same team and have the
    same number, title and body.
    """

    number: int = 0
    title: str | None = None
    body: str | None = None
    private: bool = False
    pinned: bool = False
    author: User | None = None
    comments_count: int = 0

    _team: Any = PrivateAttr(default=None)

    def wrap(self, team: "Team") -> "Discussion":
        self._team = team
        if not team.is_offline():
            self.wrap_up(team.root)
        return self

    @property
    def team(self) -> "Team | None":
        return self._team

    @property
    def raw_url(self) -> str:
        if self._team is not None:
            return f"{self._team.discussions_url}/{self.number}"
        return self.url or ""

    def set(self) -> "DiscussionSetter":
        from ..builders.discussion import DiscussionSetter

        return DiscussionSetter(self)

    def update(self) -> "DiscussionUpdater":
        from ..builders.discussion import DiscussionUpdater

        return DiscussionUpdater(self)

    def delete(self) -> None:
        self.root.create_request().method("DELETE").set_raw_url_path(self.raw_url).send()

    def _key(self) -> tuple:
        team_url = self._team.url if self._team is not None else None
        return (team_url, self.number, self.title, self.body)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self._key())

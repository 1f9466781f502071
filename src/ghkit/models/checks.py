"""Check suites."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .base import GitHubObject, GitUser
from .pull_request import PullRequest
from .repository import Repository

__all__ = ["CheckSuite", "HeadCommit"]


class HeadCommit(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    tree_id: str | None = None
    message: str | None = None
    timestamp: datetime | None = None
    author: GitUser | None = None
    committer: GitUser | None = None


class CheckSuite(GitHubObject):
    """A suite of check runs for one commit.

    The embedded pull requests are minimal records; ``get_pull_requests``
    fetches the full record for any that lack a title.
    """

    head_branch: str | None = None
    head_sha: str | None = None
    status: str | None = None
    conclusion: str | None = None
    before: str | None = None
    after: str | None = None
    latest_check_runs_count: int = 0
    check_runs_url: str | None = None
    head_commit: HeadCommit | None = None
    pull_requests: list[PullRequest] = []
    repository: Repository | None = None

    _owner: Any = PrivateAttr(default=None)

    def wrap(self, owner: Repository) -> "CheckSuite":
        """Attach the repository, and attach every embedded pull request to it."""
        self._owner = owner
        if not owner.is_offline():
            self.wrap_up(owner.root)
        for pull_request in self.pull_requests:
            pull_request.wrap(owner)
        return self

    @property
    def owner(self) -> Repository | None:
        return self._owner

    def get_pull_requests(self) -> list[PullRequest]:
        for pull_request in self.pull_requests:
            if pull_request.title is None:
                pull_request.refresh()
        return list(self.pull_requests)

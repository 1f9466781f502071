"""Commits as returned by the repository commits API."""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .base import GitHubInteractiveObject, GitUser
from .user import User

if TYPE_CHECKING:
    from .repository import Repository

__all__ = ["Commit", "CommitFile", "CommitInfo", "CommitPointerRef", "CommitStats"]


class CommitPointerRef(BaseModel):
    """SHA plus URL reference to a tree or parent commit."""

    model_config = ConfigDict(extra="ignore")

    sha: str | None = None
    url: str | None = None
    html_url: str | None = None


class CommitInfo(BaseModel):
    """The git-level part of a commit: identities, message and tree."""

    model_config = ConfigDict(extra="ignore")

    author: GitUser | None = None
    committer: GitUser | None = None
    message: str | None = None
    comment_count: int = 0
    tree: CommitPointerRef | None = None


class CommitStats(BaseModel):
    model_config = ConfigDict(extra="ignore")

    additions: int = 0
    deletions: int = 0
    total: int = 0


class CommitFile(GitHubInteractiveObject):
    """A file changed by a commit or pull request."""

    sha: str | None = None
    filename: str | None = None
    status: str | None = None
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    blob_url: str | None = None
    raw_url: str | None = None
    contents_url: str | None = None
    patch: str | None = None
    previous_filename: str | None = None


class Commit(GitHubInteractiveObject):
    """A commit in a repository.

    ``files`` and ``stats`` are only present when the commit is fetched
    individually, not in listings.
    """

    sha: str | None = None
    node_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    comments_url: str | None = None
    commit: CommitInfo | None = None
    author: User | None = None
    committer: User | None = None
    parents: list[CommitPointerRef] = []
    stats: CommitStats | None = None
    files: list[CommitFile] = []

    _owner: Any = PrivateAttr(default=None)

    def wrap(self, owner: "Repository") -> "Commit":
        self._owner = owner
        if not owner.is_offline():
            self.wrap_up(owner.root)
        return self

    @property
    def repository(self) -> "Repository | None":
        return self._owner

    @property
    def message(self) -> str | None:
        return self.commit.message if self.commit else None

    @property
    def parent_shas(self) -> list[str]:
        return [p.sha for p in self.parents if p.sha]

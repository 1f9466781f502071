"""Repositories and the operations scoped to them."""

from typing import TYPE_CHECKING

from .base import GitHubEnum, GitHubObject
from .user import User

if TYPE_CHECKING:
    from ..builders.commit_query import CommitQueryBuilder
    from ..builders.issue import IssueBuilder
    from ..builders.pull_request import PullRequestQueryBuilder
    from ..builders.repository import RepositorySetter, RepositoryUpdater
    from ..paginator import PagedIterable
    from .checks import CheckSuite
    from .commit import Commit
    from .issue import Issue, IssueState
    from .pull_request import PullRequest
    from .tree import Tree

__all__ = ["Repository", "Visibility"]


class Visibility(GitHubEnum):
    PUBLIC = "public"
    PRIVATE = "private"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


class Repository(GitHubObject):
    """A GitHub repository.

    Attributes:
        full_name: ``owner/name``
        owner: Owning user or organization (as a user record)
    """

    name: str | None = None
    full_name: str | None = None
    description: str | None = None
    homepage: str | None = None
    owner: User | None = None
    private: bool = False
    visibility: Visibility | None = None
    fork: bool = False
    archived: bool = False
    disabled: bool = False
    is_template: bool = False
    default_branch: str | None = None
    clone_url: str | None = None
    ssh_url: str | None = None
    language: str | None = None
    has_issues: bool = False
    has_wiki: bool = False
    has_projects: bool = False
    has_downloads: bool = False
    allow_forking: bool | None = None
    allow_merge_commit: bool | None = None
    allow_rebase_merge: bool | None = None
    allow_squash_merge: bool | None = None
    delete_branch_on_merge: bool | None = None
    forks_count: int | None = None
    stargazers_count: int | None = None
    open_issues_count: int | None = None
    pushed_at: str | None = None

    @property
    def owner_name(self) -> str | None:
        if self.owner is not None and self.owner.login:
            return self.owner.login
        if self.full_name and "/" in self.full_name:
            return self.full_name.split("/", 1)[0]
        return None

    def api_tail_url(self, tail: str = "") -> str:
        """API path of this repository, optionally extended by ``tail``."""
        path = f"/repos/{self.owner_name}/{self.name}"
        if tail:
            path = f"{path}/{tail.lstrip('/')}"
        return path

    # --- Issues ---

    def create_issue(self, title: str) -> "IssueBuilder":
        from ..builders.issue import IssueBuilder

        return IssueBuilder(self, title)

    def get_issue(self, number: int) -> "Issue":
        from .issue import Issue

        return (
            self.root.create_request()
            .with_url_path(self.api_tail_url("issues"), number)
            .fetch(Issue)
            .wrap(self)
        )

    def list_issues(self, state: "IssueState | None" = None) -> "PagedIterable[Issue]":
        """Issues of this repository (the API also includes pull requests).

        Args:
            state: OPEN (server default), CLOSED or ALL
        """
        from .issue import Issue

        return (
            self.root.create_request()
            .with_url_path(self.api_tail_url("issues"))
            .with_param("state", state)
            .to_iterable(Issue, transform=lambda issue: issue.wrap(self))
        )

    # --- Pull requests ---

    def create_pull_request(
        self,
        title: str,
        head: str,
        base: str,
        body: str | None = None,
        maintainer_can_modify: bool = True,
        draft: bool = False,
    ) -> "PullRequest":
        """Open a pull request.

        Args:
            title: Pull request title
            head: Branch with the changes, ``user:branch`` for cross-repository
            base: Branch the changes are merged into
            body: Optional description
            maintainer_can_modify: Allow maintainers to push to the head branch
            draft: Open as a draft
        """
        from .pull_request import PullRequest

        return (
            self.root.create_request()
            .method("POST")
            .with_param("title", title)
            .with_param("head", head)
            .with_param("base", base)
            .with_param("body", body)
            .with_param("maintainer_can_modify", maintainer_can_modify)
            .with_param("draft", draft)
            .with_url_path(self.api_tail_url("pulls"))
            .fetch(PullRequest)
            .wrap(self)
        )

    def get_pull_request(self, number: int) -> "PullRequest":
        from .pull_request import PullRequest

        return (
            self.root.create_request()
            .with_url_path(self.api_tail_url("pulls"), number)
            .fetch(PullRequest)
            .wrap(self)
        )

    def query_pull_requests(self) -> "PullRequestQueryBuilder":
        from ..builders.pull_request import PullRequestQueryBuilder

        return PullRequestQueryBuilder(self)

    def list_pull_requests(self, state: "IssueState | None" = None) -> "PagedIterable[PullRequest]":
        return self.query_pull_requests().state(state).list()

    # --- Git data ---

    def query_commits(self) -> "CommitQueryBuilder":
        from ..builders.commit_query import CommitQueryBuilder

        return CommitQueryBuilder(self)

    def get_commit(self, sha: str) -> "Commit":
        from .commit import Commit

        return (
            self.root.create_request()
            .with_url_path(self.api_tail_url("commits"), sha)
            .fetch(Commit)
            .wrap(self)
        )

    def get_tree(self, sha: str) -> "Tree":
        """Fetch one level of the git tree ``sha`` (a tree SHA or a ref)."""
        from .tree import Tree

        return (
            self.root.create_request()
            .with_url_path(self.api_tail_url("git/trees"), sha)
            .fetch(Tree)
            .wrap(self)
        )

    def get_tree_recursive(self, sha: str, recursive: int = 1) -> "Tree":
        """Fetch the git tree ``sha`` including every nested entry.

        The response may be truncated by the server; check ``Tree.truncated``.
        """
        from .tree import Tree

        return (
            self.root.create_request()
            .with_url_path(self.api_tail_url("git/trees"), sha)
            .with_param("recursive", recursive)
            .fetch(Tree)
            .wrap(self)
        )

    # --- Checks ---

    def get_check_suite(self, check_suite_id: int) -> "CheckSuite":
        from .checks import CheckSuite

        return (
            self.root.create_request()
            .with_url_path(self.api_tail_url("check-suites"), check_suite_id)
            .fetch(CheckSuite)
            .wrap(self)
        )

    def list_check_suites(self, ref: str) -> "PagedIterable[CheckSuite]":
        """Check suites for a commit SHA, branch or tag."""
        from .checks import CheckSuite

        return (
            self.root.create_request()
            .with_url_path(self.api_tail_url("commits"), ref, "check-suites")
            .to_iterable(
                CheckSuite,
                transform=lambda suite: suite.wrap(self),
                items_key="check_suites",
            )
        )

    # --- Settings ---

    def update(self) -> "RepositoryUpdater":
        """Batch several setting changes into one PATCH."""
        from ..builders.repository import RepositoryUpdater

        return RepositoryUpdater(self)

    def set(self) -> "RepositorySetter":
        """Change one setting at a time; each call sends immediately."""
        from ..builders.repository import RepositorySetter

        return RepositorySetter(self)

    def archive(self) -> "Repository":
        """Archive the repository. Archiving cannot be undone through the API."""
        return self.set().archive()

    def delete(self) -> None:
        self.root.create_request().method("DELETE").with_url_path(self.api_tail_url()).send()

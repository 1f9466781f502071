"""Pull requests.

A pull request listed from a repository or returned from search carries
only part of its detail (mergeability, line counts, merge state). The
accessors for those fields fetch the full record on first use.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

from .base import GitHubEnum
from .commit import Commit, CommitFile
from .issue import Issue
from .repository import Repository
from .team import Team
from .user import User

if TYPE_CHECKING:
    from ..builders.review import PullRequestReviewBuilder, PullRequestReviewCommentBuilder
    from ..paginator import PagedIterable
    from .review import PullRequestReview, PullRequestReviewComment

logger = logging.getLogger("ghkit.models.pull_request")

__all__ = [
    "AutoMerge",
    "CommitPointer",
    "MergeMethod",
    "PullRequest",
    "PullRequestCommitDetail",
    "PullRequestFileDetail",
]

ENABLE_AUTO_MERGE_MUTATION = """\
mutation EnableAutoMerge($input: EnablePullRequestAutoMergeInput!) {
  enablePullRequestAutoMerge(input: $input) {
    pullRequest { id }
  }
}"""


class MergeMethod(GitHubEnum):
    MERGE = "merge"
    REBASE = "rebase"
    SQUASH = "squash"


class CommitPointer(BaseModel):
    """Head or base of a pull request: a ref in some repository."""

    model_config = ConfigDict(extra="ignore")

    label: str | None = None
    ref: str | None = None
    sha: str | None = None
    user: User | None = None
    repo: Repository | None = None


class AutoMerge(BaseModel):
    model_config = ConfigDict(extra="ignore")

    enabled_by: User | None = None
    merge_method: MergeMethod | None = None
    commit_title: str | None = None
    commit_message: str | None = None


class PullRequestFileDetail(CommitFile):
    """A file changed by a pull request."""


class PullRequestCommitDetail(Commit):
    """A commit listed on a pull request."""

    _pull_request: Any = PrivateAttr(default=None)

    def wrap(self, owner: "PullRequest") -> "PullRequestCommitDetail":  # type: ignore[override]
        self._pull_request = owner
        self._owner = owner.repository
        if not owner.is_offline():
            self.wrap_up(owner.root)
        return self

    @property
    def pull_request(self) -> "PullRequest | None":
        return self._pull_request


class PullRequest(Issue):
    """A pull request.

    Attributes:
        head: Branch with the proposed changes
        base: Branch the changes would be merged into
    """

    head: CommitPointer | None = None
    base: CommitPointer | None = None
    draft: bool = False
    merged: bool = False
    merged_at: datetime | None = None
    merged_by: User | None = None
    merge_commit_sha: str | None = None
    mergeable: bool | None = None
    mergeable_state: str | None = None
    maintainer_can_modify: bool = False
    additions: int = 0
    deletions: int = 0
    commits: int = 0
    changed_files: int = 0
    review_comments: int = 0
    requested_reviewers: list[User] | None = None
    requested_teams: list[Team] | None = None
    auto_merge: AutoMerge | None = None
    diff_url: str | None = None
    patch_url: str | None = None
    issue_url: str | None = None

    @property
    def api_route(self) -> str:
        """``/repos/{owner}/{repo}/pulls/{number}``.

        Pull requests returned from issue search have no owning repository and
        an ``/issues/`` url; the route is then derived from the url.
        """
        if self._owner is not None:
            return self._owner.api_tail_url(f"pulls/{self.number}")
        return self._route_from_url().replace("/issues/", "/pulls/")

    # --- Lazy detail ---

    def refresh(self) -> "PullRequest":
        """Re-fetch this pull request from the pulls API, updating it in place."""
        if self.is_offline():
            return self
        url = self.root.api_url + self.api_route
        self.root.create_request().set_raw_url_path(url).fetch_into(self)
        return self

    def _populate(self) -> None:
        # mergeable_state is only present on individually fetched records
        if self.mergeable_state is None:
            self.refresh()

    def get_mergeable(self) -> bool | None:
        """Mergeability; None while GitHub is still computing it."""
        if self.mergeable is None:
            self.refresh()
        return self.mergeable

    def get_mergeable_state(self) -> str | None:
        self._populate()
        return self.mergeable_state

    def is_merged(self) -> bool:
        self._populate()
        return self.merged

    def is_draft(self) -> bool:
        self._populate()
        return self.draft

    def can_maintainer_modify(self) -> bool:
        self._populate()
        return self.maintainer_can_modify

    def get_additions(self) -> int:
        self._populate()
        return self.additions

    def get_deletions(self) -> int:
        self._populate()
        return self.deletions

    def get_commits(self) -> int:
        self._populate()
        return self.commits

    def get_changed_files(self) -> int:
        self._populate()
        return self.changed_files

    def get_review_comments(self) -> int:
        self._populate()
        return self.review_comments

    def get_merged_by(self) -> User | None:
        self._populate()
        return self.merged_by

    def get_merge_commit_sha(self) -> str | None:
        self._populate()
        return self.merge_commit_sha

    def get_requested_reviewers(self) -> list[User]:
        if self.requested_reviewers is None:
            self.refresh()
        return list(self.requested_reviewers or [])

    def get_requested_teams(self) -> list[Team]:
        if self.requested_teams is None:
            self.refresh()
        return list(self.requested_teams or [])

    # --- Listings ---

    def list_commits(self) -> "PagedIterable[PullRequestCommitDetail]":
        return (
            self.root.create_request()
            .with_url_path(self.api_route + "/commits")
            .to_iterable(PullRequestCommitDetail, transform=lambda c: c.wrap(self))
        )

    def list_files(self) -> "PagedIterable[PullRequestFileDetail]":
        return (
            self.root.create_request()
            .with_url_path(self.api_route + "/files")
            .to_iterable(PullRequestFileDetail)
        )

    def list_reviews(self) -> "PagedIterable[PullRequestReview]":
        from .review import PullRequestReview

        return (
            self.root.create_request()
            .with_url_path(self.api_route + "/reviews")
            .to_iterable(PullRequestReview, transform=lambda r: r.wrap(self))
        )

    def list_review_comments(self) -> "PagedIterable[PullRequestReviewComment]":
        from .review import PullRequestReviewComment

        return (
            self.root.create_request()
            .with_url_path(self.api_route + "/comments")
            .to_iterable(PullRequestReviewComment, transform=lambda c: c.wrap(self))
        )

    # --- Actions ---

    def merge(
        self,
        message: str | None = None,
        sha: str | None = None,
        method: MergeMethod | None = None,
    ) -> None:
        """Merge the pull request.

        Args:
            message: Extra detail for the merge commit message
            sha: Head SHA the merge must match
            method: MERGE, SQUASH or REBASE (repository default when None)
        """
        (
            self.root.create_request()
            .method("PUT")
            .with_param("commit_message", message)
            .with_param("sha", sha)
            .with_param("merge_method", method)
            .with_url_path(self.api_route + "/merge")
            .send()
        )

    def request_reviewers(self, reviewers: list[User | str]) -> None:
        logins = [r.login if isinstance(r, User) else r for r in reviewers]
        (
            self.root.create_request()
            .method("POST")
            .with_param("reviewers", logins)
            .with_url_path(self.api_route + "/requested_reviewers")
            .send()
        )

    def request_team_reviewers(self, teams: list[Team | str]) -> None:
        slugs = [t.slug if isinstance(t, Team) else t for t in teams]
        (
            self.root.create_request()
            .method("POST")
            .with_param("team_reviewers", slugs)
            .with_url_path(self.api_route + "/requested_reviewers")
            .send()
        )

    def set_base_branch(self, base: str) -> "PullRequest":
        """Retarget the pull request; returns the updated record."""
        updated = (
            self.root.create_request()
            .method("PATCH")
            .with_param("base", base)
            .with_url_path(self.api_route)
            .fetch(PullRequest)
        )
        return updated.wrap(self._owner) if self._owner is not None else updated

    def update_branch(self) -> None:
        """Merge the base branch into the head branch."""
        expected = self.head.sha if self.head else None
        (
            self.root.create_request()
            .method("PUT")
            .with_param("expected_head_sha", expected)
            .with_url_path(self.api_route + "/update-branch")
            .send()
        )

    def create_review(self) -> "PullRequestReviewBuilder":
        from ..builders.review import PullRequestReviewBuilder

        return PullRequestReviewBuilder(self)

    def create_review_comment(self) -> "PullRequestReviewCommentBuilder":
        from ..builders.review import PullRequestReviewCommentBuilder

        return PullRequestReviewCommentBuilder(self)

    def enable_auto_merge(
        self,
        author_email: str | None = None,
        client_mutation_id: str | None = None,
        commit_body: str | None = None,
        commit_headline: str | None = None,
        expected_head_oid: str | None = None,
        merge_method: MergeMethod | None = None,
    ) -> "PullRequest":
        """Enable auto-merge through the GraphQL API, then refresh.

        Raises:
            GraphQLError: If the mutation is rejected
        """
        mutation_input: dict[str, Any] = {"pullRequestId": self.node_id}
        optional = {
            "authorEmail": author_email,
            "clientMutationId": client_mutation_id,
            "commitBody": commit_body,
            "commitHeadline": commit_headline,
            "expectedHeadOid": expected_head_oid,
            # GraphQL enum values are the upper-case names
            "mergeMethod": merge_method.name if merge_method else None,
        }
        mutation_input.update({k: v for k, v in optional.items() if v is not None})

        self.root.create_graphql_request(
            ENABLE_AUTO_MERGE_MUTATION, {"input": mutation_input}
        ).send_graphql()
        logger.debug("Auto-merge enabled for %s", self.api_route)
        return self.refresh()


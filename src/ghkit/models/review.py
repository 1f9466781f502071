"""Pull request reviews and review comments."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import PrivateAttr

from .base import GitHubEnum, GitHubObject
from .user import User

if TYPE_CHECKING:
    from ..paginator import PagedIterable
    from .pull_request import PullRequest

__all__ = [
    "PullRequestReview",
    "PullRequestReviewComment",
    "ReviewEvent",
    "ReviewState",
]


class ReviewState(GitHubEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    UNKNOWN = "UNKNOWN"


class ReviewEvent(GitHubEnum):
    """Action taken when a review is submitted."""

    APPROVE = "APPROVE"
    REQUEST_CHANGES = "REQUEST_CHANGES"
    COMMENT = "COMMENT"
    PENDING = "PENDING"

    @property
    def action(self) -> str | None:
        """Wire value of the ``event`` parameter; pending reviews send none."""
        return None if self is ReviewEvent.PENDING else self.value

    def to_state(self) -> ReviewState:
        return _EVENT_STATES[self]


_EVENT_STATES = {
    ReviewEvent.PENDING: ReviewState.PENDING,
    ReviewEvent.APPROVE: ReviewState.APPROVED,
    ReviewEvent.REQUEST_CHANGES: ReviewState.CHANGES_REQUESTED,
    ReviewEvent.COMMENT: ReviewState.COMMENTED,
}


class PullRequestReview(GitHubObject):
    """A review on a pull request."""

    body: str | None = None
    commit_id: str | None = None
    state: ReviewState | None = None
    submitted_at: datetime | None = None
    user: User | None = None

    _owner: Any = PrivateAttr(default=None)

    def wrap(self, owner: "PullRequest") -> "PullRequestReview":
        self._owner = owner
        if not owner.is_offline():
            self.wrap_up(owner.root)
        return self

    @property
    def parent(self) -> "PullRequest | None":
        return self._owner

    @property
    def api_route(self) -> str:
        return f"{self._owner.api_route}/reviews/{self.id}"

    def submit(self, body: str, event: ReviewEvent) -> "PullRequestReview":
        """Submit a pending review, updating this object in place."""
        (
            self.root.create_request()
            .method("POST")
            .with_param("body", body)
            .with_param("event", event.action)
            .with_url_path(self.api_route + "/events")
            .fetch_into(self)
        )
        self.body = body
        self.state = event.to_state()
        return self

    def dismiss(self, message: str) -> None:
        (
            self.root.create_request()
            .method("PUT")
            .with_param("message", message)
            .with_url_path(self.api_route + "/dismissals")
            .send()
        )
        self.state = ReviewState.DISMISSED

    def delete(self) -> None:
        """Delete a pending review."""
        self.root.create_request().method("DELETE").with_url_path(self.api_route).send()

    def list_review_comments(self) -> "PagedIterable[PullRequestReviewComment]":
        return (
            self.root.create_request()
            .with_url_path(self.api_route + "/comments")
            .to_iterable(PullRequestReviewComment, transform=lambda c: c.wrap(self._owner))
        )


class PullRequestReviewComment(GitHubObject):
    """A comment on a line of a pull request diff."""

    body: str | None = None
    user: User | None = None
    path: str | None = None
    position: int | None = None
    original_position: int | None = None
    line: int | None = None
    original_line: int | None = None
    start_line: int | None = None
    side: str | None = None
    start_side: str | None = None
    commit_id: str | None = None
    original_commit_id: str | None = None
    diff_hunk: str | None = None
    in_reply_to_id: int | None = None
    pull_request_review_id: int | None = None

    _owner: Any = PrivateAttr(default=None)

    def wrap(self, owner: "PullRequest") -> "PullRequestReviewComment":
        self._owner = owner
        if not owner.is_offline():
            self.wrap_up(owner.root)
        return self

    @property
    def parent(self) -> "PullRequest | None":
        return self._owner

    @property
    def api_route(self) -> str:
        pulls_route = self._owner.api_route.rsplit("/", 1)[0]
        return f"{pulls_route}/comments/{self.id}"

    def update(self, body: str) -> "PullRequestReviewComment":
        (
            self.root.create_request()
            .method("PATCH")
            .with_param("body", body)
            .with_url_path(self.api_route)
            .fetch_into(self)
        )
        return self

    def delete(self) -> None:
        self.root.create_request().method("DELETE").with_url_path(self.api_route).send()

    def reply(self, body: str) -> "PullRequestReviewComment":
        """Reply in this comment's thread."""
        return (
            self.root.create_request()
            .method("POST")
            .with_param("body", body)
            .with_url_path(f"{self._owner.api_route}/comments/{self.id}/replies")
            .fetch(PullRequestReviewComment)
            .wrap(self._owner)
        )

"""Pull request review and review comment creation."""

from typing import Any

from ..models.base import GitHubEnum
from ..models.pull_request import PullRequest
from ..models.review import PullRequestReview, PullRequestReviewComment, ReviewEvent

__all__ = ["PullRequestReviewBuilder", "PullRequestReviewCommentBuilder", "Side"]


class Side(GitHubEnum):
    """Side of a split diff a comment applies to."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"
    UNKNOWN = "UNKNOWN"


class PullRequestReviewBuilder:
    """Builds a review, optionally with draft line comments.

    Without an ``event`` the review is created pending and can be submitted
    later with ``PullRequestReview.submit``.

    Example:
        >>> review = (
        ...     pr.create_review()
        ...     .body("Looks good overall")
        ...     .single_line_comment("Typo here", "README.md", 3)
        ...     .event(ReviewEvent.COMMENT)
        ...     .create()
        ... )
    """

    def __init__(self, pull_request: PullRequest) -> None:
        self.pull_request = pull_request
        self.requester = pull_request.root.create_request()
        self._comments: list[dict[str, Any]] = []

    def commit_id(self, commit_id: str) -> "PullRequestReviewBuilder":
        """SHA of the commit the review applies to; defaults to the latest."""
        self.requester.with_param("commit_id", commit_id)
        return self

    def body(self, body: str) -> "PullRequestReviewBuilder":
        self.requester.with_param("body", body)
        return self

    def event(self, event: ReviewEvent) -> "PullRequestReviewBuilder":
        self.requester.with_param("event", event.action)
        return self

    def comment(self, body: str, path: str, position: int) -> "PullRequestReviewBuilder":
        """Comment at a diff ``position`` (lines below the first @@ hunk header)."""
        self._comments.append({"body": body, "path": path, "position": position})
        return self

    def single_line_comment(self, body: str, path: str, line: int) -> "PullRequestReviewBuilder":
        self._comments.append({"body": body, "path": path, "line": line})
        return self

    def multi_line_comment(
        self, body: str, path: str, start_line: int, line: int
    ) -> "PullRequestReviewBuilder":
        self._comments.append(
            {"body": body, "path": path, "start_line": start_line, "line": line}
        )
        return self

    def create(self) -> PullRequestReview:
        if self._comments:
            self.requester.with_param("comments", self._comments)
        return (
            self.requester.method("POST")
            .with_url_path(self.pull_request.api_route + "/reviews")
            .fetch(PullRequestReview)
            .wrap(self.pull_request)
        )


class PullRequestReviewCommentBuilder:
    """Builds a single review comment outside of a review."""

    def __init__(self, pull_request: PullRequest) -> None:
        self.pull_request = pull_request
        self.requester = pull_request.root.create_request()

    def commit_id(self, commit_id: str) -> "PullRequestReviewCommentBuilder":
        self.requester.with_param("commit_id", commit_id)
        return self

    def body(self, body: str) -> "PullRequestReviewCommentBuilder":
        self.requester.with_param("body", body)
        return self

    def path(self, path: str) -> "PullRequestReviewCommentBuilder":
        self.requester.with_param("path", path)
        return self

    def in_reply_to(self, comment_id: int) -> "PullRequestReviewCommentBuilder":
        self.requester.with_param("in_reply_to", comment_id)
        return self

    def line(self, line: int) -> "PullRequestReviewCommentBuilder":
        self.requester.with_param("line", line)
        return self

    def lines(self, start_line: int, end_line: int) -> "PullRequestReviewCommentBuilder":
        self.requester.with_param("start_line", start_line).with_param("line", end_line)
        return self

    def side(self, side: Side) -> "PullRequestReviewCommentBuilder":
        self.requester.with_param("side", side)
        return self

    def start_side(self, side: Side) -> "PullRequestReviewCommentBuilder":
        self.requester.with_param("start_side", side)
        return self

    def position(self, position: int) -> "PullRequestReviewCommentBuilder":
        self.requester.with_param("position", position)
        return self

    def create(self) -> PullRequestReviewComment:
        return (
            self.requester.method("POST")
            .with_url_path(self.pull_request.api_route + "/comments")
            .fetch(PullRequestReviewComment)
            .wrap(self.pull_request)
        )

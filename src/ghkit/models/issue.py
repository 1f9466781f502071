"""Issues, their comments, labels, milestones and reactions."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, PrivateAttr

from ..errors import ConfigurationError
from .base import GitHubEnum, GitHubObject
from .user import User

if TYPE_CHECKING:
    from ..paginator import PagedIterable
    from .repository import Repository

__all__ = [
    "Issue",
    "IssueComment",
    "IssueState",
    "Label",
    "Milestone",
    "Reaction",
    "ReactionContent",
]


class IssueState(GitHubEnum):
    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class ReactionContent(GitHubEnum):
    PLUS_ONE = "+1"
    MINUS_ONE = "-1"
    LAUGH = "laugh"
    CONFUSED = "confused"
    HEART = "heart"
    HOORAY = "hooray"
    ROCKET = "rocket"
    EYES = "eyes"
    UNKNOWN = "unknown"


class Label(GitHubObject):
    name: str | None = None
    color: str | None = None
    description: str | None = None
    default: bool = False


class Milestone(GitHubObject):
    number: int | None = None
    title: str | None = None
    description: str | None = None
    state: str | None = None
    open_issues: int | None = None
    closed_issues: int | None = None
    due_on: datetime | None = None
    closed_at: datetime | None = None


class PullRequestLink(BaseModel):
    """Present on issues that are pull requests."""

    url: str | None = None
    html_url: str | None = None
    diff_url: str | None = None
    patch_url: str | None = None


class Reaction(GitHubObject):
    content: ReactionContent | None = None
    user: User | None = None


class Issue(GitHubObject):
    """An issue (or, through the issues API, a pull request).

    Issues fetched through a repository are attached to it; issues returned
    from search have no owner and derive their API route from ``url``.
    """

    number: int = 0
    title: str | None = None
    body: str | None = None
    state: IssueState | None = None
    state_reason: str | None = None
    user: User | None = None
    labels: list[Label] = []
    assignee: User | None = None
    assignees: list[User] = []
    milestone: Milestone | None = None
    comments: int = 0
    locked: bool = False
    closed_at: datetime | None = None
    closed_by: User | None = None
    repository_url: str | None = None
    pull_request: PullRequestLink | None = None

    _owner: Any = PrivateAttr(default=None)

    def wrap(self, owner: "Repository") -> "Issue":
        """Attach the repository this issue belongs to."""
        self._owner = owner
        if owner is not None and not owner.is_offline():
            self.wrap_up(owner.root)
        return self

    @property
    def repository(self) -> "Repository | None":
        return self._owner

    def is_pull_request(self) -> bool:
        return self.pull_request is not None

    @property
    def api_route(self) -> str:
        return self.issues_api_route

    @property
    def issues_api_route(self) -> str:
        """Route under /issues/, also for pull requests (comments, labels)."""
        if self._owner is not None:
            return self._owner.api_tail_url(f"issues/{self.number}")
        return self._route_from_url().replace("/pulls/", "/issues/")

    def _route_from_url(self) -> str:
        if not self.url:
            raise ConfigurationError(f"{type(self).__name__} #{self.number} has no url")
        route = self.url.replace(self.root.api_url, "", 1)
        return route if route.startswith("/") else "/" + route

    def _edit(self, name: str, value: Any) -> "Issue":
        return (
            self.root.create_request()
            .method("PATCH")
            .with_param(name, value)
            .with_url_path(self.api_route)
            .fetch_into(self)
        )

    def comment(self, body: str) -> "IssueComment":
        """Add a comment and return it."""
        return (
            self.root.create_request()
            .method("POST")
            .with_param("body", body)
            .with_url_path(self.issues_api_route + "/comments")
            .fetch(IssueComment)
            .wrap(self)
        )

    def list_comments(self, since: datetime | None = None) -> "PagedIterable[IssueComment]":
        return (
            self.root.create_request()
            .with_url_path(self.issues_api_route + "/comments")
            .with_param("since", since)
            .to_iterable(IssueComment, transform=lambda c: c.wrap(self))
        )

    def close(self, reason: str | None = None) -> "Issue":
        """Close the issue, optionally with a ``state_reason`` (completed, not_planned)."""
        if reason is not None:
            return (
                self.root.create_request()
                .method("PATCH")
                .with_param("state", IssueState.CLOSED)
                .with_param("state_reason", reason)
                .with_url_path(self.api_route)
                .fetch_into(self)
            )
        return self._edit("state", IssueState.CLOSED)

    def reopen(self) -> "Issue":
        return self._edit("state", IssueState.OPEN)

    def set_title(self, title: str) -> "Issue":
        return self._edit("title", title)

    def set_body(self, body: str) -> "Issue":
        return self._edit("body", body)

    def add_labels(self, *labels: str | Label) -> list[Label]:
        """Add labels and return the issue's full label set."""
        names = [label.name if isinstance(label, Label) else label for label in labels]
        data = (
            self.root.create_request()
            .method("POST")
            .with_param("labels", names)
            .with_url_path(self.issues_api_route + "/labels")
            .fetch_json()
        )
        self.labels = [Label.model_validate(item).wrap_up(self.root) for item in data or []]
        return self.labels


class IssueComment(GitHubObject):
    """A comment on an issue or pull request conversation."""

    body: str | None = None
    user: User | None = None
    author_association: str | None = None

    _owner: Any = PrivateAttr(default=None)

    def wrap(self, owner: Issue) -> "IssueComment":
        self._owner = owner
        if not owner.is_offline():
            self.wrap_up(owner.root)
        return self

    @property
    def parent(self) -> Issue | None:
        return self._owner

    @property
    def api_route(self) -> str:
        issue_route = self._owner.issues_api_route
        repo_route = issue_route.rsplit("/issues/", 1)[0]
        return f"{repo_route}/issues/comments/{self.id}"

    def update(self, body: str) -> "IssueComment":
        """Replace the comment body."""
        self.root.create_request().method("PATCH").with_param("body", body).with_url_path(
            self.api_route
        ).fetch(IssueComment)
        self.body = body
        return self

    def delete(self) -> None:
        self.root.create_request().method("DELETE").with_url_path(self.api_route).send()

    def create_reaction(self, content: ReactionContent) -> Reaction:
        return (
            self.root.create_request()
            .method("POST")
            .with_param("content", content)
            .with_url_path(self.api_route + "/reactions")
            .fetch(Reaction)
        )

    def delete_reaction(self, reaction: Reaction) -> None:
        self.root.create_request().method("DELETE").with_url_path(
            self.api_route, "reactions", reaction.id
        ).send()

    def list_reactions(self) -> "PagedIterable[Reaction]":
        return (
            self.root.create_request()
            .with_url_path(self.api_route + "/reactions")
            .to_iterable(Reaction)
        )

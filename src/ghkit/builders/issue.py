"""Issue creation."""

from ..models.issue import Issue, Milestone
from ..models.repository import Repository
from ..models.user import User

__all__ = ["IssueBuilder"]


class IssueBuilder:
    """Collects issue fields; ``create()`` sends one POST.

    Labels and assignees accumulate across calls. ``None`` arguments are
    ignored.
    """

    def __init__(self, repository: Repository, title: str) -> None:
        self.repository = repository
        self.requester = repository.root.create_request().method("POST").with_param("title", title)
        self._labels: list[str] = []
        self._assignees: list[str] = []

    def assignee(self, user: User | str | None) -> "IssueBuilder":
        if user is not None:
            self._assignees.append(user.login if isinstance(user, User) else user)
        return self

    def body(self, body: str | None) -> "IssueBuilder":
        self.requester.with_param("body", body)
        return self

    def label(self, label: str | None) -> "IssueBuilder":
        if label is not None:
            self._labels.append(label)
        return self

    def milestone(self, milestone: Milestone | int | None) -> "IssueBuilder":
        if isinstance(milestone, Milestone):
            milestone = milestone.number
        self.requester.with_param("milestone", milestone)
        return self

    def create(self) -> Issue:
        return (
            self.requester.with_param("labels", self._labels)
            .with_param("assignees", self._assignees)
            .with_url_path(self.repository.api_tail_url("issues"))
            .fetch(Issue)
            .wrap(self.repository)
        )

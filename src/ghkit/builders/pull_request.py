"""Pull request listing filters."""

from ..models.base import GitHubEnum
from ..models.issue import IssueState
from ..models.pull_request import PullRequest
from ..models.repository import Repository
from ..paginator import PagedIterable, validate_page_size

__all__ = ["Direction", "PullRequestQueryBuilder", "PullRequestSort"]


class PullRequestSort(GitHubEnum):
    CREATED = "created"
    UPDATED = "updated"
    POPULARITY = "popularity"
    LONG_RUNNING = "long-running"


class Direction(GitHubEnum):
    ASC = "asc"
    DESC = "desc"


class PullRequestQueryBuilder:
    """Filters for ``GET /repos/{owner}/{repo}/pulls``."""

    def __init__(self, repository: Repository) -> None:
        self.repository = repository
        self.requester = repository.root.create_request()

    def state(self, state: IssueState | None) -> "PullRequestQueryBuilder":
        self.requester.with_param("state", state)
        return self

    def head(self, head: str | None) -> "PullRequestQueryBuilder":
        """Head branch; an unqualified branch name is taken from the repository owner."""
        if head is not None and ":" not in head:
            head = f"{self.repository.owner_name}:{head}"
        self.requester.with_param("head", head)
        return self

    def base(self, base: str | None) -> "PullRequestQueryBuilder":
        self.requester.with_param("base", base)
        return self

    def sort(self, sort: PullRequestSort) -> "PullRequestQueryBuilder":
        self.requester.with_param("sort", sort)
        return self

    def direction(self, direction: Direction) -> "PullRequestQueryBuilder":
        self.requester.with_param("direction", direction)
        return self

    def page_size(self, page_size: int) -> "PullRequestQueryBuilder":
        self.requester.with_param("per_page", validate_page_size(page_size))
        return self

    def list(self) -> PagedIterable[PullRequest]:
        return self.requester.with_url_path(self.repository.api_tail_url("pulls")).to_iterable(
            PullRequest, transform=lambda pr: pr.wrap(self.repository)
        )

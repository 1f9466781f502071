"""Commit listing filters."""

from datetime import datetime, timezone

from ..models.commit import Commit
from ..models.repository import Repository
from ..paginator import PagedIterable, validate_page_size

__all__ = ["CommitQueryBuilder"]


def _as_datetime(value: datetime | int) -> datetime:
    # Integers are epoch milliseconds
    if isinstance(value, datetime):
        return value
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


class CommitQueryBuilder:
    """Filters for ``GET /repos/{owner}/{repo}/commits``.

    Example:
        >>> commits = repo.query_commits().path("README.md").since(week_ago).list()
    """

    def __init__(self, repository: Repository) -> None:
        self.repository = repository
        self.requester = repository.root.create_request()

    def author(self, author: str) -> "CommitQueryBuilder":
        """Login or email address of the commit author."""
        self.requester.with_param("author", author)
        return self

    def from_(self, ref: str) -> "CommitQueryBuilder":
        """SHA or branch to start listing from."""
        self.requester.with_param("sha", ref)
        return self

    def page_size(self, page_size: int) -> "CommitQueryBuilder":
        self.requester.with_param("per_page", validate_page_size(page_size))
        return self

    def path(self, path: str) -> "CommitQueryBuilder":
        self.requester.with_param("path", path)
        return self

    def since(self, since: datetime | int) -> "CommitQueryBuilder":
        self.requester.with_param("since", _as_datetime(since))
        return self

    def until(self, until: datetime | int) -> "CommitQueryBuilder":
        self.requester.with_param("until", _as_datetime(until))
        return self

    def list(self) -> PagedIterable[Commit]:
        return self.requester.with_url_path(self.repository.api_tail_url("commits")).to_iterable(
            Commit, transform=lambda c: c.wrap(self.repository)
        )

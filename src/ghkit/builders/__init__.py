"""Typed builders for creating and updating GitHub resources."""

from .app_token import AppCreateTokenBuilder
from .commit_query import CommitQueryBuilder
from .discussion import DiscussionCreator, DiscussionSetter, DiscussionUpdater
from .gist import GistUpdater
from .issue import IssueBuilder
from .pull_request import Direction, PullRequestQueryBuilder, PullRequestSort
from .repository import CreateRepositoryBuilder, RepositorySetter, RepositoryUpdater
from .review import PullRequestReviewBuilder, PullRequestReviewCommentBuilder, Side
from .team import TeamBuilder

__all__ = [
    "AppCreateTokenBuilder",
    "CommitQueryBuilder",
    "CreateRepositoryBuilder",
    "Direction",
    "DiscussionCreator",
    "DiscussionSetter",
    "DiscussionUpdater",
    "GistUpdater",
    "IssueBuilder",
    "PullRequestQueryBuilder",
    "PullRequestReviewBuilder",
    "PullRequestReviewCommentBuilder",
    "PullRequestSort",
    "RepositorySetter",
    "RepositoryUpdater",
    "Side",
    "TeamBuilder",
]

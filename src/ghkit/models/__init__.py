"""Data objects deserialized from GitHub API payloads."""

from .app import AppInstallationToken, PermissionType
from .base import GitHubEnum, GitHubInteractiveObject, GitHubObject, GitUser
from .checks import CheckSuite, HeadCommit
from .commit import Commit, CommitFile, CommitInfo, CommitStats
from .discussion import Discussion
from .gist import Gist, GistFile
from .issue import Issue, IssueComment, IssueState, Label, Milestone, Reaction, ReactionContent
from .pull_request import (
    AutoMerge,
    CommitPointer,
    MergeMethod,
    PullRequest,
    PullRequestCommitDetail,
    PullRequestFileDetail,
)
from .repository import Repository, Visibility
from .review import PullRequestReview, PullRequestReviewComment, ReviewEvent, ReviewState
from .team import Permission, Privacy, Team
from .tree import Tree, TreeEntry
from .user import Organization, User

__all__ = [
    "AppInstallationToken",
    "AutoMerge",
    "CheckSuite",
    "Commit",
    "CommitFile",
    "CommitInfo",
    "CommitPointer",
    "CommitStats",
    "Discussion",
    "Gist",
    "GistFile",
    "GitHubEnum",
    "GitHubInteractiveObject",
    "GitHubObject",
    "GitUser",
    "HeadCommit",
    "Issue",
    "IssueComment",
    "IssueState",
    "Label",
    "MergeMethod",
    "Milestone",
    "Organization",
    "Permission",
    "PermissionType",
    "Privacy",
    "PullRequest",
    "PullRequestCommitDetail",
    "PullRequestFileDetail",
    "PullRequestReview",
    "PullRequestReviewComment",
    "Reaction",
    "ReactionContent",
    "Repository",
    "ReviewEvent",
    "ReviewState",
    "Team",
    "Tree",
    "TreeEntry",
    "User",
    "Visibility",
]

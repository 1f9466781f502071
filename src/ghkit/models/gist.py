"""Gists."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from .base import GitHubObject
from .user import User

if TYPE_CHECKING:
    from ..builders.gist import GistUpdater

__all__ = ["Gist", "GistFile"]


class GistFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    filename: str | None = None
    type: str | None = None
    language: str | None = None
    raw_url: str | None = None
    size: int = 0
    truncated: bool = False
    content: str | None = None


class Gist(GitHubObject):
    """A gist. Gist ids are hex strings, not integers."""

    id: str | None = None  # type: ignore[assignment]
    description: str | None = None
    public: bool = False
    owner: User | None = None
    files: dict[str, GistFile] = {}
    comments: int = 0
    git_pull_url: str | None = None
    git_push_url: str | None = None

    def api_tail_url(self, tail: str = "") -> str:
        path = f"/gists/{self.id}"
        if tail:
            path = f"{path}/{tail.lstrip('/')}"
        return path

    def get_file(self, name: str) -> GistFile | None:
        return self.files.get(name)

    def update(self) -> "GistUpdater":
        """Start a batch edit of files and description."""
        from ..builders.gist import GistUpdater

        return GistUpdater(self)

    def delete(self) -> None:
        self.root.create_request().method("DELETE").with_url_path(self.api_tail_url()).send()

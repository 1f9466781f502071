"""Git trees."""

from typing import TYPE_CHECKING, Any

from pydantic import PrivateAttr

from .base import GitHubInteractiveObject

if TYPE_CHECKING:
    from .repository import Repository

__all__ = ["Tree", "TreeEntry"]


class TreeEntry(GitHubInteractiveObject):
    """One entry of a git tree: a blob, a subtree or a submodule commit."""

    path: str | None = None
    mode: str | None = None
    type: str | None = None
    sha: str | None = None
    size: int | None = None
    url: str | None = None

    _tree: Any = PrivateAttr(default=None)

    @property
    def tree(self) -> "Tree | None":
        return self._tree


class Tree(GitHubInteractiveObject):
    """A git tree. ``truncated`` is set when a recursive listing hit the server limit."""

    sha: str | None = None
    url: str | None = None
    tree: list[TreeEntry] = []
    truncated: bool = False

    _owner: Any = PrivateAttr(default=None)

    def wrap(self, owner: "Repository") -> "Tree":
        self._owner = owner
        if not owner.is_offline():
            self.wrap_up(owner.root)
        for entry in self.tree:
            entry._tree = self
        return self

    @property
    def repository(self) -> "Repository | None":
        return self._owner

    def get_entry(self, path: str) -> TreeEntry | None:
        """Entry with exactly this path, or None."""
        for entry in self.tree:
            if entry.path == path:
                return entry
        return None

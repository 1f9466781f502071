"""Base classes for GitHub data objects.

Data objects are pydantic models deserialized from API payloads. Construction
is two-phase: the payload is validated into a plain record, then
``wrap_up(root)`` (and, for child resources, ``wrap(parent)``) attaches the
back-references the object's own methods need. The requester and the
paginator always attach before handing an object to the caller.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

from ..errors import ConfigurationError

if TYPE_CHECKING:
    from ..github import GitHub

__all__ = [
    "GitHubEnum",
    "GitHubInteractiveObject",
    "GitHubObject",
    "GitUser",
]

T = TypeVar("T", bound="GitHubInteractiveObject")


class GitHubEnum(str, Enum):
    """String enum whose unknown wire values map to UNKNOWN when defined.

    Note: Uses (str, Enum) so members compare equal to their wire strings.
    """

    @classmethod
    def _missing_(cls, value: object) -> Any:
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return cls.__members__.get("UNKNOWN")


class GitHubInteractiveObject(BaseModel):
    """A data object that can issue further requests through its root."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    _root: Any = PrivateAttr(default=None)

    def wrap_up(self: T, root: "GitHub") -> T:
        """Attach the GitHub root this object talks through."""
        self._root = root
        return self

    @property
    def root(self) -> "GitHub":
        if self._root is None:
            raise ConfigurationError(
                f"{type(self).__name__} is not attached to a GitHub root"
            )
        return self._root

    def is_offline(self) -> bool:
        return self._root is None

    def update_from(self: T, other: T) -> T:
        """Overwrite every field with the values of ``other``, in place.

        Back-references (private attributes) are left untouched.
        """
        for name in type(self).model_fields:
            setattr(self, name, getattr(other, name))
        object.__setattr__(self, "__pydantic_fields_set__", set(other.model_fields_set))
        return self


class GitHubObject(GitHubInteractiveObject):
    """Common fields of addressable GitHub resources.

    Two objects are equal when they are of the same type and carry the same
    ``id``; objects without an id are only equal to themselves.
    """

    id: int | None = None
    node_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        if self.id is None or other.id is None:  # type: ignore[attr-defined]
            return self is other
        return self.id == other.id  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        if self.id is None:
            return id(self)
        return hash((type(self).__name__, self.id))


class GitUser(BaseModel):
    """Author or committer identity embedded in git objects."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    username: str | None = None
    date: datetime | None = None

"""Base class for create/update builders.

A builder wraps one ``Requester`` and exposes typed setters. In
``BuilderMode.BATCH`` every setter records a parameter and returns the builder
so calls chain until ``done()`` sends a single request. In
``BuilderMode.IMMEDIATE`` every setter sends its own request and returns the
resulting object.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .errors import ConfigurationError
from .models.base import GitHubInteractiveObject
from .requester import Requester

if TYPE_CHECKING:
    from .github import GitHub

F = TypeVar("F", bound=GitHubInteractiveObject)
S = TypeVar("S")


class BuilderMode(str, Enum):
    """Dispatch mode of a builder."""

    BATCH = "batch"
    IMMEDIATE = "immediate"


class AbstractBuilder(Generic[F, S]):
    """Shared machinery for typed request builders.

    Args:
        root: GitHub root the request is sent through
        final_type: Model class the response is deserialized into
        mode: BATCH (setters chain, ``done()`` sends) or IMMEDIATE
        base_instance: Existing object to update; None for create builders

    Raises:
        ConfigurationError: On an invalid mode, a final type that is not a
            model class, or a base instance of the wrong type
    """

    def __init__(
        self,
        root: "GitHub",
        final_type: type[F],
        mode: BuilderMode,
        base_instance: F | None = None,
    ) -> None:
        if not isinstance(mode, BuilderMode):
            raise ConfigurationError(f"Unknown builder mode: {mode!r}")
        if not (isinstance(final_type, type) and issubclass(final_type, GitHubInteractiveObject)):
            raise ConfigurationError(f"final_type must be a ghkit model class, got {final_type!r}")
        if base_instance is not None and not isinstance(base_instance, final_type):
            raise ConfigurationError(
                f"base_instance must be a {final_type.__name__}, got {type(base_instance).__name__}"
            )

        self.root = root
        self.requester: Requester = root.create_request()
        self._final_type = final_type
        self._mode = mode
        self._base_instance = base_instance
        self._update_in_place = base_instance is not None

    @property
    def mode(self) -> BuilderMode:
        return self._mode

    def in_place(self, update_in_place: bool) -> "AbstractBuilder[F, S]":
        """Choose between updating the base instance and returning a new object."""
        self._update_in_place = update_in_place
        return self

    def _with(self, name: str, value: Any) -> S:
        """Record ``name`` and return the builder, or send it in IMMEDIATE mode."""
        self.requester.with_param(name, value)
        return self._continue()

    def _with_nullable(self, name: str, value: Any) -> S:
        self.requester.with_nullable(name, value)
        return self._continue()

    def _continue(self) -> S:
        if self._mode is BuilderMode.IMMEDIATE:
            return self.done()  # type: ignore[return-value]
        return self  # type: ignore[return-value]

    def done(self) -> F:
        """Send the accumulated request and return the resulting object.

        Each call sends again.
        """
        if self._update_in_place and self._base_instance is not None:
            return self.requester.fetch_into(self._base_instance)
        return self.requester.fetch(self._final_type)

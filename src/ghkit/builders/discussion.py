"""Team discussion builders."""

from typing import TypeVar

from ..builder import AbstractBuilder, BuilderMode
from ..models.discussion import Discussion
from ..models.team import Team

S = TypeVar("S")

__all__ = ["DiscussionCreator", "DiscussionSetter", "DiscussionUpdater"]


class DiscussionBuilder(AbstractBuilder[Discussion, S]):
    """Setters shared by discussion creation and editing."""

    def __init__(
        self,
        team: Team,
        mode: BuilderMode,
        base_instance: Discussion | None = None,
    ) -> None:
        super().__init__(team.root, Discussion, mode, base_instance)
        self.team = team

    def title(self, title: str) -> S:
        return self._with("title", title)

    def body(self, body: str) -> S:
        return self._with("body", body)

    def done(self) -> Discussion:
        return super().done().wrap(self.team)


class DiscussionCreator(DiscussionBuilder["DiscussionCreator"]):
    def __init__(self, team: Team) -> None:
        super().__init__(team, BuilderMode.BATCH)
        self.requester.method("POST").set_raw_url_path(team.discussions_url)

    def private(self, value: bool) -> "DiscussionCreator":
        return self._with("private", value)

    def create(self) -> Discussion:
        return self.done()


class DiscussionUpdater(DiscussionBuilder["DiscussionUpdater"]):
    """Batches title/body edits into one PATCH."""

    def __init__(self, discussion: Discussion) -> None:
        super().__init__(discussion.team, BuilderMode.BATCH, discussion)
        self.requester.method("PATCH").set_raw_url_path(discussion.raw_url)


class DiscussionSetter(DiscussionBuilder[Discussion]):
    """Each setter sends its own PATCH."""

    def __init__(self, discussion: Discussion) -> None:
        super().__init__(discussion.team, BuilderMode.IMMEDIATE, discussion)
        self.requester.method("PATCH").set_raw_url_path(discussion.raw_url)

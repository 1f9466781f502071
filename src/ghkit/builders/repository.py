"""Repository create/update builders."""

from typing import TYPE_CHECKING, TypeVar

from ..builder import AbstractBuilder, BuilderMode
from ..errors import ConfigurationError
from ..models.repository import Repository, Visibility
from ..models.team import Team

if TYPE_CHECKING:
    from ..github import GitHub

S = TypeVar("S")

__all__ = ["CreateRepositoryBuilder", "RepositorySetter", "RepositoryUpdater"]


class RepositoryBuilder(AbstractBuilder[Repository, S]):
    """Setters shared by repository creation and settings updates."""

    def allow_forking(self, enabled: bool) -> S:
        return self._with("allow_forking", enabled)

    def allow_merge_commit(self, enabled: bool) -> S:
        return self._with("allow_merge_commit", enabled)

    def allow_rebase_merge(self, enabled: bool) -> S:
        return self._with("allow_rebase_merge", enabled)

    def allow_squash_merge(self, enabled: bool) -> S:
        return self._with("allow_squash_merge", enabled)

    def default_branch(self, branch: str) -> S:
        return self._with("default_branch", branch)

    def delete_branch_on_merge(self, enabled: bool) -> S:
        return self._with("delete_branch_on_merge", enabled)

    def description(self, description: str) -> S:
        return self._with("description", description)

    def downloads(self, enabled: bool) -> S:
        return self._with("has_downloads", enabled)

    def homepage(self, homepage: str) -> S:
        return self._with("homepage", homepage)

    def is_template(self, enabled: bool) -> S:
        return self._with("is_template", enabled)

    def issues(self, enabled: bool) -> S:
        return self._with("has_issues", enabled)

    def private(self, enabled: bool) -> S:
        return self._with("private", enabled)

    def projects(self, enabled: bool) -> S:
        return self._with("has_projects", enabled)

    def visibility(self, visibility: Visibility) -> S:
        return self._with("visibility", visibility)

    def wiki(self, enabled: bool) -> S:
        return self._with("has_wiki", enabled)

    def archive(self) -> S:
        return self._with("archived", True)

    def name(self, name: str) -> S:
        return self._with("name", name)


class CreateRepositoryBuilder(RepositoryBuilder["CreateRepositoryBuilder"]):
    """Creates a repository with a single POST.

    Example:
        >>> repo = (
        ...     org.create_repository("hello")
        ...     .description("Hello, world")
        ...     .private(True)
        ...     .auto_init(True)
        ...     .create()
        ... )
    """

    def __init__(self, root: "GitHub", name: str, api_tail: str) -> None:
        super().__init__(root, Repository, BuilderMode.BATCH)
        self.requester.method("POST").with_url_path(api_tail)
        self.name(name)

    def auto_init(self, enabled: bool) -> "CreateRepositoryBuilder":
        return self._with("auto_init", enabled)

    def from_template_repository(
        self, template: Repository | str, template_repo: str | None = None
    ) -> "CreateRepositoryBuilder":
        """Generate the repository from a template.

        Args:
            template: Template repository, or the template owner's login
            template_repo: Template repository name when ``template`` is a login

        Raises:
            ConfigurationError: If the repository is not marked as a template
        """
        if isinstance(template, Repository):
            if not template.is_template:
                raise ConfigurationError(
                    f"{template.full_name} is not a template repository"
                )
            owner, repo = template.owner_name, template.name
        else:
            if not template_repo:
                raise ConfigurationError("template_repo is required with a template owner")
            owner, repo = template, template_repo
        self.requester.with_url_path("/repos", owner, repo, "generate")
        return self

    def gitignore_template(self, language: str) -> "CreateRepositoryBuilder":
        return self._with("gitignore_template", language)

    def license_template(self, license: str) -> "CreateRepositoryBuilder":
        return self._with("license_template", license)

    def owner(self, owner: str) -> "CreateRepositoryBuilder":
        return self._with("owner", owner)

    def team(self, team: Team | None) -> "CreateRepositoryBuilder":
        if team is None:
            return self
        return self._with("team_id", team.id)

    def create(self) -> Repository:
        return self.done()


class RepositoryUpdater(RepositoryBuilder["RepositoryUpdater"]):
    """Accumulates setting changes; ``done()`` sends one PATCH."""

    def __init__(self, repository: Repository) -> None:
        super().__init__(repository.root, Repository, BuilderMode.BATCH, repository)
        self.requester.method("PATCH").with_url_path(repository.api_tail_url())


class RepositorySetter(RepositoryBuilder[Repository]):
    """Each setter sends its own PATCH and returns the updated repository."""

    def __init__(self, repository: Repository) -> None:
        super().__init__(repository.root, Repository, BuilderMode.IMMEDIATE, repository)
        self.requester.method("PATCH").with_url_path(repository.api_tail_url())

"""Unit tests for AbstractBuilder batch and immediate dispatch."""

import pytest

from ghkit import AbstractBuilder, BuilderMode, ConfigurationError
from ghkit.builders import CreateRepositoryBuilder, RepositorySetter, RepositoryUpdater
from ghkit.models import Issue, Organization, Repository, Visibility
from payloads import repo_json, user_json

REPO_PATH = "/repos/octo/hello"


class TestConstruction:
    """Misuse is reported when the builder is created, before any request."""

    def test_unknown_mode_rejected(self, gh):
        with pytest.raises(ConfigurationError):
            AbstractBuilder(gh, Repository, "sometimes")

    def test_final_type_must_be_model_class(self, gh):
        with pytest.raises(ConfigurationError):
            AbstractBuilder(gh, dict, BuilderMode.BATCH)

    def test_base_instance_must_match_final_type(self, gh, repo):
        with pytest.raises(ConfigurationError):
            AbstractBuilder(gh, Issue, BuilderMode.BATCH, base_instance=repo)

    def test_configuration_error_is_value_error(self, gh):
        with pytest.raises(ValueError):
            AbstractBuilder(gh, Repository, None)


class TestBatchMode:
    def test_setters_chain_without_sending(self, repo, transport):
        updater = repo.update().description("Hi").homepage("https://example.com").wiki(False)

        assert isinstance(updater, RepositoryUpdater)
        assert updater.mode is BuilderMode.BATCH
        assert transport.requests == []

    def test_done_sends_exactly_one_request(self, repo, transport):
        transport.add("PATCH", REPO_PATH, repo_json(description="Hi", homepage="https://example.com"))

        repo.update().description("Hi").homepage("https://example.com").wiki(False).done()

        assert len(transport.requests) == 1
        assert transport.body(transport.last) == {
            "description": "Hi",
            "homepage": "https://example.com",
            "has_wiki": False,
        }

    def test_update_is_applied_in_place(self, repo, transport):
        transport.add("PATCH", REPO_PATH, repo_json(description="Hi"))

        result = repo.update().description("Hi").done()

        assert result is repo
        assert repo.description == "Hi"
        assert repo.root is not None

    def test_in_place_false_returns_new_object(self, repo, transport):
        transport.add("PATCH", REPO_PATH, repo_json(description="Hi"))

        result = repo.update().in_place(False).description("Hi").done()

        assert result is not repo
        assert result.description == "Hi"
        assert repo.description is None

    def test_enum_setter_uses_wire_value(self, repo, transport):
        transport.add("PATCH", REPO_PATH, repo_json(visibility="internal"))

        repo.update().visibility(Visibility.INTERNAL).done()

        assert transport.body(transport.last) == {"visibility": "internal"}
        assert repo.visibility is Visibility.INTERNAL


class TestImmediateMode:
    def test_each_setter_sends_and_returns_object(self, repo, transport):
        transport.add("PATCH", REPO_PATH, repo_json(description="Now"))

        setter = repo.set()
        result = setter.description("Now")

        assert isinstance(setter, RepositorySetter)
        assert setter.mode is BuilderMode.IMMEDIATE
        assert result is repo
        assert repo.description == "Now"
        assert len(transport.requests) == 1
        assert transport.body(transport.last) == {"description": "Now"}

    def test_archive_sends_archived_flag(self, repo, transport):
        transport.add("PATCH", REPO_PATH, repo_json(archived=True))

        repo.archive()

        assert transport.body(transport.last) == {"archived": True}
        assert repo.archived is True


class TestCreateRepository:
    def test_create_posts_once(self, gh, transport):
        transport.add("POST", "/user/repos", repo_json(name="new", private=True), status=201)

        builder = gh.create_repository("new").description("A new repo").private(True).auto_init(True)
        assert transport.requests == []
        created = builder.create()

        assert isinstance(builder, CreateRepositoryBuilder)
        assert created.name == "new"
        assert created.root is gh
        assert transport.body(transport.last) == {
            "name": "new",
            "description": "A new repo",
            "private": True,
            "auto_init": True,
        }

    def test_from_template_repository(self, gh, transport):
        template = Repository.model_validate(repo_json(name="tmpl", is_template=True)).wrap_up(gh)
        transport.add("POST", "/repos/octo/tmpl/generate", repo_json(name="copy"), status=201)

        gh.create_repository("copy").owner("octo").from_template_repository(template).create()

        assert transport.last.url.path == "/repos/octo/tmpl/generate"
        assert transport.body(transport.last) == {"name": "copy", "owner": "octo"}

    def test_non_template_repository_rejected(self, gh, repo):
        with pytest.raises(ConfigurationError):
            gh.create_repository("copy").from_template_repository(repo)

    def test_organization_repository(self, gh, transport):
        org = Organization.model_validate(user_json("octo-org", id=9)).wrap_up(gh)
        transport.add("POST", "/orgs/octo-org/repos", repo_json("octo-org", "svc"), status=201)

        repo = org.create_repository("svc").create()

        assert repo.full_name == "octo-org/svc"
        assert transport.body(transport.last) == {"name": "svc"}

    def test_done_can_be_repeated(self, gh, transport):
        """Each done() sends again; the builder holds no completion state."""
        transport.add("POST", "/user/repos", repo_json(name="new"), status=201)
        builder = gh.create_repository("new")

        builder.create()
        builder.create()

        assert len(transport.calls("POST")) == 2

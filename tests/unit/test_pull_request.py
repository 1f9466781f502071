"""Tests for pull requests: lazy detail, actions, reviews and search results."""

import pytest

from ghkit import ConfigurationError, GraphQLError
from ghkit.builders import Direction, PullRequestSort, Side
from ghkit.models import (
    IssueState,
    MergeMethod,
    PullRequest,
    PullRequestReview,
    ReviewEvent,
    ReviewState,
    User,
)
from payloads import API, full_pr_json, pr_json, user_json

PR_PATH = "/repos/octo/hello/pulls/7"


def _review_json(id: int = 80, state: str = "PENDING", **extra) -> dict:
    data = {
        "id": id,
        "node_id": f"PRR_{id}",
        "body": "",
        "state": state,
        "user": user_json(),
        "commit_id": "abc123",
    }
    data.update(extra)
    return data


def _review_comment_json(id: int = 90, **extra) -> dict:
    data = {
        "id": id,
        "body": "Typo",
        "path": "README.md",
        "line": 3,
        "side": "RIGHT",
        "user": user_json(),
        "url": f"{API}/repos/octo/hello/pulls/comments/{id}",
    }
    data.update(extra)
    return data


# =============================================================================
# Lazy detail
# =============================================================================


class TestLazyDetail:
    """Listing records lack detail; the first detail accessor fetches it once."""

    def test_listing_shape_has_no_detail(self, pull_request, transport):
        assert pull_request.mergeable_state is None
        assert transport.requests == []

    def test_detail_fetched_on_first_access(self, pull_request, transport):
        transport.add("GET", PR_PATH, full_pr_json(7))

        assert pull_request.get_additions() == 12
        assert pull_request.get_deletions() == 3
        assert pull_request.get_commits() == 2
        assert pull_request.get_changed_files() == 4
        assert pull_request.get_review_comments() == 1
        assert pull_request.get_mergeable_state() == "clean"
        assert pull_request.can_maintainer_modify() is True

        assert len(transport.requests) == 1

    def test_mergeable_and_reviewers(self, pull_request, transport):
        transport.add("GET", PR_PATH, full_pr_json(7))

        assert pull_request.get_mergeable() is True
        assert [u.login for u in pull_request.get_requested_reviewers()] == ["hubot"]
        assert pull_request.get_requested_teams() == []
        assert len(transport.requests) == 1

    def test_mergeable_still_computing(self, pull_request, transport):
        transport.add("GET", PR_PATH, full_pr_json(7, mergeable=None))

        assert pull_request.get_mergeable() is None

    def test_refresh_keeps_identity_and_owner(self, pull_request, repo, transport):
        transport.add("GET", PR_PATH, full_pr_json(7, title="Updated"))

        result = pull_request.refresh()

        assert result is pull_request
        assert pull_request.title == "Updated"
        assert pull_request.repository is repo

    def test_offline_refresh_is_noop(self):
        pr = PullRequest.model_validate(pr_json(7))
        assert pr.refresh() is pr


class TestSearchResults:
    """Search returns pull requests with issue urls and no owning repository."""

    def test_route_derived_from_issue_url(self, gh, transport):
        transport.add(
            "GET",
            "/search/issues",
            {"items": [pr_json(3, url=f"{API}/repos/octo/hello/issues/3")]},
        )
        transport.add("GET", "/repos/octo/hello/pulls/3", full_pr_json(3))

        pr = gh.search_pull_requests("repo:octo/hello").first()

        assert pr.repository is None
        assert pr.api_route == "/repos/octo/hello/pulls/3"
        assert pr.issues_api_route == "/repos/octo/hello/issues/3"
        assert pr.is_merged() is False
        assert transport.last.url.path == "/repos/octo/hello/pulls/3"

    def test_comment_on_search_result_uses_issues_route(self, gh, transport):
        transport.add("GET", "/search/issues", {"items": [pr_json(3)]})
        transport.add(
            "POST", "/repos/octo/hello/issues/3/comments", {"id": 5, "body": "hi"}, status=201
        )

        pr = gh.search_pull_requests("repo:octo/hello").first()
        comment = pr.comment("hi")

        assert comment.body == "hi"
        assert comment.parent is pr


# =============================================================================
# Actions
# =============================================================================


class TestActions:
    def test_merge(self, pull_request, transport):
        transport.add("PUT", f"{PR_PATH}/merge", {"merged": True, "sha": "fff"})

        pull_request.merge("Ship it", sha="abc123", method=MergeMethod.SQUASH)

        assert transport.body(transport.last) == {
            "commit_message": "Ship it",
            "sha": "abc123",
            "merge_method": "squash",
        }

    def test_merge_defaults_send_no_params(self, pull_request, transport):
        transport.add("PUT", f"{PR_PATH}/merge", {"merged": True})

        pull_request.merge()

        assert transport.body(transport.last) is None

    def test_request_reviewers(self, pull_request, transport, gh):
        transport.add("POST", f"{PR_PATH}/requested_reviewers", pr_json(7), status=201)
        hubot = User.model_validate(user_json("hubot", 3)).wrap_up(gh)

        pull_request.request_reviewers([hubot, "monalisa"])

        assert transport.body(transport.last) == {"reviewers": ["hubot", "monalisa"]}

    def test_request_team_reviewers(self, pull_request, transport):
        transport.add("POST", f"{PR_PATH}/requested_reviewers", pr_json(7), status=201)

        pull_request.request_team_reviewers(["core"])

        assert transport.body(transport.last) == {"team_reviewers": ["core"]}

    def test_set_base_branch(self, pull_request, repo, transport):
        updated_json = pr_json(7)
        updated_json["base"]["ref"] = "develop"
        transport.add("PATCH", PR_PATH, updated_json)

        updated = pull_request.set_base_branch("develop")

        assert updated.base.ref == "develop"
        assert updated.repository is repo
        assert transport.body(transport.last) == {"base": "develop"}

    def test_update_branch_sends_expected_head(self, pull_request, transport):
        transport.add("PUT", f"{PR_PATH}/update-branch", {"message": "Updating"}, status=202)

        pull_request.update_branch()

        assert transport.body(transport.last) == {"expected_head_sha": "abc123"}

    def test_close_patches_pull_request(self, pull_request, transport):
        closed = pr_json(7, state="closed")
        transport.add("PATCH", PR_PATH, closed)

        pull_request.close()

        assert transport.last.url.path == PR_PATH
        assert pull_request.state is IssueState.CLOSED

    def test_labels_go_through_issues_api(self, pull_request, transport):
        transport.add(
            "POST",
            "/repos/octo/hello/issues/7/labels",
            [{"id": 1, "name": "bug"}, {"id": 2, "name": "ui"}],
        )

        labels = pull_request.add_labels("bug", "ui")

        assert [label.name for label in labels] == ["bug", "ui"]
        assert transport.body(transport.last) == {"labels": ["bug", "ui"]}


class TestAutoMerge:
    def test_enable_auto_merge_sends_mutation_then_refreshes(self, pull_request, transport):
        transport.add("POST", "/graphql", {"data": {"enablePullRequestAutoMerge": {"pullRequest": {"id": "PR_7"}}}})
        transport.add("GET", PR_PATH, full_pr_json(7, auto_merge={"merge_method": "squash"}))

        pull_request.enable_auto_merge(
            commit_headline="Ship",
            expected_head_oid="abc123",
            merge_method=MergeMethod.SQUASH,
        )

        graphql = transport.calls("POST")[0]
        payload = transport.body(graphql)
        assert "enablePullRequestAutoMerge" in payload["query"]
        assert payload["variables"] == {
            "input": {
                "pullRequestId": "PR_7",
                "commitHeadline": "Ship",
                "expectedHeadOid": "abc123",
                "mergeMethod": "SQUASH",
            }
        }
        assert pull_request.auto_merge.merge_method is MergeMethod.SQUASH

    def test_rejected_mutation_raises(self, pull_request, transport):
        transport.add("POST", "/graphql", {"errors": [{"message": "Auto merge is not allowed"}]})

        with pytest.raises(GraphQLError):
            pull_request.enable_auto_merge()

        assert transport.calls("GET") == []


class TestListings:
    def test_list_commits_attached_to_pull_request(self, pull_request, repo, transport):
        transport.add_page(
            f"{PR_PATH}/commits",
            [{"sha": "abc123", "commit": {"message": "Fix"}, "parents": [{"sha": "000"}]}],
        )

        commits = pull_request.list_commits().to_list()

        assert commits[0].pull_request is pull_request
        assert commits[0].repository is repo
        assert commits[0].message == "Fix"

    def test_list_files(self, pull_request, transport):
        transport.add_page(
            f"{PR_PATH}/files",
            [{"sha": "f1", "filename": "README.md", "status": "modified", "additions": 2}],
        )

        files = pull_request.list_files().to_list()

        assert files[0].filename == "README.md"
        assert files[0].additions == 2


class TestQueryBuilder:
    def test_filters_become_query_params(self, repo, transport):
        transport.add_page("/repos/octo/hello/pulls", [pr_json(1)])

        prs = (
            repo.query_pull_requests()
            .state(IssueState.ALL)
            .head("feature")
            .base("main")
            .sort(PullRequestSort.LONG_RUNNING)
            .direction(Direction.ASC)
            .list()
            .to_list()
        )

        params = transport.last.url.params
        assert params["state"] == "all"
        assert params["head"] == "octo:feature"
        assert params["base"] == "main"
        assert params["sort"] == "long-running"
        assert params["direction"] == "asc"
        assert prs[0].repository is repo

    def test_qualified_head_kept(self, repo):
        iterable = repo.query_pull_requests().head("fork:feature").list()
        assert iterable.request.query_param("head") == "fork:feature"

    def test_list_pull_requests_by_state(self, repo):
        iterable = repo.list_pull_requests(IssueState.CLOSED)
        assert iterable.request.query_param("state") == "closed"

    @pytest.mark.parametrize("size", [0, 101])
    def test_page_size_out_of_range(self, repo, transport, size):
        with pytest.raises(ConfigurationError):
            repo.query_pull_requests().page_size(size)
        assert transport.requests == []

    def test_page_size_sent_as_per_page(self, repo):
        iterable = repo.query_pull_requests().page_size(100).list()
        assert iterable.request.query_param("per_page") == "100"


# =============================================================================
# Reviews
# =============================================================================


class TestReviews:
    def test_review_with_comments(self, pull_request, transport):
        transport.add("POST", f"{PR_PATH}/reviews", _review_json(state="COMMENTED"))

        review = (
            pull_request.create_review()
            .body("Looks good")
            .comment("Nit", "a.py", 4)
            .single_line_comment("Typo", "README.md", 3)
            .multi_line_comment("Extract this", "b.py", 10, 14)
            .event(ReviewEvent.COMMENT)
            .create()
        )

        assert isinstance(review, PullRequestReview)
        assert review.parent is pull_request
        assert transport.body(transport.last) == {
            "body": "Looks good",
            "event": "COMMENT",
            "comments": [
                {"body": "Nit", "path": "a.py", "position": 4},
                {"body": "Typo", "path": "README.md", "line": 3},
                {"body": "Extract this", "path": "b.py", "start_line": 10, "line": 14},
            ],
        }

    def test_pending_review_sends_no_event(self, pull_request, transport):
        transport.add("POST", f"{PR_PATH}/reviews", _review_json())

        review = pull_request.create_review().body("Draft").event(ReviewEvent.PENDING).create()

        assert transport.body(transport.last) == {"body": "Draft"}
        assert review.state is ReviewState.PENDING

    def test_submit_pending_review(self, pull_request, transport):
        transport.add("POST", f"{PR_PATH}/reviews", _review_json())
        transport.add("POST", f"{PR_PATH}/reviews/80/events", _review_json(state="APPROVED", body="LGTM"))
        review = pull_request.create_review().create()

        result = review.submit("LGTM", ReviewEvent.APPROVE)

        assert result is review
        assert review.state is ReviewState.APPROVED
        assert transport.body(transport.last) == {"body": "LGTM", "event": "APPROVE"}

    def test_dismiss_review(self, pull_request, transport):
        transport.add("POST", f"{PR_PATH}/reviews", _review_json(state="APPROVED"))
        transport.add("PUT", f"{PR_PATH}/reviews/80/dismissals", _review_json(state="DISMISSED"))
        review = pull_request.create_review().create()

        review.dismiss("Outdated")

        assert review.state is ReviewState.DISMISSED
        assert transport.body(transport.last) == {"message": "Outdated"}

    def test_unknown_review_state(self, pull_request):
        review = PullRequestReview.model_validate(_review_json(state="SOMETHING_NEW")).wrap(pull_request)
        assert review.state is ReviewState.UNKNOWN


class TestReviewComments:
    def test_create_multi_line_comment(self, pull_request, transport):
        transport.add("POST", f"{PR_PATH}/comments", _review_comment_json(), status=201)

        comment = (
            pull_request.create_review_comment()
            .commit_id("abc123")
            .body("Typo")
            .path("README.md")
            .lines(1, 3)
            .side(Side.RIGHT)
            .create()
        )

        assert comment.parent is pull_request
        assert transport.body(transport.last) == {
            "commit_id": "abc123",
            "body": "Typo",
            "path": "README.md",
            "start_line": 1,
            "line": 3,
            "side": "RIGHT",
        }

    def test_update_reply_and_delete(self, pull_request, transport):
        transport.add_page(f"{PR_PATH}/comments", [_review_comment_json()])
        transport.add("PATCH", "/repos/octo/hello/pulls/comments/90", _review_comment_json(body="Fixed"))
        transport.add("POST", f"{PR_PATH}/comments/90/replies", _review_comment_json(91, body="Thanks"), status=201)
        transport.add("DELETE", "/repos/octo/hello/pulls/comments/90", status=204)

        first = pull_request.list_review_comments().first()
        first.update("Fixed")
        reply = first.reply("Thanks")
        first.delete()

        assert first.body == "Fixed"
        assert reply.id == 91
        assert reply.parent is pull_request
        assert transport.last.method == "DELETE"

"""Unit tests for lazy, restartable pagination.

Pages are chained through ``Link: <...>; rel="next"`` headers registered on
the recording transport; every test asserts how many page requests were sent.
"""

import pytest

from ghkit import (
    ConfigurationError,
    DeserializationError,
    GitHubClientError,
    HttpError,
    PagedIterable,
)
from ghkit.models import User
from ghkit.paginator import parse_next_link
from payloads import API, user_json

PATH = "/orgs/octo-org/members"


def _users(*logins: str) -> list[dict]:
    return [user_json(login, id=100 + ord(login)) for login in logins]


def _three_pages(transport) -> None:
    transport.add_page(PATH, _users("a", "b"), next_url=f"{API}{PATH}?page=2")
    transport.add_page(f"{PATH}?page=2", _users("c", "d"), next_url=f"{API}{PATH}?page=3")
    transport.add_page(f"{PATH}?page=3", _users("e", "f"))


def _members(gh) -> PagedIterable[User]:
    return gh.create_request().with_url_path(PATH).to_iterable(User)


class TestParseNextLink:
    def test_next_among_several_relations(self):
        header = (
            f'<{API}/x?page=1>; rel="prev", <{API}/x?page=3>; rel="next", '
            f'<{API}/x?page=9>; rel="last"'
        )
        assert parse_next_link(header) == f"{API}/x?page=3"

    def test_no_next_relation(self):
        assert parse_next_link(f'<{API}/x?page=1>; rel="first"') is None
        assert parse_next_link("") is None


class TestIteration:
    """Items arrive in server order and pages are fetched one at a time."""

    def test_all_items_in_order_with_one_request_per_page(self, gh, transport):
        _three_pages(transport)

        logins = [user.login for user in _members(gh)]

        assert logins == ["a", "b", "c", "d", "e", "f"]
        assert len(transport.requests) == 3

    def test_items_are_attached_to_root(self, gh, transport):
        _three_pages(transport)
        assert all(user.root is gh for user in _members(gh))

    def test_iteration_is_restartable(self, gh, transport):
        _three_pages(transport)
        iterable = _members(gh)

        first = [u.login for u in iterable]
        second = [u.login for u in iterable]

        assert first == second
        assert len(transport.requests) == 6
        assert transport.requests[3].url.path == PATH

    def test_pages_fetched_on_demand(self, gh, transport):
        _three_pages(transport)
        iterator = iter(_members(gh))

        assert transport.requests == []
        next(iterator)
        next(iterator)
        assert len(transport.requests) == 1
        next(iterator)
        assert len(transport.requests) == 2
        assert iterator.pages_fetched == 2

    def test_exhausted_iterator_keeps_raising_stop(self, gh, transport):
        transport.add_page(PATH, _users("a"))
        iterator = _members(gh).iterator()

        assert next(iterator).login == "a"
        with pytest.raises(StopIteration):
            next(iterator)
        with pytest.raises(StopIteration):
            next(iterator)
        assert len(transport.requests) == 1

    def test_empty_last_page(self, gh, transport):
        transport.add_page(PATH, _users("a", "b"), next_url=f"{API}{PATH}?page=2")
        transport.add_page(f"{PATH}?page=2", [])

        assert [u.login for u in _members(gh)] == ["a", "b"]
        assert len(transport.requests) == 2

    def test_empty_intermediate_page_is_skipped(self, gh, transport):
        transport.add_page(PATH, [], next_url=f"{API}{PATH}?page=2")
        transport.add_page(f"{PATH}?page=2", _users("z"))

        assert [u.login for u in _members(gh)] == ["z"]

    def test_single_empty_page(self, gh, transport):
        transport.add_page(PATH, [])
        iterator = _members(gh).iterator()

        assert not iterator.has_next()
        assert _members(gh).to_list() == []

    def test_failure_mid_iteration_surfaces_error(self, gh, transport):
        transport.add_page(PATH, _users("a", "b"), next_url=f"{API}{PATH}?page=2")
        transport.add("GET", f"{PATH}?page=2", {"message": "boom"}, status=500)
        iterator = iter(_members(gh))

        assert [next(iterator).login, next(iterator).login] == ["a", "b"]
        with pytest.raises(HttpError):
            next(iterator)

    def test_next_link_outside_api_root_refused(self, gh, transport):
        transport.add_page(PATH, _users("a"), next_url="https://evil.example.com/steal?page=2")

        with pytest.raises(GitHubClientError):
            _members(gh).to_list()
        assert len(transport.requests) == 1


class TestObjectPages:
    def test_default_items_key(self, gh, transport):
        transport.add("GET", "/search/users", {"total_count": 1, "items": _users("a")})

        users = gh.create_request().with_url_path("/search/users").to_iterable(User).to_list()

        assert [u.login for u in users] == ["a"]

    def test_custom_items_key(self, gh, transport):
        transport.add("GET", "/x", {"total_count": 2, "members": _users("a", "b")})

        users = gh.create_request().with_url_path("/x").to_iterable(User, items_key="members").to_list()

        assert [u.login for u in users] == ["a", "b"]

    def test_missing_items_key_is_deserialization_error(self, gh, transport):
        transport.add("GET", "/x", {"total_count": 0})

        with pytest.raises(DeserializationError):
            gh.create_request().with_url_path("/x").to_iterable(User).to_list()

    def test_transform_applied_to_each_item(self, gh, transport):
        transport.add_page(PATH, _users("a", "b"))
        seen = []

        def remember(user):
            seen.append(user.login)
            return user

        gh.create_request().with_url_path(PATH).to_iterable(User, transform=remember).to_list()

        assert seen == ["a", "b"]


class TestConvenience:
    def test_first_fetches_only_first_page(self, gh, transport):
        _three_pages(transport)

        assert _members(gh).first().login == "a"
        assert len(transport.requests) == 1

    def test_first_of_empty_listing_is_none(self, gh, transport):
        transport.add_page(PATH, [])
        assert _members(gh).first() is None

    def test_iter_pages_yields_page_lists(self, gh, transport):
        _three_pages(transport)

        pages = [[u.login for u in page] for page in _members(gh).iter_pages()]

        assert pages == [["a", "b"], ["c", "d"], ["e", "f"]]

    def test_next_page_returns_unconsumed_remainder(self, gh, transport):
        _three_pages(transport)
        iterator = _members(gh).iterator()

        next(iterator)
        assert [u.login for u in iterator.next_page()] == ["b"]
        assert [u.login for u in iterator.next_page()] == ["c", "d"]
        assert [u.login for u in iterator.next_page()] == ["e", "f"]
        assert iterator.next_page() == []

    def test_to_array_and_to_set(self, gh, transport):
        _three_pages(transport)
        iterable = _members(gh)

        assert len(iterable.to_array()) == 6
        assert isinstance(iterable.to_array(), tuple)
        assert len(iterable.to_set()) == 6


class TestPageSize:
    def test_with_page_size_sets_per_page(self, gh, transport):
        transport.add_page(PATH, _users("a"))

        _members(gh).with_page_size(2).to_list()

        assert transport.last.url.params["per_page"] == "2"

    def test_with_page_size_returns_new_iterable(self, gh):
        iterable = _members(gh)
        sized = iterable.with_page_size(50)

        assert sized is not iterable
        assert iterable.request.query_param("per_page") is None
        assert sized.request.query_param("per_page") == "50"

    @pytest.mark.parametrize("size", [0, 101, -1])
    def test_out_of_range_page_size_rejected(self, gh, size):
        with pytest.raises(ConfigurationError):
            _members(gh).with_page_size(size)

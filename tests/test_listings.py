from urllib.parse import parse_qs, urlparse

import pytest
import responses

from snoowire.client import Client
from snoowire.listings import ListingsService

BASE = "https://oauth.example.com/"

POST = {"id": "i2gvg4", "name": "t3_i2gvg4", "title": "This is a title", "selftext": "This is some text"}
POST2 = {"id": "i2gvs1", "name": "t3_i2gvs1", "title": "This is a title", "url": "http://example.com"}
COMMENT = {"id": "g05v931", "name": "t1_g05v931", "body": "Test comment", "link_id": "t3_i2gvg4"}
SUBREDDIT = {"id": "2qh23", "name": "t5_2qh23", "display_name": "test", "title": "Testing"}


def _listing(*children):
    return {"kind": "Listing", "data": {"children": list(children), "after": None, "before": None}}


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def service():
    return ListingsService(Client(base_url=BASE, username="user1"))


def test_get(mocked, service):
    mocked.add(
        responses.GET,
        BASE + "api/info",
        json=_listing(
            {"kind": "t5", "data": SUBREDDIT},
            {"kind": "t3", "data": POST},
            {"kind": "t1", "data": COMMENT},
        ),
    )
    posts, comments, subreddits, _ = service.get("t5_2qh23", "t3_i2gvg4", "t1_g05v931")
    query = parse_qs(urlparse(mocked.calls[0].request.url).query)
    assert mocked.calls[0].request.method == "GET"
    assert query == {"id": ["t5_2qh23,t3_i2gvg4,t1_g05v931"]}
    assert posts == [POST]
    assert comments == [COMMENT]
    assert subreddits == [SUBREDDIT]


def test_get_without_ids_sends_no_query(mocked, service):
    mocked.add(responses.GET, BASE + "api/info", json=_listing())
    posts, comments, subreddits, _ = service.get()
    assert urlparse(mocked.calls[0].request.url).query == ""
    assert (posts, comments, subreddits) == ([], [], [])


def test_get_posts(mocked, service):
    mocked.add(
        responses.GET,
        BASE + "by_id/t3_i2gvg4,t3_i2gwgz",
        json=_listing({"kind": "t3", "data": POST}, {"kind": "t3", "data": POST2}),
    )
    posts, _ = service.get_posts("t3_i2gvg4", "t3_i2gwgz")
    assert mocked.calls[0].request.method == "GET"
    assert posts == [POST, POST2]
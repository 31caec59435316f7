from urllib.parse import parse_qsl

import pytest
import responses

from snoowire.client import Client, JSONErrorResponse
from snoowire.comment import CommentService

BASE = "https://oauth.example.com/"

COMMENT_JSON = {
    "id": "test2",
    "name": "t1_test2",
    "parent_id": "t1_test",
    "permalink": "/r/subreddit/comments/test1/some_thread/test2/",
    "body": "test comment",
    "author": "reddit_username",
    "author_fullname": "t2_user1",
    "subreddit": "subreddit",
    "subreddit_id": "t5_test",
    "likes": True,
    "score": 1,
    "edited": False,
    "link_id": "t3_link1",
}


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def service():
    return CommentService(Client(base_url=BASE, username="user1"))


def _form(call):
    body = call.request.body or ""
    if isinstance(body, bytes):
        body = body.decode()
    return dict(parse_qsl(body, keep_blank_values=True))


def test_submit(mocked, service):
    mocked.add(responses.POST, BASE + "api/comment", json=COMMENT_JSON)
    comment, _ = service.submit("t1_test", "test comment")
    assert mocked.calls[0].request.method == "POST"
    assert _form(mocked.calls[0]) == {
        "api_type": "json",
        "return_rtjson": "true",
        "parent": "t1_test",
        "text": "test comment",
    }
    assert comment == COMMENT_JSON


def test_edit(mocked, service):
    mocked.add(responses.POST, BASE + "api/editusertext", json=COMMENT_JSON)
    comment, _ = service.edit("t1_test", "test comment")
    assert _form(mocked.calls[0]) == {
        "api_type": "json",
        "return_rtjson": "true",
        "thing_id": "t1_test",
        "text": "test comment",
    }
    assert comment == COMMENT_JSON


def test_submit_reports_api_errors(mocked, service):
    mocked.add(
        responses.POST,
        BASE + "api/comment",
        json={"json": {"errors": [["TOO_LONG", "this is too long", "text"]]}},
    )
    with pytest.raises(JSONErrorResponse) as info:
        service.submit("t1_test", "test comment")
    assert info.value.errors[0].label == "TOO_LONG"
    assert info.value.errors[0].field == "text"
from datetime import datetime, timezone
from urllib.parse import parse_qs, parse_qsl, urlparse

import pytest
import responses

from snoowire.client import Client
from snoowire.collection import Collection, CollectionCreateRequest, CollectionService

BASE = "https://oauth.example.com/"
PREFIX = BASE + "api/v1/collections/"
CID = "37f1e52d-7ec9-466b-b4cc-59e86e071ed7"


def _dt(*parts):
    return datetime(*parts, tzinfo=timezone.utc)


COLLECTION_JSON = {
    "collection_id": CID,
    "created_at_utc": _dt(2020, 8, 6, 23, 25, 3).timestamp(),
    "last_update_utc": _dt(2020, 8, 7, 1, 59, 32).timestamp(),
    "title": "Test Title",
    "description": "",
    "permalink": "https://www.reddit.com/r/helloworldtestt/collection/" + CID,
    "display_layout": "TIMELINE",
    "subreddit_id": "t5_2uquw1",
    "author_name": "v_95",
    "author_id": "t2_164ab8",
    "primary_link_id": "t3_hs0cyh",
    "link_ids": ["t3_hs0cyh", "t3_hqrg8s", "t3_hs03f3"],
}

EXPECTED_COLLECTION = Collection(
    id=CID,
    created=_dt(2020, 8, 6, 23, 25, 3),
    updated=_dt(2020, 8, 7, 1, 59, 32),
    title="Test Title",
    permalink="https://www.reddit.com/r/helloworldtestt/collection/" + CID,
    layout="TIMELINE",
    subreddit_id="t5_2uquw1",
    author="v_95",
    author_id="t2_164ab8",
    primary_post_id="t3_hs0cyh",
    post_ids=["t3_hs0cyh", "t3_hqrg8s", "t3_hs03f3"],
)

SECOND_ID = "8e94db00-6605-46c6-b0d2-44653d6f538c"
SECOND_JSON = {
    "collection_id": SECOND_ID,
    "created_at_utc": _dt(2020, 8, 7, 0, 56, 29).timestamp(),
    "last_update_utc": _dt(2020, 8, 7, 1, 59, 27).timestamp(),
    "title": "Test Title 2",
    "description": "Test Description",
    "permalink": "https://www.reddit.com/r/helloworldtestt/collection/" + SECOND_ID,
    "subreddit_id": "t5_2uquw1",
    "author_name": "v_95",
    "author_id": "t2_164ab8",
    "link_ids": [],
}


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def service():
    return CollectionService(Client(base_url=BASE, username="user1"))


def _form(call):
    body = call.request.body or ""
    if isinstance(body, bytes):
        body = body.decode()
    return dict(parse_qsl(body, keep_blank_values=True))


def test_get(mocked, service):
    mocked.add(responses.GET, PREFIX + "collection", json=COLLECTION_JSON)
    collection, _ = service.get(CID)
    query = parse_qs(urlparse(mocked.calls[0].request.url).query)
    assert query == {"collection_id": [CID], "include_links": ["false"]}
    assert collection == EXPECTED_COLLECTION


def test_from_subreddit(mocked, service):
    listed = dict(COLLECTION_JSON)
    del listed["primary_link_id"]
    mocked.add(responses.GET, PREFIX + "subreddit_collections", json=[listed, SECOND_JSON])
    collections, _ = service.from_subreddit("t5_2uquw1")
    query = parse_qs(urlparse(mocked.calls[0].request.url).query)
    assert query == {"sr_fullname": ["t5_2uquw1"]}
    assert len(collections) == 2
    assert collections[0].primary_post_id == ""
    assert collections[0].post_ids == ["t3_hs0cyh", "t3_hqrg8s", "t3_hs03f3"]
    assert collections[1] == Collection(
        id=SECOND_ID,
        created=_dt(2020, 8, 7, 0, 56, 29),
        updated=_dt(2020, 8, 7, 1, 59, 27),
        title="Test Title 2",
        description="Test Description",
        permalink="https://www.reddit.com/r/helloworldtestt/collection/" + SECOND_ID,
        subreddit_id="t5_2uquw1",
        author="v_95",
        author_id="t2_164ab8",
        post_ids=[],
    )


def test_create_requires_request(mocked, service):
    with pytest.raises(ValueError, match="CollectionCreateRequest: cannot be None"):
        service.create(None)
    assert len(mocked.calls) == 0


def test_create(mocked, service):
    mocked.add(responses.POST, PREFIX + "create_collection", json=COLLECTION_JSON)
    collection, _ = service.create(
        CollectionCreateRequest(title="Test Title", subreddit_id="t5_2uquw1", layout="TIMELINE")
    )
    assert _form(mocked.calls[0]) == {
        "title": "Test Title",
        "sr_fullname": "t5_2uquw1",
        "display_layout": "TIMELINE",
    }
    assert collection == EXPECTED_COLLECTION


@pytest.mark.parametrize(
    "method, args, endpoint, expected",
    [
        ("delete", (CID,), "delete_collection", {"collection_id": CID}),
        (
            "add_post",
            ("t3_hs03f3", CID),
            "add_post_to_collection",
            {"link_fullname": "t3_hs03f3", "collection_id": CID},
        ),
        (
            "remove_post",
            ("t3_hs03f3", CID),
            "remove_post_in_collection",
            {"link_fullname": "t3_hs03f3", "collection_id": CID},
        ),
        (
            "reorder_posts",
            (CID, "t3_hs0cyh", "t3_hqrg8s", "t3_hs03f3"),
            "reorder_collection",
            {"collection_id": CID, "link_ids": "t3_hs0cyh,t3_hqrg8s,t3_hs03f3"},
        ),
        (
            "update_title",
            (CID, "Test Title"),
            "update_collection_title",
            {"collection_id": CID, "title": "Test Title"},
        ),
        (
            "update_description",
            (CID, "Test Description"),
            "update_collection_description",
            {"collection_id": CID, "description": "Test Description"},
        ),
        (
            "update_layout_timeline",
            (CID,),
            "update_collection_display_layout",
            {"collection_id": CID, "display_layout": "TIMELINE"},
        ),
        (
            "update_layout_gallery",
            (CID,),
            "update_collection_display_layout",
            {"collection_id": CID, "display_layout": "GALLERY"},
        ),
        ("follow", (CID,), "follow_collection", {"collection_id": CID, "follow": "true"}),
        ("unfollow", (CID,), "follow_collection", {"collection_id": CID, "follow": "false"}),
    ],
)
def test_post_actions(mocked, service, method, args, endpoint, expected):
    mocked.add(responses.POST, PREFIX + endpoint)
    resp = getattr(service, method)(*args)
    assert resp.status_code == 200
    assert mocked.calls[0].request.method == "POST"
    assert _form(mocked.calls[0]) == expected
from urllib.parse import parse_qsl

import pytest
import responses

from snoowire.client import Client
from snoowire.gold import GoldService

BASE = "https://oauth.example.com/"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def service():
    return GoldService(Client(base_url=BASE, username="user1"))


def _form(call):
    body = call.request.body or ""
    if isinstance(body, bytes):
        body = body.decode()
    return dict(parse_qsl(body, keep_blank_values=True))


def test_gild(mocked, service):
    mocked.add(responses.POST, BASE + "api/v1/gold/gild/t1_test")
    resp = service.gild("t1_test")
    assert resp.status_code == 200
    assert mocked.calls[0].request.method == "POST"
    assert _form(mocked.calls[0]) == {}


@pytest.mark.parametrize("months", [0, 37])
def test_give_rejects_out_of_range(mocked, service, months):
    with pytest.raises(ValueError, match=r"months: must be between 1 and 36 \(inclusive\)"):
        service.give("testuser", months)
    assert len(mocked.calls) == 0


def test_give(mocked, service):
    mocked.add(responses.POST, BASE + "api/v1/gold/give/testuser")
    resp = service.give("testuser", 1)
    assert resp.status_code == 200
    assert mocked.calls[0].request.method == "POST"
    assert _form(mocked.calls[0]) == {"months": "1"}
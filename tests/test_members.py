import json
from urllib.parse import parse_qs

import pytest
import responses

from mgclient.errors import UnexpectedResponseError
from mgclient.members import (
    Member,
    create_member,
    create_member_list,
    delete_member,
    get_member,
    list_members,
    update_member,
)
from mgclient.transport import ApiClient

BASE = "https://api.example.com/v3"
LIST = "dev@example.com"
MEMBERS_URL = f"{BASE}/lists/{LIST}/members"


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def client():
    return ApiClient("example.com", "placeholder", BASE)


def _form(call):
    body = call.request.body
    if isinstance(body, bytes):
        body = body.decode()
    return parse_qs(body or "", keep_blank_values=True)


def test_to_dict_leaves_out_empty_fields():
    assert Member(address="a@example.com").to_dict() == {"address": "a@example.com"}


def test_from_dict_round_trip():
    member = Member(address="a@example.com", name="Ann", subscribed=False, vars={"k": 1})
    assert Member.from_dict(member.to_dict()) == member


def test_get_member(mocked, client):
    mocked.add(
        responses.GET,
        f"{MEMBERS_URL}/a@example.com",
        json={"member": {"address": "a@example.com", "name": "Ann", "subscribed": True}},
    )
    member = get_member(client, "a@example.com", LIST)
    assert member == Member(address="a@example.com", name="Ann", subscribed=True)


def test_get_member_missing_raises(mocked, client):
    mocked.add(responses.GET, f"{MEMBERS_URL}/b@example.com", status=404, body="nope")
    with pytest.raises(UnexpectedResponseError) as info:
        get_member(client, "b@example.com", LIST)
    assert info.value.actual == 404


def test_create_member_sends_fields(mocked, client):
    mocked.add(responses.POST, MEMBERS_URL, json={"message": "ok"})
    result = create_member(
        client, True, LIST, Member(address="a@example.com", name="Ann")
    )
    assert result is None
    form = _form(mocked.calls[0])
    assert form["upsert"] == ["yes"]
    assert form["address"] == ["a@example.com"]
    assert form["name"] == ["Ann"]
    assert form["vars"] == ["null"]
    assert "subscribed" not in form


def test_create_member_with_subscription_and_vars(mocked, client):
    mocked.add(responses.POST, MEMBERS_URL, json={})
    prototype = Member(address="a@example.com", subscribed=False, vars={"age": 3})
    result = create_member(client, False, LIST, prototype)
    assert result is None
    form = _form(mocked.calls[0])
    assert form["upsert"] == ["no"]
    assert form["subscribed"] == ["no"]
    assert json.loads(form["vars"][0]) == {"age": 3}


def test_create_member_failure_raises(mocked, client):
    mocked.add(responses.POST, MEMBERS_URL, status=400, body="duplicate")
    with pytest.raises(UnexpectedResponseError) as info:
        create_member(client, False, LIST, Member(address="a@example.com"))
    assert info.value.actual == 400


def test_update_member_sends_only_set_fields(mocked, client):
    mocked.add(
        responses.PUT,
        f"{MEMBERS_URL}/a@example.com",
        json={"member": {"address": "a@example.com", "name": "Bea"}},
    )
    updated = update_member(client, "a@example.com", LIST, Member(name="Bea"))
    form = _form(mocked.calls[0])
    assert form == {"name": ["Bea"]}
    assert updated.name == "Bea"
    assert updated.address == "a@example.com"


def test_delete_member(mocked, client):
    mocked.add(responses.DELETE, f"{MEMBERS_URL}/a@example.com", json={})
    result = delete_member(client, "a@example.com", LIST)
    assert result is None
    assert mocked.calls[0].request.method == "DELETE"
    assert mocked.calls[0].request.url == f"{MEMBERS_URL}/a@example.com"


def test_delete_member_missing_raises(mocked, client):
    mocked.add(responses.DELETE, f"{MEMBERS_URL}/a@example.com", status=404)
    with pytest.raises(UnexpectedResponseError) as info:
        delete_member(client, "a@example.com", LIST)
    assert info.value.actual == 404


def test_create_member_list_mixed(mocked, client):
    mocked.add(responses.POST, MEMBERS_URL + ".json", json={})
    result = create_member_list(
        client, None, LIST, ["a@example.com", Member(address="b@example.com", name="Bo")]
    )
    assert result is None
    form = _form(mocked.calls[0])
    assert "upsert" not in form
    assert json.loads(form["members"][0]) == [
        "a@example.com",
        {"address": "b@example.com", "name": "Bo"},
    ]


def test_create_member_list_upsert(mocked, client):
    mocked.add(responses.POST, MEMBERS_URL + ".json", json={})
    result = create_member_list(client, True, LIST, ["a@example.com"])
    assert result is None
    assert _form(mocked.calls[0])["upsert"] == ["yes"]


def test_list_members_follows_paging(mocked, client):
    next_url = f"{MEMBERS_URL}/pages?page=next"
    mocked.add(
        responses.GET,
        f"{MEMBERS_URL}/pages",
        json={
            "items": [{"address": "a@example.com"}, {"address": "b@example.com"}],
            "paging": {"next": next_url, "first": f"{MEMBERS_URL}/pages"},
        },
    )
    mocked.add(responses.GET, f"{MEMBERS_URL}/pages", json={"items": [], "paging": {}})
    pages = list(list_members(client, LIST, limit=2))
    assert pages == [[Member(address="a@example.com"), Member(address="b@example.com")]]
    assert "limit=2" in mocked.calls[0].request.url
    assert mocked.calls[1].request.url == next_url
from datetime import datetime, timezone
from urllib.parse import parse_qsl, urlsplit

import pytest
import responses

from mgclient.errors import UnexpectedResponseError
from mgclient.stats import Resolution, Stats, get_stats
from mgclient.transport import ApiClient

BASE = "https://api.example.com/v3"
STATS_URL = f"{BASE}/example.com/stats/total"

SAMPLE = {
    "time": "Mon, 01 Jun 2020 00:00:00 UTC",
    "accepted": {"incoming": 1, "outgoing": 4, "total": 5},
    "delivered": {"smtp": 3, "http": 1, "total": 4},
    "failed": {
        "temporary": {"espblock": 2, "total": 2},
        "permanent": {
            "suppress-bounce": 1,
            "suppress-unsubscribe": 2,
            "suppress-complaint": 3,
            "bounce": 4,
            "delayed-bounce": 5,
            "total": 15,
        },
    },
    "stored": {"total": 6},
    "opened": {"total": 7},
    "clicked": {"total": 8},
    "unsubscribed": {"total": 9},
    "complained": {"total": 10},
}


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def client():
    return ApiClient("example.com", "placeholder", BASE)


def _query(call):
    return parse_qsl(urlsplit(call.request.url).query)


def test_stats_from_dict():
    stats = Stats.from_dict(SAMPLE)
    assert stats.time == "Mon, 01 Jun 2020 00:00:00 UTC"
    assert stats.accepted.total == 5
    assert stats.accepted.outgoing == 4
    assert stats.delivered.smtp == 3
    assert stats.failed.temporary.espblock == 2
    assert stats.failed.permanent.delayed_bounce == 5
    assert stats.failed.permanent.total == 15
    assert (stats.stored, stats.opened, stats.clicked) == (6, 7, 8)
    assert (stats.unsubscribed, stats.complained) == (9, 10)


def test_stats_from_empty_dict_is_zero():
    stats = Stats.from_dict({})
    assert stats.accepted.total == 0
    assert stats.failed.permanent.bounce == 0
    assert stats.failed.temporary.total == 0


def test_list_stats(rsps, client):
    rsps.add(responses.GET, STATS_URL, json={
        "start": "", "end": "", "resolution": "day", "stats": [SAMPLE],
    })
    stats = get_stats(client, ["accepted", "delivered"])
    assert len(stats) == 1
    assert stats[0].accepted.total == 5
    assert stats[0].delivered.total == 4
    assert _query(rsps.calls[0]) == [("event", "accepted"), ("event", "delivered")]


def test_stats_parameters(rsps, client):
    rsps.add(responses.GET, STATS_URL, json={"stats": []})
    result = get_stats(
        client,
        ["opened"],
        resolution=Resolution.HOUR,
        duration="1m",
        start=datetime(2020, 1, 1, tzinfo=timezone.utc),
        end=datetime(2020, 1, 2),
    )
    assert result == []
    assert _query(rsps.calls[0]) == [
        ("start", "1577836800"),
        ("end", "1577923200"),
        ("resolution", "hour"),
        ("duration", "1m"),
        ("event", "opened"),
    ]


def test_stats_error_raises(rsps, client):
    rsps.add(responses.GET, STATS_URL, status=400, body="bad request")
    with pytest.raises(UnexpectedResponseError) as info:
        get_stats(client, ["accepted"])
    assert info.value.actual == 400
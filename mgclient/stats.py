"""Total event statistics for the domain."""

from dataclasses import dataclass, field
from datetime import timezone
from enum import Enum

STATS_TOTAL_ENDPOINT = "stats/total"


class Resolution(str, Enum):
    """The time resolution statistics are reported at."""

    HOUR = "hour"
    DAY = "day"
    MONTH = "month"


def _count(data, key):
    return int((data or {}).get(key) or 0)


@dataclass
class Stats:
    """Counts of events for one period."""

    @dataclass
    class Accepted:
        incoming: int = 0
        outgoing: int = 0
        total: int = 0

        @classmethod
        def from_dict(cls, data):
            return cls(
                _count(data, "incoming"), _count(data, "outgoing"), _count(data, "total")
            )

    @dataclass
    class Delivered:
        smtp: int = 0
        http: int = 0
        total: int = 0

        @classmethod
        def from_dict(cls, data):
            return cls(_count(data, "smtp"), _count(data, "http"), _count(data, "total"))

    @dataclass
    class Temporary:
        espblock: int = 0
        total: int = 0

        @classmethod
        def from_dict(cls, data):
            return cls(_count(data, "espblock"), _count(data, "total"))

    @dataclass
    class Permanent:
        suppress_bounce: int = 0
        suppress_unsubscribe: int = 0
        suppress_complaint: int = 0
        bounce: int = 0
        delayed_bounce: int = 0
        total: int = 0

        @classmethod
        def from_dict(cls, data):
            return cls(
                _count(data, "suppress-bounce"),
                _count(data, "suppress-unsubscribe"),
                _count(data, "suppress-complaint"),
                _count(data, "bounce"),
                _count(data, "delayed-bounce"),
                _count(data, "total"),
            )

    @dataclass
    class Failed:
        temporary: "Stats.Temporary" = None
        permanent: "Stats.Permanent" = None

        @classmethod
        def from_dict(cls, data):
            data = data or {}
            return cls(
                Stats.Temporary.from_dict(data.get("temporary")),
                Stats.Permanent.from_dict(data.get("permanent")),
            )

    time: str = ""
    accepted: Accepted = field(default_factory=Accepted)
    delivered: Delivered = field(default_factory=Delivered)
    failed: Failed = field(
        default_factory=lambda: Stats.Failed(Stats.Temporary(), Stats.Permanent())
    )
    stored: int = 0
    opened: int = 0
    clicked: int = 0
    unsubscribed: int = 0
    complained: int = 0

    @classmethod
    def from_dict(cls, data):
        return cls(
            time=data.get("time") or "",
            accepted=cls.Accepted.from_dict(data.get("accepted")),
            delivered=cls.Delivered.from_dict(data.get("delivered")),
            failed=cls.Failed.from_dict(data.get("failed")),
            stored=_count(data.get("stored"), "total"),
            opened=_count(data.get("opened"), "total"),
            clicked=_count(data.get("clicked"), "total"),
            unsubscribed=_count(data.get("unsubscribed"), "total"),
            complained=_count(data.get("complained"), "total"),
        )


def _unix(moment):
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp())


def get_stats(client, events, resolution=None, duration=None, start=None, end=None):
    """Total statistics for ``events`` over the given period.

    ``start`` and ``end`` are datetimes (naive ones are taken as UTC);
    ``duration`` is a string such as '1m'.
    """
    params = []
    if start is not None:
        params.append(("start", _unix(start)))
    if end is not None:
        params.append(("end", _unix(end)))
    if resolution:
        value = resolution.value if isinstance(resolution, Resolution) else str(resolution)
        params.append(("resolution", value))
    if duration:
        params.append(("duration", duration))
    params.extend(("event", event) for event in events)
    body = client.get_json(client.domain_url(STATS_TOTAL_ENDPOINT), params=params)
    return [Stats.from_dict(item) for item in body.get("stats") or []]
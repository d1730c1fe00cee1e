"""Timestamps in the RFC 2822 / RFC 1123 form the API uses."""

import re
from datetime import datetime, timedelta, timezone

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_PATTERN = re.compile(
    r"(?P<weekday>[A-Za-z]{3}), (?P<day>\d{2}) (?P<month>[A-Za-z]{3}) "
    r"(?P<year>\d{4}) (?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}) "
    r"(?P<zone>[A-Za-z]{3,5}|[+-]\d{4})"
)


def _zone(text):
    if text[0] in "+-":
        minutes = int(text[1:3]) * 60 + int(text[3:5])
        sign = -1 if text[0] == "-" else 1
        return timezone(timedelta(minutes=sign * minutes))
    return timezone.utc


def parse_rfc2822(text):
    """Parse 'Thu, 13 Oct 2011 18:02:00 GMT' (or a numeric zone) to a datetime."""
    match = _PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f"cannot parse {text!r} as an RFC 2822 time")
    if match["weekday"] not in _DAYS:
        raise ValueError(f"bad day name in {text!r}")
    if match["month"] not in _MONTHS:
        raise ValueError(f"bad month name in {text!r}")
    return datetime(
        int(match["year"]),
        _MONTHS.index(match["month"]) + 1,
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
        tzinfo=_zone(match["zone"]),
    )


def format_rfc2822(value):
    """Format a datetime in RFC 1123 form; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    name = value.tzname()
    zone = name if name and name.isalpha() else value.strftime("%z")
    return (
        f"{_DAYS[value.weekday()]}, {value.day:02d} {_MONTHS[value.month - 1]} "
        f"{value.year:04d} {value.hour:02d}:{value.minute:02d}:{value.second:02d} "
        f"{zone}"
    )
"""Helpers for an in-process stand-in of the API: value parsing and paging."""

import json
import re
import secrets
from email.utils import parseaddr

_ALPHANUM = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}
_INTEGER = re.compile(r"[+-]?\d+")


def page_offsets(pivot_idx, pivot_dir, pivot_val, limit):
    """Slice bounds for a page, given a direction, pivot value and limit."""
    size = len(pivot_idx)
    if pivot_dir == "first":
        return 0, min(limit, size)
    if pivot_dir == "last":
        if limit < size:
            return size - limit, size
        return 0, size
    if pivot_dir in ("next", "prev"):
        try:
            position = list(pivot_idx).index(pivot_val)
        except ValueError:
            return 0, 0
        if pivot_dir == "next":
            return position + 1, min(position + 1 + limit, size)
        if position == 0:
            return 0, 0
        return max(position - limit, 0), position
    if limit > size:
        return 0, size
    return 0, limit


def string_to_bool(value):
    """Read yes/no or a boolean literal; empty means False."""
    lower = value.lower()
    if lower in ("yes", "no"):
        return lower == "yes"
    if value == "":
        return False
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


def string_to_int(value):
    """Read a decimal integer; empty means 0."""
    if value == "":
        return 0
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"invalid integer: {value!r}")
    return int(value)


def string_to_map(value):
    """Read a JSON object; empty means None."""
    if value == "":
        return None
    result = json.loads(value)
    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ValueError(f"expected a JSON object: {value!r}")
    return result


def parse_address(value):
    """Return the bare address from 'Name <address>' or an address."""
    if value == "":
        return ""
    _, address = parseaddr(value)
    local, at, domain = address.partition("@")
    if not at or not local or not domain:
        raise ValueError(f"invalid address: {value!r}")
    return address


def random_string(n, prefix=""):
    """``prefix`` followed by ``n`` random ASCII letters and digits."""
    chosen = (_ALPHANUM[b % len(_ALPHANUM)] for b in secrets.token_bytes(n))
    return prefix + "".join(chosen)


def random_email(prefix, domain):
    """A lower-case random address at ``domain``."""
    return f"{random_string(20, prefix)}@{domain}".lower()
"""Members of mailing lists."""

import json
from dataclasses import dataclass
from urllib.parse import urlencode

from .messages import yes_no
from .paging import PageIterator

LISTS_ENDPOINT = "lists"

# Values for a member's subscription filter: unspecified, subscribed, unsubscribed.
ALL = None
SUBSCRIBED = True
UNSUBSCRIBED = False


def _to_json(value):
    return json.dumps(value, separators=(",", ":"), sort_keys=True)


@dataclass
class Member:
    """A mailing list member.

    ``subscribed`` is None when unspecified; ``vars`` holds any
    JSON-encodable data.
    """

    address: str = ""
    name: str = ""
    subscribed: bool | None = None
    vars: dict | None = None

    @classmethod
    def from_dict(cls, data):
        return cls(
            address=data.get("address") or "",
            name=data.get("name") or "",
            subscribed=data.get("subscribed"),
            vars=data.get("vars"),
        )

    def to_dict(self):
        """The JSON form, leaving out fields that are empty."""
        result = {}
        if self.address:
            result["address"] = self.address
        if self.name:
            result["name"] = self.name
        if self.subscribed is not None:
            result["subscribed"] = self.subscribed
        if self.vars:
            result["vars"] = self.vars
        return result


def _members_url(client, list_address):
    return f"{client.public_url(LISTS_ENDPOINT)}/{list_address}/members"


def list_members(client, list_address, limit=None):
    """A page iterator over the members of ``list_address``."""
    url = _members_url(client, list_address) + "/pages"
    if limit:
        url += "?" + urlencode({"limit": limit})
    return PageIterator(client, url, "items", Member.from_dict)


def get_member(client, member, list_address):
    """The member of ``list_address`` subscribed as ``member``."""
    body = client.get_json(f"{_members_url(client, list_address)}/{member}")
    return Member.from_dict(body.get("member") or {})


def create_member(client, merge, list_address, prototype):
    """Add ``prototype`` to ``list_address``; with ``merge`` an existing one is updated."""
    fields = [
        ("upsert", yes_no(merge)),
        ("address", prototype.address),
        ("name", prototype.name),
        ("vars", _to_json(prototype.vars)),
    ]
    if prototype.subscribed is not None:
        fields.append(("subscribed", yes_no(prototype.subscribed)))
    client.request("POST", _members_url(client, list_address), data=fields)


def update_member(client, member, list_address, prototype):
    """Change the set fields of a member and return the updated member."""
    fields = []
    if prototype.address:
        fields.append(("address", prototype.address))
    if prototype.name:
        fields.append(("name", prototype.name))
    if prototype.vars is not None:
        fields.append(("vars", _to_json(prototype.vars)))
    if prototype.subscribed is not None:
        fields.append(("subscribed", yes_no(prototype.subscribed)))
    body = client.put_json(f"{_members_url(client, list_address)}/{member}", data=fields)
    return Member.from_dict(body.get("member") or {})


def delete_member(client, member, list_address):
    """Remove ``member`` from ``list_address``."""
    client.delete(f"{_members_url(client, list_address)}/{member}")


def create_member_list(client, upsert, list_address, new_members):
    """Add many members in one request.

    ``new_members`` holds address strings or :class:`Member` values;
    ``upsert`` of None leaves the service default in place.
    """
    fields = []
    if upsert is not None:
        fields.append(("upsert", yes_no(upsert)))
    encoded = [m.to_dict() if isinstance(m, Member) else m for m in new_members]
    fields.append(("members", _to_json(encoded)))
    client.request("POST", _members_url(client, list_address) + ".json", data=fields)
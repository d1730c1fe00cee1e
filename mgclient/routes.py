"""Routes that match incoming messages and act on them."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .rfc2822 import parse_rfc2822

ROUTES_ENDPOINT = "routes"
DEFAULT_ROUTES_LIMIT = 100


@dataclass
class Route:
    """A configured route.

    When creating one, only priority, description, expression and
    actions are used; ``created_at`` and ``id`` come from the service.
    """

    priority: int = 0
    description: str = ""
    expression: str = ""
    actions: list = field(default_factory=list)
    created_at: datetime | None = None
    id: str = ""

    @classmethod
    def from_dict(cls, data):
        created = data.get("created_at")
        return cls(
            priority=int(data.get("priority") or 0),
            description=data.get("description") or "",
            expression=data.get("expression") or "",
            actions=list(data.get("actions") or []),
            created_at=parse_rfc2822(created) if created else None,
            id=data.get("id") or "",
        )


@dataclass
class ForwardedMessage:
    """The form a route posts to a forwarding address."""

    body_plain: str = ""
    from_address: str = ""
    message_headers: dict = field(default_factory=dict)
    recipient: str = ""
    sender: str = ""
    signature: str = ""
    stripped_html: str = ""
    stripped_text: str = ""
    subject: str = ""
    timestamp: datetime = datetime.fromtimestamp(0, timezone.utc)
    token: str = ""


def _form_value(form, name):
    value = form.get(name, "")
    if isinstance(value, (list, tuple)):
        return value[0] if value else ""
    return value


def _parse_headers(text):
    try:
        parsed = json.loads(text)
    except ValueError:
        return {}
    if not isinstance(parsed, list):
        return {}
    if not all(
        isinstance(pair, list) and all(isinstance(part, str) for part in pair)
        for pair in parsed
    ):
        return {}
    return {pair[0]: pair[1] for pair in parsed if len(pair) >= 2}


def extract_forwarded_message(form):
    """Read a forwarded message from posted form values.

    ``form`` maps field names to strings or lists of strings. A missing
    or malformed timestamp gives the epoch; malformed headers give none.
    """
    try:
        seconds = int(_form_value(form, "timestamp"))
    except ValueError:
        seconds = 0
    return ForwardedMessage(
        body_plain=_form_value(form, "body-plain"),
        from_address=_form_value(form, "from"),
        message_headers=_parse_headers(_form_value(form, "message-headers")),
        recipient=_form_value(form, "recipient"),
        sender=_form_value(form, "sender"),
        signature=_form_value(form, "signature"),
        stripped_html=_form_value(form, "stripped-html"),
        stripped_text=_form_value(form, "stripped-text"),
        subject=_form_value(form, "subject"),
        timestamp=datetime.fromtimestamp(seconds, timezone.utc),
        token=_form_value(form, "token"),
    )


class RoutesIterator:
    """Pages through routes by skip and limit.

    ``total_count`` is -1 until a page has been fetched.
    """

    def __init__(self, client, url, limit=DEFAULT_ROUTES_LIMIT):
        self.client = client
        self.url = url
        self.limit = limit
        self.offset = 0
        self.total_count = -1
        self.items = []

    def _fetch(self, skip, limit):
        self.items = []
        params = {}
        if skip:
            params["skip"] = skip
        if limit:
            params["limit"] = limit
        data = self.client.get_json(self.url, params=params or None)
        if "total_count" in data:
            self.total_count = int(data["total_count"])
        self.items = [Route.from_dict(item) for item in data.get("items") or []]
        return list(self.items)

    def next_page(self):
        """Fetch the next page; an empty list means there are no more."""
        page = self._fetch(self.offset, self.limit)
        self.offset += len(page)
        return page

    def first(self):
        """Fetch the first page and reset the cursor there."""
        page = self._fetch(0, self.limit)
        self.offset = len(page)
        return page

    def last(self):
        """Fetch the last page; only valid after a page has been fetched."""
        if self.total_count == -1:
            raise ValueError("the last page is unknown until a page has been fetched")
        self.offset = max(self.total_count - self.limit, 0)
        return self._fetch(self.offset, self.limit)

    def previous(self):
        """Fetch the previous page; an empty list means there is none."""
        if self.total_count == -1:
            return []
        self.offset = max(self.offset - self.limit * 2, 0)
        return self._fetch(self.offset, self.limit)

    def __iter__(self):
        while True:
            page = self.next_page()
            if not page:
                return
            yield page


def _routes_url(client, route_id=None):
    url = client.public_url(ROUTES_ENDPOINT)
    return url if route_id is None else f"{url}/{route_id}"


def list_routes(client, limit=None):
    """An iterator over the configured routes; the page size defaults to 100."""
    return RoutesIterator(client, _routes_url(client), limit or DEFAULT_ROUTES_LIMIT)


def create_route(client, prototype):
    """Install a route built from ``prototype`` and return it as created."""
    fields = [
        ("priority", str(prototype.priority)),
        ("description", prototype.description),
        ("expression", prototype.expression),
    ]
    fields.extend(("action", action) for action in prototype.actions)
    body = client.post_json(_routes_url(client), data=fields)
    return Route.from_dict(body.get("route") or {})


def delete_route(client, route_id):
    """Remove the route with ``route_id``."""
    client.delete(_routes_url(client, route_id))


def get_route(client, route_id):
    """The route with ``route_id``."""
    body = client.get_json(_routes_url(client, route_id))
    return Route.from_dict(body.get("route") or {})


def update_route(client, route_id, route):
    """Change the non-empty fields of a route and return the result."""
    fields = []
    if route.priority:
        fields.append(("priority", str(route.priority)))
    if route.description:
        fields.append(("description", route.description))
    if route.expression:
        fields.append(("expression", route.expression))
    fields.extend(("action", action) for action in route.actions)
    # The service answers with a bare route here, not an envelope.
    return Route.from_dict(client.put_json(_routes_url(client, route_id), data=fields))
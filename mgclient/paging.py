"""Cursor-style paging over list endpoints that return paging links."""

from dataclasses import dataclass, fields, replace

_PAGING_FIELDS = ("first", "next", "previous", "last")


@dataclass
class Paging:
    """Links to the first, next, previous and last pages."""

    first: str = ""
    next: str = ""
    previous: str = ""
    last: str = ""

    @classmethod
    def from_dict(cls, data):
        return cls(**{name: str(data.get(name) or "") for name in _PAGING_FIELDS})


def _merge(paging, data):
    known = {f.name for f in fields(Paging)}
    updates = {k: str(v or "") for k, v in data.items() if k in known}
    return replace(paging, **updates)


class PageIterator:
    """Walks pages of a list endpoint by following its paging links.

    ``items_key`` names where the items sit in each response; a dotted
    path such as ``template.versions`` reaches nested lists.
    Request failures are raised as they happen.
    """

    def __init__(self, client, url, items_key="items", parse_item=None):
        self.client = client
        self.paging = Paging(first=url, next=url)
        self.items = []
        self._items_path = tuple(items_key.split("."))
        self._parse_item = parse_item if parse_item is not None else (lambda item: item)

    def _fetch(self, url):
        self.items = []
        data = self.client.get_json(url)
        if isinstance(data.get("paging"), dict):
            self.paging = _merge(self.paging, data["paging"])
        raw = data
        for key in self._items_path:
            raw = raw.get(key) if isinstance(raw, dict) else None
        self.items = [self._parse_item(item) for item in raw or []]
        return list(self.items)

    def next_page(self):
        """Fetch the next page; an empty list means there are no more."""
        return self._fetch(self.paging.next)

    def first(self):
        """Fetch the first page and reset the cursor there."""
        return self._fetch(self.paging.first)

    def last(self):
        """Fetch the last page; only valid after a page has been fetched."""
        if not self.paging.last:
            raise ValueError("the last page is unknown until a page has been fetched")
        return self._fetch(self.paging.last)

    def previous(self):
        """Fetch the previous page; an empty list means there is none."""
        if not self.paging.previous:
            return []
        return self._fetch(self.paging.previous)

    def __iter__(self):
        while True:
            page = self.next_page()
            if not page:
                return
            yield page
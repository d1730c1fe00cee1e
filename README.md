# mgclient

A Python client for the Mailgun HTTP API. It sends plain and MIME messages,
reads and re-sends stored messages, manages routes, webhooks and mailing list
members, checks webhook signatures, and fetches delivery statistics.

## Installation

```
pip install mgclient
```

To run the test suite:

```
pip install "mgclient[test]"
pytest
```

## Connecting

Every API call takes an `ApiClient` from `mgclient.transport`. It holds the
sending domain, the API key and the base URL of the API; a `requests.Session`
may be passed as `session`, otherwise a new one is made:

```python
from mgclient.transport import ApiClient

client = ApiClient(
    domain="example.com",
    api_key="placeholder",
    api_base="https://api.example.com/v3",
)
```

Requests use HTTP basic auth with the user `api` and send the user agent
`mgclient/4.6.1`. When the API answers with a status other than 200, 202 or
204, the call raises `mgclient.errors.UnexpectedResponseError`, which carries
`url`, `expected`, `actual` and the raw body in `data`.
`status_from_error(err)` returns `err.actual`, or -1 for any other exception.

## Sending a message

```python
from mgclient.messages import Message
from mgclient.sending import send

message = Message("sender@example.com", "Hello", "Plain text body", "friend@example.com")
message.set_html("<p>HTML body</p>")
message.add_cc("copy@example.com")
message.add_tag("newsletter")
message.add_variable("campaign", "spring")
message.add_attachment("report.pdf")

result = send(client, message)
print(result.message, result.id)
```

`Message.mime(body, ...)` wraps a ready-made MIME document read from a
stream; for such a message the Cc:, Bcc:, HTML and template setters do
nothing, and ten Cc:/Bcc: recipients are assumed when counting.

Limits and checks:

- `add_recipient` raises `ValueError` once the message has 1000 recipients.
- `add_tag` raises `ValueError` once the message already holds 3 tags.
- `set_sto_period` accepts only `"24h"` to `"72h"`.
- `send` raises `ValueError` for a missing or malformed domain, a missing API
  key, or a send-time-optimised message with more than one recipient, and
  `InvalidMessageError` for a message that `is_valid()` rejects.

`build_payload(message)` returns the form fields and files a send would post,
without sending anything.

Stored messages can be read back with `get_stored_message`,
`get_stored_message_raw` and `get_stored_attachment`, and sent again with
`resend(client, url, "someone@example.com")`.

## Paging through lists

`list_members` returns a `PageIterator` (from `mgclient.paging`) and
`list_routes` a `RoutesIterator`. Iterating over either yields one page (a
list) at a time until an empty page comes back:

```python
from mgclient.members import list_members

for page in list_members(client, "list@example.com", limit=100):
    for member in page:
        print(member.address, member.subscribed)
```

`first()`, `next_page()`, `previous()` and `last()` move through the pages
directly. `last()` raises `ValueError` until a page has been fetched.

## Mailing list members

`mgclient.members` has `Member`, `get_member`, `create_member`,
`update_member`, `delete_member`, and `create_member_list` for adding many
addresses or `Member` values in one request.

## Webhooks

```python
from mgclient.webhooks import create_webhook, list_webhooks, verify_webhook_form

create_webhook(client, "delivered", ["https://hooks.example.com/delivered"])
print(list_webhooks(client))

form = {"timestamp": "123456789", "token": "token", "signature": "00ff"}
if verify_webhook_form("placeholder", form):
    print("genuine request")
```

`verify_webhook_signature(api_key, Signature(...))` checks the signature
block of a JSON webhook payload in the same way. Both raise `ValueError` if
the signature is not hexadecimal. `get_webhook`, `update_webhook` and
`delete_webhook` work on one webhook kind.

## Routes

```python
from mgclient.routes import Route, create_route, extract_forwarded_message

route = create_route(client, Route(
    priority=1,
    description="Sample route",
    expression='match_recipient(".*@example.com")',
    actions=['forward("https://hooks.example.com/messages/")', "stop()"],
))
```

`get_route`, `update_route` and `delete_route` work by route id.
`extract_forwarded_message(form)` turns the form fields posted for a
forwarded message into a `ForwardedMessage`.

## Statistics

```python
from mgclient.stats import Resolution, get_stats

for stats in get_stats(client, ["accepted", "delivered"], resolution=Resolution.DAY):
    print(stats.time, stats.accepted.total, stats.delivered.total)
```

## Smaller helpers

- `mgclient.recipients`: `Recipient.parse("Name <someone@example.com>")`.
- `mgclient.rfc2822`: `parse_rfc2822` and `format_rfc2822` for the
  timestamp form the API uses.
- `mgclient.mockutil`: value parsing, page offsets and random addresses for
  building a local stand-in of the API in tests.

## What it does not do

This package has no calls for spam complaints, the unsubscribe table, tag
metadata, or stored templates and their versions, and it does not parse
event records. `mgclient.mockutil` only holds helpers; there is no local
mock server in the package.
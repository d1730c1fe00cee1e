"""Client for the Mailgun HTTP API: messages, routes, webhooks, members and stats."""

__version__ = "4.6.1"

__all__ = [
    "errors",
    "members",
    "messages",
    "mockutil",
    "paging",
    "recipients",
    "rfc2822",
    "routes",
    "sending",
    "stats",
    "transport",
    "webhooks",
]
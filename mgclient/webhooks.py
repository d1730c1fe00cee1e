"""Webhook configuration and signature verification."""

import hashlib
import hmac
from dataclasses import dataclass

WEBHOOKS_ENDPOINT = "webhooks"


@dataclass(frozen=True)
class Signature:
    """The signature part of a webhook call."""

    timestamp: str = ""
    token: str = ""
    signature: str = ""


def _webhooks_url(client, kind=None):
    url = f"{client.public_url('domains')}/{client.domain}/{WEBHOOKS_ENDPOINT}"
    return url if kind is None else f"{url}/{kind}"


def _urls_of(entry):
    urls = []
    if entry.get("url"):
        urls.append(entry["url"])
    urls.extend(entry.get("urls") or [])
    return urls


def list_webhooks(client):
    """Map each configured webhook kind to its URLs."""
    body = client.get_json(_webhooks_url(client))
    hooks = {}
    for kind, entry in (body.get("webhooks") or {}).items():
        urls = _urls_of(entry or {})
        if urls:
            hooks[kind] = urls
    return hooks


def create_webhook(client, kind, urls):
    """Install a webhook of ``kind`` calling ``urls``."""
    data = [("id", kind)] + [("url", url) for url in urls]
    client.request("POST", _webhooks_url(client), data=data)


def delete_webhook(client, kind):
    """Remove the webhook of ``kind``."""
    client.delete(_webhooks_url(client, kind))


def get_webhook(client, kind):
    """The URLs of the webhook of ``kind``."""
    body = client.get_json(_webhooks_url(client, kind))
    entry = body.get("webhook") or {}
    if entry.get("url"):
        return [entry["url"]]
    if entry.get("urls"):
        return list(entry["urls"])
    raise ValueError(f"webhook '{kind}' returned no urls")


def update_webhook(client, kind, urls):
    """Replace the URLs of the webhook of ``kind``."""
    client.request("PUT", _webhooks_url(client, kind), data=[("url", url) for url in urls])


def _verify(api_key, timestamp, token, signature):
    expected = hmac.new(
        api_key.encode(), (timestamp + token).encode(), hashlib.sha256
    ).digest()
    given = bytes.fromhex(signature)
    if len(given) != len(expected):
        return False
    return hmac.compare_digest(given, expected)


def verify_webhook_signature(api_key, signature):
    """Whether ``signature`` was made with ``api_key``.

    Raises ValueError if the signature is not hexadecimal.
    """
    return _verify(api_key, signature.timestamp, signature.token, signature.signature)


def _form_value(form, name):
    value = form.get(name, "")
    if isinstance(value, (list, tuple)):
        return value[0] if value else ""
    return value


def verify_webhook_form(api_key, form):
    """Verify the timestamp, token and signature fields of a posted form.

    ``form`` maps field names to strings or to lists of strings.
    """
    return _verify(
        api_key,
        _form_value(form, "timestamp"),
        _form_value(form, "token"),
        _form_value(form, "signature"),
    )
"""Submitting messages to the API and reading messages it has stored."""

import json
from dataclasses import dataclass, field

from .messages import InvalidMessageError, true_false, yes_no
from .rfc2822 import format_rfc2822

_INVALID_DOMAIN_CHARS = frozenset(":&'@(),!?#;%+=<>")
_ACCEPT_RAW = {"Accept": "message/rfc2822"}


@dataclass(frozen=True)
class SendResult:
    """The service's answer to a send: a status text and the message id."""

    message: str
    id: str


@dataclass
class StoredAttachment:
    """An attachment of a stored message."""

    size: int = 0
    url: str = ""
    name: str = ""
    content_type: str = ""

    @classmethod
    def from_dict(cls, data):
        return cls(
            size=int(data.get("size") or 0),
            url=data.get("url") or "",
            name=data.get("name") or "",
            content_type=data.get("content-type") or "",
        )


@dataclass
class StoredMessage:
    """The parsed content of a message kept by the service.

    ``message_headers`` is a list of ``[name, value]`` pairs, as sent on
    the wire; ``content_id_map`` maps content ids to their url,
    content type, name and size.
    """

    recipients: str = ""
    sender: str = ""
    from_address: str = ""
    subject: str = ""
    body_plain: str = ""
    stripped_text: str = ""
    stripped_signature: str = ""
    body_html: str = ""
    stripped_html: str = ""
    attachments: list = field(default_factory=list)
    message_url: str = ""
    content_id_map: dict = field(default_factory=dict)
    message_headers: list = field(default_factory=list)

    @classmethod
    def from_dict(cls, data):
        content_ids = {
            key: {
                "url": value.get("url") or "",
                "content_type": value.get("content-type") or "",
                "name": value.get("name") or "",
                "size": int(value.get("size") or 0),
            }
            for key, value in (data.get("content-id-map") or {}).items()
        }
        return cls(
            recipients=data.get("recipients") or "",
            sender=data.get("sender") or "",
            from_address=data.get("from") or "",
            subject=data.get("subject") or "",
            body_plain=data.get("body-plain") or "",
            stripped_text=data.get("stripped-text") or "",
            stripped_signature=data.get("stripped-signature") or "",
            body_html=data.get("body-html") or "",
            stripped_html=data.get("stripped-html") or "",
            attachments=[
                StoredAttachment.from_dict(item)
                for item in data.get("attachments") or []
            ],
            message_url=data.get("message-url") or "",
            content_id_map=content_ids,
            message_headers=[list(pair) for pair in data.get("message-headers") or []],
        )


@dataclass
class StoredMessageRaw:
    """A stored message with its unparsed MIME body."""

    recipients: str = ""
    sender: str = ""
    from_address: str = ""
    subject: str = ""
    body_mime: str = ""

    @classmethod
    def from_dict(cls, data):
        return cls(
            recipients=data.get("recipients") or "",
            sender=data.get("sender") or "",
            from_address=data.get("from") or "",
            subject=data.get("subject") or "",
            body_mime=data.get("body-mime") or "",
        )


def _to_json(value):
    return json.dumps(value, separators=(",", ":"), sort_keys=True)


def _read_stream(stream):
    try:
        return stream.read()
    finally:
        close = getattr(stream, "close", None)
        if close is not None:
            close()


def _attachment_content(attachment):
    if attachment.data is not None:
        return attachment.data
    if attachment.path is not None:
        with open(attachment.path, "rb") as handle:
            return handle.read()
    return _read_stream(attachment.stream)


def build_payload(message):
    """The form fields and files a send of ``message`` submits.

    Returns ``(fields, files)``: ``fields`` is a list of ``(name, value)``
    pairs, ``files`` a list of ``(name, (filename, content))`` pairs.
    """
    fields = []
    files = []

    if message.is_mime:
        files.append(("message", ("message.mime", _read_stream(message.mime_body))))
    else:
        fields.append(("from", message.sender))
        fields.append(("subject", message.subject))
        fields.append(("text", message.text))
        fields.extend(("cc", cc) for cc in message.cc)
        fields.extend(("bcc", bcc) for bcc in message.bcc)
        if message.html:
            fields.append(("html", message.html))
        if message.template:
            fields.append(("template", message.template))
        if message.amp_html:
            fields.append(("amp-html", message.amp_html))

    fields.extend(("to", to) for to in message.to)
    fields.extend(("o:tag", tag) for tag in message.tags)
    fields.extend(("o:campaign", campaign) for campaign in message.campaigns)
    if message.dkim is not None:
        fields.append(("o:dkim", yes_no(message.dkim)))
    if message.delivery_time is not None:
        fields.append(("o:deliverytime", format_rfc2822(message.delivery_time)))
    if message.sto_period:
        fields.append(("o:deliverytime-optimize-period", message.sto_period))
    if message.native_send:
        fields.append(("o:native-send", "yes"))
    if message.test_mode:
        fields.append(("o:testmode", "yes"))
    if message.tracking is not None:
        fields.append(("o:tracking", yes_no(message.tracking)))
    if message.tracking_clicks is not None:
        fields.append(("o:tracking-clicks", message.tracking_clicks))
    if message.tracking_opens is not None:
        fields.append(("o:tracking-opens", yes_no(message.tracking_opens)))
    if message.require_tls:
        fields.append(("o:require-tls", true_false(message.require_tls)))
    if message.skip_verification:
        fields.append(("o:skip-verification", true_false(message.skip_verification)))
    fields.extend((f"h:{name}", value) for name, value in message.headers.items())
    fields.extend((f"v:{name}", value) for name, value in message.variables.items())
    if message.template_variables:
        fields.append(("h:X-Mailgun-Variables", _to_json(message.template_variables)))
    if message.recipient_variables:
        fields.append(("recipient-variables", _to_json(message.recipient_variables)))

    for attachment in message.attachments:
        files.append(
            ("attachment", (attachment.filename, _attachment_content(attachment)))
        )
    for inline in message.inlines:
        files.append(("inline", (inline.filename, _attachment_content(inline))))

    if message.template_version:
        fields.append(("t:version", message.template_version))
    if message.template_render_text:
        fields.append(("t:text", yes_no(message.template_render_text)))

    return fields, files


def send(client, message):
    """Queue ``message`` for delivery and return the service's answer."""
    if not client.domain:
        raise ValueError("you must provide a valid domain before calling send()")
    if _INVALID_DOMAIN_CHARS.intersection(client.domain):
        raise ValueError(
            "you called send() with a domain that contains invalid characters"
        )
    if not client.api_key:
        raise ValueError("you must provide a valid api-key before calling send()")
    if not message.is_valid():
        raise InvalidMessageError()
    if message.sto_period and message.recipient_count() > 1:
        raise ValueError("STO can only be used on a per-message basis")

    fields, files = build_payload(message)
    domain = message.domain or client.domain
    url = f"{client.api_base}/{domain}/{message.endpoint}"
    data = client.post_json(
        url,
        data=fields,
        files=files or None,
        headers=dict(client.override_headers),
    )
    return SendResult(message=data.get("message") or "", id=data.get("id") or "")


def resend(client, url, *recipients):
    """Send the message stored at ``url`` again to ``recipients``."""
    if not recipients:
        raise ValueError("must provide at least one recipient")
    data = client.post_json(url, data=[("to", to) for to in recipients])
    return SendResult(message=data.get("message") or "", id=data.get("id") or "")


def get_stored_message(client, url):
    """Fetch the parsed content of a stored message."""
    return StoredMessage.from_dict(client.get_json(url))


def get_stored_message_raw(client, url):
    """Fetch a stored message with its raw MIME body."""
    return StoredMessageRaw.from_dict(client.get_json(url, headers=_ACCEPT_RAW))


def get_stored_attachment(client, url):
    """Fetch the raw bytes of a stored attachment."""
    return client.request("GET", url, headers=_ACCEPT_RAW).content
"""Outgoing messages: the envelope, content and sending options."""

import json
import os
import re
from dataclasses import dataclass

MAX_NUMBER_OF_RECIPIENTS = 1000
MAX_NUMBER_OF_TAGS = 3
MAX_NUMBER_OF_CAMPAIGNS = 3

MESSAGES_ENDPOINT = "messages"
MIME_MESSAGES_ENDPOINT = "messages.mime"

# MIME messages are assumed to carry this many Cc:/Bcc: recipients.
_MIME_EXTRA_RECIPIENTS = 10

_STO_PATTERN = re.compile(r"([2-6][4-9]|[3-6][0-9]|7[0-2])h")

_YES_NO = {True: "yes", False: "no"}
_TRUE_FALSE = {True: "true", False: "false"}


class InvalidMessageError(ValueError):
    """A message is not complete enough to be sent."""

    def __init__(self, message="message not valid"):
        super().__init__(message)


@dataclass
class TrackingOptions:
    """Values for o:tracking, o:tracking-clicks and o:tracking-opens."""

    tracking: bool = False
    tracking_clicks: str = ""
    tracking_opens: bool = False


@dataclass(frozen=True)
class Attachment:
    """A file sent with a message, taken from a path, a stream or bytes."""

    filename: str
    path: str | None = None
    stream: object = None
    data: bytes | None = None


def yes_no(flag):
    """'yes' or 'no', as the API expects for its option values."""
    return _YES_NO[bool(flag)]


def true_false(flag):
    """'true' or 'false'."""
    return _TRUE_FALSE[bool(flag)]


def _all_present(values):
    return all(value != "" for value in values)


class Message:
    """An e-mail message and the options it is sent with.

    Created directly it is a plain message built from fields; created
    with :meth:`mime` it wraps a ready-made MIME body, and the Cc:, Bcc:,
    HTML and template setters have no effect.
    """

    def __init__(self, sender, subject, text, *to):
        self.sender = sender
        self.subject = subject
        self.text = text
        self.to = list(to)
        self.cc = []
        self.bcc = []
        self.html = ""
        self.amp_html = ""
        self.template = ""
        self.mime_body = None
        self._mime = False

        self.tags = []
        self.campaigns = []
        self.attachments = []
        self.inlines = []

        self.dkim = None
        self.delivery_time = None
        self.sto_period = ""
        self.native_send = False
        self.test_mode = False
        self.tracking = None
        self.tracking_clicks = None
        self.tracking_opens = None
        self.require_tls = False
        self.skip_verification = False

        self.headers = {}
        self.variables = {}
        self.template_variables = {}
        self.recipient_variables = {}
        self.domain = ""
        self.template_version = ""
        self.template_render_text = False

    @classmethod
    def mime(cls, body, *to):
        """A message whose content is the MIME document read from ``body``."""
        message = cls("", "", "", *to)
        message._mime = True
        message.mime_body = body
        return message

    @property
    def is_mime(self):
        return self._mime

    @property
    def endpoint(self):
        """The API endpoint this kind of message is submitted to."""
        return MIME_MESSAGES_ENDPOINT if self._mime else MESSAGES_ENDPOINT

    def add_attachment(self, path):
        """Attach a file from the local filesystem."""
        self.attachments.append(Attachment(filename=os.path.basename(path), path=path))

    def add_reader_attachment(self, filename, stream):
        """Attach the contents read from ``stream`` under ``filename``."""
        self.attachments.append(Attachment(filename=filename, stream=stream))

    def add_buffer_attachment(self, filename, data):
        """Attach ``data`` under ``filename``."""
        self.attachments.append(Attachment(filename=filename, data=bytes(data)))

    def add_inline(self, path):
        """Send a local file inline with the message body."""
        self.inlines.append(Attachment(filename=os.path.basename(path), path=path))

    def add_reader_inline(self, filename, stream):
        """Send the contents read from ``stream`` inline under ``filename``."""
        self.inlines.append(Attachment(filename=filename, stream=stream))

    def add_recipient(self, recipient, variables=None):
        """Add a To: recipient, with optional per-recipient variables."""
        if self.recipient_count() >= MAX_NUMBER_OF_RECIPIENTS:
            raise ValueError(
                f"recipient limit exceeded (max {MAX_NUMBER_OF_RECIPIENTS})"
            )
        self.to.append(recipient)
        if variables is not None:
            self.recipient_variables[recipient] = variables

    def recipient_count(self):
        """Number of To:, Cc: and Bcc: recipients.

        For MIME messages only To: is known; ten more are assumed.
        """
        if self._mime:
            return len(self.to) + _MIME_EXTRA_RECIPIENTS
        return len(self.to) + len(self.cc) + len(self.bcc)

    def set_reply_to(self, recipient):
        self.add_header("Reply-To", recipient)

    def add_cc(self, recipient):
        if not self._mime:
            self.cc.append(recipient)

    def add_bcc(self, recipient):
        if not self._mime:
            self.bcc.append(recipient)

    def set_html(self, html):
        if not self._mime:
            self.html = html

    def set_amp_html(self, html):
        if not self._mime:
            self.amp_html = html

    def set_template(self, name):
        """Use a template stored through the templates API."""
        if not self._mime:
            self.template = name

    def add_tag(self, *tags):
        """Attach tags; fails once the message already holds the maximum."""
        if len(self.tags) >= MAX_NUMBER_OF_TAGS:
            raise ValueError(
                "cannot add any new tags. "
                f"Message tag limit ({MAX_NUMBER_OF_TAGS}) reached"
            )
        self.tags.extend(tags)

    def add_campaign(self, campaign):
        """Deprecated by the service; kept for existing callers."""
        self.campaigns.append(campaign)

    def set_sto_period(self, period):
        """Enable send time optimisation over a period such as '24h'."""
        if not _STO_PATTERN.fullmatch(period):
            raise ValueError("STO period is invalid. Valid range is 24h to 72h")
        self.sto_period = period

    def set_tracking_clicks(self, enabled):
        self.tracking_clicks = yes_no(enabled)

    def set_tracking_options(self, options):
        """Set tracking, click tracking and open tracking at once."""
        self.tracking = options.tracking
        self.tracking_clicks = options.tracking_clicks
        self.tracking_opens = options.tracking_opens

    def add_header(self, header, value):
        """Send a custom MIME header with the message."""
        self.headers[header] = value

    def add_variable(self, name, value):
        """Attach a custom variable; non-string values are sent as JSON."""
        if isinstance(value, str):
            self.variables[name] = value
        else:
            self.variables[name] = json.dumps(
                value, separators=(",", ":"), sort_keys=True
            )

    def add_template_variable(self, name, value):
        """Set a variable for server-side templates, replacing any earlier one."""
        self.template_variables[name] = value

    def _content_is_valid(self):
        if self._mime:
            return self.mime_body is not None
        if not _all_present(self.cc) or not _all_present(self.bcc):
            return False
        if self.template:
            return True
        if not self.sender:
            return False
        return bool(self.text or self.html)

    def is_valid(self):
        """Whether the message is complete enough to send."""
        if not self._content_is_valid():
            return False
        if self.recipient_count() == 0:
            return False
        if not _all_present(self.tags):
            return False
        if not _all_present(self.campaigns):
            return False
        return len(self.campaigns) <= MAX_NUMBER_OF_CAMPAIGNS
"""Errors raised when the API answers with an unexpected status."""


class UnexpectedResponseError(Exception):
    """The API returned a status code outside the expected set.

    ``url`` is the address that was requested, ``expected`` the accepted
    status codes, ``actual`` the code received and ``data`` the raw body.
    """

    def __init__(self, url, expected, actual, data):
        self.url = url
        self.expected = list(expected)
        self.actual = actual
        self.data = data if isinstance(data, bytes) else str(data or "").encode()
        super().__init__(str(self))

    def __str__(self):
        body = self.data.decode("utf-8", errors="replace")
        return (
            f"UnexpectedResponseError URL={self.url} "
            f"ExpectedOneOf={self.expected!r} Got={self.actual} Error: {body}"
        )


def status_from_error(err):
    """Return the HTTP status carried by ``err``, or -1 if it carries none."""
    if isinstance(err, UnexpectedResponseError):
        return err.actual
    return -1
"""HTTP access to the API with status checking and JSON decoding."""

import requests

from .errors import UnexpectedResponseError

VERSION = "4.6.1"
USER_AGENT = f"mgclient/{VERSION}"
BASIC_AUTH_USER = "api"
EXPECTED_STATUS = (200, 202, 204)


class ApiClient:
    """Holds the domain, key and base address, and performs checked requests."""

    def __init__(self, domain, api_key, api_base, session=None):
        self.domain = domain
        self.api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.override_headers = {}

    def domain_url(self, endpoint):
        """Address of an endpoint scoped to the configured domain."""
        return f"{self.api_base}/{self.domain}/{endpoint}"

    def public_url(self, endpoint):
        """Address of an endpoint that is not scoped to a domain."""
        return f"{self.api_base}/{endpoint}"

    def request(self, method, url, params=None, data=None, files=None,
                json_body=None, headers=None):
        """Perform a request and raise UnexpectedResponseError on a bad status."""
        merged = dict(headers or {})
        merged["User-Agent"] = USER_AGENT
        response = self.session.request(
            method,
            url,
            params=params,
            data=data,
            files=files,
            json=json_body,
            headers=merged,
            auth=(BASIC_AUTH_USER, self.api_key),
        )
        if response.status_code not in EXPECTED_STATUS:
            raise UnexpectedResponseError(
                url, EXPECTED_STATUS, response.status_code, response.content
            )
        return response

    def get_json(self, url, params=None, headers=None):
        """GET ``url`` and return the decoded JSON body."""
        return self.request("GET", url, params=params, headers=headers).json()

    def post_json(self, url, data=None, files=None, json_body=None, headers=None):
        """POST to ``url`` and return the decoded JSON body."""
        response = self.request(
            "POST", url, data=data, files=files, json_body=json_body, headers=headers
        )
        return response.json()

    def put_json(self, url, data=None):
        """PUT to ``url`` and return the decoded JSON body."""
        return self.request("PUT", url, data=data).json()

    def delete(self, url, params=None):
        """DELETE ``url`` and return the response."""
        return self.request("DELETE", url, params=params)
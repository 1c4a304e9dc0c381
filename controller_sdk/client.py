"""HTTP client for the controller API."""

from __future__ import annotations

import warnings
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import requests

from .compat import check_api_compatibility
from .errors import APIMismatchError, APIMismatchWarning, ControllerError, check_for_errors

API_VERSION = "2.3"
"""The controller API version this client is written against."""

_INVALID_CONTROLLER = (
    "{url} does not appear to be a valid Deis controller.\n"
    "Make sure that the Controller URI is correct, the server is running and\n"
    "your deis version is correct."
)


class Client:
    """A connection to one controller.

    After each call, ``controller_api_version`` and ``controller_version`` hold
    the versions the controller reported.
    """

    def __init__(
        self,
        controller_url: str,
        token: str = "",
        ssl_verify: bool = True,
        user_agent: str = "",
        hooks_token: str = "",
    ) -> None:
        if "://" not in controller_url:
            controller_url = "http://" + controller_url
        if not urlsplit(controller_url).netloc:
            raise ValueError(f"invalid controller URL: {controller_url!r}")
        self.controller_url = controller_url
        self.token = token
        self.ssl_verify = ssl_verify
        self.user_agent = user_agent
        self.hooks_token = hooks_token
        self.controller_api_version = ""
        self.controller_version = ""
        self._session = requests.Session()
        self._session.verify = ssl_verify

    def _url_for(self, path: str) -> str:
        base = urlsplit(self.controller_url)
        if "?" in path:
            route, query = path.split("?")[:2]
        else:
            route, query = path, base.query
        return urlunsplit((base.scheme, base.netloc, route, query, base.fragment))

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Connection": "close"}

    def _record_versions(self, response: requests.Response) -> str:
        api_version = response.headers.get("DEIS_API_VERSION", "")
        self.controller_api_version = api_version
        self.controller_version = response.headers.get("DEIS_PLATFORM_VERSION", "")
        return api_version

    def request(
        self, method: str, path: str, body: bytes | str | None = None
    ) -> requests.Response:
        """Send an authenticated request to a path on the controller.

        Error responses raise the matching ControllerError. When the controller's
        API version does not match, an APIMismatchWarning is issued and the
        response is still returned.
        """
        headers = self._headers()
        headers["Content-Type"] = "application/json"
        if self.token:
            headers["Authorization"] = "token " + self.token
        if self.hooks_token:
            headers["X-Deis-Builder-Auth"] = self.hooks_token
        if isinstance(body, str):
            body = body.encode("utf-8")

        response = self._session.request(
            method, self._url_for(path), data=body, headers=headers
        )
        check_for_errors(response.status_code, response.content)

        api_version = self._record_versions(response)
        try:
            check_api_compatibility(api_version, API_VERSION)
        except APIMismatchError as exc:
            warnings.warn(str(exc), APIMismatchWarning, stacklevel=2)
        return response

    def limited_request(self, path: str, results: int) -> tuple[list[Any], int]:
        """GET a paginated listing limited to ``results`` items.

        Returns the items of the first page and the total count.
        """
        response = self.request("GET", f"{path}?limit={results}")
        payload = response.json()
        if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
            raise ValueError("paginated response has no list of results")
        return payload["results"], int(payload["count"])

    def check_connection(self) -> None:
        """Check that the URL points to a controller with a compatible API.

        Raises ControllerError if it does not look like a controller and
        APIMismatchError if the API versions do not match.
        """
        response = self._session.get(
            self.controller_url + "/v2/", headers=self._headers()
        )
        response.close()
        if response.status_code != 401:
            raise ControllerError(_INVALID_CONTROLLER.format(url=self.controller_url))
        check_api_compatibility(self._record_versions(response), API_VERSION)

    def healthcheck(self) -> None:
        """Check that the controller is healthy and its API is compatible."""
        url = self.controller_url
        if not url.endswith("/"):
            url += "/"
        response = self._session.get(url + "healthz", headers=self._headers())
        check_for_errors(response.status_code, response.content)
        response.close()
        check_api_compatibility(self._record_versions(response), API_VERSION)
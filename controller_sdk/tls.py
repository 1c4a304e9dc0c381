"""Management of an app's TLS settings."""

from __future__ import annotations

import json
import warnings
from typing import Any

import requests

from .client import Client
from .errors import APIMismatchError, APIMismatchWarning


def _dumps(value: Any) -> bytes:
    return json.dumps(value, separators=(",", ":")).encode("utf-8")


def _strict_request(
    client: Client, method: str, path: str, body: bytes | None = None
) -> requests.Response:
    """Send a request, treating an API version mismatch as an error."""
    with warnings.catch_warnings():
        warnings.simplefilter("error", APIMismatchWarning)
        try:
            return client.request(method, path, body)
        except APIMismatchWarning as exc:
            raise APIMismatchError(str(exc)) from None


def _decode_object(response: requests.Response) -> dict[str, Any]:
    """Decode the first JSON value of a response body, which must be an object."""
    value, _ = json.JSONDecoder().raw_decode(response.text.lstrip())
    if not isinstance(value, dict):
        raise ValueError(f"cannot decode {type(value).__name__} into a TLS setting")
    return value


def _set_enforced(client: Client, app: str, enforced: bool) -> dict[str, Any]:
    body = _dumps({"https_enforced": enforced})
    response = _strict_request(client, "POST", f"/v2/apps/{app}/tls/", body)
    return _decode_object(response)


def info(client: Client, app: str) -> dict[str, Any]:
    """Return an app's TLS settings."""
    response = _strict_request(client, "GET", f"/v2/apps/{app}/tls/")
    return _decode_object(response)


def enable(client: Client, app: str) -> dict[str, Any]:
    """Make the router enforce HTTPS-only requests to the app."""
    return _set_enforced(client, app, True)


def disable(client: Client, app: str) -> dict[str, Any]:
    """Stop the router from enforcing HTTPS-only requests to the app."""
    return _set_enforced(client, app, False)
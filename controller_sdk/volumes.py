"""Management of an app's volumes."""

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


def list_volumes(
    client: Client, app_id: str, results: int
) -> tuple[list[dict[str, Any]], int]:
    """Return up to ``results`` of an app's volumes and the total count."""
    return client.limited_request(f"/v2/apps/{app_id}/volumes/", results)


def create_volume(client: Client, app_id: str, volume: dict[str, Any]) -> dict[str, Any]:
    """Create a volume for an app and return it as stored."""
    response = _strict_request(
        client, "POST", f"/v2/apps/{app_id}/volumes/", _dumps(volume)
    )
    return response.json()


def delete_volume(client: Client, app_id: str, name: str) -> None:
    """Delete one of an app's volumes."""
    client.request("DELETE", f"/v2/apps/{app_id}/volumes/{name}/").close()


def mount_volume(
    client: Client, app_id: str, name: str, volume: dict[str, Any]
) -> dict[str, Any]:
    """Patch the mount paths of a volume, creating a new release.

    Paths given are set or overwritten, paths set to None are unmounted and
    paths left out stay as they are.
    """
    response = _strict_request(
        client, "PATCH", f"/v2/apps/{app_id}/volumes/{name}/path/", _dumps(volume)
    )
    return response.json()
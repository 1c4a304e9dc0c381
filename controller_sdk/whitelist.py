"""Management of an app's whitelisted IP addresses."""

from __future__ import annotations

import json
from typing import Any, Iterable

import requests

from .client import Client


def _body(addresses: Iterable[str]) -> bytes:
    return json.dumps({"addresses": list(addresses)}, separators=(",", ":")).encode("utf-8")


def _addresses(response: requests.Response) -> list[str]:
    """Decode the first JSON value of a response as a whitelist."""
    value, _ = json.JSONDecoder().raw_decode(response.text.lstrip())
    if not isinstance(value, dict):
        raise ValueError(f"cannot decode {type(value).__name__} into a whitelist")
    addresses: Any = value.get("addresses") or []
    if not isinstance(addresses, list):
        raise ValueError("whitelist addresses are not a list")
    return list(addresses)


def list_addresses(client: Client, app_id: str) -> list[str]:
    """Return the addresses whitelisted for an app."""
    response = client.request("GET", f"/v2/apps/{app_id}/whitelist/")
    return _addresses(response)


def add_addresses(client: Client, app_id: str, addresses: Iterable[str]) -> list[str]:
    """Add addresses to an app's whitelist and return the whitelist."""
    response = client.request("POST", f"/v2/apps/{app_id}/whitelist/", _body(addresses))
    return _addresses(response)


def delete_addresses(client: Client, app_id: str, addresses: Iterable[str]) -> None:
    """Remove addresses from an app's whitelist."""
    client.request("DELETE", f"/v2/apps/{app_id}/whitelist/", _body(addresses)).close()
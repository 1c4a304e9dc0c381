"""Management of app and administrative permissions."""

from __future__ import annotations

import json

from .client import Client


def list_users(client: Client, app_id: str) -> list[str]:
    """Return the users that can access an app."""
    response = client.request("GET", f"/v2/apps/{app_id}/perms/")
    return list(response.json().get("users") or [])


def list_admins(client: Client, results: int) -> tuple[list[str], int]:
    """Return up to ``results`` platform administrators and the total count."""
    entries, count = client.limited_request("/v2/admin/perms/", results)
    return [entry.get("username", "") for entry in entries], count


def _grant(client: Client, path: str, username: str) -> None:
    body = json.dumps({"username": username}, separators=(",", ":"))
    client.request("POST", path, body.encode("utf-8")).close()


def _revoke(client: Client, path: str) -> None:
    client.request("DELETE", path).close()


def add_user(client: Client, app_id: str, username: str) -> None:
    """Give a user access to an app."""
    _grant(client, f"/v2/apps/{app_id}/perms/", username)


def add_admin(client: Client, username: str) -> None:
    """Make a user an administrator."""
    _grant(client, "/v2/admin/perms/", username)


def remove_user(client: Client, app_id: str, username: str) -> None:
    """Remove a user's access to an app."""
    _revoke(client, f"/v2/apps/{app_id}/perms/{username}")


def remove_admin(client: Client, username: str) -> None:
    """Remove administrative privileges from a user."""
    _revoke(client, f"/v2/admin/perms/{username}")
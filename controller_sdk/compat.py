"""API version compatibility checks."""

from __future__ import annotations

from .errors import APIMismatchError


def check_api_compatibility(server_version: str, client_version: str) -> None:
    """Raise APIMismatchError unless the server API can serve this client."""
    server = server_version.split(".")
    client = client_version.split(".")

    if len(server) < 2 or len(client) < 2:
        raise APIMismatchError()
    if server[0] != client[0]:
        raise APIMismatchError()
    # Minor versions are compared as text, as the controller reports them.
    if server[1] < client[1]:
        raise APIMismatchError()
    return None
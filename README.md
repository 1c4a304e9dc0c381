# controller-sdk

A Python client for the application platform controller's REST API.
It sends authenticated requests, checks the controller's API version and
turns controller error responses into Python exceptions.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Getting started

```python
from controller_sdk.client import Client
from controller_sdk import perms, tls, volumes, whitelist

client = Client("http://controller.example.com", token="token", ssl_verify=True)
client.check_connection()

print(perms.list_users(client, "example-go"))
perms.add_user(client, "example-go", "someone")

print(tls.enable(client, "example-go"))

volume = volumes.create_volume(client, "example-go", {"name": "myvolume", "size": "500M"})
volumes.mount_volume(client, "example-go", "myvolume", {"path": {"web": "/data/web1"}})

whitelist.add_addresses(client, "example-go", ["1.2.3.4", "0.0.0.0/0"])
```

## Modules

- `controller_sdk.client` — `Client(controller_url, token="", ssl_verify=True,
  user_agent="", hooks_token="")`. A URL without a scheme gets `http://`.
  - `request(method, path, body=None)` sends a request with the JSON content
    type, the `Authorization: token …` header when a token is set and the
    `X-Deis-Builder-Auth` header when a hooks token is set, and returns the
    `requests.Response`. A query string may be given in `path`.
  - `limited_request(path, results)` GETs `path?limit=results` and returns
    the list of results of the first page and the total count.
  - `check_connection()` expects a 401 from `/v2/`; anything else raises
    `ControllerError`.
  - `healthcheck()` GETs `/healthz` and raises on an error response.
  - After each call, `controller_api_version` and `controller_version` hold
    the versions the controller reported. `API_VERSION` is the API version
    the client is written against.
- `controller_sdk.errors` — `ControllerError` and its subclasses, such as
  `NotFoundError`, `UnauthorizedError`, `ForbiddenError`, `ServerError`,
  `UnprocessableError` and `UnknownServerError`; `check_for_errors(status_code,
  body)` raises the one that matches a response and returns `None` for 2xx and
  3xx. `APIMismatchError` and `APIMismatchWarning` report API version
  mismatches.
- `controller_sdk.compat` — `check_api_compatibility(server_version,
  client_version)` raises `APIMismatchError` when the major versions differ or
  the server's minor version is older.
- `controller_sdk.timestamps` — `parse_time` reads RFC 3339, the controller's
  `2014-01-01T00:00:00UTC` form and the zone-less `2014-01-01T00:00:00` form;
  `format_time`, `to_json` and `from_json` write and read the controller's form.
- `controller_sdk.perms` — `list_users`, `list_admins`, `add_user`,
  `add_admin`, `remove_user`, `remove_admin`.
- `controller_sdk.tls` — `info`, `enable`, `disable`; each returns the app's
  TLS settings as a dict.
- `controller_sdk.volumes` — `list_volumes`, `create_volume`,
  `delete_volume`, `mount_volume`. Volumes are plain dicts; in a mount, a path
  set to `None` is unmounted.
- `controller_sdk.whitelist` — `list_addresses`, `add_addresses`,
  `delete_addresses`.

## Errors and API versions

Failed requests raise a subclass of `ControllerError`; a response body that
is not the expected JSON raises `ValueError`. If the controller reports an API
version that is not compatible with this client, `Client.request` still
returns the response and issues an `APIMismatchWarning`. `check_connection`,
`healthcheck`, the `tls` functions, `create_volume` and `mount_volume` raise
`APIMismatchError` instead.

## What this package does not cover

The package speaks to the controller's permission, TLS, volume and IP
whitelist endpoints only. It has no functions for SSH keys, app processes and
scaling, releases and rollbacks, routing services, shared volumes, listing
users or the builder hooks; those endpoints can still be reached by hand with
`Client.request` and `Client.limited_request`. It is a library and provides no
command-line tool.
"""Client for the controller's REST API: requests, errors, version checks, permissions, TLS, volumes and whitelists."""

__version__ = "0.1.0"
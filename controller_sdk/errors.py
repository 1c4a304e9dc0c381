"""Exceptions raised by the controller client and mapping of API error responses."""

from __future__ import annotations

import json
from typing import Any

_FIELD_REQUIRED = "This field may not be blank."
_INVALID_USER = (
    "Enter a valid username. This value may contain only letters, numbers "
    "and @/./+/-/_ characters."
)
_FAILED_LOGIN = "Unable to log in with provided credentials."
_INVALID_APP_NAME = "App name can only contain a-z (lowercase), 0-9 and hyphens"
_INVALID_NAME = "Can only contain a-z (lowercase), 0-9 and hyphens"
_INVALID_CERT = "Could not load certificate"
_INVALID_POD = "does not exist in application"
_INVALID_DOMAIN = "Hostname does not look valid."
_INVALID_VERSION = "version cannot be below 0"
_INVALID_KEY = "Key contains invalid base64 chars"
_DUPLICATE_USER = "A user with that username already exists."
_INVALID_EMAIL = "Enter a valid email address."
_INVALID_TAG = "No nodes matched the provided labels"
_DUPLICATE_ID = "Application with this id already exists."
_CANCELLATION_FAILED = "still has applications assigned. Delete or transfer ownership"
_DUPLICATE_DOMAIN = "Domain is already in use by another application"
_DUPLICATE_KEY = "Public Key is already in use"


class ControllerError(Exception):
    """Base class of every error reported by the controller SDK."""

    default_message = "Controller error"

    def __init__(self, message: str | None = None) -> None:
        self.message = self.default_message if message is None else message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class APIMismatchError(ControllerError):
    """The controller's API version is not compatible with this client."""

    default_message = "The controller API version is not compatible with this client"


class APIMismatchWarning(UserWarning):
    """Issued when a request succeeded but the API versions do not match."""


class ServerError(ControllerError):
    default_message = "Internal Server Error"


class MethodNotAllowedError(ControllerError):
    default_message = "Method Not Allowed"


class InvalidUsernameError(ControllerError):
    default_message = _INVALID_USER


class DuplicateUsernameError(ControllerError):
    default_message = _DUPLICATE_USER


class MissingPasswordError(ControllerError):
    default_message = "A Password is required"


class LoginError(ControllerError):
    default_message = _FAILED_LOGIN


class UnauthorizedError(ControllerError):
    default_message = "Unauthorized: Missing or Invalid Token"


class InvalidAppNameError(ControllerError):
    default_message = _INVALID_APP_NAME


class ConflictError(ControllerError):
    default_message = "This action could not be completed due to a conflict."


class ForbiddenError(ControllerError):
    default_message = "You do not have permission to perform this action."


class MissingKeyError(ControllerError):
    default_message = "A key is required"


class DuplicateKeyError(ControllerError):
    default_message = _DUPLICATE_KEY


class InvalidNameError(ControllerError):
    default_message = f"Name {_INVALID_NAME.lower()}"


class InvalidCertificateError(ControllerError):
    default_message = _INVALID_CERT


class PodNotFoundError(ControllerError):
    default_message = "Pod not found in application"


class InvalidDomainError(ControllerError):
    default_message = _INVALID_DOMAIN


class DuplicateDomainError(ControllerError):
    default_message = _DUPLICATE_DOMAIN


class InvalidImageError(ControllerError):
    default_message = "The given image is invalid"


class InvalidVersionError(ControllerError):
    default_message = "The given version is invalid"


class MissingIDError(ControllerError):
    default_message = "An id is required"


class InvalidEmailError(ControllerError):
    default_message = _INVALID_EMAIL


class TagNotFoundError(ControllerError):
    default_message = _INVALID_TAG


class DuplicateAppError(ControllerError):
    default_message = _DUPLICATE_ID


class CancellationFailedError(ControllerError):
    default_message = (
        "Failed to delete user because the user still has applications assigned. "
        "Delete or transfer ownership."
    )


class UnprocessableError(ControllerError):
    """The controller answered 422."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Unable to process your request: {detail}")


class NotFoundError(ControllerError):
    """The controller answered 404."""

    default_message = "Not Found"


class UnknownServerError(ControllerError):
    """An error response that matches none of the known errors."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        # Newlines sent by the controller arrive escaped.
        self.detail = detail.replace("\\n", "\n")
        super().__init__(f"Unknown Error ({status_code}): {self.detail}")


# (field, messages, complete match, error) checked in order for 400 responses.
_FIELD_RULES: list[tuple[str, tuple[str, ...], bool, type[ControllerError]]] = [
    ("username", (_FIELD_REQUIRED, _INVALID_USER), True, InvalidUsernameError),
    ("username", (_DUPLICATE_USER,), True, DuplicateUsernameError),
    ("password", (_FIELD_REQUIRED,), True, MissingPasswordError),
    ("non_field_errors", (_FAILED_LOGIN,), True, LoginError),
    ("id", (_INVALID_APP_NAME,), True, InvalidAppNameError),
    ("id", (_DUPLICATE_ID,), True, DuplicateAppError),
    ("key", (_FIELD_REQUIRED,), True, MissingKeyError),
    ("key", (_DUPLICATE_KEY,), True, DuplicateKeyError),
    ("public", (_FIELD_REQUIRED, _INVALID_KEY), True, MissingKeyError),
    ("certificate", (_FIELD_REQUIRED, _INVALID_CERT), False, InvalidCertificateError),
    ("name", (_FIELD_REQUIRED, _INVALID_NAME), True, InvalidNameError),
    ("domain", (_INVALID_DOMAIN,), True, InvalidDomainError),
    ("domain", (_DUPLICATE_DOMAIN,), True, DuplicateDomainError),
    ("image", (_FIELD_REQUIRED,), True, InvalidImageError),
    ("id", (_FIELD_REQUIRED,), True, MissingIDError),
    ("email", (_INVALID_EMAIL,), True, InvalidEmailError),
]

_DETAIL_RULES: list[tuple[str, type[ControllerError]]] = [
    (_INVALID_POD, PodNotFoundError),
    (_INVALID_VERSION, InvalidVersionError),
    (_INVALID_TAG, TagNotFoundError),
]


def _field_strings(body: dict[str, Any], field: str) -> list[str]:
    value = body.get(field)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _field_matches(
    body: dict[str, Any], field: str, messages: tuple[str, ...], complete: bool
) -> bool:
    entries = _field_strings(body, field)
    return any(
        (entry == message) if complete else (message in entry)
        for message in messages
        for entry in entries
    )


def _decode_object(status_code: int, text: str) -> dict[str, Any]:
    try:
        decoded = json.loads(text)
    except ValueError as exc:
        raise UnknownServerError(
            status_code, f"error decoding json response ({exc}): {text}"
        ) from None
    if not isinstance(decoded, dict):
        reason = f"cannot decode {type(decoded).__name__} into an object"
        raise UnknownServerError(
            status_code, f"error decoding json response ({reason}): {text}"
        )
    return decoded


def check_for_errors(status_code: int, body: str | bytes | None) -> None:
    """Raise the error matching an API response; return None for 2xx and 3xx."""
    if 200 <= status_code < 400:
        return None

    if body is None:
        text = ""
    elif isinstance(body, bytes):
        text = body.decode("utf-8", errors="replace")
    else:
        text = body

    if status_code == 400:
        decoded = _decode_object(status_code, text)
        for field, messages, complete, error in _FIELD_RULES:
            if _field_matches(decoded, field, messages, complete):
                raise error()
        detail = decoded.get("detail")
        if isinstance(detail, str):
            for fragment, error in _DETAIL_RULES:
                if fragment in detail:
                    raise error()
        raise UnknownServerError(status_code, text)
    if status_code == 401:
        raise UnauthorizedError()
    if status_code == 403:
        raise ForbiddenError()
    if status_code == 404:
        raise NotFoundError(text or None)
    if status_code == 405:
        raise MethodNotAllowedError()
    if status_code == 409:
        decoded = _decode_object(status_code, text)
        detail = decoded.get("detail")
        if isinstance(detail, str) and _CANCELLATION_FAILED in detail:
            raise CancellationFailedError()
        raise UnknownServerError(status_code, text)
    if status_code == 422:
        decoded = _decode_object(status_code, text)
        detail = decoded.get("detail")
        if isinstance(detail, str):
            raise UnprocessableError(detail)
        raise UnknownServerError(status_code, text)
    if status_code == 500:
        raise ServerError()
    raise UnknownServerError(status_code, text)
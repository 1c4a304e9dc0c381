"""Parsing and formatting of the controller's date/time strings."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_DATE_TIME = r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
_RFC3339 = re.compile(_DATE_TIME + r"(Z|[+-]\d{2}:\d{2})")
_DEIS = re.compile(_DATE_TIME + r"([A-Z]{3}|[A-Z]{3,4}T|ChST|MeST)")
_PYOPENSSL = re.compile(_DATE_TIME)
_UNNAMED_ZONE = re.compile(r"UTC[+-]\d{2}:\d{2}(?::\d{2})?")


def _build(groups: tuple[str | None, ...], tz: timezone) -> datetime:
    year, month, day, hour, minute, second, fraction = groups[:7]
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second),
        microsecond, tzinfo=tz,
    )


def _offset_zone(text: str) -> timezone:
    if text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    hours, minutes = text[1:].split(":")
    return timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))


def parse_time(text: str | bytes) -> datetime:
    """Parse RFC 3339, the controller's format or the pyOpenSSL format.

    Zone abbreviations carry no offset and are read as UTC; times without
    a zone are UTC. Raises ValueError for anything else.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8")

    match = _RFC3339.fullmatch(text)
    if match:
        return _build(match.groups(), _offset_zone(match.group(8)))

    match = _DEIS.fullmatch(text)
    if match:
        name = match.group(8)
        tz = timezone.utc if name == "UTC" else timezone(timedelta(0), name)
        return _build(match.groups(), tz)

    match = _PYOPENSSL.fullmatch(text)
    if match:
        return _build(match.groups(), timezone.utc)

    raise ValueError(f"cannot parse {text!r} as a controller time")


def _zone_label(value: datetime) -> str:
    if value.tzinfo is None:
        return "UTC"
    name = value.tzname()
    if name and not _UNNAMED_ZONE.fullmatch(name):
        return name
    offset = value.utcoffset() or timedelta(0)
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}{minutes % 60:02d}"


def format_time(value: datetime) -> str:
    """Format a datetime in the controller's format, e.g. 2014-01-01T00:00:00UTC."""
    return value.strftime("%Y-%m-%dT%H:%M:%S") + _zone_label(value)


def to_json(value: datetime) -> str:
    """Return the quoted JSON string for a datetime."""
    return f'"{format_time(value)}"'


def from_json(data: str | bytes) -> datetime:
    """Parse a quoted JSON time string."""
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    if len(data) < 2 or not (data.startswith('"') and data.endswith('"')):
        raise ValueError(f"expected a quoted time string, got {data!r}")
    return parse_time(data[1:-1])
from datetime import datetime, timedelta, timezone

import pytest

from controller_sdk.timestamps import format_time, from_json, parse_time, to_json


@pytest.mark.parametrize(
    "text",
    [
        "2006-01-02T15:04:05MST",
        "2006-01-02T15:04:05UTC",
        "2006-01-02T15:04:05PST",
        "2006-01-02T15:04:05Z",
    ],
)
def test_standard_formats(text):
    assert parse_time(text).year == 2006


@pytest.mark.parametrize("text", ["2007-01-02T15:04:05", b"2007-01-02T15:04:05"])
def test_alternate_format(text):
    parsed = parse_time(text)
    assert parsed.year == 2007
    assert parsed.utcoffset() == timedelta(0)


def test_bad_time_raises():
    with pytest.raises(ValueError):
        parse_time("this is a bad time, isn't it?")


def test_out_of_range_fields_raise():
    with pytest.raises(ValueError):
        parse_time("2006-13-02T15:04:05Z")


def test_rfc3339_offset_and_fraction():
    parsed = parse_time("2014-10-19T22:01:00.601+02:00")
    assert parsed.utcoffset() == timedelta(hours=2)
    assert parsed.microsecond == 601000


def test_fraction_with_zulu():
    parsed = parse_time("2014-10-19T22:01:00.601Z")
    assert parsed == datetime(2014, 10, 19, 22, 1, 0, 601000, tzinfo=timezone.utc)


def test_format_pyopenssl_time_as_utc():
    assert format_time(parse_time("2016-02-13T00:47:52")) == "2016-02-13T00:47:52UTC"


def test_zone_abbreviation_is_kept():
    assert format_time(parse_time("2006-01-02T15:04:05PST")) == "2006-01-02T15:04:05PST"


def test_unnamed_offset_is_formatted_numerically():
    assert format_time(parse_time("2016-08-22T17:40:16-07:30")) == "2016-08-22T17:40:16-0730"


def test_naive_datetime_formats_as_utc():
    assert format_time(datetime(2014, 1, 1)) == "2014-01-01T00:00:00UTC"


def test_to_json():
    assert to_json(parse_time("2014-01-01T00:00:00UTC")) == '"2014-01-01T00:00:00UTC"'


def test_json_round_trip():
    text = '"2020-08-26T00:00:00UTC"'
    assert to_json(from_json(text)) == text


def test_from_json_bytes():
    assert from_json(b'"2016-08-22T17:40:16Z"') == datetime(
        2016, 8, 22, 17, 40, 16, tzinfo=timezone.utc
    )


@pytest.mark.parametrize("data", ["2014-01-01T00:00:00UTC", '"', "null", '"garbage"'])
def test_from_json_rejects(data):
    with pytest.raises(ValueError):
        from_json(data)
"""
Timestamp and ttl conversion tests.
"""

from __future__ import annotations

import pytest

from casper_sdk.errors import ValidationError
from casper_sdk.utils.timefmt import format_timestamp, format_ttl, parse_timestamp, parse_ttl


@pytest.mark.parametrize(
    "text, ms",
    [
        (1800000, 1_800_000),
        ("1800000", 1_800_000),
        ("30m", 1_800_000),
        ("1h 30m", 5_400_000),
        ("1day", 86_400_000),
        ("2h30m15s", 9_015_000),
        ("500ms", 500),
    ],
)
def test_parse_ttl(text, ms):
    assert parse_ttl(text) == ms


@pytest.mark.parametrize("text", ["", "soon", "5 fortnights", "1h garbage", -1, True])
def test_parse_ttl_rejects(text):
    with pytest.raises(ValidationError):
        parse_ttl(text)


def test_format_ttl():
    assert format_ttl(0) == "0ms"
    assert format_ttl(1_800_000) == "30m"
    assert format_ttl(5_400_000) == "1h 30m"
    assert format_ttl(86_400_000 + 1) == "1day 1ms"
    assert parse_ttl(format_ttl(93_784_005)) == 93_784_005


def test_timestamps():
    assert format_timestamp(1620133769105) == "2021-05-04T13:09:29.105Z"
    assert parse_timestamp("2021-05-04T13:09:29.105Z") == 1620133769105
    assert parse_timestamp("2021-05-04T15:09:29.105+02:00") == 1620133769105
    assert format_timestamp(0) == "1970-01-01T00:00:00.000Z"
    with pytest.raises(ValidationError):
        parse_timestamp("yesterday")

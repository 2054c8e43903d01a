"""
casper_sdk.utils.timefmt
========================

Deploy headers carry `timestamp` and `ttl` as u64 milliseconds on the wire,
while operators write them as ISO-8601 instants and humantime durations
("30m", "1h 30m", "1day"). These helpers convert between the two.
"""

from __future__ import annotations

import datetime as _dt
import re
import time
from typing import Any

from casper_sdk.errors import ValidationError

_UNIT_MS = {
    "ms": 1,
    "msec": 1,
    "s": 1_000,
    "sec": 1_000,
    "secs": 1_000,
    "m": 60_000,
    "min": 60_000,
    "mins": 60_000,
    "h": 3_600_000,
    "hr": 3_600_000,
    "hrs": 3_600_000,
    "d": 86_400_000,
    "day": 86_400_000,
    "days": 86_400_000,
}

# Largest unit first; used when formatting.
_FORMAT_UNITS = (("day", 86_400_000), ("h", 3_600_000), ("m", 60_000), ("s", 1_000), ("ms", 1))

_PART_RE = re.compile(r"(\d+)\s*([a-z]+)")

_EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)


def parse_ttl(val: Any) -> int:
    """
    Accept int milliseconds, a decimal string, or a humantime duration and
    return milliseconds.
    """
    if isinstance(val, bool):
        raise ValidationError("ttl must be an int or duration string")
    if isinstance(val, int):
        if val < 0:
            raise ValidationError("ttl must be non-negative", ttl=val)
        return val
    s = str(val).strip().lower()
    if s.isdigit():
        return int(s, 10)
    total = 0
    pos = 0
    for m in _PART_RE.finditer(s):
        if s[pos : m.start()].strip():
            break
        unit = _UNIT_MS.get(m.group(2))
        if unit is None:
            raise ValidationError(f"unknown duration unit {m.group(2)!r}", ttl=s)
        total += int(m.group(1)) * unit
        pos = m.end()
    if pos == 0 or s[pos:].strip():
        raise ValidationError(f"cannot parse duration {val!r}")
    return total


def format_ttl(ms: int) -> str:
    """Render milliseconds as a compact humantime string, e.g. 5400000 → '1h 30m'."""
    if ms < 0:
        raise ValidationError("ttl must be non-negative", ttl=ms)
    if ms == 0:
        return "0ms"
    parts = []
    rest = ms
    for unit, size in _FORMAT_UNITS:
        n, rest = divmod(rest, size)
        if n:
            parts.append(f"{n}{unit}")
    return " ".join(parts)


def now_ms() -> int:
    return int(time.time() * 1000)


def format_timestamp(ms: int) -> str:
    """u64 milliseconds since the epoch → '2021-05-04T13:09:29.105Z'."""
    dt = _EPOCH + _dt.timedelta(milliseconds=ms)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(text: str) -> int:
    """ISO-8601 instant (Z or offset) → u64 milliseconds since the epoch."""
    s = text.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        dt = _dt.datetime.fromisoformat(s)
    except ValueError as e:
        raise ValidationError(f"invalid timestamp {text!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)
    delta = dt - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


__all__ = ["parse_ttl", "format_ttl", "now_ms", "format_timestamp", "parse_timestamp"]

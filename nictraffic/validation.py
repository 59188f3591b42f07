"""Counter field validation and the staleness predicate."""

from __future__ import annotations

import re
from typing import Iterable

from nictraffic.errorlog import error_logger
from nictraffic.models import CounterSnapshot

_COUNTER_RE = re.compile(r"[0-9]+")

# Stays below the interpreter's int-from-str digit limit
_CHUNK_DIGITS = 1000


def parse_counter(raw: str | None) -> int | None:
    """Return the integer value of a pure ASCII digit string, else ``None``."""
    if raw is None or not _COUNTER_RE.fullmatch(raw):
        return None
    value = 0
    for start in range(0, len(raw), _CHUNK_DIGITS):
        chunk = raw[start : start + _CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def validate_sample(fields: Iterable[str | None]) -> CounterSnapshot | None:
    """Turn (bytes_in, bytes_out, packets_in, packets_out) text into a snapshot.

    Fields are checked in order; the first invalid one is logged to the error
    log and the whole sample is rejected.
    """
    values: list[int] = []
    for raw in fields:
        value = parse_counter(raw)
        if value is None:
            error_logger.error(f"Invalid data read: {'' if raw is None else raw}")
            return None
        values.append(value)
    if len(values) != 4:
        error_logger.error(f"Invalid data read: expected 4 counters, got {len(values)}")
        return None
    bytes_in, bytes_out, packets_in, packets_out = values
    return CounterSnapshot(bytes_in=bytes_in, bytes_out=bytes_out, packets_in=packets_in, packets_out=packets_out)


def is_stalled(old: CounterSnapshot, new: CounterSnapshot) -> bool:
    """True when none of the four counters moved."""
    return old.as_tuple() == new.as_tuple()

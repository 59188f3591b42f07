"""Counter source backed by the kernel's ``/proc/net/dev`` statistics table."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from nictraffic.exceptions import FatalConfigError
from nictraffic.models import DEFAULT_STATS_PATH

RawCounters = tuple[str, str, str, str]

EMPTY_COUNTERS: RawCounters = ("", "", "", "")

# Column positions after the "<iface>:" key
_RX_BYTES = 0
_RX_PACKETS = 1
_TX_BYTES = 8
_TX_PACKETS = 9


def parse_net_dev(text: str, interface: str) -> RawCounters:
    """Extract (rx_bytes, tx_bytes, rx_packets, tx_packets) for ``interface`` from /proc/net/dev text.

    Rows look like::

        Inter-|   Receive                            ...
         face |bytes    packets errs drop fifo frame ...
          eth0: 123456     789    0    0    0     0 ...

    The interface name must match the row key exactly. Missing rows or
    missing columns yield empty strings, leaving the decision to the validator.
    """
    for line in text.splitlines():
        key, sep, values = line.partition(":")
        if not sep or key.strip() != interface:
            continue
        cols = values.split()

        def col(i: int) -> str:
            return cols[i] if i < len(cols) else ""

        return (col(_RX_BYTES), col(_TX_BYTES), col(_RX_PACKETS), col(_TX_PACKETS))
    return EMPTY_COUNTERS


class ProcNetDevSource:
    """Read raw counter fields for a named interface, re-reading the table on every call."""

    def __init__(self, path: Path | str = DEFAULT_STATS_PATH) -> None:
        self.path = Path(path)

    def check_readable(self) -> None:
        """Fail fast when the statistics table cannot be read."""
        if not os.access(self.path, os.R_OK):
            raise FatalConfigError(
                f"Unable to read the network device status file {self.path}. Please check the file permissions.",
                path=str(self.path),
            )
        try:
            self.path.read_bytes()
        except OSError as e:
            raise FatalConfigError(
                f"Unable to read the network device status file {self.path}: {e}",
                path=str(self.path),
            ) from e

    def read(self, interface: str) -> RawCounters:
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            logger.debug(f"Reading {self.path} failed: {e}")
            return EMPTY_COUNTERS
        # decoded like argv, so byte-valued interface names still match
        return parse_net_dev(os.fsdecode(raw), interface)

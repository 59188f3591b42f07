"""Shared fixtures for the nictraffic test suite."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from nictraffic.errorlog import ErrorLog
from nictraffic.models import CounterSnapshot, MonitorConfig

FIXED_NOW = datetime(2024, 5, 17, 12, 30, 45)

NET_DEV_TEXT = """\
Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:  104736     912    0    0    0     0          0         0   104736     912    0    0    0     0       0          0
  eth0: 1000000    2000    0    0    0     0          0         0   500000    1500    0    0    0     0       0          0
 eth01:      77      88    0    0    0     0          0         0       99     111    0    0    0     0       0          0
wlan0:12345678   9876    0    0    0     0          0         0  87654321    5432    0    0    0     0       0          0
"""


class FakeSource:
    """Counter source returning scripted raw fields.

    A tuple value is returned on every read; a list value is consumed one
    reading per call and its last entry repeats once exhausted.
    """

    def __init__(self, readings: dict) -> None:
        self.readings = readings
        self.calls: list[str] = []

    def read(self, interface: str) -> tuple[str, str, str, str]:
        self.calls.append(interface)
        value = self.readings.get(interface, ("", "", "", ""))
        if isinstance(value, list):
            return value.pop(0) if len(value) > 1 else value[0]
        return value


class ErrorLogCapture:
    """Open ErrorLog on a temp file; ``lines()`` closes the sink and returns its message parts."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.log = ErrorLog(path).open()

    def lines(self) -> list[str]:
        self.log.close()
        if not self.path.exists():
            return []
        return self.path.read_text().splitlines()

    def messages(self) -> list[str]:
        # "<YYYY-MM-DD> <HH:mm:ss> <message>"
        return [line.split(" ", 2)[2] for line in self.lines()]


# ── snapshots and sources ─────────────────────────────────────────────


@pytest.fixture()
def make_snapshot():
    """Factory fixture returning a CounterSnapshot with customizable fields."""

    def _make(**kwargs):
        defaults = {"bytes_in": 1000, "bytes_out": 2000, "packets_in": 10, "packets_out": 20}
        defaults.update(kwargs)
        return CounterSnapshot(**defaults)

    return _make


@pytest.fixture()
def fake_source():
    """Factory fixture returning a FakeSource."""

    def _make(readings: dict):
        return FakeSource(readings)

    return _make


@pytest.fixture()
def net_dev_text():
    """Sample /proc/net/dev content."""
    return NET_DEV_TEXT


@pytest.fixture()
def net_dev_file(tmp_path):
    """A /proc/net/dev lookalike on disk."""
    path = tmp_path / "net_dev"
    path.write_text(NET_DEV_TEXT)
    return path


# ── logs and config ───────────────────────────────────────────────────


@pytest.fixture()
def error_log(tmp_path):
    """ErrorLog writing to a temporary file."""
    capture = ErrorLogCapture(tmp_path / "network_monitor_error.csv")
    yield capture
    capture.log.close()


@pytest.fixture()
def fixed_clock():
    """Clock returning a constant timestamp."""
    return lambda: FIXED_NOW


@pytest.fixture()
def monitor_config(tmp_path):
    """Factory fixture returning a MonitorConfig rooted in tmp_path."""

    def _make(**overrides):
        defaults = dict(
            interfaces=["eth0"],
            interval=1.0,
            stats_path=tmp_path / "net_dev",
            log_file=tmp_path / "network_monitor.csv",
            error_log_file=tmp_path / "network_monitor_error.csv",
            retry_backoff=0.0,
        )
        defaults.update(overrides)
        return MonitorConfig(**defaults)

    return _make
